"""WorkflowEditorSession - 一次工作流编辑会话（应用服务）

职责：
1. 加载工作流（解码 + 升级历史输入），新工作流从空图开始
2. 转发画布操作（添加/删除/连接/移动节点）到 WorkflowGraph
3. 维护单焦点的选中状态（SelectionController），配置面板的编辑即时写回
4. 每个会话只拉取一次凭证列表，作为只读参考数据
5. 保存/执行：先校验，再调用存储；同一时间只允许一个保存（或执行）请求

并发模型：
- 单线程、事件驱动（asyncio），每个操作都完整执行后才处理下一个事件
- 网络调用是唯一的挂起点；请求进行中再次保存/执行会被拒绝（can_save / can_execute 为 False）
- 网络失败原样抛出，内存中的图保持最后一次的状态
"""

from __future__ import annotations

import logging
from typing import Any

from flowcanvas.application.use_cases.execute_workflow import (
    ExecuteWorkflowInput,
    ExecuteWorkflowOutput,
    ExecuteWorkflowUseCase,
)
from flowcanvas.application.use_cases.load_workflow_graph import (
    LoadWorkflowGraphInput,
    LoadWorkflowGraphUseCase,
)
from flowcanvas.application.use_cases.save_workflow_graph import (
    SaveWorkflowGraphInput,
    SaveWorkflowGraphOutput,
    SaveWorkflowGraphUseCase,
)
from flowcanvas.config import Settings, settings as default_settings
from flowcanvas.domain.entities.credential import Credential
from flowcanvas.domain.entities.edge import Edge
from flowcanvas.domain.entities.node import Node
from flowcanvas.domain.entities.workflow_document import WorkflowDocument
from flowcanvas.domain.entities.workflow_graph import WorkflowGraph
from flowcanvas.domain.exceptions import DomainError, OperationInProgressError
from flowcanvas.domain.ports.credential_store import CredentialStore
from flowcanvas.domain.ports.workflow_store import WorkflowStore
from flowcanvas.domain.services.graph_serializer import GraphSerializer
from flowcanvas.domain.services.graph_validator import GraphValidator
from flowcanvas.domain.services.input_migrator import InputMigrator
from flowcanvas.domain.services.node_type_registry import (
    NodeTypeRegistry,
    get_node_type_registry,
)
from flowcanvas.domain.services.selection_controller import SelectionController
from flowcanvas.domain.value_objects.node_type import NodeType
from flowcanvas.domain.value_objects.position import Position
from flowcanvas.domain.value_objects.validation_result import ValidationResult

logger = logging.getLogger(__name__)


class WorkflowEditorSession:
    """工作流编辑会话

    使用示例：
        session = WorkflowEditorSession(workflow_store=store, credential_store=store)
        await session.load("wf_123")
        trigger = session.add_node(NodeType.MANUAL_TRIGGER)
        telegram = session.add_node(NodeType.TELEGRAM)
        session.connect(trigger.id, telegram.id)
        session.select(telegram.id)
        session.update_field("credentialId", "cred_1")
        result = await session.save()
    """

    def __init__(
        self,
        workflow_store: WorkflowStore,
        credential_store: CredentialStore,
        registry: NodeTypeRegistry | None = None,
        config: Settings | None = None,
    ):
        self.workflow_store = workflow_store
        self.credential_store = credential_store
        self.registry = registry or get_node_type_registry()
        self.config = config or default_settings

        serializer = GraphSerializer(registry=self.registry)
        self.validator = validator = GraphValidator(registry=self.registry)
        self._load_use_case = LoadWorkflowGraphUseCase(
            workflow_store, serializer=serializer, migrator=InputMigrator()
        )
        self._save_use_case = SaveWorkflowGraphUseCase(
            workflow_store, validator=validator, serializer=serializer
        )
        self._execute_use_case = ExecuteWorkflowUseCase(workflow_store, validator=validator)

        self._document: WorkflowDocument | None = None
        self._name: str = ""
        self._graph: WorkflowGraph | None = None
        self._selection: SelectionController | None = None
        self._credentials: tuple[Credential, ...] | None = None
        self._saving = False
        self._executing = False

    # ==================== 加载 ====================

    async def load(self, workflow_id: str) -> WorkflowGraph:
        """加载工作流（失败时会话保持原状）"""
        output = await self._load_use_case.execute(LoadWorkflowGraphInput(workflow_id=workflow_id))

        if self._selection is not None:
            self._selection.detach()
        self._document = output.document
        self._name = output.document.name
        self._graph = output.graph
        self._selection = SelectionController(output.graph)
        return output.graph

    @property
    def is_loaded(self) -> bool:
        return self._graph is not None

    @property
    def workflow_id(self) -> str:
        return self._require_document().id

    @property
    def document(self) -> WorkflowDocument | None:
        return self._document

    @property
    def name(self) -> str:
        return self._name

    def rename(self, name: str) -> None:
        if not name or not name.strip():
            raise DomainError("name 不能为空")
        self._name = name.strip()

    @property
    def graph(self) -> WorkflowGraph:
        if self._graph is None:
            raise DomainError("工作流尚未加载")
        return self._graph

    @property
    def selection(self) -> SelectionController:
        if self._selection is None:
            raise DomainError("工作流尚未加载")
        return self._selection

    # ==================== 画布操作 ====================

    def add_node(self, node_type: NodeType | str, position: Position | None = None) -> Node:
        """从侧边栏添加节点（未指定位置时放在默认位置）"""
        if position is None:
            position = Position(x=self.config.default_node_x, y=self.config.default_node_y)
        return self.graph.add_node(node_type, position)

    def remove_node(self, node_id: str) -> Node:
        return self.graph.remove_node(node_id)

    def connect(self, source_id: str, target_id: str) -> Edge:
        return self.graph.connect(source_id, target_id)

    def disconnect(self, edge_id: str) -> Edge:
        return self.graph.disconnect(edge_id)

    def move(self, node_id: str, position: Position) -> None:
        self.graph.move(node_id, position)

    # ==================== 选中与配置面板 ====================

    def select(self, node_id: str) -> Node:
        return self.selection.select(node_id)

    def clear_selection(self) -> None:
        self.selection.clear()

    def update_field(self, key: str, value: Any) -> dict[str, Any]:
        return self.selection.update_field(key, value)

    async def credentials(self) -> tuple[Credential, ...]:
        """凭证列表（每个会话只拉取一次）"""
        if self._credentials is None:
            fetched = await self.credential_store.list_credentials()
            self._credentials = tuple(fetched)
            logger.debug("credentials_loaded", extra={"credential_count": len(self._credentials)})
        return self._credentials

    async def relevant_credentials(self) -> list[Credential]:
        """当前选中节点可选的凭证"""
        return self.selection.relevant_credentials(await self.credentials())

    # ==================== 校验 / 保存 / 执行 ====================

    def validate(self) -> ValidationResult:
        return self.validator.check(self.graph)

    @property
    def can_save(self) -> bool:
        return self.is_loaded and not self._saving

    @property
    def can_execute(self) -> bool:
        return self.is_loaded and not self._executing

    async def save(self) -> SaveWorkflowGraphOutput:
        """保存（校验失败时返回违规，不调用存储）

        抛出：
            OperationInProgressError: 已有保存请求在进行中
        """
        if self._saving:
            raise OperationInProgressError("save")

        self._saving = True
        try:
            output = await self._save_use_case.execute(
                SaveWorkflowGraphInput(
                    workflow_id=self.workflow_id,
                    name=self._name,
                    graph=self.graph,
                )
            )
        finally:
            self._saving = False

        if output.document is not None:
            self._document = output.document
        return output

    async def execute(self) -> ExecuteWorkflowOutput:
        """请求执行（先对当前的图做校验）

        抛出：
            OperationInProgressError: 已有执行请求在进行中
        """
        if self._executing:
            raise OperationInProgressError("execute")

        self._executing = True
        try:
            return await self._execute_use_case.execute(
                ExecuteWorkflowInput(workflow_id=self.workflow_id, graph=self.graph)
            )
        finally:
            self._executing = False

    # ==================== Webhook ====================

    def webhook_url(self) -> str | None:
        """已保存的入口节点是 Webhook 触发器时，返回对外可调用的 URL（只展示，不生成令牌）"""
        document = self._document
        if document is None or not document.webhook_token:
            return None

        if self._saved_start_node_type(document) != NodeType.WEBHOOK_TRIGGER.value:
            return None

        return self.config.webhook_url_template.format(
            base_url=self.config.api_base_url.rstrip("/"),
            token=document.webhook_token,
        )

    @staticmethod
    def _saved_start_node_type(document: WorkflowDocument) -> str | None:
        content = document.content or {}
        start_node_id = content.get("startNodeId")
        for record in content.get("nodes") or []:
            if isinstance(record, dict) and record.get("id") == start_node_id:
                return record.get("type")
        return None

    def _require_document(self) -> WorkflowDocument:
        if self._document is None:
            raise DomainError("工作流尚未加载")
        return self._document
