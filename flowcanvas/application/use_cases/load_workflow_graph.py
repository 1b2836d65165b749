"""LoadWorkflowGraphUseCase - 加载工作流到编辑器

业务场景：
- 用户打开工作流编辑页面
- 从存储中读取工作流文档
- 把执行规格解码为可编辑的图，并升级历史格式的节点输入

业务流程：
存储文档 → GraphSerializer.decode → InputMigrator.upgrade_graph → WorkflowGraph
（新建的工作流没有 content，从空图开始）
"""

import logging
from dataclasses import dataclass

from flowcanvas.domain.entities.workflow_document import WorkflowDocument
from flowcanvas.domain.entities.workflow_graph import WorkflowGraph
from flowcanvas.domain.ports.workflow_store import WorkflowStore
from flowcanvas.domain.services.graph_serializer import GraphSerializer
from flowcanvas.domain.services.input_migrator import InputMigrator

logger = logging.getLogger(__name__)


@dataclass
class LoadWorkflowGraphInput:
    workflow_id: str


@dataclass
class LoadWorkflowGraphOutput:
    """加载结果

    属性说明：
    - document: 存储中的工作流文档（名称、webhook 令牌）
    - graph: 可编辑的图
    """

    document: WorkflowDocument
    graph: WorkflowGraph


class LoadWorkflowGraphUseCase:
    """LoadWorkflowGraph Use Case

    依赖：
    - WorkflowStore: 工作流存储接口
    - GraphSerializer: 执行规格解码
    - InputMigrator: 历史节点输入升级
    """

    def __init__(
        self,
        workflow_store: WorkflowStore,
        serializer: GraphSerializer | None = None,
        migrator: InputMigrator | None = None,
    ):
        self.workflow_store = workflow_store
        self.serializer = serializer or GraphSerializer()
        self.migrator = migrator or InputMigrator()

    async def execute(self, input_data: LoadWorkflowGraphInput) -> LoadWorkflowGraphOutput:
        """执行 Use Case

        抛出：
            NotFoundError: 工作流不存在
            InvalidExecutionSpecError / UnknownNodeTypeError: 持久化数据无法解码
        """
        document = await self.workflow_store.get_document(input_data.workflow_id)

        if document.is_blank:
            graph = WorkflowGraph(registry=self.serializer.registry)
        else:
            graph = self.migrator.upgrade_graph(self.serializer.decode(document.content or {}))

        logger.info(
            "workflow_graph_loaded",
            extra={
                "workflow_id": document.id,
                "node_count": len(graph.nodes),
                "edge_count": len(graph.edges),
            },
        )
        return LoadWorkflowGraphOutput(document=document, graph=graph)
