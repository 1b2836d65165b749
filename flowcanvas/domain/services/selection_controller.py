"""SelectionController - 画布上的单焦点选中状态

状态机：
- IDLE: 没有打开任何节点的配置面板
- EDITING(node_id): 正在编辑某个节点的配置

状态转换：
- 点击节点 → EDITING(node_id)
- 点击空白画布 / 关闭配置面板 → IDLE
- 删除正在编辑的节点 → IDLE（由 WorkflowGraph 的删除通知触发）

配置面板的表单值来自节点当前的 inputs，每次字段变更都立即通过
WorkflowGraph.update_node_inputs() 写回（没有单独的"应用"步骤）。
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import Enum
from typing import Any

from flowcanvas.domain.entities.credential import Credential
from flowcanvas.domain.entities.node import Node
from flowcanvas.domain.entities.workflow_graph import WorkflowGraph
from flowcanvas.domain.exceptions import DomainError

logger = logging.getLogger(__name__)


class SelectionState(str, Enum):
    IDLE = "idle"
    EDITING = "editing"


class SelectionController:
    """选中状态控制器

    使用示例：
        selection = SelectionController(graph)
        selection.select(node.id)
        selection.update_field("chat_id", "@my_channel")
    """

    def __init__(self, graph: WorkflowGraph):
        self._graph = graph
        self._node_id: str | None = None
        graph.add_removal_listener(self.handle_node_removed)

    @property
    def state(self) -> SelectionState:
        return SelectionState.IDLE if self._node_id is None else SelectionState.EDITING

    @property
    def selected_node_id(self) -> str | None:
        return self._node_id

    @property
    def is_editing(self) -> bool:
        return self._node_id is not None

    @property
    def selected_node(self) -> Node | None:
        if self._node_id is None:
            return None
        return self._graph.find_node(self._node_id)

    def select(self, node_id: str) -> Node:
        """点击节点：打开该节点的配置面板（同一时间只有一个）

        抛出：
            UnknownNodeError: 节点不存在
        """
        node = self._graph.get_node(node_id)
        self._node_id = node.id
        return node

    def clear(self) -> None:
        """点击空白画布或关闭配置面板"""
        self._node_id = None

    def handle_node_removed(self, node_id: str) -> None:
        if self._node_id == node_id:
            logger.debug("selection_cleared_on_remove", extra={"node_id": node_id})
            self._node_id = None

    def form_values(self) -> dict[str, Any]:
        """当前选中节点的表单值（inputs 的副本）"""
        return dict(self._require_selected().inputs)

    def update_field(self, key: str, value: Any) -> dict[str, Any]:
        """表单字段变更：与当前 inputs 合并后整体写回

        返回：
            写回后的 inputs

        抛出：
            DomainError: 当前没有选中的节点
        """
        node = self._require_selected()
        new_inputs = {**node.inputs, key: value}
        self._graph.update_node_inputs(node.id, new_inputs)
        return new_inputs

    def relevant_credentials(self, credentials: Iterable[Credential]) -> list[Credential]:
        """配置面板中凭证选择框可选的凭证"""
        node = self._require_selected()
        return self._graph.registry.relevant_credentials(node.type, credentials)

    def detach(self) -> None:
        self._graph.remove_removal_listener(self.handle_node_removed)

    def _require_selected(self) -> Node:
        node = self.selected_node
        if node is None:
            raise DomainError("当前没有正在编辑的节点")
        return node
