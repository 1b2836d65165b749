"""WorkflowGraph 实体 - 编辑中的工作流图（聚合根）

业务定义：
- WorkflowGraph 是一次编辑会话中工作流的工作状态
- 包含有序的节点列表（插入顺序，不是拓扑顺序）和边列表
- 所有增删改都通过这里完成，从而保证结构不变式

不变式：
- 节点 ID 在图内唯一
- 每条边的两个端点都必须是图中存在的节点（删除节点时级联删除相关的边）

生命周期：
- 加载工作流时创建（从执行规格解码，或新工作流的空图）
- 离开编辑页面时丢弃
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from flowcanvas.domain.entities.edge import Edge
from flowcanvas.domain.entities.node import Node, current_timestamp_ms
from flowcanvas.domain.exceptions import (
    DuplicateNodeError,
    UnknownEdgeError,
    UnknownNodeError,
)
from flowcanvas.domain.services.node_type_registry import (
    NodeTypeRegistry,
    get_node_type_registry,
)
from flowcanvas.domain.value_objects.node_type import NodeType
from flowcanvas.domain.value_objects.position import Position

logger = logging.getLogger(__name__)

NodeRemovalListener = Callable[[str], None]


@dataclass
class WorkflowGraph:
    """WorkflowGraph 实体（聚合根）

    属性说明：
    - nodes: 节点列表（插入顺序）
    - edges: 边列表
    - registry: 节点类型注册表（标签、默认输入）
    - clock: 毫秒时间戳来源，用于生成节点 ID（测试时可注入）

    为什么是聚合根？
    1. WorkflowGraph 管理 Node 和 Edge 的生命周期
    2. 外部只能通过 WorkflowGraph 操作 Node 和 Edge
    3. WorkflowGraph 维护节点和边的一致性（不会出现悬空的边）
    """

    nodes: list[Node] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)
    registry: NodeTypeRegistry = field(
        default_factory=get_node_type_registry, repr=False, compare=False
    )
    clock: Callable[[], int] = field(default=current_timestamp_ms, repr=False, compare=False)
    _removal_listeners: list[NodeRemovalListener] = field(
        default_factory=list, init=False, repr=False, compare=False
    )

    # ==================== 查询 ====================

    def find_node(self, node_id: str) -> Node | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def get_node(self, node_id: str) -> Node:
        """根据 ID 获取节点（不存在抛异常）

        抛出：
            UnknownNodeError: 节点不存在
        """
        node = self.find_node(node_id)
        if node is None:
            raise UnknownNodeError(node_id)
        return node

    def has_node(self, node_id: str) -> bool:
        return self.find_node(node_id) is not None

    def node_ids(self) -> list[str]:
        return [node.id for node in self.nodes]

    def incident_edges(self, node_id: str) -> list[Edge]:
        return [edge for edge in self.edges if edge.touches(node_id)]

    def trigger_nodes(self) -> list[Node]:
        """所有触发器类型的节点（插入顺序）"""
        return [node for node in self.nodes if self.registry.is_trigger(node.type)]

    def is_empty(self) -> bool:
        return not self.nodes

    # ==================== 节点操作 ====================

    def add_node(self, node_type: NodeType | str, position: Position) -> Node:
        """从侧边栏添加新节点

        业务规则：
        - 类型必须在注册表中
        - label 取注册表中的显示名称
        - inputs 取默认输入（包含 type 字段）

        抛出：
            UnknownNodeTypeError: 类型不在注册表中
        """
        resolved = self.registry.resolve(node_type)
        node = Node.create(
            type=resolved,
            label=self.registry.label(resolved),
            inputs=self.registry.default_inputs(resolved),
            position=position,
            created_at_ms=self.clock(),
            taken_ids=set(self.node_ids()),
        )
        self.nodes.append(node)
        logger.debug("node_added", extra={"node_id": node.id, "node_type": resolved.value})
        return node

    def insert_node(self, node: Node) -> None:
        """插入已经构造好的节点（解码持久化数据时使用）

        抛出：
            DuplicateNodeError: 节点 ID 已存在
        """
        if self.has_node(node.id):
            raise DuplicateNodeError(node.id)
        self.nodes.append(node)

    def remove_node(self, node_id: str) -> Node:
        """删除节点

        业务规则：
        - 同时删除所有以该节点为 source 或 target 的边（强制级联）
        - 通知监听者（选中状态需要回到 Idle）

        抛出：
            UnknownNodeError: 节点不存在
        """
        node = self.get_node(node_id)

        self.nodes = [n for n in self.nodes if n.id != node_id]

        before = len(self.edges)
        self.edges = [edge for edge in self.edges if not edge.touches(node_id)]
        removed_edges = before - len(self.edges)

        logger.debug(
            "node_removed",
            extra={"node_id": node_id, "removed_edges": removed_edges},
        )

        for listener in list(self._removal_listeners):
            listener(node_id)
        return node

    def update_node_inputs(self, node_id: str, inputs: dict[str, Any]) -> None:
        """整体替换节点输入（不是合并）

        抛出：
            UnknownNodeError: 节点不存在
        """
        self.get_node(node_id).replace_inputs(inputs)

    def move(self, node_id: str, position: Position) -> None:
        """更新节点位置，不影响有效性"""
        self.get_node(node_id).update_position(position)

    # ==================== 边操作 ====================

    def connect(self, source_id: str, target_id: str) -> Edge:
        """连接两个节点

        业务规则：
        - 两个端点都必须存在
        - 不做环检测（是否无环由执行器决定）

        抛出：
            UnknownNodeError: 任一端点不存在
        """
        self._ensure_endpoints(source_id, target_id)
        edge = Edge.create(source_node_id=source_id, target_node_id=target_id)
        self.edges.append(edge)
        return edge

    def insert_edge(self, edge: Edge) -> None:
        """插入已经构造好的边（解码持久化数据时使用）"""
        self._ensure_endpoints(edge.source_node_id, edge.target_node_id)
        self.edges.append(edge)

    def disconnect(self, edge_id: str) -> Edge:
        """删除单条边

        抛出：
            UnknownEdgeError: 边不存在
        """
        for i, edge in enumerate(self.edges):
            if edge.id == edge_id:
                return self.edges.pop(i)
        raise UnknownEdgeError(edge_id)

    # ==================== 监听 ====================

    def add_removal_listener(self, listener: NodeRemovalListener) -> None:
        self._removal_listeners.append(listener)

    def remove_removal_listener(self, listener: NodeRemovalListener) -> None:
        if listener in self._removal_listeners:
            self._removal_listeners.remove(listener)

    # ==================== 内部 ====================

    def _ensure_endpoints(self, source_id: str, target_id: str) -> None:
        for node_id in (source_id, target_id):
            if not self.has_node(node_id):
                raise UnknownNodeError(node_id)
