"""InputMigrator - 历史节点输入的升级

旧版本保存的工作流中，节点 inputs 里没有 type 字段（后来才把类型标签复制进 inputs）。
解码持久化数据之后、展示或校验之前执行一次升级：

- inputs 缺少 type 时补上节点自身的类型标签
- 其他字段保持不变
- 纯函数且幂等：升级两次等于升级一次（同一份数据可能在多个层次被升级）
"""

from __future__ import annotations

import logging
from dataclasses import replace

from flowcanvas.domain.entities.node import Node
from flowcanvas.domain.entities.workflow_graph import WorkflowGraph

logger = logging.getLogger(__name__)

TYPE_FIELD = "type"


class InputMigrator:
    def needs_upgrade(self, node: Node) -> bool:
        return not node.inputs.get(TYPE_FIELD)

    def upgrade(self, node: Node) -> Node:
        """返回升级后的节点（不修改传入的节点）"""
        if not self.needs_upgrade(node):
            return node
        inputs = dict(node.inputs)
        inputs[TYPE_FIELD] = node.type.value
        return replace(node, inputs=inputs, metadata=dict(node.metadata))

    def upgrade_graph(self, graph: WorkflowGraph) -> WorkflowGraph:
        """升级图中的所有节点（保持插入顺序）"""
        upgraded = 0
        for index, node in enumerate(graph.nodes):
            new_node = self.upgrade(node)
            if new_node is not node:
                graph.nodes[index] = new_node
                upgraded += 1

        if upgraded:
            logger.info("node_inputs_upgraded", extra={"upgraded_nodes": upgraded})
        return graph
