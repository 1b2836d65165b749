"""GraphSerializer - 编辑图与执行规格之间的双向转换（Domain Service）

decode(spec) -> WorkflowGraph:
- 节点记录的外层 type 就是节点类型标签
- inputs.type 存在但与外层 type 不一致时，以外层为准修复 inputs
- inputs.type 缺失的情况留给 InputMigrator 处理
- 边原样复制
- startNodeId 不保存为节点状态（编码时重新推导），只检查是否指向存在的节点

encode(graph) -> ExecutionSpec:
- 外层 type 取节点的类型标签（覆盖 inputs 中的 type，编码后两者不会漂移）
- label / position / inputs 原样透传
- startNodeId 取图中唯一的触发器节点
- 只能在校验通过后调用；没有唯一触发器时拒绝编码

往返约定：
- decode(encode(g)) 与 g 结构等价（ID、位置、输入、边完全保留）
- encode(decode(s)) 与 s 结构等价（s 由之前的 encode 产生）
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from flowcanvas.domain.entities.edge import Edge
from flowcanvas.domain.entities.node import Node
from flowcanvas.domain.entities.workflow_graph import WorkflowGraph
from flowcanvas.domain.exceptions import GraphNotEncodableError
from flowcanvas.domain.services.input_migrator import TYPE_FIELD
from flowcanvas.domain.services.node_type_registry import (
    NodeTypeRegistry,
    get_node_type_registry,
)
from flowcanvas.domain.value_objects.execution_spec import (
    EdgeRecord,
    ExecutionSpec,
    NodeRecord,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GraphSerializer:
    registry: NodeTypeRegistry = field(default_factory=get_node_type_registry)

    # ==================== 解码 ====================

    def decode(self, spec: ExecutionSpec | Mapping[str, Any]) -> WorkflowGraph:
        """把执行规格解码为可编辑的图

        抛出：
            InvalidExecutionSpecError: 规格结构不合法
            UnknownNodeTypeError: 节点类型不在注册表中
            DuplicateNodeError: 节点 ID 重复
            UnknownNodeError: 边引用了不存在的节点
        """
        if not isinstance(spec, ExecutionSpec):
            spec = ExecutionSpec.from_dict(dict(spec))

        graph = WorkflowGraph(registry=self.registry)
        for record in spec.nodes:
            graph.insert_node(self._decode_node(record))
        for record in spec.edges:
            graph.insert_edge(
                Edge(
                    id=record.id,
                    source_node_id=record.source,
                    target_node_id=record.target,
                    metadata=dict(record.metadata),
                )
            )

        if spec.start_node_id is not None and not graph.has_node(spec.start_node_id):
            logger.warning(
                "start_node_missing",
                extra={"start_node_id": spec.start_node_id},
            )

        logger.debug(
            "workflow_graph_decoded",
            extra={"node_count": len(graph.nodes), "edge_count": len(graph.edges)},
        )
        return graph

    def _decode_node(self, record: NodeRecord) -> Node:
        node_type = self.registry.resolve(record.type)
        inputs = dict(record.inputs)

        declared = inputs.get(TYPE_FIELD)
        if declared and declared != node_type.value:
            logger.warning(
                "node_inputs_type_repaired",
                extra={"node_id": record.id, "declared_type": declared},
            )
            inputs[TYPE_FIELD] = node_type.value

        return Node(
            id=record.id,
            type=node_type,
            label=record.label or self.registry.label(node_type),
            position=record.position,
            inputs=inputs,
            metadata=dict(record.metadata),
        )

    # ==================== 编码 ====================

    def encode(self, graph: WorkflowGraph) -> ExecutionSpec:
        """把图编码为执行规格

        抛出：
            GraphNotEncodableError: 图中没有唯一的触发器节点
        """
        return ExecutionSpec(
            start_node_id=self.derive_start_node_id(graph),
            nodes=tuple(self._encode_node(node) for node in graph.nodes),
            edges=tuple(
                EdgeRecord(
                    id=edge.id,
                    source=edge.source_node_id,
                    target=edge.target_node_id,
                    metadata=dict(edge.metadata),
                )
                for edge in graph.edges
            ),
        )

    def derive_start_node_id(self, graph: WorkflowGraph) -> str:
        triggers = [node for node in graph.nodes if self.registry.is_trigger(node.type)]
        if len(triggers) != 1:
            raise GraphNotEncodableError(
                f"工作流必须恰好有一个触发器节点，当前有 {len(triggers)} 个"
            )
        return triggers[0].id

    def _encode_node(self, node: Node) -> NodeRecord:
        return NodeRecord(
            id=node.id,
            type=node.type.value,
            label=node.label,
            position=node.position,
            inputs=dict(node.inputs),
            metadata=dict(node.metadata),
        )
