"""GraphValidator - 保存/执行前的语义校验（Domain Service）

校验规则（固定顺序，遇到第一个违规立即返回）：
1. 触发器：图中必须恰好有一个触发器节点
   - 0 个 → MissingTrigger
   - 多个 → AmbiguousTrigger（否则 startNodeId 无法确定）
2. 凭证：需要凭证的节点（按注册表判断），inputs.credentialId 必须非空
   - 按插入顺序第一个违规的节点 → MissingCredential
   - credentialId 是凭证 ID 字符串；非字符串（如 7）和空白字符串都视为未选择

说明：
- 不做结构校验（悬空边、重复 ID）：WorkflowGraph 的操作保证这些状态不可达
- 纯函数：只依赖传入的图和注册表，不抛异常
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from flowcanvas.domain.entities.workflow_graph import WorkflowGraph
from flowcanvas.domain.services.node_type_registry import (
    CREDENTIAL_FIELD,
    NodeTypeRegistry,
    get_node_type_registry,
)
from flowcanvas.domain.value_objects.validation_result import (
    AmbiguousTrigger,
    MissingCredential,
    MissingTrigger,
    ValidationResult,
)

logger = logging.getLogger(__name__)


def _is_non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


@dataclass(frozen=True, slots=True)
class GraphValidator:
    registry: NodeTypeRegistry = field(default_factory=get_node_type_registry)

    def check(self, graph: WorkflowGraph) -> ValidationResult:
        result = self._check_trigger(graph)
        if result.is_valid:
            result = self._check_credentials(graph)

        logger.info(
            "workflow_graph_validation",
            extra={
                "node_count": len(graph.nodes),
                "edge_count": len(graph.edges),
                "violation": result.violation.code if result.violation else None,
            },
        )
        return result

    def _check_trigger(self, graph: WorkflowGraph) -> ValidationResult:
        triggers = [node for node in graph.nodes if self.registry.is_trigger(node.type)]
        if not triggers:
            return ValidationResult.fail(MissingTrigger())
        if len(triggers) > 1:
            return ValidationResult.fail(
                AmbiguousTrigger(
                    node_ids=tuple(node.id for node in triggers),
                    node_labels=tuple(node.label for node in triggers),
                )
            )
        return ValidationResult.ok()

    def _check_credentials(self, graph: WorkflowGraph) -> ValidationResult:
        for node in graph.nodes:
            if not self.registry.requires_credential(node.type):
                continue
            if not _is_non_empty_str(node.inputs.get(CREDENTIAL_FIELD)):
                return ValidationResult.fail(
                    MissingCredential(node_id=node.id, node_label=node.label)
                )
        return ValidationResult.ok()
