"""Domain 值对象

导出所有领域值对象，方便其他模块导入
"""

from flowcanvas.domain.value_objects.execution_spec import EdgeRecord, ExecutionSpec, NodeRecord
from flowcanvas.domain.value_objects.node_type import NodeCategory, NodeType
from flowcanvas.domain.value_objects.position import Position
from flowcanvas.domain.value_objects.run_status import RunStatus
from flowcanvas.domain.value_objects.validation_result import (
    AmbiguousTrigger,
    MissingCredential,
    MissingTrigger,
    ValidationResult,
    Violation,
)

__all__ = [
    "AmbiguousTrigger",
    "EdgeRecord",
    "ExecutionSpec",
    "MissingCredential",
    "MissingTrigger",
    "NodeCategory",
    "NodeRecord",
    "NodeType",
    "Position",
    "RunStatus",
    "ValidationResult",
    "Violation",
]
