"""存储适配器（HTTP / 内存）"""

from flowcanvas.infrastructure.adapters.http_workflow_store import HttpWorkflowStore, StoreError
from flowcanvas.infrastructure.adapters.in_memory_workflow_store import InMemoryWorkflowStore

__all__ = ["HttpWorkflowStore", "InMemoryWorkflowStore", "StoreError"]
