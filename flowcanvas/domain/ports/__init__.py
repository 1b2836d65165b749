"""Domain Ports - 外部存储接口（Protocol）"""

from flowcanvas.domain.ports.credential_store import CredentialStore
from flowcanvas.domain.ports.workflow_store import WorkflowStore

__all__ = ["CredentialStore", "WorkflowStore"]
