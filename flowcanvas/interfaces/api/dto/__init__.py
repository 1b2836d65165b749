"""接口层 DTO - 与后端 REST API 的数据契约"""

from flowcanvas.interfaces.api.dto.credential_dto import CredentialDTO
from flowcanvas.interfaces.api.dto.workflow_dto import (
    CreateWorkflowRequest,
    UpdateWorkflowRequest,
    WorkflowDocumentDTO,
    WorkflowRunDTO,
)

__all__ = [
    "CreateWorkflowRequest",
    "CredentialDTO",
    "UpdateWorkflowRequest",
    "WorkflowDocumentDTO",
    "WorkflowRunDTO",
]
