"""Workflow DTO（Data Transfer Objects）

定义与后端 REST API 交互的工作流文档、保存请求和执行记录模型
"""

import json
from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from flowcanvas.domain.entities.workflow_document import WorkflowDocument
from flowcanvas.domain.entities.workflow_run import WorkflowRun
from flowcanvas.domain.value_objects.run_status import RunStatus


class WorkflowDocumentDTO(BaseModel):
    """工作流文档 DTO

    字段：
    - id: 工作流 ID
    - name: 工作流名称
    - json_content: 执行规格（新建的工作流为空；旧接口字段名为 content）
    - webhook_token: Webhook 触发令牌（可选）
    """

    id: str
    name: str = ""
    json_content: dict[str, Any] | None = Field(
        default=None,
        validation_alias=AliasChoices("json_content", "content"),
        description="执行规格",
    )
    webhook_token: str | None = Field(default=None, description="Webhook 令牌")
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    def to_entity(self) -> WorkflowDocument:
        return WorkflowDocument(
            id=self.id,
            name=self.name,
            content=self.json_content or None,
            webhook_token=self.webhook_token or None,
        )

    @classmethod
    def from_entity(cls, document: WorkflowDocument) -> "WorkflowDocumentDTO":
        return cls(
            id=document.id,
            name=document.name,
            json_content=document.content,
            webhook_token=document.webhook_token,
        )


class CreateWorkflowRequest(BaseModel):
    """新建工作流请求 DTO（只有名称，content 为空）"""

    name: str = Field(..., description="工作流名称")


class UpdateWorkflowRequest(BaseModel):
    """保存工作流请求 DTO

    业务场景：编辑器保存时整体替换名称和执行规格
    """

    name: str = Field(..., description="工作流名称")
    json_content: dict[str, Any] = Field(..., description="执行规格")


class WorkflowRunDTO(BaseModel):
    """执行记录 DTO

    注意：
    - 执行接口返回 run_id，查询接口返回 id，两者都接受
    - status 大小写不敏感（PENDING / pending）
    """

    id: str = Field(..., validation_alias=AliasChoices("id", "run_id"))
    workflow_id: str = ""
    status: RunStatus = RunStatus.PENDING
    started_at: datetime | None = None
    finished_at: datetime | None = None
    logs: str | None = None
    error: str | None = None

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @field_validator("status", mode="before")
    @classmethod
    def _parse_status(cls, value: Any) -> Any:
        if isinstance(value, str):
            return RunStatus(value)
        return value

    @field_validator("logs", mode="before")
    @classmethod
    def _stringify_logs(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        return json.dumps(value, ensure_ascii=False)

    def to_entity(self) -> WorkflowRun:
        return WorkflowRun(
            id=self.id,
            workflow_id=self.workflow_id,
            status=self.status,
            started_at=self.started_at,
            finished_at=self.finished_at,
            logs=self.logs,
            error=self.error,
        )

    @classmethod
    def from_entity(cls, run: WorkflowRun) -> "WorkflowRunDTO":
        return cls(
            id=run.id,
            workflow_id=run.workflow_id,
            status=run.status,
            started_at=run.started_at,
            finished_at=run.finished_at,
            logs=run.logs,
            error=run.error,
        )
