"""In-memory WorkflowStore / CredentialStore adapter (Infrastructure).

用于本地开发和测试：保存时整体替换文档，执行时创建一条 pending 状态的执行记录。
"""

from __future__ import annotations

import asyncio
import copy
import secrets
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from flowcanvas.domain.entities.credential import Credential
from flowcanvas.domain.entities.workflow_document import WorkflowDocument
from flowcanvas.domain.entities.workflow_run import WorkflowRun
from flowcanvas.domain.exceptions import NotFoundError
from flowcanvas.domain.value_objects.node_type import NodeType
from flowcanvas.domain.value_objects.run_status import RunStatus


class InMemoryWorkflowStore:
    def __init__(self, credentials: list[Credential] | None = None) -> None:
        self._documents: dict[str, WorkflowDocument] = {}
        self._runs: dict[str, WorkflowRun] = {}
        self._credentials: list[Credential] = list(credentials or [])
        self._lock = asyncio.Lock()

    def seed_document(self, name: str, content: dict[str, Any] | None = None) -> WorkflowDocument:
        """同步写入一份文档（本地开发、测试准备数据）"""
        document = WorkflowDocument(
            id=f"wf_{uuid4().hex[:8]}",
            name=name,
            content=copy.deepcopy(content),
            webhook_token=self._webhook_token_for(content, None),
        )
        self._documents[document.id] = document
        return document

    async def list_documents(self) -> list[WorkflowDocument]:
        async with self._lock:
            return list(self._documents.values())

    async def create_document(self, name: str) -> WorkflowDocument:
        async with self._lock:
            return self.seed_document(name)

    async def delete_document(self, workflow_id: str) -> None:
        async with self._lock:
            self._get(workflow_id)
            del self._documents[workflow_id]
            self._runs = {
                run_id: run for run_id, run in self._runs.items() if run.workflow_id != workflow_id
            }

    async def get_document(self, workflow_id: str) -> WorkflowDocument:
        async with self._lock:
            return self._get(workflow_id)

    async def save_document(
        self, workflow_id: str, *, name: str, content: dict[str, Any]
    ) -> WorkflowDocument:
        async with self._lock:
            current = self._get(workflow_id)
            document = WorkflowDocument(
                id=workflow_id,
                name=name,
                content=copy.deepcopy(content),
                webhook_token=self._webhook_token_for(content, current.webhook_token),
            )
            self._documents[workflow_id] = document
            return document

    async def execute(self, workflow_id: str) -> WorkflowRun:
        async with self._lock:
            self._get(workflow_id)
            run = WorkflowRun(
                id=f"run_{uuid4().hex[:8]}",
                workflow_id=workflow_id,
                status=RunStatus.PENDING,
                started_at=datetime.now(UTC),
            )
            self._runs[run.id] = run
            return run

    async def list_runs(self, workflow_id: str) -> list[WorkflowRun]:
        async with self._lock:
            self._get(workflow_id)
            return [run for run in self._runs.values() if run.workflow_id == workflow_id]

    async def get_run(self, run_id: str) -> WorkflowRun:
        async with self._lock:
            if run_id not in self._runs:
                raise NotFoundError("WorkflowRun", run_id)
            return self._runs[run_id]

    async def list_credentials(self) -> list[Credential]:
        return list(self._credentials)

    def _get(self, workflow_id: str) -> WorkflowDocument:
        if workflow_id not in self._documents:
            raise NotFoundError("Workflow", workflow_id)
        return self._documents[workflow_id]

    @staticmethod
    def _webhook_token_for(content: dict[str, Any] | None, current: str | None) -> str | None:
        # 令牌一旦生成保持稳定，只有入口是 Webhook 触发器时才生成
        if current:
            return current
        if not content:
            return None
        start_id = content.get("startNodeId")
        for record in content.get("nodes") or []:
            if not isinstance(record, dict) or record.get("id") != start_id:
                continue
            if record.get("type") == NodeType.WEBHOOK_TRIGGER.value:
                return secrets.token_urlsafe(16)
        return None
