"""HTTP Workflow Store - 通过后端 REST API 读写工作流（httpx 实现）

职责:
- 实现 WorkflowStore / CredentialStore 两个 Port
- 请求附带 Bearer 令牌
- 把 httpx 异常转换为 NotFoundError / StoreError，错误信息对用户友好

接口:
- GET    /workflows/
- POST   /workflows/               {name}
- DELETE /workflows/{id}
- GET    /workflows/{id}
- PATCH  /workflows/{id}           {name, json_content}
- POST   /workflows/{id}/execute
- GET    /workflows/{id}/runs
- GET    /workflow-runs/{id}
- GET    /credentials/
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from flowcanvas.config import Settings
from flowcanvas.domain.entities.credential import Credential
from flowcanvas.domain.entities.workflow_document import WorkflowDocument
from flowcanvas.domain.entities.workflow_run import WorkflowRun
from flowcanvas.domain.exceptions import NotFoundError
from flowcanvas.interfaces.api.dto.credential_dto import CredentialDTO
from flowcanvas.interfaces.api.dto.workflow_dto import (
    CreateWorkflowRequest,
    UpdateWorkflowRequest,
    WorkflowDocumentDTO,
    WorkflowRunDTO,
)

logger = logging.getLogger(__name__)


class StoreError(RuntimeError):
    """外部存储调用失败（网络错误、超时、非 2xx 响应）

    属性:
        status_code: HTTP 状态码（网络错误时为 None）
        detail: 后端返回的错误详情（已格式化为字符串）
    """

    def __init__(self, message: str, *, status_code: int | None = None, detail: str = ""):
        self.status_code = status_code
        self.detail = detail
        super().__init__(message)


def extract_error_detail(response: httpx.Response) -> str:
    """从错误响应中提取可展示的详情

    兼容两种格式:
    - {"detail": "Workflow not found"}
    - FastAPI 校验错误 {"detail": [{"msg": "...", "loc": ["body", "name"]}]}
    """
    try:
        payload = response.json()
    except ValueError:
        return response.text[:200]

    detail = payload.get("detail") if isinstance(payload, dict) else None
    if isinstance(detail, list) and detail and isinstance(detail[0], dict):
        first = detail[0]
        loc = " -> ".join(str(part) for part in first.get("loc", []))
        msg = first.get("msg", "Validation error")
        return f"{msg} (in {loc})" if loc else str(msg)
    if isinstance(detail, str):
        return detail
    return "Something went wrong."


class HttpWorkflowStore:
    """基于 httpx.AsyncClient 的工作流存储

    使用示例:
        async with HttpWorkflowStore.from_settings(settings) as store:
            document = await store.get_document("wf_123")
    """

    def __init__(
        self,
        base_url: str,
        *,
        token: str = "",
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = timeout
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._owns_client = client is None

    @classmethod
    def from_settings(
        cls, config: Settings, client: httpx.AsyncClient | None = None
    ) -> HttpWorkflowStore:
        return cls(
            config.api_base_url,
            token=config.api_token,
            timeout=config.request_timeout,
            client=client,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def __aenter__(self) -> HttpWorkflowStore:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # ==================== WorkflowStore ====================

    async def list_documents(self) -> list[WorkflowDocument]:
        payload = await self._request("GET", "/workflows/")
        return [WorkflowDocumentDTO.model_validate(item).to_entity() for item in payload or []]

    async def create_document(self, name: str) -> WorkflowDocument:
        body = CreateWorkflowRequest(name=name).model_dump()
        payload = await self._request("POST", "/workflows/", json_body=body)
        return WorkflowDocumentDTO.model_validate(payload).to_entity()

    async def delete_document(self, workflow_id: str) -> None:
        await self._request(
            "DELETE", f"/workflows/{workflow_id}", entity=("Workflow", workflow_id)
        )

    async def get_document(self, workflow_id: str) -> WorkflowDocument:
        payload = await self._request(
            "GET", f"/workflows/{workflow_id}", entity=("Workflow", workflow_id)
        )
        return WorkflowDocumentDTO.model_validate(payload).to_entity()

    async def save_document(
        self, workflow_id: str, *, name: str, content: dict[str, Any]
    ) -> WorkflowDocument:
        body = UpdateWorkflowRequest(name=name, json_content=content).model_dump()
        payload = await self._request(
            "PATCH", f"/workflows/{workflow_id}", json_body=body, entity=("Workflow", workflow_id)
        )
        return WorkflowDocumentDTO.model_validate(payload).to_entity()

    async def execute(self, workflow_id: str) -> WorkflowRun:
        payload = await self._request(
            "POST", f"/workflows/{workflow_id}/execute", entity=("Workflow", workflow_id)
        )
        if isinstance(payload, dict):
            payload.setdefault("workflow_id", workflow_id)
        return WorkflowRunDTO.model_validate(payload).to_entity()

    async def list_runs(self, workflow_id: str) -> list[WorkflowRun]:
        payload = await self._request(
            "GET", f"/workflows/{workflow_id}/runs", entity=("Workflow", workflow_id)
        )
        return [WorkflowRunDTO.model_validate(item).to_entity() for item in payload or []]

    async def get_run(self, run_id: str) -> WorkflowRun:
        payload = await self._request(
            "GET", f"/workflow-runs/{run_id}", entity=("WorkflowRun", run_id)
        )
        return WorkflowRunDTO.model_validate(payload).to_entity()

    # ==================== CredentialStore ====================

    async def list_credentials(self) -> list[Credential]:
        payload = await self._request("GET", "/credentials/")
        return [CredentialDTO.model_validate(item).to_entity() for item in payload or []]

    # ==================== 内部 ====================

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json_body: dict[str, Any] | None = None,
        entity: tuple[str, str] | None = None,
    ) -> Any:
        url = f"{self._base_url}{path}"
        try:
            response = await self._client.request(
                method,
                url,
                headers=self._headers(),
                json=json_body,
                timeout=self._timeout,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            if status_code == 404 and entity is not None:
                raise NotFoundError(*entity) from e
            detail = extract_error_detail(e.response)
            logger.warning(
                "store_request_failed",
                extra={"method": method, "url": url, "status_code": status_code},
            )
            raise StoreError(
                f"HTTP error {status_code} for {method} {url}: {detail}",
                status_code=status_code,
                detail=detail,
            ) from e
        except httpx.TimeoutException as e:
            raise StoreError(
                f"HTTP request timeout after {self._timeout}s: {method} {url}",
                detail="Request timed out.",
            ) from e
        except httpx.TransportError as e:
            raise StoreError(f"Network error for {method} {url}: {e}", detail=str(e)) from e

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise StoreError(
                f"Invalid JSON response for {method} {url}",
                status_code=response.status_code,
                detail="Unexpected response from server.",
            ) from e
