"""测试：WorkflowEditorSession（一次完整的编辑会话）

场景覆盖：
- 新工作流：添加触发器和动作、配置凭证、保存
- 选中节点被删除后配置面板关闭
- 保存/执行请求进行中时拒绝重复请求
- 凭证列表每个会话只拉取一次
- Webhook URL 只在入口是 Webhook 触发器时展示
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from flowcanvas.application.services.workflow_editor_session import WorkflowEditorSession
from flowcanvas.config import Settings
from flowcanvas.domain.entities.credential import Credential
from flowcanvas.domain.exceptions import DomainError, OperationInProgressError
from flowcanvas.domain.services.selection_controller import SelectionState
from flowcanvas.domain.value_objects.node_type import NodeType
from flowcanvas.domain.value_objects.position import Position
from flowcanvas.domain.value_objects.run_status import RunStatus
from flowcanvas.domain.value_objects.validation_result import MissingCredential
from flowcanvas.infrastructure.adapters.in_memory_workflow_store import InMemoryWorkflowStore


@pytest.fixture
def config() -> Settings:
    return Settings(api_base_url="https://flows.example.com/api/v1/", api_token="")


@pytest.fixture
def store(sample_credentials) -> InMemoryWorkflowStore:
    return InMemoryWorkflowStore(credentials=sample_credentials)


@pytest.fixture
def session(store, registry, config) -> WorkflowEditorSession:
    return WorkflowEditorSession(
        workflow_store=store, credential_store=store, registry=registry, config=config
    )


class TestEditingFlow:
    @pytest.mark.asyncio
    async def test_new_workflow_starts_empty(self, store, session):
        document = await store.create_document("New Flow")

        graph = await session.load(document.id)

        assert graph.is_empty()
        assert session.name == "New Flow"
        assert session.selection.state is SelectionState.IDLE

    @pytest.mark.asyncio
    async def test_add_node_without_position_uses_default(self, store, session, config):
        await session.load(store.seed_document("Flow").id)

        node = session.add_node(NodeType.TELEGRAM)

        assert node.position == Position(x=config.default_node_x, y=config.default_node_y)

    @pytest.mark.asyncio
    async def test_configure_and_save(self, store, session):
        """场景：触发器 + Telegram，先保存失败，选择凭证后保存成功"""
        # Arrange
        document = store.seed_document("Flow")
        await session.load(document.id)
        trigger = session.add_node(NodeType.MANUAL_TRIGGER, Position(x=0, y=0))
        telegram = session.add_node(NodeType.TELEGRAM, Position(x=300, y=0))
        session.connect(trigger.id, telegram.id)

        # Act: 未选择凭证
        rejected = await session.save()

        # Assert
        assert isinstance(rejected.validation.violation, MissingCredential)
        assert (await store.get_document(document.id)).is_blank

        # Act: 选择凭证后再次保存
        session.select(telegram.id)
        session.update_field("credentialId", "cred_tg")
        session.update_field("chat_id", "@channel")
        saved = await session.save()

        # Assert
        assert saved.saved
        content = (await store.get_document(document.id)).content
        assert content["startNodeId"] == trigger.id
        assert content["nodes"][1]["data"]["inputs"]["chat_id"] == "@channel"

    @pytest.mark.asyncio
    async def test_saved_workflow_reloads_same_graph(self, store, session, registry, config):
        document = store.seed_document("Flow")
        await session.load(document.id)
        trigger = session.add_node(NodeType.WEBHOOK_TRIGGER, Position(x=0, y=0))
        llm = session.add_node(NodeType.LLM_PROMPT, Position(x=300, y=0))
        session.connect(trigger.id, llm.id)
        session.select(llm.id)
        session.update_field("credentialId", "cred_openai")
        await session.save()

        other = WorkflowEditorSession(store, store, registry=registry, config=config)
        reloaded = await other.load(document.id)

        assert reloaded.nodes == session.graph.nodes
        assert reloaded.edges == session.graph.edges

    @pytest.mark.asyncio
    async def test_removing_selected_node_closes_panel(self, store, session):
        await session.load(store.seed_document("Flow").id)
        node = session.add_node(NodeType.TELEGRAM)
        session.select(node.id)

        session.remove_node(node.id)

        assert session.selection.state is SelectionState.IDLE
        with pytest.raises(DomainError):
            session.update_field("chat_id", "@c")

    @pytest.mark.asyncio
    async def test_rename_is_saved(self, store, session):
        document = store.seed_document("Old")
        await session.load(document.id)
        session.add_node(NodeType.MANUAL_TRIGGER)

        session.rename("  New name ")
        await session.save()

        assert (await store.get_document(document.id)).name == "New name"

    def test_operations_before_load_should_raise(self, session):
        assert not session.is_loaded
        with pytest.raises(DomainError, match="尚未加载"):
            session.add_node(NodeType.TELEGRAM)


class TestReentrancy:
    @pytest.mark.asyncio
    async def test_second_save_while_saving_is_rejected(self, store, session):
        # Arrange
        document = store.seed_document("Flow")
        await session.load(document.id)
        session.add_node(NodeType.MANUAL_TRIGGER)

        release = asyncio.Event()
        original_save = store.save_document

        async def slow_save(*args, **kwargs):
            await release.wait()
            return await original_save(*args, **kwargs)

        store.save_document = slow_save

        # Act
        first = asyncio.create_task(session.save())
        await asyncio.sleep(0)

        # Assert
        assert not session.can_save
        with pytest.raises(OperationInProgressError):
            await session.save()

        release.set()
        result = await first
        assert result.saved
        assert session.can_save

    @pytest.mark.asyncio
    async def test_second_execute_while_executing_is_rejected(self, store, session):
        document = store.seed_document("Flow")
        await session.load(document.id)
        session.add_node(NodeType.MANUAL_TRIGGER)

        release = asyncio.Event()
        original_execute = store.execute

        async def slow_execute(workflow_id):
            await release.wait()
            return await original_execute(workflow_id)

        store.execute = slow_execute

        first = asyncio.create_task(session.execute())
        await asyncio.sleep(0)

        assert not session.can_execute
        with pytest.raises(OperationInProgressError):
            await session.execute()

        release.set()
        output = await first
        assert output.run.status is RunStatus.PENDING
        assert session.can_execute

    @pytest.mark.asyncio
    async def test_failed_save_keeps_graph_and_allows_retry(self, store, session):
        document = store.seed_document("Flow")
        await session.load(document.id)
        session.add_node(NodeType.MANUAL_TRIGGER)
        store.save_document = AsyncMock(side_effect=RuntimeError("network down"))

        with pytest.raises(RuntimeError):
            await session.save()

        assert len(session.graph.nodes) == 1
        assert session.document.is_blank
        assert session.can_save


class TestCredentials:
    @pytest.mark.asyncio
    async def test_credentials_are_fetched_once_per_session(self, store, registry, config):
        credential_store = AsyncMock()
        credential_store.list_credentials.return_value = [
            Credential(id="cred_tg", name="Bot", type="telegram")
        ]
        session = WorkflowEditorSession(store, credential_store, registry=registry, config=config)

        first = await session.credentials()
        second = await session.credentials()

        assert first == second
        credential_store.list_credentials.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_relevant_credentials_for_selected_node(self, store, session):
        await session.load(store.seed_document("Flow").id)
        node = session.add_node(NodeType.TELEGRAM)
        session.select(node.id)

        result = await session.relevant_credentials()

        assert [c.id for c in result] == ["cred_tg", "cred_tg_bot"]


class TestWebhookUrl:
    @pytest.mark.asyncio
    async def test_webhook_url_after_saving_webhook_workflow(self, store, session):
        document = store.seed_document("Hook")
        await session.load(document.id)
        session.add_node(NodeType.WEBHOOK_TRIGGER)
        assert session.webhook_url() is None

        await session.save()

        token = (await store.get_document(document.id)).webhook_token
        assert token
        assert session.webhook_url() == f"https://flows.example.com/api/v1/webhooks/{token}"

    @pytest.mark.asyncio
    async def test_manual_workflow_has_no_webhook_url(self, store, session):
        await session.load(store.seed_document("Manual").id)
        session.add_node(NodeType.MANUAL_TRIGGER)

        await session.save()

        assert session.webhook_url() is None
