"""测试：InMemoryWorkflowStore"""

import pytest

from flowcanvas.domain.exceptions import NotFoundError
from flowcanvas.domain.value_objects.run_status import RunStatus
from flowcanvas.infrastructure.adapters.in_memory_workflow_store import InMemoryWorkflowStore


def _content(start_type: str) -> dict:
    return {
        "startNodeId": f"{start_type}-1",
        "nodes": [{"id": f"{start_type}-1", "type": start_type, "data": {"inputs": {}}}],
        "edges": [],
    }


class TestInMemoryWorkflowStore:
    @pytest.mark.asyncio
    async def test_save_replaces_document(self):
        store = InMemoryWorkflowStore()
        document = store.seed_document("Flow")

        saved = await store.save_document(
            document.id, name="Renamed", content=_content("manual_trigger")
        )

        assert saved.name == "Renamed"
        assert (await store.get_document(document.id)).content == _content("manual_trigger")

    @pytest.mark.asyncio
    async def test_saved_content_is_copied(self):
        store = InMemoryWorkflowStore()
        document = store.seed_document("Flow")
        content = _content("manual_trigger")

        await store.save_document(document.id, name="Flow", content=content)
        content["nodes"].clear()

        assert len((await store.get_document(document.id)).content["nodes"]) == 1

    @pytest.mark.asyncio
    async def test_unknown_workflow_raises_not_found(self):
        store = InMemoryWorkflowStore()

        with pytest.raises(NotFoundError):
            await store.get_document("wf_x")
        with pytest.raises(NotFoundError):
            await store.execute("wf_x")
        with pytest.raises(NotFoundError):
            await store.get_run("run_x")

    @pytest.mark.asyncio
    async def test_webhook_token_is_stable_across_saves(self):
        store = InMemoryWorkflowStore()
        document = store.seed_document("Hook")

        first = await store.save_document(
            document.id, name="Hook", content=_content("webhook_trigger")
        )
        second = await store.save_document(
            document.id, name="Hook", content=_content("webhook_trigger")
        )

        assert first.webhook_token
        assert second.webhook_token == first.webhook_token

    @pytest.mark.asyncio
    async def test_manual_workflow_has_no_webhook_token(self):
        store = InMemoryWorkflowStore()
        document = store.seed_document("Manual", content=_content("manual_trigger"))

        assert document.webhook_token is None

    @pytest.mark.asyncio
    async def test_execute_records_pending_run(self):
        store = InMemoryWorkflowStore()
        document = store.seed_document("Flow")

        run = await store.execute(document.id)

        assert run.status is RunStatus.PENDING
        assert run.started_at is not None
        assert await store.list_runs(document.id) == [run]
        assert await store.get_run(run.id) == run

    @pytest.mark.asyncio
    async def test_list_credentials_returns_copy(self, sample_credentials):
        store = InMemoryWorkflowStore(credentials=sample_credentials)

        credentials = await store.list_credentials()
        credentials.clear()

        assert len(await store.list_credentials()) == len(sample_credentials)


class TestWorkflowList:
    @pytest.mark.asyncio
    async def test_create_document_starts_blank(self):
        store = InMemoryWorkflowStore()

        document = await store.create_document("New Flow")

        assert document.name == "New Flow"
        assert document.is_blank
        assert await store.list_documents() == [document]

    @pytest.mark.asyncio
    async def test_delete_document_removes_it_and_its_runs(self):
        # Arrange
        store = InMemoryWorkflowStore()
        kept = await store.create_document("Kept")
        deleted = await store.create_document("Deleted")
        run = await store.execute(deleted.id)

        # Act
        await store.delete_document(deleted.id)

        # Assert
        assert await store.list_documents() == [kept]
        with pytest.raises(NotFoundError):
            await store.get_document(deleted.id)
        with pytest.raises(NotFoundError):
            await store.get_run(run.id)

    @pytest.mark.asyncio
    async def test_delete_unknown_document_raises_not_found(self):
        store = InMemoryWorkflowStore()

        with pytest.raises(NotFoundError):
            await store.delete_document("wf_x")
