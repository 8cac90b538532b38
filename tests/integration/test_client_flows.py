"""End-to-end client flows against the in-process fake server."""

from __future__ import annotations

import json

import pytest

from src.client.client import XNovelClient
from src.models.chapter import CreateChapterRequest
from src.models.chat import ChatMode, MessageRole
from src.models.project import CreateProjectRequest, UpdateProjectRequest
from src.utils.errors import APIError

pytestmark = pytest.mark.integration


# ======================================================================
# Device identity
# ======================================================================


class TestDeviceIdentity:
    @pytest.mark.asyncio
    async def test_generated_id_sent_on_every_request(self, api_client: XNovelClient, fake_state, device_store) -> None:
        async with api_client:
            assert await api_client.health.check() is True
            await api_client.projects.list()

        assert len(set(fake_state.device_ids)) == 1
        assert fake_state.device_ids[0].startswith("device_")
        assert device_store.load() == fake_state.device_ids[0]

    @pytest.mark.asyncio
    async def test_server_assigned_id_adopted(self, api_client: XNovelClient, fake_state, device_store) -> None:
        fake_state.assign_device_id = "device_from_server"
        async with api_client:
            await api_client.health.check()
            fake_state.assign_device_id = None
            await api_client.health.check()

        assert fake_state.device_ids[-1] == "device_from_server"
        assert device_store.load() == "device_from_server"


# ======================================================================
# Projects with the query cache
# ======================================================================


class TestProjectFlow:
    @pytest.mark.asyncio
    async def test_create_list_update_delete(self, api_client: XNovelClient, fake_state) -> None:
        async with api_client:
            created = await api_client.cache.mutate(
                lambda: api_client.projects.create(CreateProjectRequest(title="Tidewater", chapter_count=10)),
                invalidates=[("projects",)],
            )
            assert created.genre == []

            listing = await api_client.cached_projects()
            assert [p.title for p in listing.projects] == ["Tidewater"]

            # Cached: the server is not asked again.
            before = len(fake_state.request_log)
            await api_client.cached_projects()
            assert len(fake_state.request_log) == before

            await api_client.projects.update(created.id, UpdateProjectRequest(title="Tidewater Rising"))
            await api_client.invalidate_project(created.id)
            refreshed = await api_client.cached_project(created.id)
            assert refreshed.title == "Tidewater Rising"

            await api_client.projects.delete(created.id)
            with pytest.raises(APIError) as exc_info:
                await api_client.projects.get(created.id)
            assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_validation_error_details_surface(self, api_client: XNovelClient) -> None:
        async with api_client:
            with pytest.raises(APIError) as exc_info:
                await api_client.http.request("POST", "/api/v1/projects", json={"topic": "no title"})
        assert exc_info.value.status_code == 400
        assert exc_info.value.errors == [{"field": "title", "message": "required"}]

    @pytest.mark.asyncio
    async def test_chapters_listed_after_invalidation(self, api_client: XNovelClient) -> None:
        async with api_client:
            project = await api_client.projects.create(CreateProjectRequest(title="Ledger"))
            assert (await api_client.cached_chapters(project.id)).chapters == []

            await api_client.chapters.create(project.id, CreateChapterRequest(chapter_number=1, title="Arrival"))
            await api_client.invalidate_project(project.id)

            chapters = (await api_client.cached_chapters(project.id)).chapters
            assert [c.title for c in chapters] == ["Arrival"]


# ======================================================================
# Chat
# ======================================================================


class TestChatFlow:
    @pytest.mark.asyncio
    async def test_stream_reply_then_transcript(self, api_client: XNovelClient) -> None:
        async with api_client:
            session = api_client.chat_session()
            conv = await session.create(mode=ChatMode.CHARACTER, title="Keeper")
            assert [c.id for c in await session.conversations()] == [conv.id]

            deltas: list[str] = []
            result = await session.send("Who is lying?", on_delta=lambda d, acc: deltas.append(d))

            assert deltas == ["The ", "lighthouse ", "keeper ", "lied."]
            assert result.done is True
            assert result.done_frame.payload["assistant_message"]["content"] == "The lighthouse keeper lied."

            messages = await session.messages()
            assert [m.role for m in messages] == [MessageRole.USER, MessageRole.ASSISTANT]
            assert messages[0].content == "Who is lying?"

    @pytest.mark.asyncio
    async def test_falls_back_when_streaming_fails(self, api_client: XNovelClient, fake_state) -> None:
        fake_state.streaming_broken = True
        async with api_client:
            session = api_client.chat_session()
            await session.create()
            result = await session.send("hello")

        assert result.fell_back is True
        assert result.result == "The lighthouse keeper lied."

    @pytest.mark.asyncio
    async def test_rename_and_delete(self, api_client: XNovelClient) -> None:
        async with api_client:
            session = api_client.chat_session()
            conv = await session.create(title="Draft")
            await session.rename(conv.id, "Final")
            assert (await session.conversation(conv.id)).title == "Final"

            await session.delete(conv.id)
            assert session.active_conversation_id is None
            assert await session.conversations() == []


# ======================================================================
# Writing assistant and backup
# ======================================================================


class TestWritingAndBackup:
    @pytest.mark.asyncio
    async def test_assist_streams(self, api_client: XNovelClient) -> None:
        async with api_client:
            text = await api_client.writing_assistant().execute("polish", "the sea was loud")
        assert text == "[polish] the sea was loud"

    @pytest.mark.asyncio
    async def test_assist_fallback(self, api_client: XNovelClient, fake_state) -> None:
        fake_state.streaming_broken = True
        async with api_client:
            text = await api_client.writing_assistant().execute("suggestion", "stuck here")
        assert text == "[suggestion] stuck here"

    @pytest.mark.asyncio
    async def test_backup_preview_and_export(self, api_client: XNovelClient) -> None:
        async with api_client:
            await api_client.projects.create(CreateProjectRequest(title="Archive"))
            preview = await api_client.backup.preview()
            document = json.loads(await api_client.backup.export_data())

        assert preview.projects == 1
        assert document["projects"][0]["title"] == "Archive"
