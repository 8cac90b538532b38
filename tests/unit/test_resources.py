"""Unit tests for the typed API resources: paths, methods, bodies, validation."""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from src.models.chat import ChatMode, CreateConversationRequest
from src.models.device import UpdateDeviceSettingsRequest
from src.models.model_config import ValidateModelConfigRequest
from src.models.project import CreateProjectRequest, ExportFormat
from src.models.writing import WritingAction, WritingAssistantRequest
from src.utils.errors import APIError, ValidationError


# ======================================================================
# Helpers
# ======================================================================


class _Recorder:
    """MockTransport handler that records requests and replies with a canned envelope."""

    def __init__(self, data: Any = None, status: int = 200) -> None:
        self.data = data
        self.status = status
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        body: dict[str, Any] = {"code": 200, "message": "success"}
        if self.data is not None:
            body["data"] = self.data
        return httpx.Response(self.status, json=body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


_PROJECT = {"id": "p1", "title": "The Salt Road", "genre": ["fantasy"], "status": "writing"}
_CHAPTER = {"id": "c3", "project_id": "p1", "chapter_number": 3, "status": "draft"}
_CONVERSATION = {"id": "conv1", "title": "Villains", "mode": "character", "messages": None}


# ======================================================================
# Projects and chapters
# ======================================================================


class TestProjects:
    @pytest.mark.asyncio
    async def test_create_posts_body(self, make_client) -> None:
        rec = _Recorder(_PROJECT)
        client = make_client(rec)
        project = await client.projects.create(CreateProjectRequest(title="The Salt Road", genre=["fantasy"]))

        assert rec.last.method == "POST"
        assert rec.last.url.path == "/api/v1/projects"
        assert rec.last_json() == {"title": "The Salt Road", "genre": ["fantasy"]}
        assert project.id == "p1"

    @pytest.mark.asyncio
    async def test_list_sends_pagination(self, make_client) -> None:
        rec = _Recorder({"projects": [_PROJECT], "total": 1})
        listing = await make_client(rec).projects.list(page=2, page_size=5)

        assert rec.last.url.params["page"] == "2"
        assert rec.last.url.params["page_size"] == "5"
        assert listing.total == 1
        assert listing.projects[0].title == "The Salt Road"

    @pytest.mark.asyncio
    async def test_list_without_data_is_empty(self, make_client) -> None:
        listing = await make_client(_Recorder()).projects.list()
        assert listing.projects == []

    @pytest.mark.asyncio
    async def test_invalid_page_rejected_before_request(self, make_client) -> None:
        rec = _Recorder()
        with pytest.raises(ValidationError):
            await make_client(rec).projects.list(page=0)
        assert rec.requests == []

    @pytest.mark.asyncio
    async def test_blank_id_rejected(self, make_client) -> None:
        with pytest.raises(ValidationError):
            await make_client(_Recorder()).projects.get("  ")

    @pytest.mark.asyncio
    async def test_generate_architecture_path(self, make_client) -> None:
        rec = _Recorder(_PROJECT)
        await make_client(rec).projects.generate_architecture("p1", overwrite=True)
        assert rec.last.url.path == "/api/v1/projects/p1/architecture/generate"
        assert rec.last_json() == {"overwrite": True}

    @pytest.mark.asyncio
    async def test_export_format_in_path(self, make_client) -> None:
        rec = _Recorder({"download_url": "/files/p1.md", "word_count": 1200})
        result = await make_client(rec).projects.export("p1", ExportFormat.MD)
        assert rec.last.url.path == "/api/v1/projects/p1/export/md"
        assert result.word_count == 1200

    @pytest.mark.asyncio
    async def test_export_unknown_format(self, make_client) -> None:
        with pytest.raises(ValidationError, match="unsupported export format"):
            await make_client(_Recorder()).projects.export("p1", "pdf")


class TestChapters:
    @pytest.mark.asyncio
    async def test_get_by_number(self, make_client) -> None:
        rec = _Recorder(_CHAPTER)
        chapter = await make_client(rec).chapters.get("p1", 3)
        assert rec.last.url.path == "/api/v1/projects/p1/chapters/3"
        assert chapter.chapter_number == 3

    @pytest.mark.asyncio
    async def test_chapter_number_must_be_positive(self, make_client) -> None:
        with pytest.raises(ValidationError):
            await make_client(_Recorder()).chapters.get("p1", 0)

    @pytest.mark.asyncio
    async def test_finalize_body(self, make_client) -> None:
        rec = _Recorder(_CHAPTER)
        await make_client(rec).chapters.finalize("p1", 3, update_summary=False)
        assert rec.last.url.path == "/api/v1/projects/p1/chapters/3/finalize"
        assert rec.last_json() == {"update_summary": False}

    @pytest.mark.asyncio
    async def test_enrich_omits_unset_target(self, make_client) -> None:
        rec = _Recorder(_CHAPTER)
        await make_client(rec).chapters.enrich("p1", 3)
        assert rec.last_json() == {}


# ======================================================================
# Chat, writing, review
# ======================================================================


class TestChat:
    @pytest.mark.asyncio
    async def test_create_conversation(self, make_client) -> None:
        rec = _Recorder(_CONVERSATION)
        conv = await make_client(rec).chat.create(CreateConversationRequest(mode=ChatMode.CHARACTER))
        assert rec.last.url.path == "/api/v1/conversations"
        assert rec.last_json() == {"mode": "character"}
        assert conv.messages == []

    @pytest.mark.asyncio
    async def test_send_message_is_non_streaming(self, make_client) -> None:
        rec = _Recorder(
            {
                "user_message": {"id": "m1", "conversation_id": "conv1", "role": "user", "content": "hi"},
                "assistant_message": {
                    "id": "m2",
                    "conversation_id": "conv1",
                    "role": "assistant",
                    "content": "hello",
                },
            }
        )
        response = await make_client(rec).chat.send_message("conv1", "hi")
        assert rec.last.url.path == "/api/v1/conversations/conv1/messages"
        assert rec.last_json() == {"content": "hi", "stream": False}
        assert response.assistant_message.content == "hello"

    @pytest.mark.asyncio
    async def test_rename_requires_title(self, make_client) -> None:
        with pytest.raises(ValidationError):
            await make_client(_Recorder()).chat.update("conv1", "   ")


class TestWriting:
    @pytest.mark.asyncio
    async def test_assist_forces_non_streaming(self, make_client) -> None:
        rec = _Recorder({"result": "Polished text."})
        request = WritingAssistantRequest(action=WritingAction.POLISH, content="rough text", stream=True)
        text = await make_client(rec).writing.assist(request)

        assert rec.last.url.path == "/api/v1/writing/assist"
        assert rec.last_json() == {
            "action": "polish",
            "content": "rough text",
            "style": "vivid",
            "stream": False,
        }
        assert text == "Polished text."


class TestReview:
    @pytest.mark.asyncio
    async def test_detect_normalises_types(self, make_client) -> None:
        rec = _Recorder({"issues": []})
        await make_client(rec).review.detect("text", types=["grammar"])
        assert rec.last_json()["types"] == ["grammar"]

    @pytest.mark.asyncio
    async def test_detect_unknown_type(self, make_client) -> None:
        with pytest.raises(ValidationError):
            await make_client(_Recorder()).review.detect("text", types=["spelling-bee"])

    @pytest.mark.asyncio
    async def test_market_predict_path(self, make_client) -> None:
        rec = _Recorder({})
        await make_client(rec).review.market_predict("p1")
        assert rec.last.url.path == "/api/v1/projects/p1/market-predict"


# ======================================================================
# Device, models, backup, health
# ======================================================================


class TestMisc:
    @pytest.mark.asyncio
    async def test_update_device_settings(self, make_client) -> None:
        rec = _Recorder({"theme": "dark"})
        await make_client(rec).device.update_settings(UpdateDeviceSettingsRequest(theme="dark"))
        assert rec.last.method == "PUT"
        assert rec.last.url.path == "/api/v1/device/settings"
        assert rec.last_json() == {"theme": "dark"}

    @pytest.mark.asyncio
    async def test_model_validate_rejection_raises(self, make_client) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json={"code": 400, "message": "invalid api key"})

        request = ValidateModelConfigRequest(provider_id=1, api_key="sk-bad")
        with pytest.raises(APIError, match="invalid api key"):
            await make_client(handler).models.validate(request)

    @pytest.mark.asyncio
    async def test_model_validate_sends_secret(self, make_client) -> None:
        rec = _Recorder()
        request = ValidateModelConfigRequest(provider_id=1, api_key="sk-good")
        assert await make_client(rec).models.validate(request) is True
        assert rec.last_json()["api_key"] == "sk-good"

    @pytest.mark.asyncio
    async def test_backup_import_is_multipart(self, make_client) -> None:
        rec = _Recorder({"imported_projects": 2})
        result = await make_client(rec).backup.import_data(b'{"projects":[]}')
        assert rec.last.headers["content-type"].startswith("multipart/form-data")
        assert result.imported_projects == 2

    @pytest.mark.asyncio
    async def test_backup_import_rejects_empty(self, make_client) -> None:
        with pytest.raises(ValidationError):
            await make_client(_Recorder()).backup.import_data(b"")

    @pytest.mark.asyncio
    async def test_health_check(self, make_client) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/health"
            return httpx.Response(200, json={"status": "ok"})

        assert await make_client(handler).health.check() is True
