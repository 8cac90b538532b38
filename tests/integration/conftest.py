"""In-process fake x-novel server for integration tests.

A small FastAPI app keeps projects, chapters and conversations in memory
and answers with the real wire shapes: ``{code, message, data}`` envelopes,
``text/event-stream`` bodies of ``data: {json}`` lines, and an echoed
``X-Device-ID`` header.  The client reaches it through
``httpx.ASGITransport`` so no socket is opened.
"""

from __future__ import annotations

import json
import uuid
from typing import Any, AsyncIterator

import httpx
import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response, StreamingResponse

from src.client.client import XNovelClient
from src.config.settings import Settings
from src.main import build_client
from src.providers.device.memory_store import MemoryDeviceIdStore


def _ok(data: Any = None) -> JSONResponse:
    body: dict[str, Any] = {"code": 200, "message": "success"}
    if data is not None:
        body["data"] = data
    return JSONResponse(body)


def _fail(status: int, message: str) -> JSONResponse:
    return JSONResponse({"code": status, "message": message}, status_code=status)


def _sse(frames: list[dict[str, Any]]) -> StreamingResponse:
    async def body() -> AsyncIterator[bytes]:
        for frame in frames:
            yield f"data: {json.dumps(frame, ensure_ascii=False)}\n\n".encode("utf-8")

    return StreamingResponse(body(), media_type="text/event-stream")


class FakeState:
    """Mutable server state plus switches the tests flip."""

    def __init__(self) -> None:
        self.projects: dict[str, dict[str, Any]] = {}
        self.chapters: dict[str, list[dict[str, Any]]] = {}
        self.conversations: dict[str, dict[str, Any]] = {}
        self.device_ids: list[str] = []
        self.request_log: list[str] = []
        self.assign_device_id: str | None = None
        self.streaming_broken = False
        self.reply_words = ["The ", "lighthouse ", "keeper ", "lied."]


def build_fake_app(state: FakeState) -> FastAPI:
    app = FastAPI()

    @app.middleware("http")
    async def device_header(request: Request, call_next):
        device_id = request.headers.get("X-Device-ID", "")
        state.device_ids.append(device_id)
        state.request_log.append(f"{request.method} {request.url.path}")
        response = await call_next(request)
        response.headers["X-Device-ID"] = state.assign_device_id or device_id
        return response

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    # -- Projects ---------------------------------------------------------

    @app.post("/api/v1/projects")
    async def create_project(request: Request) -> JSONResponse:
        body = await request.json()
        if not body.get("title"):
            return JSONResponse(
                {"code": 400, "message": "invalid request", "errors": [{"field": "title", "message": "required"}]},
                status_code=400,
            )
        project = {"id": uuid.uuid4().hex[:8], "status": "draft", "genre": None, **body}
        state.projects[project["id"]] = project
        state.chapters[project["id"]] = []
        return _ok(project)

    @app.get("/api/v1/projects")
    async def list_projects(page: int = 1, page_size: int = 20) -> JSONResponse:
        items = list(state.projects.values())
        start = (page - 1) * page_size
        return _ok({"projects": items[start : start + page_size], "total": len(items)})

    @app.get("/api/v1/projects/{project_id}")
    async def get_project(project_id: str) -> JSONResponse:
        if project_id not in state.projects:
            return _fail(404, "project not found")
        return _ok(state.projects[project_id])

    @app.put("/api/v1/projects/{project_id}")
    async def update_project(project_id: str, request: Request) -> JSONResponse:
        if project_id not in state.projects:
            return _fail(404, "project not found")
        state.projects[project_id].update(await request.json())
        return _ok(state.projects[project_id])

    @app.delete("/api/v1/projects/{project_id}")
    async def delete_project(project_id: str) -> JSONResponse:
        state.projects.pop(project_id, None)
        state.chapters.pop(project_id, None)
        return _ok()

    @app.post("/api/v1/projects/{project_id}/chapters")
    async def create_chapter(project_id: str, request: Request) -> JSONResponse:
        body = await request.json()
        chapter = {"id": uuid.uuid4().hex[:8], "project_id": project_id, "status": "not_started", **body}
        state.chapters.setdefault(project_id, []).append(chapter)
        return _ok(chapter)

    @app.get("/api/v1/projects/{project_id}/chapters")
    async def list_chapters(project_id: str) -> JSONResponse:
        chapters = state.chapters.get(project_id, [])
        return _ok({"chapters": chapters, "total": len(chapters)})

    # -- Conversations ----------------------------------------------------

    @app.post("/api/v1/conversations")
    async def create_conversation(request: Request) -> JSONResponse:
        body = await request.json()
        conv = {
            "id": uuid.uuid4().hex[:8],
            "title": body.get("title") or "New conversation",
            "mode": body.get("mode", "general"),
            "project_id": body.get("project_id"),
            "messages": None,
        }
        state.conversations[conv["id"]] = conv
        return _ok(conv)

    @app.get("/api/v1/conversations")
    async def list_conversations() -> JSONResponse:
        convs = [{k: v for k, v in c.items() if k != "messages"} for c in state.conversations.values()]
        return _ok({"conversations": convs, "total": len(convs)})

    @app.get("/api/v1/conversations/{conv_id}")
    async def get_conversation(conv_id: str) -> JSONResponse:
        if conv_id not in state.conversations:
            return _fail(404, "conversation not found")
        return _ok(state.conversations[conv_id])

    @app.put("/api/v1/conversations/{conv_id}")
    async def rename_conversation(conv_id: str, request: Request) -> JSONResponse:
        state.conversations[conv_id]["title"] = (await request.json())["title"]
        return _ok()

    @app.delete("/api/v1/conversations/{conv_id}")
    async def delete_conversation(conv_id: str) -> JSONResponse:
        state.conversations.pop(conv_id, None)
        return _ok()

    @app.post("/api/v1/conversations/{conv_id}/messages")
    async def send_message(conv_id: str, request: Request) -> Response:
        conv = state.conversations.get(conv_id)
        if conv is None:
            return _fail(404, "conversation not found")
        body = await request.json()
        if body.get("stream") and state.streaming_broken:
            return _fail(500, "streaming unavailable")

        messages = conv["messages"] or []
        user = {"id": uuid.uuid4().hex[:8], "conversation_id": conv_id, "role": "user", "content": body["content"]}
        reply = {
            "id": uuid.uuid4().hex[:8],
            "conversation_id": conv_id,
            "role": "assistant",
            "content": "".join(state.reply_words),
        }
        conv["messages"] = [*messages, user, reply]

        if body.get("stream"):
            frames = [{"content": word} for word in state.reply_words]
            frames.append({"done": True, "user_message": user, "assistant_message": reply})
            return _sse(frames)
        return _ok({"user_message": user, "assistant_message": reply})

    # -- Writing assistant ------------------------------------------------

    @app.post("/api/v1/writing/assist")
    async def assist(request: Request) -> Response:
        body = await request.json()
        if body.get("stream") and state.streaming_broken:
            return _fail(500, "streaming unavailable")
        result = f"[{body['action']}] {body['content']}"
        if body.get("stream"):
            return _sse([{"content": result[:5]}, {"content": result[5:]}, {"done": True, "result": result}])
        return _ok({"result": result})

    # -- Backup -----------------------------------------------------------

    @app.get("/api/v1/backup/preview")
    async def backup_preview() -> JSONResponse:
        return _ok(
            {
                "projects": len(state.projects),
                "chapters": sum(len(c) for c in state.chapters.values()),
                "conversations": len(state.conversations),
            }
        )

    @app.get("/api/v1/backup/export")
    async def backup_export() -> Response:
        document = {"version": "1.0", "projects": list(state.projects.values())}
        return Response(json.dumps(document).encode("utf-8"), media_type="application/json")

    return app


@pytest.fixture
def fake_state() -> FakeState:
    return FakeState()


@pytest.fixture
def device_store() -> MemoryDeviceIdStore:
    return MemoryDeviceIdStore()


@pytest.fixture
def api_client(fake_state: FakeState, device_store: MemoryDeviceIdStore) -> XNovelClient:
    """An XNovelClient wired to the fake server through ASGITransport."""
    transport = httpx.ASGITransport(app=build_fake_app(fake_state))
    return build_client(
        Settings(_env_file=None, api_base_url="http://testserver", device_id_path=""),
        http_client=httpx.AsyncClient(transport=transport),
        device_store=device_store,
    )
