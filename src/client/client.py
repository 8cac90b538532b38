"""Top-level client object bundling every resource, the cache and the sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from src.client.http import XNovelHTTPClient
from src.client.resources import (
    BackupResource,
    ChaptersResource,
    ChatResource,
    DeviceResource,
    GraphResource,
    HealthResource,
    ModelConfigsResource,
    ProjectsResource,
    ReviewResource,
    WritingResource,
)
from src.models.chapter import ChapterList
from src.models.chat import ConversationList
from src.models.project import Project, ProjectList
from src.services.query_cache import QueryCache
from src.streaming.consumer import StreamConsumer

if TYPE_CHECKING:
    from src.services.chat_session import ChatSession
    from src.services.writing_assistant import WritingAssistant


class XNovelClient:
    """Everything a front end needs to talk to one x-novel server.

    Build it with :func:`src.main.build_client` rather than by hand so the
    settings, device store and cache backend are wired consistently.
    """

    def __init__(
        self,
        http: XNovelHTTPClient,
        cache: QueryCache,
        fallback_enabled: bool = True,
    ) -> None:
        self.http = http
        self.cache = cache
        self.stream = StreamConsumer(http)

        self.device = DeviceResource(http)
        self.projects = ProjectsResource(http)
        self.chapters = ChaptersResource(http)
        self.models = ModelConfigsResource(http)
        self.graph = GraphResource(http)
        self.review = ReviewResource(http)
        self.writing = WritingResource(http)
        self.chat = ChatResource(http)
        self.backup = BackupResource(http)
        self.health = HealthResource(http)

        self._fallback_enabled = fallback_enabled

    async def __aenter__(self) -> XNovelClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.http.aclose()

    def chat_session(self) -> ChatSession:
        # Deferred: the session modules import the resource classes from this package.
        from src.services.chat_session import ChatSession

        return ChatSession(self.chat, self.stream, self.cache, fallback_enabled=self._fallback_enabled)

    def writing_assistant(self) -> WritingAssistant:
        from src.services.writing_assistant import WritingAssistant

        return WritingAssistant(self.writing, self.stream, fallback_enabled=self._fallback_enabled)

    # ------------------------------------------------------------------
    # Cached project reads and the mutations that invalidate them
    # ------------------------------------------------------------------

    async def cached_projects(self, page: int = 1, page_size: int = 20) -> ProjectList:
        return await self.cache.fetch(
            ("projects", {"page": page, "page_size": page_size}),
            lambda: self.projects.list(page=page, page_size=page_size),
        )

    async def cached_project(self, project_id: str) -> Project | None:
        return await self.cache.fetch(("project", project_id), lambda: self.projects.get(project_id))

    async def cached_chapters(self, project_id: str, page: int = 1, page_size: int = 100) -> ChapterList:
        return await self.cache.fetch(
            ("chapters", project_id, {"page": page, "page_size": page_size}),
            lambda: self.chapters.list(project_id, page=page, page_size=page_size),
        )

    async def cached_conversations(self, page: int = 1, page_size: int = 100) -> ConversationList:
        # Same key shape ChatSession uses, so its sends invalidate this too.
        return await self.cache.fetch(
            ("conversations", {"page": page, "page_size": page_size}),
            lambda: self.chat.list(page=page, page_size=page_size),
        )

    async def invalidate_project(self, project_id: str) -> None:
        """Mark a project, its chapters, and the project list stale."""
        await self.cache.invalidate_many(
            [("project", project_id), ("chapters", project_id), ("projects",)]
        )
