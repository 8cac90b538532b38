"""Chapter CRUD and per-chapter generation actions, scoped to one project."""

from __future__ import annotations

from src.client.resources.base import DEFAULT_PAGE_SIZE, Resource
from src.models.chapter import Chapter, ChapterList, CreateChapterRequest, UpdateChapterRequest
from src.utils.errors import ValidationError


class ChaptersResource(Resource):
    def _chapters(self, project_id: str, *rest: object) -> str:
        return self._path("projects", self._require_id(project_id, "project_id"), "chapters", *rest)

    async def create(self, project_id: str, request: CreateChapterRequest) -> Chapter | None:
        return await self._http.request_model("POST", self._chapters(project_id), Chapter, json=request)

    async def list(
        self, project_id: str, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE
    ) -> ChapterList:
        result = await self._http.request_model(
            "GET", self._chapters(project_id), ChapterList, params=self._page(page, page_size)
        )
        return result or ChapterList()

    async def get(self, project_id: str, chapter_number: int) -> Chapter | None:
        return await self._http.request_model(
            "GET", self._chapters(project_id, self._require_chapter(chapter_number)), Chapter
        )

    async def update(
        self, project_id: str, chapter_number: int, request: UpdateChapterRequest
    ) -> Chapter | None:
        return await self._http.request_model(
            "PUT",
            self._chapters(project_id, self._require_chapter(chapter_number)),
            Chapter,
            json=request,
        )

    async def generate_content(
        self, project_id: str, chapter_number: int, overwrite: bool = False
    ) -> Chapter | None:
        return await self._http.request_model(
            "POST",
            self._chapters(project_id, self._require_chapter(chapter_number), "generate"),
            Chapter,
            json={"overwrite": overwrite},
        )

    async def finalize(
        self, project_id: str, chapter_number: int, update_summary: bool = True
    ) -> Chapter | None:
        """Lock the chapter; with *update_summary* the project summary is refreshed."""
        return await self._http.request_model(
            "POST",
            self._chapters(project_id, self._require_chapter(chapter_number), "finalize"),
            Chapter,
            json={"update_summary": update_summary},
        )

    async def enrich(
        self, project_id: str, chapter_number: int, target_words: int | None = None
    ) -> Chapter | None:
        if target_words is not None and target_words < 1:
            raise ValidationError(message="target_words must be >= 1")
        return await self._http.request_model(
            "POST",
            self._chapters(project_id, self._require_chapter(chapter_number), "enrich"),
            Chapter,
            json={"target_words": target_words},
        )
