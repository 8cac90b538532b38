"""Error detection, AI review, and market prediction endpoints."""

from __future__ import annotations

from src.client.resources.base import Resource
from src.models.review import DetectionResult, DetectionType, MarketPrediction, ReviewResult
from src.utils.errors import ValidationError


class ReviewResource(Resource):
    async def detect(
        self, content: str, types: list[DetectionType | str] | None = None
    ) -> DetectionResult:
        if not content.strip():
            raise ValidationError(message="content must not be empty")
        body: dict[str, object] = {"content": content}
        if types:
            try:
                body["types"] = [DetectionType(t).value for t in types]
            except ValueError as exc:
                raise ValidationError(message=f"unknown detection type: {exc}") from exc
        result = await self._http.request_model(
            "POST", self._path("review", "detect"), DetectionResult, json=body
        )
        return result or DetectionResult()

    async def review_chapter(self, project_id: str, chapter_number: int) -> ReviewResult | None:
        return await self._http.request_model(
            "POST",
            self._path(
                "projects",
                self._require_id(project_id, "project_id"),
                "review",
                "chapters",
                self._require_chapter(chapter_number),
            ),
            ReviewResult,
        )

    async def review_project(self, project_id: str) -> ReviewResult | None:
        return await self._http.request_model(
            "POST",
            self._path("projects", self._require_id(project_id, "project_id"), "review"),
            ReviewResult,
        )

    async def market_predict(self, project_id: str) -> MarketPrediction | None:
        return await self._http.request_model(
            "POST",
            self._path("projects", self._require_id(project_id, "project_id"), "market-predict"),
            MarketPrediction,
        )
