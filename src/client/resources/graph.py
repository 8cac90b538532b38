"""Character relationship graph endpoints."""

from __future__ import annotations

from src.client.resources.base import Resource
from src.models.graph import GraphData


class GraphResource(Resource):
    def _graph(self, project_id: str, *rest: object) -> str:
        return self._path("projects", self._require_id(project_id, "project_id"), "graph", *rest)

    async def get(self, project_id: str) -> GraphData:
        return await self._http.request_model("GET", self._graph(project_id), GraphData) or GraphData()

    async def generate(self, project_id: str) -> GraphData:
        """Extract the initial graph from the project architecture."""
        return (
            await self._http.request_model("POST", self._graph(project_id, "generate"), GraphData)
            or GraphData()
        )

    async def update_from_chapter(self, project_id: str, chapter_number: int) -> GraphData:
        return (
            await self._http.request_model(
                "POST",
                self._graph(project_id, "chapters", self._require_chapter(chapter_number)),
                GraphData,
            )
            or GraphData()
        )

    async def get_chapter_snapshot(self, project_id: str, chapter_number: int) -> GraphData:
        return (
            await self._http.request_model(
                "GET",
                self._graph(project_id, "chapters", self._require_chapter(chapter_number)),
                GraphData,
            )
            or GraphData()
        )
