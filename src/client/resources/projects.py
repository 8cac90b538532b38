"""Project CRUD plus architecture/blueprint generation and export."""

from __future__ import annotations

from src.client.resources.base import DEFAULT_PAGE_SIZE, Resource
from src.models.project import (
    CreateProjectRequest,
    ExportFormat,
    ExportResult,
    Project,
    ProjectList,
    UpdateProjectRequest,
)
from src.utils.errors import ValidationError


class ProjectsResource(Resource):
    async def create(self, request: CreateProjectRequest) -> Project | None:
        return await self._http.request_model("POST", self._path("projects"), Project, json=request)

    async def list(self, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> ProjectList:
        result = await self._http.request_model(
            "GET", self._path("projects"), ProjectList, params=self._page(page, page_size)
        )
        return result or ProjectList()

    async def get(self, project_id: str) -> Project | None:
        return await self._http.request_model(
            "GET", self._path("projects", self._require_id(project_id)), Project
        )

    async def update(self, project_id: str, request: UpdateProjectRequest) -> Project | None:
        return await self._http.request_model(
            "PUT", self._path("projects", self._require_id(project_id)), Project, json=request
        )

    async def delete(self, project_id: str) -> None:
        await self._http.request("DELETE", self._path("projects", self._require_id(project_id)))

    async def generate_architecture(self, project_id: str, overwrite: bool = False) -> Project | None:
        """Ask the server to generate the novel architecture (core seed, world, plot)."""
        return await self._http.request_model(
            "POST",
            self._path("projects", self._require_id(project_id), "architecture", "generate"),
            Project,
            json={"overwrite": overwrite},
        )

    async def generate_blueprint(self, project_id: str, overwrite: bool = False) -> Project | None:
        """Ask the server to generate the chapter-by-chapter blueprint."""
        return await self._http.request_model(
            "POST",
            self._path("projects", self._require_id(project_id), "blueprint", "generate"),
            Project,
            json={"overwrite": overwrite},
        )

    async def export(self, project_id: str, fmt: ExportFormat | str = ExportFormat.TXT) -> ExportResult | None:
        try:
            fmt = ExportFormat(fmt)
        except ValueError as exc:
            raise ValidationError(message=f"unsupported export format: {fmt}") from exc
        return await self._http.request_model(
            "GET",
            self._path("projects", self._require_id(project_id), "export", fmt.value),
            ExportResult,
        )
