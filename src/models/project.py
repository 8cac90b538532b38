"""Novel project models.

A project carries its generation inputs (topic, genre, chapter plan),
the generated architecture and chapter blueprint, and rollup statistics
the server computes from its chapters.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProjectStatus(str, Enum):  # noqa: UP042
    """Lifecycle states for a novel project."""

    DRAFT = "draft"
    WRITING = "writing"
    COMPLETED = "completed"
    PUBLISHED = "published"


class ExportFormat(str, Enum):  # noqa: UP042
    TXT = "txt"
    MD = "md"


class Project(BaseModel):
    """A novel project as returned by the API."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    topic: str | None = None
    genre: list[str] = Field(default_factory=list)
    chapter_count: int = 0
    words_per_chapter: int = 0
    user_guidance: str | None = None

    # Architecture
    core_seed: str | None = None
    character_dynamics: str | None = None
    world_building: str | None = None
    plot_architecture: str | None = None
    character_state: str | None = None
    architecture_generated: bool = False

    # Blueprint
    chapter_blueprint: str | None = None
    blueprint_generated: bool = False

    # Rollups
    global_summary: str | None = None
    total_chapters: int = 0
    completed_chapters: int = 0
    total_words: int = 0

    status: ProjectStatus = ProjectStatus.DRAFT
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("genre", mode="before")
    @classmethod
    def _null_genre(cls, value: object) -> object:
        # The server serialises an empty Go slice as null.
        return [] if value is None else value


class ProjectList(BaseModel):
    model_config = ConfigDict(frozen=True)

    projects: list[Project] = Field(default_factory=list)
    total: int = 0


class CreateProjectRequest(BaseModel):
    title: str = Field(min_length=1)
    topic: str | None = None
    genre: list[str] | None = None
    chapter_count: int | None = Field(default=None, ge=1)
    words_per_chapter: int | None = Field(default=None, ge=1)
    user_guidance: str | None = None


class UpdateProjectRequest(BaseModel):
    """Partial update; fields left as ``None`` are not sent."""

    title: str | None = Field(default=None, min_length=1)
    topic: str | None = None
    genre: list[str] | None = None
    chapter_count: int | None = Field(default=None, ge=1)
    words_per_chapter: int | None = Field(default=None, ge=1)
    user_guidance: str | None = None
    status: ProjectStatus | None = None

    core_seed: str | None = None
    character_dynamics: str | None = None
    world_building: str | None = None
    plot_architecture: str | None = None
    character_state: str | None = None

    chapter_blueprint: str | None = None
    global_summary: str | None = None


class ExportResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    download_url: str
    file_size: int = 0
    word_count: int = 0
    chapter_count: int = 0
