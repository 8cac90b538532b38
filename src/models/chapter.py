"""Chapter models -- blueprint slots, generated content, and finalisation state."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ChapterStatus(str, Enum):  # noqa: UP042
    NOT_STARTED = "not_started"
    DRAFT = "draft"
    COMPLETED = "completed"


class Chapter(BaseModel):
    """A single chapter of a project, addressed by ``chapter_number``."""

    model_config = ConfigDict(frozen=True)

    id: str
    project_id: str
    chapter_number: int = Field(ge=1)
    title: str | None = None

    blueprint_position: str | None = None
    blueprint_purpose: str | None = None
    blueprint_suspense: str | None = None
    blueprint_foreshadowing: str | None = None
    blueprint_twist_level: str | None = None
    blueprint_summary: str | None = None

    content: str | None = None
    word_count: int = 0

    status: ChapterStatus = ChapterStatus.NOT_STARTED
    is_finalized: bool = False

    created_at: datetime | None = None
    updated_at: datetime | None = None


class ChapterList(BaseModel):
    model_config = ConfigDict(frozen=True)

    chapters: list[Chapter] = Field(default_factory=list)
    total: int = 0


class CreateChapterRequest(BaseModel):
    chapter_number: int = Field(ge=1)
    title: str | None = None
    blueprint_summary: str | None = None


class UpdateChapterRequest(BaseModel):
    """Partial update; fields left as ``None`` are not sent."""

    title: str | None = None
    content: str | None = None
    status: ChapterStatus | None = None
    is_finalized: bool | None = None

    blueprint_position: str | None = None
    blueprint_purpose: str | None = None
    blueprint_suspense: str | None = None
    blueprint_foreshadowing: str | None = None
    blueprint_twist_level: str | None = None
    blueprint_summary: str | None = None
