"""Backup preview and import result models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class BackupPreview(BaseModel):
    """Counts of what an export would contain for the current device."""

    model_config = ConfigDict(frozen=True)

    projects: int = 0
    chapters: int = 0
    total_words: int = 0
    conversations: int = 0
    messages: int = 0


class ImportResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    imported_projects: int = 0
    imported_chapters: int = 0
    imported_conversations: int = 0
    imported_messages: int = 0
    failed_projects: int = 0
    failed_chapters: int = 0
    failed_conversations: int = 0
    failed_messages: int = 0

    @property
    def failed_total(self) -> int:
        return (
            self.failed_projects
            + self.failed_chapters
            + self.failed_conversations
            + self.failed_messages
        )
