"""Whole-device backup: preview counts, JSON export, multipart import."""

from __future__ import annotations

from src.client.resources.base import Resource
from src.models.backup import BackupPreview, ImportResult
from src.utils.errors import ValidationError


class BackupResource(Resource):
    async def preview(self) -> BackupPreview:
        result = await self._http.request_model("GET", self._path("backup", "preview"), BackupPreview)
        return result or BackupPreview()

    async def export_data(self) -> bytes:
        """Return the raw backup document (JSON bytes, not enveloped)."""
        return await self._http.request_raw("GET", self._path("backup", "export"))

    async def import_data(self, data: bytes, filename: str = "backup.json") -> ImportResult:
        if not data:
            raise ValidationError(message="backup file is empty")
        result = await self._http.request_model(
            "POST",
            self._path("backup", "import"),
            ImportResult,
            files={"file": (filename, data, "application/json")},
        )
        return result or ImportResult()
