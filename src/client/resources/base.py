"""Shared base for the typed API resource classes."""

from __future__ import annotations

from typing import Any

from src.client.http import XNovelHTTPClient
from src.utils.errors import ValidationError

API_PREFIX = "/api/v1"
DEFAULT_PAGE_SIZE = 20


class Resource:
    """Holds the HTTP client and builds paths under ``/api/v1``."""

    def __init__(self, http: XNovelHTTPClient) -> None:
        self._http = http

    @staticmethod
    def _path(*parts: object) -> str:
        return "/".join([API_PREFIX, *(str(p).strip("/") for p in parts)])

    @staticmethod
    def _page(page: int, page_size: int) -> dict[str, Any]:
        if page < 1 or page_size < 1:
            raise ValidationError(message="page and page_size must be >= 1")
        return {"page": page, "page_size": page_size}

    @staticmethod
    def _require_id(value: str, name: str = "id") -> str:
        if not value or not str(value).strip():
            raise ValidationError(message=f"{name} must not be empty")
        return str(value).strip()

    @staticmethod
    def _require_chapter(number: int) -> int:
        if number < 1:
            raise ValidationError(message="chapter_number must be >= 1")
        return number
