"""Wire envelope models shared by every REST response.

Every JSON response from the x-novel server wraps its payload as
``{"code": 200, "message": "success", "data": {...}}``.  Error responses
use the same shape without ``data`` and optionally list per-field
``errors``.  The HTTP client validates the envelope first and only then
validates ``data`` into the resource model the caller asked for.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

SUCCESS_CODES = range(200, 300)


class ErrorDetail(BaseModel):
    """A single field-level validation error reported by the server."""

    model_config = ConfigDict(frozen=True)

    field: str = ""
    message: str = ""


class Envelope(BaseModel):
    """The ``{code, message, data}`` wrapper around every API payload."""

    model_config = ConfigDict(frozen=True)

    code: int = Field(description="Application status code; 200 means success.")
    message: str = Field(default="", description="Human-readable status message.")
    data: Any = Field(default=None, description="Resource payload, absent on errors.")
    errors: list[ErrorDetail] = Field(default_factory=list)

    def is_success(self) -> bool:
        return self.code in SUCCESS_CODES
