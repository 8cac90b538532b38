"""Streaming frame and result models.

A streaming endpoint answers with ``text/event-stream`` lines of the form
``data: {json}``.  Each decoded line becomes a :class:`StreamFrame`:

  - ``{"content": "..."}``             -> DELTA, a piece of generated text
  - ``{"error": "..."}``               -> ERROR, generation failed server-side
  - ``{"done": true, "result": ...}``  -> DONE, carries the final payload

:class:`StreamResult` is what the consumer hands back once the stream is
over (completed, aborted, or replaced by the one-shot fallback).
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class FrameKind(str, Enum):  # noqa: UP042
    DELTA = "delta"
    DONE = "done"
    ERROR = "error"


class StreamFrame(BaseModel):
    """One decoded ``data:`` frame."""

    model_config = ConfigDict(frozen=True)

    kind: FrameKind
    content: str = ""
    error: str | None = None
    payload: dict[str, Any] = Field(
        default_factory=dict,
        description="The full decoded JSON object, for fields like result/user_message.",
    )

    @property
    def result(self) -> str | None:
        value = self.payload.get("result")
        return value if isinstance(value, str) else None


class StreamResult(BaseModel):
    """Final state of one streaming request."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(default="", description="Concatenation of every DELTA frame received.")
    result: str = Field(default="", description="Final text: done-frame result, else accumulated text.")
    done: bool = False
    aborted: bool = False
    fell_back: bool = False
    error: str | None = None
    done_frame: StreamFrame | None = None

    @property
    def succeeded(self) -> bool:
        return (self.done or self.fell_back or bool(self.result)) and self.error is None
