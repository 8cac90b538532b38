"""Incremental decoding of ``data: {json}`` event streams.

Network chunks do not respect character or line boundaries: a multi-byte
UTF-8 character or a whole ``data:`` line can be split across two reads.
:class:`SSELineDecoder` holds back incomplete bytes and an unterminated
trailing line until the rest arrives, so :func:`parse_frame` only ever sees
complete lines.
"""

from __future__ import annotations

import codecs
import json

from src.models.stream import FrameKind, StreamFrame

DATA_PREFIX = "data:"


class SSELineDecoder:
    """Turns a sequence of byte chunks into complete text lines."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._buffer = ""

    def feed(self, chunk: bytes) -> list[str]:
        """Decode *chunk* and return every line it completed."""
        self._buffer += self._decoder.decode(chunk)
        if "\n" not in self._buffer:
            return []
        *lines, self._buffer = self._buffer.split("\n")
        return [line.rstrip("\r") for line in lines]

    def flush(self) -> list[str]:
        """Return the final unterminated line, if any, and reset."""
        self._buffer += self._decoder.decode(b"", final=True)
        remainder, self._buffer = self._buffer, ""
        self._decoder.reset()
        remainder = remainder.rstrip("\r")
        return [remainder] if remainder else []


def parse_frame(line: str) -> StreamFrame | None:
    """Decode one line into a frame, or ``None`` when it carries nothing usable.

    Non-``data:`` lines, empty payloads, malformed JSON and objects with no
    recognised key are all skipped rather than treated as failures.  A
    ``done`` flag wins over ``error``, which wins over ``content``.
    """
    if not line.startswith(DATA_PREFIX):
        return None
    payload = line[len(DATA_PREFIX):].strip()
    if not payload:
        return None
    try:
        obj = json.loads(payload)
    except ValueError:
        return None
    if not isinstance(obj, dict):
        return None

    if obj.get("done"):
        return StreamFrame(kind=FrameKind.DONE, payload=obj)
    if obj.get("error"):
        return StreamFrame(kind=FrameKind.ERROR, error=str(obj["error"]), payload=obj)
    if obj.get("content") is not None:
        return StreamFrame(kind=FrameKind.DELTA, content=str(obj["content"]), payload=obj)
    return None
