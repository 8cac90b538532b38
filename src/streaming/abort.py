"""Cancellation handle for an in-flight streaming request."""

from __future__ import annotations

import asyncio


class AbortSignal:
    """One-shot abort flag the consumer races against the byte stream.

    ``abort()`` may be called from any coroutine on the same loop (a "stop"
    button handler, a timeout, a signal handler).  Once aborted a signal
    stays aborted; create a new one per request.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._reason: str | None = None

    @property
    def aborted(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> str | None:
        return self._reason

    def abort(self, reason: str = "aborted") -> None:
        if not self._event.is_set():
            self._reason = reason
            self._event.set()

    async def wait(self) -> None:
        await self._event.wait()
