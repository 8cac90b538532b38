"""Streaming response consumer.

Opens a streaming request, decodes ``data:`` frames as bytes arrive, and
accumulates generated text.  The lifecycle of one call to
:meth:`StreamConsumer.consume`:

  1. OPEN      -- the request is sent; a non-2xx status is a failure.
  2. READ      -- each DELTA frame is appended and reported via ``on_delta``;
                  an ERROR frame is recorded and reading continues; a DONE
                  frame fixes the final result.
  3. FINISH    -- if the stream ends without DONE, the accumulated text is
                  the result.

Two exits short-circuit that flow:

  - ABORT      -- the caller's :class:`AbortSignal` fires.  Reading stops
                  at once, the connection is closed, and the partial text
                  becomes the result.  No fallback runs.
  - FALLBACK   -- the request fails (transport error or error status)
                  before a DONE frame.  The caller-supplied one-shot
                  coroutine runs instead and its text becomes the result.
"""

from __future__ import annotations

import asyncio
import inspect
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Awaitable, Callable

from pydantic import BaseModel

from src.models.stream import FrameKind, StreamFrame, StreamResult
from src.streaming.abort import AbortSignal
from src.streaming.decoder import SSELineDecoder, parse_frame
from src.utils.errors import APIError, StreamError, TransportError
from src.utils.logging import get_logger

if TYPE_CHECKING:
    from src.client.http import XNovelHTTPClient

DeltaCallback = Callable[[str, str], Any]
FrameCallback = Callable[[StreamFrame], Any]
Fallback = Callable[[], Awaitable[str]]

PROVIDER_NAME = "stream"


@dataclass
class _StreamState:
    """Mutable accumulator shared with the reader task so partial text survives an abort."""

    text: str = ""
    done_frame: StreamFrame | None = None
    error: str | None = None
    frames: int = 0


async def _maybe_await(value: Any) -> None:
    if inspect.isawaitable(value):
        await value


class StreamConsumer:
    """Consumes ``text/event-stream`` responses from the x-novel API.

    Parameters
    ----------
    http:
        The shared HTTP client; its ``stream()`` supplies device headers and
        error mapping.
    """

    def __init__(self, http: XNovelHTTPClient) -> None:
        self._http = http
        self._logger = get_logger(__name__)

    async def consume(
        self,
        method: str,
        path: str,
        body: BaseModel | dict[str, Any] | None = None,
        *,
        signal: AbortSignal | None = None,
        on_delta: DeltaCallback | None = None,
        on_frame: FrameCallback | None = None,
        fallback: Fallback | None = None,
    ) -> StreamResult:
        """Run one streaming request to completion, abort, or fallback.

        Parameters
        ----------
        on_delta:
            Called as ``on_delta(delta, accumulated)`` for every DELTA frame.
            May be a plain function or a coroutine function.
        on_frame:
            Called with every decoded frame, including DONE and ERROR.
        fallback:
            One-shot replacement for the whole operation, awaited when the
            stream fails before DONE.  Without it such failures raise
            :class:`StreamError`.

        Raises
        ------
        StreamError
            The stream failed and there was no fallback, or the fallback
            itself failed.
        """
        state = _StreamState()
        if signal is not None and signal.aborted:
            return self._aborted(state, path)

        reader = asyncio.create_task(self._read(method, path, body, state, on_delta, on_frame))
        abort_waiter = asyncio.create_task(signal.wait()) if signal is not None else None
        try:
            waiters = {reader} if abort_waiter is None else {reader, abort_waiter}
            await asyncio.wait(waiters, return_when=asyncio.FIRST_COMPLETED)
        finally:
            if abort_waiter is not None:
                abort_waiter.cancel()
            if not reader.done():
                reader.cancel()
                await asyncio.wait({reader})

        if reader.cancelled():
            return self._aborted(state, path)

        failure = reader.exception()
        if failure is None:
            return self._finish(state, path)
        if not isinstance(failure, (TransportError, APIError)):
            raise failure
        if state.done_frame is not None:
            # The connection dropped after completion; nothing was lost.
            self._logger.debug("stream_closed_after_done", path=path, error=str(failure))
            return self._finish(state, path)
        return await self._fall_back(failure, state, path, fallback)

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    async def _read(
        self,
        method: str,
        path: str,
        body: BaseModel | dict[str, Any] | None,
        state: _StreamState,
        on_delta: DeltaCallback | None,
        on_frame: FrameCallback | None,
    ) -> None:
        decoder = SSELineDecoder()
        async with self._http.stream(method, path, json=body) as response:
            async for chunk in response.aiter_bytes():
                for line in decoder.feed(chunk):
                    await self._handle_line(line, state, on_delta, on_frame)
        for line in decoder.flush():
            await self._handle_line(line, state, on_delta, on_frame)

    async def _handle_line(
        self,
        line: str,
        state: _StreamState,
        on_delta: DeltaCallback | None,
        on_frame: FrameCallback | None,
    ) -> None:
        frame = parse_frame(line)
        if frame is None:
            if line.strip():
                self._logger.debug("stream_line_skipped", line=line[:80])
            return

        state.frames += 1
        if frame.kind is FrameKind.DELTA:
            state.text += frame.content
            if on_delta is not None:
                await _maybe_await(on_delta(frame.content, state.text))
        elif frame.kind is FrameKind.ERROR:
            state.error = frame.error
            self._logger.warning("stream_error_frame", error=frame.error)
        else:
            state.done_frame = frame

        if on_frame is not None:
            await _maybe_await(on_frame(frame))

    # ------------------------------------------------------------------
    # Outcomes
    # ------------------------------------------------------------------

    def _finish(self, state: _StreamState, path: str) -> StreamResult:
        done = state.done_frame is not None
        result = state.text
        if done and state.done_frame.result:
            result = state.done_frame.result
        self._logger.info(
            "stream_completed",
            path=path,
            done=done,
            frames=state.frames,
            chars=len(result),
            error=state.error,
        )
        return StreamResult(
            text=state.text,
            result=result,
            done=done,
            error=state.error,
            done_frame=state.done_frame,
        )

    def _aborted(self, state: _StreamState, path: str) -> StreamResult:
        self._logger.info("stream_aborted", path=path, chars=len(state.text))
        return StreamResult(
            text=state.text,
            result=state.text,
            aborted=True,
            error=state.error,
            done_frame=state.done_frame,
        )

    async def _fall_back(
        self,
        failure: BaseException,
        state: _StreamState,
        path: str,
        fallback: Fallback | None,
    ) -> StreamResult:
        if fallback is None:
            raise StreamError(
                message=f"Streaming {path} failed: {failure}",
                provider_name=PROVIDER_NAME,
            ) from failure

        self._logger.warning(
            "stream_fallback",
            path=path,
            error=str(failure),
            partial_chars=len(state.text),
        )
        try:
            text = await fallback()
        except (TransportError, APIError) as exc:
            raise StreamError(
                message=f"Streaming {path} failed ({failure}) and the one-shot retry failed: {exc}",
                provider_name=PROVIDER_NAME,
            ) from exc
        return StreamResult(text=state.text, result=text or "", fell_back=True)
