"""Writing-assistant service: polish, continue, or suggest on a passage.

Holds the same state a panel would render: ``streaming_content`` while a
response is arriving and ``result`` once it is final.  :meth:`stop` aborts
the stream and keeps whatever text already arrived as the result.
"""

from __future__ import annotations

from typing import Any

import pydantic

from src.client.resources.writing import ASSIST_PATH, WritingResource
from src.models.stream import StreamResult
from src.models.writing import (
    PolishStyle,
    SuggestionAspect,
    WritingAction,
    WritingAssistantRequest,
)
from src.streaming.abort import AbortSignal
from src.streaming.consumer import DeltaCallback, StreamConsumer
from src.utils.errors import SessionBusyError, StreamError, ValidationError
from src.utils.logging import get_logger


class WritingAssistant:
    """Panel state and actions for one writing-assistant surface.

    Parameters
    ----------
    writing:
        Resource used for the one-shot ``/writing/assist`` call.
    consumer:
        Streaming consumer that reads the ``data:`` frames.
    fallback_enabled:
        Retry through *writing* when the stream fails before its done frame.

    ``loading`` stays set until :meth:`execute` has fully unwound, including
    after :meth:`stop`, so a second run cannot overlap the first.
    ``last_outcome`` holds the :class:`StreamResult` of the latest run.
    """

    def __init__(
        self,
        writing: WritingResource,
        consumer: StreamConsumer,
        fallback_enabled: bool = True,
    ) -> None:
        self._writing = writing
        self._consumer = consumer
        self._fallback_enabled = fallback_enabled
        self._signal: AbortSignal | None = None
        self.loading = False
        self.result = ""
        self.streaming_content = ""
        self.last_outcome: StreamResult | None = None
        self._logger = get_logger(__name__)

    @property
    def display_content(self) -> str:
        return self.streaming_content or self.result

    async def execute(
        self,
        action: WritingAction | str,
        content: str,
        *,
        project_id: str | None = None,
        style: PolishStyle | str | None = None,
        target_words: int | None = None,
        aspect: SuggestionAspect | str | None = None,
        on_delta: DeltaCallback | None = None,
    ) -> str:
        """Run *action* on *content*, streaming, and return the final text.

        Options that do not apply to *action* are ignored; ``continue``
        defaults to 500 target words and ``suggestion`` to the plot aspect.
        """
        if not content.strip():
            raise ValidationError(message="content must not be empty")
        if self.loading:
            raise SessionBusyError()
        try:
            request = WritingAssistantRequest(
                action=action,
                content=content.strip(),
                project_id=project_id,
                style=style,
                target_words=target_words,
                aspect=aspect,
                stream=True,
            )
        except pydantic.ValidationError as exc:
            raise ValidationError(message=f"invalid writing request: {exc}") from exc

        signal = AbortSignal()
        self.loading = True
        self.result = ""
        self.streaming_content = ""
        self.last_outcome = None
        self._signal = signal

        def _on_delta(delta: str, accumulated: str) -> Any:
            if not signal.aborted:
                self.streaming_content = accumulated
            return on_delta(delta, accumulated) if on_delta is not None else None

        async def _assist_once() -> str:
            return await self._writing.assist(request)

        try:
            outcome = await self._consumer.consume(
                "POST",
                ASSIST_PATH,
                request,
                signal=signal,
                on_delta=_on_delta,
                fallback=_assist_once if self._fallback_enabled else None,
            )
        finally:
            if self._signal is signal:
                self._signal = None
                self.loading = False

        self.last_outcome = outcome
        # stop() may already have promoted the partial text.
        self.result = outcome.result or self.result
        self.streaming_content = ""
        self._logger.info(
            "writing_assist_finished",
            action=request.action.value,
            chars=len(self.result),
            aborted=outcome.aborted,
            fell_back=outcome.fell_back,
        )
        if outcome.error and not outcome.done:
            raise StreamError(message=outcome.error, provider_name="x-novel-api")
        return self.result

    def stop(self) -> None:
        """Abort the running request, keeping the partial text as the result.

        ``loading`` clears once :meth:`execute` returns, not here.
        """
        if self._signal is not None:
            self._signal.abort("stopped by user")
        if self.streaming_content:
            self.result = self.streaming_content
            self.streaming_content = ""
