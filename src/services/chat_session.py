"""Chat session service: conversation list/detail state and streamed sends.

Reads go through the :class:`QueryCache` under two keys:

    ("conversations", {"page": 1, "page_size": N})   -- the sidebar list
    ("conversation", <id>)                           -- one transcript

Every mutation (create, rename, delete, send) invalidates the keys it makes
stale, so the next read refetches.  While a reply streams in,
``streaming_content`` holds the partial assistant text; it is cleared once
the stream ends and the refetched transcript takes over.
"""

from __future__ import annotations

from typing import Any

from src.client.resources.chat import ChatResource
from src.models.chat import ChatMessage, ChatMode, Conversation, CreateConversationRequest
from src.models.stream import StreamResult
from src.services.query_cache import QueryCache
from src.streaming.abort import AbortSignal
from src.streaming.consumer import DeltaCallback, StreamConsumer
from src.utils.errors import SessionBusyError, StreamError, ValidationError
from src.utils.logging import get_logger

CONVERSATIONS_KEY = ("conversations",)
CONVERSATION_KEY = "conversation"
LIST_PAGE_SIZE = 100


class ChatSession:
    """Client-side state for the creative chat assistant.

    Parameters
    ----------
    chat:
        Conversation REST resource.
    consumer:
        Streaming consumer used for sends.
    cache:
        Server-state cache shared with the rest of the client.
    fallback_enabled:
        When ``True`` a failed stream is retried as a one-shot send.
    """

    def __init__(
        self,
        chat: ChatResource,
        consumer: StreamConsumer,
        cache: QueryCache,
        fallback_enabled: bool = True,
    ) -> None:
        self._chat = chat
        self._consumer = consumer
        self._cache = cache
        self._fallback_enabled = fallback_enabled
        self._signal: AbortSignal | None = None
        self._sending = False
        self.active_conversation_id: str | None = None
        self.streaming_content = ""
        self._logger = get_logger(__name__)

    @property
    def sending(self) -> bool:
        return self._sending

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def conversations(self) -> list[Conversation]:
        params = {"page": 1, "page_size": LIST_PAGE_SIZE}
        listing = await self._cache.fetch(
            (*CONVERSATIONS_KEY, params),
            lambda: self._chat.list(page=1, page_size=LIST_PAGE_SIZE),
        )
        return listing.conversations

    async def conversation(self, conversation_id: str | None = None) -> Conversation | None:
        conv_id = conversation_id or self.active_conversation_id
        if not conv_id:
            return None
        return await self._cache.fetch((CONVERSATION_KEY, conv_id), lambda: self._chat.get(conv_id))

    async def messages(self, conversation_id: str | None = None) -> list[ChatMessage]:
        conv = await self.conversation(conversation_id)
        return conv.messages if conv else []

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def create(
        self,
        mode: ChatMode | str = ChatMode.GENERAL,
        title: str | None = None,
        project_id: str | None = None,
    ) -> Conversation | None:
        """Create a conversation and make it the active one."""
        try:
            request = CreateConversationRequest(mode=ChatMode(mode), title=title, project_id=project_id)
        except ValueError as exc:
            raise ValidationError(message=f"unknown chat mode: {mode}") from exc
        conv = await self._cache.mutate(
            lambda: self._chat.create(request),
            invalidates=[CONVERSATIONS_KEY],
        )
        self.active_conversation_id = conv.id if conv else None
        return conv

    async def rename(self, conversation_id: str, title: str) -> None:
        await self._cache.mutate(
            lambda: self._chat.update(conversation_id, title),
            invalidates=[CONVERSATIONS_KEY, (CONVERSATION_KEY, conversation_id)],
        )

    async def delete(self, conversation_id: str) -> None:
        await self._cache.mutate(
            lambda: self._chat.delete(conversation_id),
            invalidates=[CONVERSATIONS_KEY, (CONVERSATION_KEY, conversation_id)],
        )
        if self.active_conversation_id == conversation_id:
            self.active_conversation_id = None

    # ------------------------------------------------------------------
    # Sending
    # ------------------------------------------------------------------

    async def send(
        self,
        content: str,
        conversation_id: str | None = None,
        on_delta: DeltaCallback | None = None,
        signal: AbortSignal | None = None,
    ) -> StreamResult:
        """Send *content* and stream the assistant's reply.

        Raises
        ------
        ValidationError
            Blank content or no conversation selected.
        SessionBusyError
            Another send on this session has not finished.
        StreamError
            The server reported a generation error, or the stream and its
            one-shot fallback both failed.
        """
        conv_id = conversation_id or self.active_conversation_id
        if not conv_id:
            raise ValidationError(message="no conversation selected")
        text = content.strip()
        if not text:
            raise ValidationError(message="message must not be empty")
        if self._sending:
            raise SessionBusyError()

        self._sending = True
        self.streaming_content = ""
        self._signal = signal or AbortSignal()

        def _on_delta(delta: str, accumulated: str) -> Any:
            self.streaming_content = accumulated
            return on_delta(delta, accumulated) if on_delta is not None else None

        async def _send_once() -> str:
            response = await self._chat.send_message(conv_id, text)
            return response.assistant_message.content if response else ""

        try:
            result = await self._consumer.consume(
                "POST",
                self._chat.messages_path(conv_id),
                {"content": text, "stream": True},
                signal=self._signal,
                on_delta=_on_delta,
                fallback=_send_once if self._fallback_enabled else None,
            )
        finally:
            self._sending = False
            self._signal = None
            self.streaming_content = ""
            # The server may have stored the user turn even when the reply failed.
            await self._cache.invalidate_many([(CONVERSATION_KEY, conv_id), CONVERSATIONS_KEY])

        self._logger.info(
            "chat_message_sent",
            conversation_id=conv_id,
            done=result.done,
            aborted=result.aborted,
            fell_back=result.fell_back,
        )
        if result.error and not result.done:
            raise StreamError(message=result.error, provider_name="x-novel-api")
        return result

    def stop(self) -> None:
        """Abort the running send, if any."""
        if self._signal is not None:
            self._signal.abort("stopped by user")
