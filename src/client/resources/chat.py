"""Conversation endpoints (the streaming send lives in src/streaming)."""

from __future__ import annotations

from src.client.resources.base import DEFAULT_PAGE_SIZE, Resource
from src.models.chat import (
    Conversation,
    ConversationList,
    CreateConversationRequest,
    SendMessageResponse,
)
from src.utils.errors import ValidationError


class ChatResource(Resource):
    def messages_path(self, conversation_id: str) -> str:
        return self._path("conversations", self._require_id(conversation_id), "messages")

    async def create(self, request: CreateConversationRequest) -> Conversation | None:
        return await self._http.request_model(
            "POST", self._path("conversations"), Conversation, json=request
        )

    async def list(self, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> ConversationList:
        result = await self._http.request_model(
            "GET", self._path("conversations"), ConversationList, params=self._page(page, page_size)
        )
        return result or ConversationList()

    async def get(self, conversation_id: str) -> Conversation | None:
        """Fetch a conversation including its messages."""
        return await self._http.request_model(
            "GET", self._path("conversations", self._require_id(conversation_id)), Conversation
        )

    async def update(self, conversation_id: str, title: str) -> None:
        if not title.strip():
            raise ValidationError(message="title must not be empty")
        await self._http.request(
            "PUT",
            self._path("conversations", self._require_id(conversation_id)),
            json={"title": title.strip()},
        )

    async def delete(self, conversation_id: str) -> None:
        await self._http.request("DELETE", self._path("conversations", self._require_id(conversation_id)))

    async def send_message(self, conversation_id: str, content: str) -> SendMessageResponse | None:
        """Send a message and wait for the whole reply (``stream: false``)."""
        return await self._http.request_model(
            "POST",
            self.messages_path(conversation_id),
            SendMessageResponse,
            json={"content": content, "stream": False},
        )
