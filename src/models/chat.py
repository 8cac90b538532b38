"""Conversation models for the creative chat assistant."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ChatMode(str, Enum):  # noqa: UP042
    """Assistant persona a conversation is created with."""

    CREATIVE = "creative"
    BUILDING = "building"
    CHARACTER = "character"
    GENERAL = "general"


class MessageRole(str, Enum):  # noqa: UP042
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    conversation_id: str
    role: MessageRole
    content: str
    created_at: datetime | None = None


class Conversation(BaseModel):
    """A conversation; ``messages`` is only populated on the detail endpoint."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str = ""
    mode: ChatMode = ChatMode.GENERAL
    project_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    messages: list[ChatMessage] = Field(default_factory=list)

    @field_validator("messages", mode="before")
    @classmethod
    def _null_messages(cls, value: object) -> object:
        return [] if value is None else value


class ConversationList(BaseModel):
    model_config = ConfigDict(frozen=True)

    conversations: list[Conversation] = Field(default_factory=list)
    total: int = 0


class CreateConversationRequest(BaseModel):
    title: str | None = None
    mode: ChatMode = ChatMode.GENERAL
    project_id: str | None = None


class SendMessageResponse(BaseModel):
    """The persisted user turn and the assistant's reply."""

    model_config = ConfigDict(frozen=True)

    user_message: ChatMessage
    assistant_message: ChatMessage
