"""Conversation and message schemas for request/response serialization."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import ConfigDict, Field

from .base import BaseModelSchema, BaseSchema


class MessageResponse(BaseModelSchema):
    """Schema for a message as rendered by the UI."""

    conversation_id: UUID
    content: str
    is_from_user: bool
    timestamp: datetime
    thinking_time: float | None = Field(None, description="Seconds spent in reasoning mode")
    is_thinking: bool = Field(default=False)

    model_config = ConfigDict(from_attributes=True)


class ConversationCreate(BaseSchema):
    """Schema for creating a new conversation."""

    title: str | None = Field(None, max_length=255, description="Optional conversation title")
    selected_model: str | None = Field(None, max_length=255, description="Optional model id")


class ConversationUpdate(BaseSchema):
    """Schema for updating a conversation (all fields optional)."""

    title: str | None = Field(None, min_length=1, max_length=255)
    selected_model: str | None = Field(None, min_length=1, max_length=255)
    think_harder_enabled: bool | None = None


class ConversationResponse(BaseModelSchema):
    """Schema for a conversation list row."""

    title: str
    created_at: datetime
    last_message_at: datetime
    selected_model: str
    think_harder_enabled: bool

    model_config = ConfigDict(from_attributes=True)


class ConversationDetailResponse(ConversationResponse):
    """Schema for a conversation with its messages."""

    messages: list[MessageResponse] = Field(default=[], description="Messages in display order")


class SendMessageRequest(BaseSchema):
    """Schema for a user turn.

    Blank input is rejected by the orchestrator rather than here so the
    rejection carries its own error code.
    """

    message: str = Field(..., max_length=100000, description="User message")


class TurnResponse(BaseSchema):
    """Schema returned once a turn has been accepted."""

    conversation_id: UUID
    user_message: MessageResponse
    assistant_message: MessageResponse


class ChatStatusResponse(BaseSchema):
    """Schema for the sending flag the UI uses to disable input."""

    is_sending: bool


__all__ = [
    "MessageResponse",
    "ConversationCreate",
    "ConversationUpdate",
    "ConversationResponse",
    "ConversationDetailResponse",
    "SendMessageRequest",
    "TurnResponse",
    "ChatStatusResponse",
]
