# ruff: noqa: D107
"""Conversation and turn exceptions."""

from typing import Any
from uuid import UUID

from .base import ConflictError, NotFoundError, ValidationError


class ConversationNotFoundError(NotFoundError):
    """Exception raised when a conversation does not exist."""

    default_message = "Conversation not found"

    def __init__(
        self,
        conversation_id: UUID | str | None = None,
        details: dict[str, Any] | None = None,
    ):
        message = None
        if conversation_id is not None:
            message = f"Conversation {conversation_id} not found"
            details = {**(details or {}), "conversation_id": str(conversation_id)}
        super().__init__(message, details)


class EmptyInputError(ValidationError):
    """Exception raised when a user turn has no content after trimming."""

    error_code = "EMPTY_INPUT"
    default_message = "Message cannot be empty"


class TurnInProgressError(ConflictError):
    """Exception raised when a send is attempted while another turn is in flight."""

    error_code = "TURN_IN_PROGRESS"
    default_message = "A message is already being sent"
