"""Wire schemas for the provider chat-completions endpoint."""

from enum import Enum

from pydantic import BaseModel, Field


class CompletionRole(str, Enum):
    """Roles sent to the completion endpoint."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class CompletionMessage(BaseModel):
    """One role-tagged turn of the transcript."""

    role: CompletionRole
    content: str


class CompletionRequest(BaseModel):
    """Request body for POST /chat/completions."""

    model: str
    messages: list[CompletionMessage]
    max_tokens: int = Field(default=4096)
    temperature: float = Field(default=0.7)

    def to_payload(self) -> dict:
        return self.model_dump(mode="json")


class ChoiceMessage(BaseModel):
    content: str | None = None


class Choice(BaseModel):
    message: ChoiceMessage


class ChatCompletionResponse(BaseModel):
    """Response body of POST /chat/completions.

    Only the fields read by the client are declared; anything else the
    provider returns is ignored.
    """

    choices: list[Choice]

    @property
    def first_content(self) -> str | None:
        if not self.choices:
            return None
        return self.choices[0].message.content


__all__ = [
    "CompletionRole",
    "CompletionMessage",
    "CompletionRequest",
    "ChoiceMessage",
    "Choice",
    "ChatCompletionResponse",
]
