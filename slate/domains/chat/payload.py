"""Builds the chat-completions payload for a conversation."""

from collections.abc import Iterable
from uuid import UUID

from slate.core.config import Settings, settings as default_settings
from slate.models.conversation import Conversation
from slate.models.message import Message
from slate.schemas.completion import CompletionMessage, CompletionRequest, CompletionRole


def build_completion_request(
    conversation: Conversation,
    messages: Iterable[Message],
    think_harder: bool,
    exclude_message_id: UUID | None = None,
    config: Settings | None = None,
) -> CompletionRequest:
    """Assemble the request for the next assistant reply.

    Args:
        conversation: Conversation supplying the model id.
        messages: History in display order.
        think_harder: Prepend the step-by-step system instruction.
        exclude_message_id: The pending placeholder, which is never sent.
        config: Settings providing token cap, temperature and prompt.
    """
    config = config or default_settings

    transcript: list[CompletionMessage] = []
    if think_harder:
        transcript.append(CompletionMessage(role=CompletionRole.SYSTEM, content=config.reasoning_prompt))

    for message in messages:
        if exclude_message_id is not None and message.id == exclude_message_id:
            continue
        role = CompletionRole.USER if message.is_from_user else CompletionRole.ASSISTANT
        transcript.append(CompletionMessage(role=role, content=message.content))

    return CompletionRequest(
        model=conversation.selected_model,
        messages=transcript,
        max_tokens=config.completion_max_tokens,
        temperature=config.completion_temperature,
    )
