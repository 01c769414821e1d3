"""Chat service layer: drives one user turn against the remote provider."""

import logging
import time
from uuid import UUID

from pydantic import ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from slate.core.config import Settings, settings as default_settings
from slate.core.state import ClientState
from slate.domains.chat.payload import build_completion_request
from slate.domains.conversation.service import ConversationService
from slate.exceptions.base import BaseAppException
from slate.exceptions.chat import EmptyInputError
from slate.models.message import THINKING_PLACEHOLDER, Message
from slate.schemas.base import BaseSchema
from slate.schemas.chat import MessageResponse
from slate.schemas.completion import CompletionRequest
from slate.schemas.settings import APIProvider
from slate.services.provider_transport import ProviderTransport


logger = logging.getLogger(__name__)

ERROR_REPLY_PREFIX = "Sorry, I encountered an error: "


class PendingTurn(BaseSchema):
    """A turn whose messages are stored and whose remote call has not settled."""

    conversation_id: UUID
    user_message: MessageResponse
    assistant_message: MessageResponse
    request: CompletionRequest
    provider: APIProvider
    api_key: str = Field(repr=False)
    is_thinking: bool = False

    model_config = ConfigDict(frozen=True)


class ChatService:
    """Turn orchestrator.

    A turn moves through user message appended, assistant placeholder
    created, awaiting the provider, and reconciled. :meth:`begin_turn`
    commits both messages before anything is dispatched so the UI can render
    them; :meth:`complete_turn` performs the remote call and writes the
    outcome into the placeholder. Provider failures never escape a turn, they
    become the placeholder's content.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        state: ClientState,
        transport: ProviderTransport,
        config: Settings | None = None,
    ):
        """Initialize chat service.

        Args:
            session_factory: Factory for the sessions each turn phase uses.
            state: Client state with credentials, catalog and sending flag.
            transport: Provider transport for the completion call.
            config: Application settings.
        """
        self.session_factory = session_factory
        self.state = state
        self.transport = transport
        self.settings = config or default_settings

    async def send_message(self, conversation_id: UUID, text: str) -> Message | None:
        """Run a whole turn and return the reconciled assistant message.

        Returns None if the conversation was deleted before the reply arrived.
        """
        turn = await self.begin_turn(conversation_id, text)
        return await self.complete_turn(turn)

    async def begin_turn(self, conversation_id: UUID, text: str) -> PendingTurn:
        """Store the user message and the assistant placeholder, build the payload.

        Raises:
            EmptyInputError: If ``text`` is blank; nothing is stored.
            ConversationNotFoundError: If the conversation does not exist.
        """
        if not text or not text.strip():
            raise EmptyInputError()

        async with self.session_factory() as db:
            conversations = ConversationService(db, self.settings)
            conversation = await conversations.get_conversation(conversation_id)

            user_message = await conversations.append_message(
                conversation, text, is_from_user=True, commit=False
            )

            # Capability is read from the live catalog at this point
            is_thinking = conversation.think_harder_enabled and self.state.model_supports_thinking(
                conversation.selected_model
            )
            placeholder = await conversations.append_message(
                conversation,
                THINKING_PLACEHOLDER if is_thinking else "",
                is_from_user=False,
                is_thinking=is_thinking,
                commit=False,
            )
            await db.commit()

            history = await conversations.list_messages(conversation.id)
            request = build_completion_request(
                conversation,
                history,
                think_harder=conversation.think_harder_enabled,
                exclude_message_id=placeholder.id,
                config=self.settings,
            )

            turn = PendingTurn(
                conversation_id=conversation.id,
                user_message=MessageResponse.model_validate(user_message),
                assistant_message=MessageResponse.model_validate(placeholder),
                request=request,
                provider=self.state.selected_provider,
                api_key=self.state.active_key,
                is_thinking=is_thinking,
            )

        self.state.is_sending = True
        logger.info(
            f"Turn started in conversation {conversation_id} "
            f"(model: {request.model}, thinking: {is_thinking})"
        )
        return turn

    async def complete_turn(self, turn: PendingTurn) -> Message | None:
        """Dispatch the remote call and reconcile the result into the placeholder.

        Clears ``is_sending`` exactly once, whatever the outcome.
        """
        try:
            started = time.monotonic()
            try:
                content = await self.transport.complete(turn.provider, turn.api_key, turn.request)
            except Exception as e:
                description = e.message if isinstance(e, BaseAppException) else str(e)
                logger.error(f"Completion failed for conversation {turn.conversation_id}: {description}")
                return await self._reconcile(turn, ERROR_REPLY_PREFIX + description, succeeded=False)

            elapsed = time.monotonic() - started
            return await self._reconcile(turn, content, succeeded=True, elapsed=elapsed)
        finally:
            self.state.is_sending = False

    # Private helper methods

    async def _reconcile(
        self,
        turn: PendingTurn,
        content: str,
        succeeded: bool,
        elapsed: float | None = None,
    ) -> Message | None:
        async with self.session_factory() as db:
            conversations = ConversationService(db, self.settings)
            message = await conversations.get_message(turn.assistant_message.id)
            if message is None:
                # The conversation was deleted mid-flight; its messages are gone
                logger.warning(
                    f"Dropping reply for deleted conversation {turn.conversation_id} "
                    f"(message {turn.assistant_message.id})"
                )
                return None

            message.content = content
            if succeeded and turn.is_thinking:
                message.thinking_time = elapsed
            message.is_thinking = False

            if succeeded:
                conversation = await conversations.get_conversation(turn.conversation_id)
                conversations.touch(conversation)

            await db.commit()
            return message
