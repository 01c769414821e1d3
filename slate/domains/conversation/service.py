"""Conversation store: conversations, their messages and the query views."""

import logging
from datetime import datetime
from uuid import UUID

from sqlalchemy import String, func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from slate.core.config import Settings, settings as default_settings
from slate.exceptions.chat import ConversationNotFoundError
from slate.models.base import utcnow
from slate.models.conversation import Conversation
from slate.models.message import Message


logger = logging.getLogger(__name__)


class ConversationService:
    """Service class owning conversation and message entities.

    The store has no notion of an "active" conversation; callers that track
    a selection clear it themselves after a delete.
    """

    def __init__(self, db: AsyncSession, config: Settings | None = None):
        """Initialize conversation service with database session.

        Args:
            db: Async database session for data operations.
            config: Settings providing conversation defaults.
        """
        self.db = db
        self.settings = config or default_settings

    async def create_conversation(
        self, title: str | None = None, selected_model: str | None = None
    ) -> Conversation:
        """Create an empty conversation with default title and model, reasoning off."""
        now = utcnow()
        conversation = Conversation(
            title=title or self.settings.default_conversation_title,
            created_at=now,
            last_message_at=now,
            selected_model=selected_model or self.settings.default_model,
            think_harder_enabled=False,
        )
        self.db.add(conversation)
        await self.db.commit()
        await self.db.refresh(conversation)
        logger.info(f"Created conversation {conversation.id}")
        return conversation

    async def get_conversation(self, conversation_id: UUID) -> Conversation:
        """Get a conversation by id.

        Raises:
            ConversationNotFoundError: If it does not exist.
        """
        conversation = await self.db.get(Conversation, conversation_id)
        if not conversation:
            raise ConversationNotFoundError(conversation_id)
        return conversation

    async def update_conversation(
        self,
        conversation_id: UUID,
        title: str | None = None,
        selected_model: str | None = None,
        think_harder_enabled: bool | None = None,
    ) -> Conversation:
        """Rename, pick a model or toggle reasoning mode."""
        conversation = await self.get_conversation(conversation_id)

        # Update only provided fields
        if title is not None:
            conversation.title = title
        if selected_model is not None:
            conversation.selected_model = selected_model
        if think_harder_enabled is not None:
            conversation.think_harder_enabled = think_harder_enabled

        await self.db.commit()
        await self.db.refresh(conversation)
        return conversation

    async def delete_conversation(self, conversation_id: UUID) -> bool:
        """Delete a conversation and, by cascade, all of its messages.

        Returns:
            True if deleted successfully
        """
        conversation = await self.get_conversation(conversation_id)
        await self.db.delete(conversation)
        await self.db.commit()
        logger.info(f"Deleted conversation {conversation_id}")
        return True

    async def count_messages(self, conversation_id: UUID) -> int:
        query = select(func.count(Message.id)).where(Message.conversation_id == conversation_id)
        result = await self.db.execute(query)
        return result.scalar() or 0

    async def append_message(
        self,
        conversation: Conversation,
        content: str,
        is_from_user: bool,
        is_thinking: bool = False,
        commit: bool = True,
    ) -> Message:
        """Append a message to a conversation.

        Bumps ``last_message_at`` and, for the very first message when it is
        user-authored, derives the conversation title from its content.
        """
        existing = await self.count_messages(conversation.id)

        message = Message(
            conversation_id=conversation.id,
            content=content,
            is_from_user=is_from_user,
            timestamp=utcnow(),
            position=existing,
            is_thinking=is_thinking,
        )
        self.db.add(message)

        self._advance_last_message_at(conversation, message.timestamp)

        if existing == 0 and is_from_user:
            conversation.title = content[: self.settings.title_max_length]

        if commit:
            await self.db.commit()
        else:
            await self.db.flush()
        return message

    def touch(self, conversation: Conversation) -> None:
        """Mark activity on a conversation now."""
        self._advance_last_message_at(conversation, utcnow())

    async def get_message(self, message_id: UUID) -> Message | None:
        return await self.db.get(Message, message_id)

    async def list_conversations(self, search: str | None = None) -> list[Conversation]:
        """List conversations, most recently active first.

        Args:
            search: Case-insensitive substring matched against the title or
                any message content.
        """
        query = select(Conversation)
        if search:
            query = query.where(
                or_(
                    _folded_contains(Conversation.title, search),
                    Conversation.messages.any(_folded_contains(Message.content, search)),
                )
            )
        query = query.order_by(Conversation.last_message_at.desc())

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def list_messages(self, conversation_id: UUID, search: str | None = None) -> list[Message]:
        """List a conversation's messages oldest first.

        Args:
            conversation_id: Conversation ID
            search: Case-insensitive substring matched against content only.
        """
        query = select(Message).where(Message.conversation_id == conversation_id)
        if search:
            query = query.where(_folded_contains(Message.content, search))
        query = query.order_by(Message.timestamp, Message.position)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    # Private helper methods

    @staticmethod
    def _advance_last_message_at(conversation: Conversation, moment: datetime) -> None:
        # last_message_at never moves backwards
        if conversation.last_message_at is None or moment > conversation.last_message_at:
            conversation.last_message_at = moment


def _folded_contains(column, search: str):
    """Unicode case-insensitive substring match, using the connection's casefold()."""
    return func.casefold(column, type_=String).contains(search.casefold(), autoescape=True)
