"""
Conversation model for locally persisted chats.
"""

from sqlalchemy import Boolean, Column, DateTime, String
from sqlalchemy.orm import relationship

from .base import BaseModel, utcnow


class Conversation(BaseModel):
    """
    Represents a chat conversation with a remote model.

    :ivar title: Display title, derived from the first user message.
    :ivar created_at: Creation time.
    :ivar last_message_at: Time of the latest activity; never moves backwards.
    :ivar selected_model: Provider-specific model id used for new turns.
    :ivar think_harder_enabled: Reasoning mode flag.
    """

    __tablename__ = "conversations"

    title = Column(String(255), nullable=False, default="New Chat")
    created_at = Column(DateTime, nullable=False, default=utcnow)
    last_message_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    selected_model = Column(String(255), nullable=False, default="gpt-4")
    think_harder_enabled = Column(Boolean, nullable=False, default=False)

    # Relationships
    messages = relationship(
        "Message",
        back_populates="conversation",
        cascade="all, delete-orphan",
        order_by="Message.position",
    )
