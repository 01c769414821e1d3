"""
Message model for chat turns.
"""

from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, Text, Uuid
from sqlalchemy.orm import relationship

from .base import BaseModel, utcnow

THINKING_PLACEHOLDER = "Thinking..."


class Message(BaseModel):
    """
    Represents a single chat message.

    Assistant messages start as placeholders and have their content
    overwritten once the remote call settles.
    """

    __tablename__ = "messages"

    conversation_id = Column(
        Uuid, ForeignKey("conversations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    content = Column(Text, nullable=False, default="")
    is_from_user = Column(Boolean, nullable=False)
    timestamp = Column(DateTime, nullable=False, default=utcnow)
    # Insertion order, breaks timestamp ties
    position = Column(Integer, nullable=False, default=0)
    thinking_time = Column(Float, nullable=True)
    is_thinking = Column(Boolean, nullable=False, default=False)

    # Relationships
    conversation = relationship("Conversation", back_populates="messages")
