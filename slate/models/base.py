"""
Declarative base and shared column helpers for the conversation store.

Conversations and messages manage their own timestamps because their
ordering rules differ, so the shared base only provides the primary key.
"""

import uuid
from datetime import UTC, datetime

from sqlalchemy import Column, Uuid
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow() -> datetime:
    """Naive UTC timestamp, matching what SQLite round-trips."""
    return datetime.now(UTC).replace(tzinfo=None)


class BaseModel(Base):
    """
    Abstract base for persisted entities.

    :ivar id: Unique identifier for the record.
    :type id: uuid.UUID
    """
    __abstract__ = True

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
