"""Base schemas for the application."""

from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """Base schema class; reads ORM objects by attribute."""
    model_config = ConfigDict(from_attributes=True)


class BaseModelSchema(BaseSchema):
    """Base schema for persisted entities."""
    id: UUID


class ResponseSchema(BaseSchema):
    """Acknowledgement body for endpoints with nothing else to return."""
    status: str = "success"
    message: str | None = None
    data: dict[str, Any] | None = None


__all__ = ["BaseSchema", "BaseModelSchema", "ResponseSchema"]
