"""Model catalog schemas."""

from pydantic import ConfigDict, Field

from .base import BaseSchema
from .settings import APIProvider


class AIModel(BaseSchema):
    """A remote model the user can pick for a conversation."""

    id: str = Field(..., description="Provider model identifier")
    display_name: str = Field(..., description="Human-friendly model name")
    supports_thinking: bool = Field(default=False, description="Supports extended reasoning")

    model_config = ConfigDict(frozen=True)


class ModelData(BaseSchema):
    """Single entry of the provider /models listing."""

    id: str


class ModelListResponse(BaseSchema):
    """Provider /models response body."""

    data: list[ModelData]


class ModelCatalogResponse(BaseSchema):
    """Schema for the catalog endpoint."""

    provider: APIProvider
    is_loading: bool
    models: list[AIModel] = Field(default=[], description="Available models")


__all__ = ["AIModel", "ModelData", "ModelListResponse", "ModelCatalogResponse"]
