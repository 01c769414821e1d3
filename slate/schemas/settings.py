"""Provider selection and credential schemas."""

from enum import Enum

from pydantic import Field, field_validator

from .base import BaseSchema


class APIProvider(str, Enum):
    """Supported remote completion providers."""

    OPENAI = "OpenAI"
    OPENROUTER = "OpenRouter"


class ProviderCredentials(BaseSchema):
    """Secret keys for both providers plus the active provider selection."""

    openai_key: str = Field(default="", description="OpenAI API key")
    openrouter_key: str = Field(default="", description="OpenRouter API key")
    selected_provider: APIProvider = Field(default=APIProvider.OPENAI, description="Active provider")

    @field_validator("selected_provider", mode="before")
    @classmethod
    def validate_provider(cls, v):
        # Unknown stored values fall back to OpenAI
        if isinstance(v, str) and v not in {p.value for p in APIProvider}:
            return APIProvider.OPENAI
        return v

    def key_for(self, provider: APIProvider) -> str:
        if provider == APIProvider.OPENROUTER:
            return self.openrouter_key
        return self.openai_key

    @property
    def active_key(self) -> str:
        return self.key_for(self.selected_provider)


class SettingsUpdate(BaseSchema):
    """Schema for updating provider settings (all fields optional)."""

    openai_key: str | None = Field(None, description="OpenAI API key")
    openrouter_key: str | None = Field(None, description="OpenRouter API key")
    selected_provider: APIProvider | None = Field(None, description="Active provider")

    @field_validator("openai_key", "openrouter_key")
    @classmethod
    def strip_key(cls, v: str | None) -> str | None:
        """Trim whitespace pasted around keys."""
        if v is not None:
            return v.strip()
        return v


class SettingsResponse(BaseSchema):
    """Provider settings with keys masked."""

    selected_provider: APIProvider
    openai_key_set: bool
    openrouter_key_set: bool
    openai_key_hint: str | None = None
    openrouter_key_hint: str | None = None

    @classmethod
    def from_credentials(cls, credentials: ProviderCredentials) -> "SettingsResponse":
        return cls(
            selected_provider=credentials.selected_provider,
            openai_key_set=bool(credentials.openai_key),
            openrouter_key_set=bool(credentials.openrouter_key),
            openai_key_hint=_mask(credentials.openai_key),
            openrouter_key_hint=_mask(credentials.openrouter_key),
        )


def _mask(key: str) -> str | None:
    if not key:
        return None
    return f"...{key[-4:]}" if len(key) > 8 else "****"


__all__ = [
    "APIProvider",
    "ProviderCredentials",
    "SettingsUpdate",
    "SettingsResponse",
]
