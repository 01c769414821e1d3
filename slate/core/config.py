# python
# slate/core/config.py
"""Configuration settings for the Slate chat client.

Uses Pydantic BaseSettings for environment variable management.
"""
from enum import Enum
from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from slate.schemas.settings import APIProvider


class EnvironmentEnum(str, Enum):
    development = "development"
    testing = "testing"
    production = "production"


class LogLevelEnum(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    # Pydantic v2 settings configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ===== Application Settings =====
    app_name: str = Field(default="Slate Chat", description="Application name")
    environment: EnvironmentEnum = Field(
        default=EnvironmentEnum.development, description="Environment type"
    )
    debug: bool = Field(default=False, description="Debug mode")
    version: str = Field(default="1.0.0", description="Application version")

    # ===== Storage Settings =====
    data_dir: Path = Field(
        default_factory=lambda: Path.home() / ".slate",
        description="Directory holding the conversation database and credentials",
    )
    database_url: str | None = Field(default=None, description="Database connection URL")
    credentials_file: str = Field(
        default="credentials.json", description="Credential file name inside data_dir"
    )

    # ===== Provider Endpoints =====
    openai_base_url: str = Field(
        default="https://api.openai.com/v1", description="OpenAI API base URL"
    )
    openrouter_base_url: str = Field(
        default="https://openrouter.ai/api/v1", description="OpenRouter API base URL"
    )
    openrouter_referer: str = Field(
        default="AI-Chat-iOS", description="HTTP-Referer header sent to OpenRouter"
    )
    openrouter_title: str = Field(
        default="AI Chat iOS App", description="X-Title header sent to OpenRouter"
    )
    request_timeout: float = Field(default=60.0, description="Provider request timeout in seconds")

    # ===== Completion Parameters =====
    completion_max_tokens: int = Field(default=4096, description="Maximum tokens per completion")
    completion_temperature: float = Field(default=0.7, description="Sampling temperature")
    reasoning_prompt: str = Field(
        default=(
            "Please think step by step and provide detailed reasoning for your response. "
            "Take your time to consider all aspects of the question."
        ),
        description="System instruction prepended in reasoning mode",
    )

    # ===== Conversation Defaults =====
    default_conversation_title: str = Field(default="New Chat", description="Title of new chats")
    default_model: str = Field(default="gpt-4", description="Model selected for new chats")
    title_max_length: int = Field(default=50, description="Length of auto-derived titles")

    # ===== Monitoring & Logging =====
    log_level: LogLevelEnum = Field(default=LogLevelEnum.INFO, description="Logging level")

    # ===== Server Settings =====
    host: str = Field(default="127.0.0.1", description="Host to bind the local API")
    port: int = Field(default=8765, description="Port to bind the local API")

    # ===== Computed Properties =====
    @property
    def is_development(self) -> bool:
        return self.environment == EnvironmentEnum.development

    @property
    def is_testing(self) -> bool:
        return self.environment == EnvironmentEnum.testing

    @property
    def credentials_path(self) -> Path:
        return self.data_dir / self.credentials_file

    def base_url_for(self, provider: APIProvider) -> str:
        """Return the API base URL for a provider."""
        if provider == APIProvider.OPENROUTER:
            return self.openrouter_base_url
        return self.openai_base_url

    # ===== Validation Methods =====
    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v):
        if v and isinstance(v, str):
            lv = v.lower()
            if lv in ["dev", "develop"]:
                return "development"
            if lv in ["prod"]:
                return "production"
            if lv in ["test"]:
                return "testing"
        return v

    @field_validator("completion_temperature")
    @classmethod
    def validate_temperature(cls, v):
        if not 0.0 <= v <= 2.0:
            raise ValueError("Temperature must be between 0 and 2")
        return v

    @field_validator("title_max_length", "completion_max_tokens")
    @classmethod
    def validate_positive(cls, v):
        if v <= 0:
            raise ValueError("Value must be positive")
        return v

    @model_validator(mode="after")
    def set_computed_fields(self):
        if not self.database_url:
            self.database_url = f"sqlite+aiosqlite:///{self.data_dir / 'slate.db'}"
        return self


settings = Settings()


def get_config_summary() -> dict:
    return {
        "app_name": settings.app_name,
        "version": settings.version,
        "environment": settings.environment,
        "debug": settings.debug,
        "data_dir": str(settings.data_dir),
        "openai_base_url": settings.openai_base_url,
        "openrouter_base_url": settings.openrouter_base_url,
    }


__all__ = [
    "settings",
    "Settings",
    "get_config_summary",
    "EnvironmentEnum",
    "LogLevelEnum",
]
