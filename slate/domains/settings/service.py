# slate/domains/settings/service.py
"""Settings service for provider selection and credentials."""

import logging
import os
from pathlib import Path

from pydantic import ValidationError

from slate.core.state import ClientState
from slate.schemas.settings import APIProvider, ProviderCredentials


logger = logging.getLogger(__name__)


class CredentialStore:
    """JSON file holding both provider keys and the provider selection.

    Kept apart from the conversation database. Nothing is written until
    :meth:`save` is called.
    """

    def __init__(self, path: Path):
        """Initialize store with the credential file path."""
        self.path = path

    def load(self) -> ProviderCredentials:
        """
        Read stored credentials, falling back to empty defaults.

        Returns:
            ProviderCredentials: Stored values, or defaults if the file is
            missing or unreadable.
        """
        if not self.path.exists():
            return ProviderCredentials()

        try:
            return ProviderCredentials.model_validate_json(self.path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            logger.warning("Could not read credentials from %s: %s", self.path, e)
            return ProviderCredentials()

    def save(self, credentials: ProviderCredentials) -> None:
        """
        Write credentials to disk, readable by the owner only.

        Raises:
            OSError: If the file cannot be written
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(".tmp")
        # A leftover temp file would keep its old mode
        tmp_path.unlink(missing_ok=True)

        fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(credentials.model_dump_json(indent=2))
            tmp_path.replace(self.path)
        except Exception:
            tmp_path.unlink(missing_ok=True)
            raise


class SettingsService:
    """Service for reading and editing the provider settings."""

    def __init__(self, state: ClientState, store: CredentialStore):
        """Initialize service with client state and credential store."""
        self.state = state
        self.store = store

    def load(self) -> ProviderCredentials:
        """Load stored credentials into the client state."""
        self.state.credentials = self.store.load()
        logger.info(f"Loaded settings, active provider: {self.state.selected_provider.value}")
        return self.state.credentials

    def get_settings(self) -> ProviderCredentials:
        return self.state.credentials

    def update_settings(
        self,
        openai_key: str | None = None,
        openrouter_key: str | None = None,
        selected_provider: APIProvider | None = None,
    ) -> bool:
        """
        Update credentials in memory with provided values.

        Changes are not persisted until :meth:`save` runs.

        Args:
            openai_key: New OpenAI key
            openrouter_key: New OpenRouter key
            selected_provider: Provider to switch to

        Returns:
            bool: True if the active provider or its key changed, meaning the
            model catalog is stale.
        """
        current = self.state.credentials
        updates = {}

        # Update only provided fields
        if openai_key is not None:
            updates["openai_key"] = openai_key
        if openrouter_key is not None:
            updates["openrouter_key"] = openrouter_key
        if selected_provider is not None:
            updates["selected_provider"] = selected_provider

        updated = current.model_copy(update=updates)
        self.state.credentials = updated

        return (
            updated.selected_provider != current.selected_provider
            or updated.active_key != current.active_key
        )

    def save(self) -> None:
        """Flush the in-memory credentials to disk."""
        self.store.save(self.state.credentials)
        logger.info("Saved provider settings")
