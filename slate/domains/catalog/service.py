"""Model catalog service: remote listing with a static per-provider fallback."""

import logging

from slate.core.state import ClientState
from slate.domains.catalog.capabilities import build_catalog, fallback_models
from slate.exceptions.provider import ProviderError
from slate.schemas.catalog import AIModel
from slate.schemas.settings import APIProvider
from slate.services.provider_transport import ProviderTransport


logger = logging.getLogger(__name__)


class ModelCatalogService:
    """Resolves the models available for the active provider."""

    def __init__(self, state: ClientState, transport: ProviderTransport):
        """Initialize catalog service.

        Args:
            state: Client state holding credentials and the catalog.
            transport: Provider transport used for the /models call.
        """
        self.state = state
        self.transport = transport

    async def refresh(self) -> list[AIModel]:
        """Fetch the catalog for the active provider and publish it on the state.

        Never raises and never returns an empty list: any failure, or a
        listing with no chat models, yields the provider's fallback list.
        """
        provider = self.state.selected_provider
        self.state.is_loading_models = True
        try:
            models = await self._resolve(provider)
        finally:
            self.state.is_loading_models = False

        # Replace rather than mutate so readers holding the old list are unaffected
        self.state.available_models = models
        logger.info(f"Loaded {len(models)} models for {provider.value}")
        return models

    async def _resolve(self, provider: APIProvider) -> list[AIModel]:
        api_key = self.state.credentials.key_for(provider)
        if not api_key:
            logger.debug(f"No key stored for {provider.value}, using fallback models")
            return fallback_models(provider)

        try:
            model_ids = await self.transport.list_models(provider, api_key)
        except ProviderError as e:
            logger.warning(f"Error fetching models from {provider.value}: {e.message}")
            return fallback_models(provider)
        except Exception as e:
            logger.error(f"Unexpected error fetching models from {provider.value}: {str(e)}", exc_info=True)
            return fallback_models(provider)

        models = build_catalog(model_ids)
        if not models:
            logger.warning(f"{provider.value} listed no chat models, using fallback models")
            return fallback_models(provider)
        return models
