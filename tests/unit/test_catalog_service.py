"""Unit tests for ModelCatalogService."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from slate.domains.catalog.service import ModelCatalogService
from slate.schemas.settings import APIProvider


@pytest.mark.asyncio
class TestModelCatalogService:
    """Test cases for ModelCatalogService."""

    @pytest.fixture
    def catalog(self, client_state, transport):
        return ModelCatalogService(client_state, transport)

    async def test_refresh_filters_remote_listing(self, catalog, client_state, provider_stub):
        provider_stub.models = {"data": [{"id": "gpt-4o"}, {"id": "o1-preview"}, {"id": "gpt-o1-mini"}]}

        models = await catalog.refresh()

        assert [m.id for m in models] == ["gpt-4o", "gpt-o1-mini"]
        assert models[1].supports_thinking is True
        assert client_state.available_models == models
        assert client_state.is_loading_models is False

        request = provider_stub.last_request
        assert request.method == "GET"
        assert str(request.url) == "https://api.openai.com/v1/models"
        assert request.headers["Authorization"] == "Bearer sk-test-openai"

    async def test_no_key_uses_fallback_without_network(self, catalog, client_state, provider_stub):
        client_state.credentials = client_state.credentials.model_copy(update={"openai_key": ""})

        models = await catalog.refresh()

        assert len(models) > 0
        assert [m.id for m in models] == ["gpt-4", "gpt-4-turbo", "gpt-3.5-turbo"]
        assert provider_stub.requests == []

    async def test_uses_active_provider(self, catalog, client_state, provider_stub):
        client_state.credentials = client_state.credentials.model_copy(
            update={"selected_provider": APIProvider.OPENROUTER, "openrouter_key": "sk-or"}
        )
        provider_stub.models = {"data": [{"id": "anthropic/claude-3.5-sonnet"}]}

        models = await catalog.refresh()

        assert [m.display_name for m in models] == ["Claude 3.5 Sonnet"]
        assert str(provider_stub.last_request.url) == "https://openrouter.ai/api/v1/models"
        assert provider_stub.last_request.headers["Authorization"] == "Bearer sk-or"

    async def test_network_failure_falls_back(self, catalog, client_state, provider_stub):
        provider_stub.error = httpx.ConnectError("connection refused")

        models = await catalog.refresh()

        assert [m.id for m in models] == ["gpt-4", "gpt-4-turbo", "gpt-3.5-turbo"]
        assert client_state.is_loading_models is False

    async def test_auth_failure_falls_back(self, catalog, provider_stub):
        provider_stub.status_code = 401
        provider_stub.models = {"error": {"message": "Incorrect API key provided"}}

        models = await catalog.refresh()

        assert [m.id for m in models][0] == "gpt-4"

    async def test_malformed_payload_falls_back(self, catalog, provider_stub):
        provider_stub.models = {"unexpected": []}

        models = await catalog.refresh()

        assert len(models) == 3

    async def test_listing_without_chat_models_falls_back(self, catalog, provider_stub):
        provider_stub.models = {"data": [{"id": "whisper-1"}, {"id": "dall-e-3"}]}

        models = await catalog.refresh()

        assert [m.id for m in models] == ["gpt-4", "gpt-4-turbo", "gpt-3.5-turbo"]

    async def test_unexpected_error_falls_back(self, client_state):
        transport = MagicMock()
        transport.list_models = AsyncMock(side_effect=RuntimeError("boom"))
        catalog = ModelCatalogService(client_state, transport)

        models = await catalog.refresh()

        assert len(models) == 3
        assert client_state.is_loading_models is False

    async def test_loading_flag_set_during_fetch(self, client_state):
        observed = []

        async def list_models(provider, api_key):
            observed.append(client_state.is_loading_models)
            return ["gpt-4"]

        transport = MagicMock()
        transport.list_models = list_models
        await ModelCatalogService(client_state, transport).refresh()

        assert observed == [True]
        assert client_state.is_loading_models is False

    async def test_refresh_replaces_list_object(self, catalog, client_state):
        previous = client_state.available_models

        await catalog.refresh()

        assert client_state.available_models is not previous
        assert previous == []
