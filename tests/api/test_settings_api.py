"""API tests for provider settings and the model catalog."""

import json

import pytest


@pytest.mark.asyncio
class TestSettingsAPI:
    """Test cases for /api/settings."""

    async def test_get_settings_masks_keys(self, client):
        response = await client.get("/api/settings")

        assert response.status_code == 200
        data = response.json()
        assert data["selected_provider"] == "OpenAI"
        assert data["openai_key_set"] is True
        assert data["openai_key_hint"] == "...enai"
        assert data["openrouter_key_set"] is False
        assert "sk-test-openai" not in response.text

    async def test_update_is_saved_only_on_request(self, client, tmp_path):
        credentials_file = tmp_path / "credentials.json"

        response = await client.patch("/api/settings", json={"openrouter_key": "  sk-or-123456789  "})
        assert response.status_code == 200
        assert response.json()["openrouter_key_hint"] == "...6789"
        assert not credentials_file.exists()

        response = await client.post("/api/settings/save")
        assert response.status_code == 200
        stored = json.loads(credentials_file.read_text())
        assert stored["openrouter_key"] == "sk-or-123456789"
        assert stored["openai_key"] == "sk-test-openai"

    async def test_invalid_provider_rejected(self, client):
        response = await client.patch("/api/settings", json={"selected_provider": "Anthropic"})

        assert response.status_code == 422

    async def test_switching_provider_refreshes_catalog(self, client, client_state, provider_stub):
        provider_stub.models = {"data": [{"id": "anthropic/claude-3-opus"}, {"id": "mistral/mixtral"}]}

        response = await client.patch(
            "/api/settings", json={"selected_provider": "OpenRouter", "openrouter_key": "sk-or"}
        )

        assert response.json()["selected_provider"] == "OpenRouter"
        assert str(provider_stub.last_request.url) == "https://openrouter.ai/api/v1/models"
        assert [m.id for m in client_state.available_models] == ["anthropic/claude-3-opus"]

    async def test_inactive_key_change_keeps_catalog(self, client, provider_stub):
        await client.patch("/api/settings", json={"openrouter_key": "sk-or"})

        assert provider_stub.requests == []


@pytest.mark.asyncio
class TestModelsAPI:
    """Test cases for /api/models."""

    async def test_list_models_before_refresh(self, client):
        response = await client.get("/api/models")

        assert response.status_code == 200
        assert response.json() == {"provider": "OpenAI", "is_loading": False, "models": []}

    async def test_refresh_models(self, client, provider_stub):
        response = await client.post("/api/models/refresh")

        assert response.status_code == 200
        data = response.json()
        assert data["is_loading"] is False
        assert data["models"] == [{"id": "gpt-4o", "display_name": "GPT-4o", "supports_thinking": False}]

    async def test_refresh_falls_back_on_failure(self, client, provider_stub):
        provider_stub.status_code = 401

        response = await client.post("/api/models/refresh")

        assert [m["id"] for m in response.json()["models"]] == ["gpt-4", "gpt-4-turbo", "gpt-3.5-turbo"]

    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["provider"] == "OpenAI"
