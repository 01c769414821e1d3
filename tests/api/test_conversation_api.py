"""API tests for the conversation endpoints."""

import uuid

import pytest


@pytest.mark.asyncio
class TestConversationAPI:
    """Test cases for /api/conversations."""

    async def test_create_conversation(self, client):
        response = await client.post("/api/conversations")

        assert response.status_code == 201
        data = response.json()
        assert data["title"] == "New Chat"
        assert data["selected_model"] == "gpt-4"
        assert data["think_harder_enabled"] is False
        assert uuid.UUID(data["id"])

    async def test_create_conversation_with_body(self, client):
        response = await client.post(
            "/api/conversations", json={"title": "Research", "selected_model": "gpt-4o"}
        )

        assert response.status_code == 201
        assert response.json()["title"] == "Research"
        assert response.json()["selected_model"] == "gpt-4o"

    async def test_list_conversations(self, client):
        first = (await client.post("/api/conversations", json={"title": "First"})).json()
        await client.post("/api/conversations", json={"title": "Second"})
        await client.post(f"/api/conversations/{first['id']}/messages", json={"message": "bump"})

        response = await client.get("/api/conversations")

        assert response.status_code == 200
        titles = [c["title"] for c in response.json()]
        assert titles == ["bump", "Second"]

    async def test_search_conversations(self, client):
        await client.post("/api/conversations", json={"title": "Cooking pasta"})
        await client.post("/api/conversations", json={"title": "Tax return"})

        response = await client.get("/api/conversations", params={"search": "PASTA"})

        assert [c["title"] for c in response.json()] == ["Cooking pasta"]

    async def test_get_conversation_with_messages(self, client):
        conversation = (await client.post("/api/conversations")).json()
        await client.post(f"/api/conversations/{conversation['id']}/messages", json={"message": "Hi"})

        response = await client.get(f"/api/conversations/{conversation['id']}")

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Hi"
        assert [(m["is_from_user"], m["content"]) for m in data["messages"]] == [(True, "Hi"), (False, "Hello")]

    async def test_get_missing_conversation(self, client):
        response = await client.get(f"/api/conversations/{uuid.uuid4()}")

        assert response.status_code == 404
        data = response.json()
        assert data["status"] == "error"
        assert data["error_code"] == "NOT_FOUND"
        assert "request_id" in data

    async def test_update_conversation(self, client):
        conversation = (await client.post("/api/conversations")).json()

        response = await client.patch(
            f"/api/conversations/{conversation['id']}",
            json={"selected_model": "o1-preview", "think_harder_enabled": True},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["selected_model"] == "o1-preview"
        assert data["think_harder_enabled"] is True
        assert data["title"] == "New Chat"

    async def test_update_rejects_empty_title(self, client):
        conversation = (await client.post("/api/conversations")).json()

        response = await client.patch(f"/api/conversations/{conversation['id']}", json={"title": ""})

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_delete_conversation(self, client):
        conversation = (await client.post("/api/conversations")).json()
        await client.post(f"/api/conversations/{conversation['id']}/messages", json={"message": "Hi"})

        response = await client.delete(f"/api/conversations/{conversation['id']}")

        assert response.status_code == 200
        assert response.json()["status"] == "success"
        assert (await client.get(f"/api/conversations/{conversation['id']}")).status_code == 404
        assert (await client.get(f"/api/conversations/{conversation['id']}/messages")).status_code == 404

    async def test_list_messages_with_search(self, client):
        conversation = (await client.post("/api/conversations")).json()
        url = f"/api/conversations/{conversation['id']}/messages"
        await client.post(url, json={"message": "Tell me about whales"})

        all_messages = (await client.get(url)).json()
        matching = (await client.get(url, params={"search": "WHALES"})).json()

        assert [m["content"] for m in all_messages] == ["Tell me about whales", "Hello"]
        assert [m["content"] for m in matching] == ["Tell me about whales"]

    async def test_request_id_header(self, client):
        response = await client.get("/api/conversations")

        assert "X-Request-ID" in response.headers
