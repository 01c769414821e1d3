# tests/conftest.py
import os
import tempfile

# Set up test environment variables BEFORE any other imports
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("DATA_DIR", tempfile.mkdtemp(prefix="slate-test-"))

import asyncio

import httpx
import pytest
import pytest_asyncio

from slate.core.config import Settings
from slate.core.state import ClientState
from slate.database import create_engine, create_session_factory, init_db
from slate.domains.chat.service import ChatService
from slate.domains.conversation.service import ConversationService
from slate.schemas.catalog import AIModel
from slate.services.provider_transport import ProviderTransport


class ProviderStub:
    """Programmable stand-in for the provider HTTP API, used via httpx.MockTransport."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.completion: dict = {"choices": [{"message": {"content": "Hello"}}]}
        self.models: dict = {"data": [{"id": "gpt-4o"}, {"id": "o1-preview"}, {"id": "whisper-1"}]}
        self.status_code = 200
        self.raw_body: bytes | None = None
        self.error: Exception | None = None
        self.gate: asyncio.Event | None = None
        self.entered = asyncio.Event()

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        self.entered.set()
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        if self.raw_body is not None:
            return httpx.Response(self.status_code, content=self.raw_body)
        body = self.models if request.url.path.endswith("/models") else self.completion
        return httpx.Response(self.status_code, json=body)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def test_settings(tmp_path):
    """Settings isolated to a temporary data directory."""
    return Settings(data_dir=tmp_path, environment="testing")


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    """Session factory bound to a fresh SQLite database."""
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await init_db(engine)
    try:
        yield create_session_factory(engine)
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def test_db(session_factory):
    """Create a test database session."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def conversation_service(test_db, test_settings):
    return ConversationService(test_db, test_settings)


@pytest.fixture
def provider_stub():
    return ProviderStub()


@pytest_asyncio.fixture
async def transport(test_settings, provider_stub):
    client = httpx.AsyncClient(transport=httpx.MockTransport(provider_stub))
    yield ProviderTransport(test_settings, client=client)
    await client.aclose()


@pytest.fixture
def client_state():
    state = ClientState()
    state.credentials = state.credentials.model_copy(update={"openai_key": "sk-test-openai"})
    return state


@pytest.fixture
def reasoning_model():
    return AIModel(id="o1-preview", display_name="O1 Preview", supports_thinking=True)


@pytest.fixture
def chat_service(session_factory, client_state, transport, test_settings):
    return ChatService(session_factory, client_state, transport, test_settings)


@pytest_asyncio.fixture
async def test_conversation(conversation_service):
    """Create an empty conversation."""
    return await conversation_service.create_conversation()


@pytest_asyncio.fixture
async def client(session_factory, client_state, transport, tmp_path):
    """Create a test client wired to the test database, state and provider stub."""
    from slate.core.dependencies import get_credential_store, get_session_factory
    from slate.domains.settings.service import CredentialStore
    from slate.main import app

    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_credential_store] = lambda: CredentialStore(tmp_path / "credentials.json")
    app.state.client_state = client_state
    app.state.transport = transport

    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
