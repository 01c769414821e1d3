# slate/core/dependencies.py
"""FastAPI dependencies wiring the services to the application state."""
from collections.abc import AsyncGenerator
from typing import Any

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from slate.core.config import settings
from slate.core.state import ClientState
from slate.database import AsyncSessionLocal
from slate.domains.catalog.service import ModelCatalogService
from slate.domains.chat.service import ChatService
from slate.domains.conversation.service import ConversationService
from slate.domains.settings.service import CredentialStore, SettingsService
from slate.services.provider_transport import ProviderTransport


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    return AsyncSessionLocal


async def get_db(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> AsyncGenerator[AsyncSession, Any]:
    async with session_factory() as session:
        yield session


def get_client_state(request: Request) -> ClientState:
    return request.app.state.client_state


def get_transport(request: Request) -> ProviderTransport:
    return request.app.state.transport


def get_credential_store() -> CredentialStore:
    return CredentialStore(settings.credentials_path)


def get_conversation_service(db: AsyncSession = Depends(get_db)) -> ConversationService:
    return ConversationService(db)


def get_chat_service(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
    state: ClientState = Depends(get_client_state),
    transport: ProviderTransport = Depends(get_transport),
) -> ChatService:
    return ChatService(session_factory, state, transport)


def get_catalog_service(
    state: ClientState = Depends(get_client_state),
    transport: ProviderTransport = Depends(get_transport),
) -> ModelCatalogService:
    return ModelCatalogService(state, transport)


def get_settings_service(
    state: ClientState = Depends(get_client_state),
    store: CredentialStore = Depends(get_credential_store),
) -> SettingsService:
    return SettingsService(state, store)
