"""Slate Chat - Main Application Module.

This module initializes the local FastAPI application that a chat UI talks
to, with configuration, logging, error handling, routing and lifecycle
management for the conversation store and provider transport.
"""

import asyncio
import logging
import uuid
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from slate import __version__
from slate.core.config import get_config_summary, settings
from slate.core.state import ClientState
from slate.database import engine, init_db
from slate.domains.catalog.service import ModelCatalogService
from slate.domains.settings.service import CredentialStore, SettingsService
from slate.services.provider_transport import ProviderTransport

logger = logging.getLogger(__name__)


def setup_logging() -> None:
    """Configure root logging from settings."""
    logging.basicConfig(
        level=settings.log_level.value,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle events."""
    # Startup
    logger.info("Starting Slate Chat...")
    logger.debug(f"Configuration: {get_config_summary()}")
    await init_db()

    state = ClientState()
    SettingsService(state, CredentialStore(settings.credentials_path)).load()
    transport = ProviderTransport(settings)

    app.state.client_state = state
    app.state.transport = transport
    app.state.catalog_task = asyncio.create_task(ModelCatalogService(state, transport).refresh())

    yield

    # Shutdown
    logger.info("Shutting down Slate Chat...")
    app.state.catalog_task.cancel()
    await transport.aclose()
    await engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Slate Chat",
        description="Local chat client core for OpenAI and OpenRouter",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url=None,
    )

    setup_middleware(app)
    setup_exception_handlers(app)
    setup_routers(app)

    return app


def setup_middleware(app: FastAPI):
    """Configure application middleware."""

    # Request ID middleware
    @app.middleware("http")
    async def add_request_id(request: Request, call_next):
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


def _error_response(
    request: Request, status_code: int, message: str, error_code: str, details=None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "status": "error",
            "message": message,
            "error_code": error_code,
            "details": details,
            "timestamp": datetime.now(UTC).isoformat(),
            "request_id": getattr(request.state, "request_id", None),
        },
    )


def setup_exception_handlers(app: FastAPI):
    """Configure global exception handlers."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # Application exceptions carry a structured detail
        if isinstance(exc.detail, dict) and "message" in exc.detail:
            return _error_response(
                request,
                exc.status_code,
                exc.detail["message"],
                exc.detail.get("error_code", "HTTP_ERROR"),
                exc.detail.get("details"),
            )
        return _error_response(request, exc.status_code, str(exc.detail or "An error occurred"), "HTTP_ERROR")

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = [
            {
                "loc": list(error.get("loc", [])),
                "msg": str(error.get("msg", "Validation error")),
                "type": error.get("type", "value_error"),
            }
            for error in exc.errors()
        ]
        return _error_response(request, 422, "Validation error", "VALIDATION_ERROR", errors)


def setup_routers(app: FastAPI):
    """Configure application routers."""
    from slate.domains.catalog.controller import router as catalog_router
    from slate.domains.chat.controller import router as chat_router
    from slate.domains.conversation.controller import router as conversation_router
    from slate.domains.settings.controller import router as settings_router

    @app.get("/health")
    async def health_check(request: Request):
        """Liveness endpoint with the provider and catalog status."""
        state: ClientState | None = getattr(request.app.state, "client_state", None)
        return {
            "status": "healthy",
            "version": __version__,
            "environment": settings.environment,
            "timestamp": datetime.now(UTC).isoformat(),
            "provider": state.selected_provider.value if state else None,
            "models_loaded": len(state.available_models) if state else 0,
        }

    app.include_router(conversation_router)
    app.include_router(chat_router)
    app.include_router(catalog_router)
    app.include_router(settings_router)


# Create the application instance
app = create_app()


def main():
    """Entry point for running the local API."""
    import uvicorn

    setup_logging()
    uvicorn.run(
        "slate.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development and settings.debug,
        log_level=settings.log_level.value.lower(),
    )


if __name__ == "__main__":
    main()
