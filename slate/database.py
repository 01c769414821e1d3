# python
"""Database engine and session utilities.

This module sets up the asynchronous database engine and session factory
for the conversation store, and creates the schema at startup.
"""
import logging
from pathlib import Path

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from slate.core.config import settings
from slate.models import Base

logger = logging.getLogger(__name__)


def _casefold(value):
    return value.casefold() if value is not None else None


def _configure_sqlite_connection(dbapi_connection, _connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
    # SQLite lower() and LIKE only fold ASCII
    dbapi_connection.create_function("casefold", 1, _casefold, deterministic=True)


def create_engine(url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine; SQLite connections get foreign keys and a Unicode casefold() function."""
    engine = create_async_engine(url, echo=echo)
    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _configure_sqlite_connection)
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, expire_on_commit=False)


engine = create_engine(settings.database_url, echo=settings.debug)

AsyncSessionLocal = create_session_factory(engine)


async def init_db(target: AsyncEngine = engine) -> None:
    """Create the storage directory and tables.

    Failure here is fatal: the application cannot run without local storage.
    """
    url = make_url(str(target.url))
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Conversation store ready at %s", url.render_as_string(hide_password=True))
