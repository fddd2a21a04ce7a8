"""
Async database engine and session management.

One process-wide ``AsyncEngine`` (asyncpg) is created on first use from
``DATABASE_URL`` and released by :func:`dispose_engine` at application
shutdown. Route handlers receive sessions through :func:`get_async_session`.

CHANGELOG:
- 2026-10-16: Lazy session factory accessor; dispose on shutdown (STORY-010)
- 2026-10-11: Initial creation (STORY-001)

TODO:
- None
"""

import logging
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from energylens.config import get_settings

logger = logging.getLogger(__name__)

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def create_engine(database_url: str | None = None) -> AsyncEngine:
    """Build an async engine for *database_url* (default: ``DATABASE_URL``).

    Connections are pinged on checkout so a restarted database does not
    surface as errors on the first requests afterwards.
    """
    url = database_url or get_settings().DATABASE_URL
    return create_async_engine(url, pool_pre_ping=True)


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the process-wide session factory, creating the engine on first use."""
    global _engine, _session_factory  # noqa: PLW0603
    if _session_factory is None:
        _engine = create_engine()
        _session_factory = async_sessionmaker(_engine, expire_on_commit=False)
        logger.info("Database engine created")
    return _session_factory


async def dispose_engine() -> None:
    """Close pooled connections and forget the engine (application shutdown)."""
    global _engine, _session_factory  # noqa: PLW0603
    engine, _engine, _session_factory = _engine, None, None
    if engine is not None:
        await engine.dispose()
        logger.info("Database engine disposed")


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a session that is closed after the request."""
    async with get_session_factory()() as session:
        yield session
