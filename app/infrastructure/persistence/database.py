"""Persistence: async engine, session factory, and Base for SQLAlchemy ORM.

Database owns the engine for the lifetime of the application. It is built
from Settings at startup (see app.core.lifespan), held on app.state, and
disposed on shutdown. There is no module-level engine.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.core.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy declarative models."""


def _engine_kwargs(settings: Settings) -> dict[str, Any]:
    """Pool options for create_async_engine (SQLite uses a static pool, no sizing)."""
    kwargs: dict[str, Any] = {"echo": settings.database_echo, "pool_pre_ping": True}
    if settings.database_url.startswith("sqlite"):
        return kwargs
    kwargs["pool_size"] = settings.db_pool_size if settings.db_pool_size is not None else 10
    kwargs["max_overflow"] = (
        settings.db_max_overflow if settings.db_max_overflow is not None else 20
    )
    kwargs["pool_recycle"] = 3600
    return kwargs


class Database:
    """Engine + session factory with scoped acquisition.

    session() yields a session for reads; transaction() yields a session
    inside BEGIN and commits on exit (rolls back on exception). Both release
    the connection back to the pool when the block exits.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self._sessionmaker = async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Create the engine from DATABASE_URL. Does not connect yet."""
        engine = create_async_engine(settings.database_url, **_engine_kwargs(settings))
        return cls(engine)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Read session; no commit."""
        async with self._sessionmaker() as session:
            yield session

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        """Write session: commits when the block exits without error."""
        async with self._sessionmaker() as session:
            async with session.begin():
                yield session

    async def create_tables(self) -> None:
        """Create missing tables for all models registered on Base."""
        # Registers Entity on Base.metadata.
        from app.infrastructure.persistence import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured")

    async def ping(self) -> bool:
        """Return True if SELECT 1 succeeds."""
        async with self.session() as session:
            await session.execute(text("SELECT 1"))
        return True

    async def dispose(self) -> None:
        """Close all pooled connections. Call on app shutdown."""
        await self.engine.dispose()
        logger.info("Database engine disposed")
