"""Async SQLAlchemy engine and session management."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from lumastack.core.config import DatabaseSettings
from lumastack.modules.accounts.exceptions import StoreFailureError

from .base import Base

logger = logging.getLogger(__name__)

MEMORY_DATABASES = (None, "", ":memory:")


def _is_memory_sqlite(url: str) -> bool:
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return False
    return parsed.database in MEMORY_DATABASES or parsed.query.get("mode") == "memory"


def build_engine(settings: DatabaseSettings) -> AsyncEngine:
    engine_kwargs: dict[str, Any] = {
        "echo": settings.echo,
        "future": True,
        "pool_pre_ping": True,
    }
    # In-memory SQLite uses a static pool that rejects queue pool arguments.
    if not _is_memory_sqlite(settings.url):
        engine_kwargs["pool_timeout"] = settings.pool_timeout
        engine_kwargs["pool_recycle"] = settings.pool_recycle
        if settings.pool_size is not None:
            engine_kwargs["pool_size"] = settings.pool_size
        if settings.max_overflow is not None:
            engine_kwargs["max_overflow"] = settings.max_overflow

    return create_async_engine(settings.url, **engine_kwargs)


class Database:
    """Engine plus session factory, built once at startup and disposed at shutdown."""

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine
        self._session_factory = async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: DatabaseSettings) -> "Database":
        return cls(build_engine(settings))

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield a session that commits on success and rolls back on error."""
        async with self._session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
            try:
                await session.commit()
            except SQLAlchemyError as exc:
                await session.rollback()
                logger.error("Commit failed: %s", exc)
                raise StoreFailureError(f"commit failed: {exc}") from exc

    async def ping(self) -> bool:
        """Run ``SELECT 1`` without touching account data."""
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as exc:
            logger.warning("Database health probe failed: %s", exc)
            return False
        return True

    async def create_all(self) -> None:
        """Create database tables in development mode (migrations preferred)."""
        from . import models  # noqa: F401

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self._engine.dispose()


__all__ = ["Database", "build_engine"]
