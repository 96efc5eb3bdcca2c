"""
PawMart Backend — Database Engine & Session Management
========================================================

What:  Async SQLAlchemy engine, session factory and the declarative Base.
Why:   Keeps all connection logic in one place, behind an explicitly
       constructed `Database` object rather than module-level handles.
How:   `Database` owns one async engine (one connection pool) for the life of
       the process. `Database.session()` yields a session that commits on
       success and rolls back on error.
Who:   Built by the application factory; used by the DocumentStore.
When:  Engine is created with the app; the first real connection is made
       lazily on the first query.

Connection Pooling Strategy:
    PostgreSQL (asyncpg): QueuePool sized from settings (pool_size,
    max_overflow, pool_pre_ping, hourly recycle).
    SQLite (aiosqlite):   Default pool for file databases; StaticPool for
    in-memory databases so every session sees the same database.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from pawmart.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models (shared metadata for Alembic)."""
    pass


def _engine_options(settings: Settings, url: str) -> Dict[str, Any]:
    parsed = make_url(url)
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}

    if parsed.get_backend_name() == "sqlite":
        if parsed.database in (None, "", ":memory:"):
            options["poolclass"] = StaticPool
            options["connect_args"] = {"check_same_thread": False}
        return options

    options.update(
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        pool_recycle=3600,
    )
    return options


class Database:
    """
    Owns the async engine and session factory for one database.

    Safe to share across concurrent requests: each `session()` call checks a
    connection out of the pool and returns it when the block exits.
    """

    def __init__(self, settings: Settings):
        url = settings.store_url
        self.engine: AsyncEngine = create_async_engine(url, **_engine_options(settings, url))
        # expire_on_commit=False: ORM rows stay readable after commit
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Provide a transactional session.

        How it works:
            1. Creates a new session from the factory
            2. Yields it to the caller (the caller performs queries)
            3. On success: commits the transaction
            4. On error: rolls back and re-raises
            5. Always: closes the session (returns connection to pool)
        """
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def create_schema(self) -> None:
        """Create every table registered on Base.metadata (idempotent)."""
        # Register models on the metadata before create_all
        from pawmart.models import document  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ensured")

    async def ping(self) -> bool:
        """Run SELECT 1; True when the database answered."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Database ping failed: %s", str(e))
            return False

    async def dispose(self) -> None:
        """Close all pooled connections. Called during application shutdown."""
        await self.engine.dispose()
