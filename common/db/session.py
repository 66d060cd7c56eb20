"""
Database handle with an explicit lifecycle.

The application creates one ``Database`` at startup (see ``api.main.lifespan``),
stores it on ``app.state.database`` and disposes it at shutdown. Routes reach
it through the ``get_database`` / ``get_db`` dependencies; nothing in the
codebase holds a module-level engine.

Usage:
    database = Database.from_settings(settings)

    # Multiple operations in a transaction - share one session
    async with database.transaction() as session:
        await CreditUsageRepository(session).create(...)
        await PaymentHistoryRepository(session).create(...)
    # Commits together, or rolls back if anything raised

    await database.dispose()
"""

import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional
from uuid import uuid4

from fastapi import Request
from sqlalchemy import pool
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from common.core.config import Settings
from common.core.otel_axiom_exporter import get_logger

logger = get_logger(__name__)


class Database:
    """Owns the async engine and hands out transactional sessions."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        engine: Optional[AsyncEngine] = None,
    ):
        self.session_factory = session_factory
        self.engine = engine

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        # NullPool (db_use_nullpool=True): No pooling, new connection per operation (for workers)
        # Default pool: Connection pooling (for API servers with concurrent requests)
        engine_kwargs = {
            "echo": settings.debug,
            "pool_pre_ping": True,
            "pool_recycle": 3600,
            "connect_args": {
                "prepared_statement_name_func": lambda: f"__asyncpg_{uuid4()}__",
            },
        }

        if settings.db_use_nullpool:
            logger.info("Using NullPool - no connection pooling (worker mode)")
            engine_kwargs["poolclass"] = pool.NullPool
        else:
            logger.info(
                f"Using connection pooling - pool_size={settings.db_pool_size}, max_overflow={settings.db_pool_overflow}"
            )
            engine_kwargs["pool_size"] = settings.db_pool_size
            engine_kwargs["max_overflow"] = settings.db_pool_overflow

        engine = create_async_engine(settings.async_database_url, **engine_kwargs)
        session_factory = async_sessionmaker(
            engine, class_=AsyncSession, expire_on_commit=False
        )
        return cls(session_factory, engine)

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Explicit transaction boundary.

        All DB operations inside share one session/connection.
        Commits on success, rolls back on exception.

        Raises:
            Exception: Re-raises any exception after rollback
        """
        start = time.perf_counter()
        async with self.session_factory() as session:
            acquire_time = time.perf_counter() - start
            logger.debug(f"Transaction session acquire: {acquire_time * 1000:.2f}ms")

            try:
                yield session
                commit_start = time.perf_counter()
                await session.commit()
                commit_time = time.perf_counter() - commit_start
                logger.debug(f"Transaction commit: {commit_time * 1000:.2f}ms")
            except Exception as e:
                logger.error(f"Transaction rollback due to: {e}")
                await session.rollback()
                raise

    async def dispose(self) -> None:
        """Close all pooled connections. Safe to call when no engine is owned."""
        if self.engine is not None:
            await self.engine.dispose()
            logger.info("Database engine disposed")


def get_database(request: Request) -> Database:
    """FastAPI dependency returning the application's database handle."""
    return request.app.state.database


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a request-scoped transactional session."""
    async with get_database(request).transaction() as session:
        yield session
