"""
Database engine, connection pool and session configuration.

The pool lives on a Database object that the application creates once at
startup (see task_tracker.main) and disposes on shutdown. Request handlers
reach it through the get_db dependency, never through module globals.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from task_tracker.core.config import Settings
from task_tracker.db.base import Base

logger = logging.getLogger(__name__)


class Database:
    """Process-wide connection pool plus the session factory bound to it."""

    def __init__(
        self,
        url: str,
        *,
        echo: bool = False,
        pool_size: int = 10,
        max_overflow: int = 0,
        pool_timeout: float = 30.0,
        connect_timeout: float | None = None,
    ) -> None:
        self.url = make_url(url)
        self.engine: AsyncEngine = create_async_engine(
            self.url,
            echo=echo,
            **_pool_options(self.url, pool_size, max_overflow, pool_timeout, connect_timeout),
        )
        # expire_on_commit=False keeps loaded rows readable after commit
        self.session_maker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.DATABASE_URL,
            echo=settings.DEBUG,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            connect_timeout=settings.DB_CONNECT_TIMEOUT,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Open a session, committing on success and rolling back on error."""
        async with self.session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def ping(self) -> None:
        """Round-trip a trivial query; raises if the database is unreachable."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def create_all(self) -> None:
        # important: ensures models are registered before creating tables
        import task_tracker.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables initialized")

    async def dispose(self) -> None:
        await self.engine.dispose()


def _pool_options(url, pool_size: int, max_overflow: int, pool_timeout: float, connect_timeout: float | None) -> Dict[str, Any]:
    options: Dict[str, Any] = {}
    # In-memory SQLite runs on a single shared connection without a queue pool
    if url.get_backend_name() != "sqlite" or url.database not in (None, "", ":memory:"):
        options.update(
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_timeout=pool_timeout,
            pool_pre_ping=True,
        )
    if connect_timeout is not None and url.get_driver_name() == "asyncpg":
        options["connect_args"] = {"timeout": connect_timeout}
    return options


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Get a database session from the application's pool.

    The session is automatically closed when the request is done.

    Usage in a FastAPI endpoint:
        @router.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db)):
            ...
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session
