"""Database handle - engine, pooled sessions and lifecycle."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.taskhub.core.config import Settings


class Database:
    """Owns the async engine (and with it the connection pool).

    Created once in the application lifespan, stored on ``app.state`` and
    disposed at shutdown. Services never reach for a global engine; they
    receive a session produced by this handle.
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self._session_factory = async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        engine_kwargs: dict[str, Any] = {"pool_pre_ping": True}
        if not settings.is_sqlite:
            engine_kwargs["pool_size"] = settings.database_pool_size
            engine_kwargs["max_overflow"] = settings.database_max_overflow
        return cls(create_async_engine(settings.database_url, **engine_kwargs))

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession]:
        """Yield a session bound to one pooled connection.

        Anything left uncommitted when the block exits (normally or through
        an exception) is rolled back before the connection goes back to the pool.
        """
        async with self._session_factory() as session:
            try:
                yield session
            finally:
                if session.in_transaction():
                    await session.rollback()

    async def ping(self) -> None:
        """Round-trip to the database. Raises on connectivity failure."""
        async with self.engine.connect() as connection:
            await connection.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        """Close every pooled connection. Call during shutdown."""
        await self.engine.dispose()
