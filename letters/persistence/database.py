"""Async engine and session factory for PostgreSQL."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from letters.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Build the asyncpg engine described by ``settings.database``.

    SQL is echoed when ``DEBUG`` is on.
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Rows are mapped to frozen domain models right away, so nothing needs
    # refreshing after commit and nothing flushes behind the repository's back
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


@asynccontextmanager
async def request_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """Open a session for one request.

    Use cases commit through the unit of work. Whatever is still pending
    when the request ends, successful or not, is rolled back.
    """
    async with session_factory() as session:
        try:
            yield session
        finally:
            if session.in_transaction():
                await session.rollback()
