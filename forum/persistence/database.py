"""Async engine and session factory for PostgreSQL."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from forum.config import DatabaseSettings


def create_engine(database: DatabaseSettings) -> AsyncEngine:
    """Create the async engine (asyncpg driver).

    Args:
        database: Connection and pool settings

    Returns:
        Engine with a pre-pinged connection pool
    """
    return create_async_engine(
        database.url,
        echo=database.echo,
        pool_pre_ping=True,  # Stale connections surface as reconnects, not errors
        pool_size=database.pool_size,
        max_overflow=database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory for request-scoped sessions.

    Objects stay usable after commit; nothing is flushed until a repository
    asks for it.
    """
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
