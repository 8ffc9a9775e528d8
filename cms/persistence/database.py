"""Database connection and session management.

Provides async database engine and session factory for PostgreSQL.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from cms.config import Settings
from cms.domain.error import ConcurrencyConflictError


def create_engine(settings: Settings) -> AsyncEngine:
    """Create async database engine.

    Args:
        settings: Application settings with database URL

    Returns:
        Configured async engine
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,  # Log SQL queries in debug mode
        pool_pre_ping=True,  # Verify connections before using
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create async session factory.

    Args:
        engine: Database engine

    Returns:
        Session factory for creating database sessions
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Don't expire objects after commit
        autoflush=False,  # Manual flushing for better control
        autocommit=False,  # Explicit transaction management
    )


@asynccontextmanager
async def unique_guard(
    session: AsyncSession, what: str
) -> AsyncGenerator[None, None]:
    """Run writes in a SAVEPOINT, turning unique violations into a domain error.

    Only the savepoint is rolled back, so the request transaction stays usable
    and the caller can retry.

    Args:
        session: Active session
        what: Description used in the error message

    Raises:
        ConcurrencyConflictError: If a unique constraint rejected the write
    """
    try:
        async with session.begin_nested():
            yield
    except IntegrityError as e:
        raise ConcurrencyConflictError(f"Conflicting {what}") from e
