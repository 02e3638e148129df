"""Database connection and session management.

Provides async database engine and session factory for PostgreSQL.
"""

import asyncio
from contextlib import asynccontextmanager, contextmanager
from typing import AsyncGenerator, Iterator

import logfire
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from blog.config import Settings
from blog.domain.error import StoreUnavailableError


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
        pool_pre_ping=True,
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
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )


@asynccontextmanager
async def get_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Get a database session wrapped in a transaction.

    Commits when the block exits normally and rolls back on any error,
    so a request's writes land together or not at all.

    Args:
        session_factory: Factory for creating sessions

    Yields:
        Database session
    """
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
            logfire.debug("Session committed")
        except BaseException as e:
            logfire.warn("Session rollback", error=repr(e))
            await session.rollback()
            raise


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """Translate connection-level database failures to StoreUnavailableError.

    Such a failure aborts the request transaction, so the error is marked
    ``rolled_back``: none of the request's writes will be committed.

    Args:
        operation: Repository operation name used in the error
    """
    try:
        yield
    except (OperationalError, InterfaceError, asyncio.TimeoutError) as e:
        raise StoreUnavailableError(operation, str(e), rolled_back=True) from e
