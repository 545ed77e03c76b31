"""
Journal Backend — Database Session Management
=============================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
Why:   Centralizes all database connection logic in one place.
How:   build_engine() creates an async engine with connection pooling from an
       explicit Settings object. create_app() stores the engine and session
       factory on app.state; get_db_session() reads them from the request, so
       each application instance (and each test) owns its own pool.

Connection Pooling Strategy:
    pool_size:         Persistent connections for normal load
    max_overflow:      Temporary connections for traffic spikes
    pool_pre_ping:     Validates connections before use (catches stale connections)
    pool_recycle=3600: Recycles connections every hour
"""

import logging
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from journal.config import Settings
from journal.exceptions import DatabaseError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Registers every model with one shared metadata object, which Alembic and
    the test suite use to create the schema.
    """
    pass


# ── Engine & Session Factory ──────────────────────────────────────────────
def build_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine and its connection pool from settings."""
    return create_async_engine(
        settings.database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        pool_recycle=3600,
        # SQL logging is noisy; only useful during development
        echo=settings.log_level == "DEBUG",
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: ORM objects stay readable after the commit
    # that happens when the request's dependency scope closes
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the app's session factory
        2. Yields it to the route handler
        3. On success: commits the transaction
        4. On error: rolls back the transaction and re-raises
        5. Always: closes the session (returns connection to pool)

    Routes declare it as Depends(get_db_session, scope="function") so the commit
    runs before the response is sent. A failed commit then reaches the error
    handlers as DatabaseError instead of following a success response.
    """
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise

        try:
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error("Commit failed: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine(engine: AsyncEngine) -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
