"""
Pastebin Backend — Database Session Management
================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
Why:   Centralizes all database connection logic in one place.
How:   Creates an async engine with connection pooling, provides a session
       dependency that auto-commits on success and auto-rolls-back on error.
Who:   Used by route handlers via FastAPI's dependency injection system.
When:  Engine is created at module import; sessions are created per-request.

Connection Pooling Strategy:
    PostgreSQL (asyncpg) gets a sized pool with pre-ping and hourly recycling.
    SQLite (aiosqlite, used by the test-suite and local experiments) manages
    its own pool class, so the sizing options are left out for it.
"""

import logging
from typing import Any, AsyncGenerator, Dict

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from pastebin.config import settings

logger = logging.getLogger(__name__)


def engine_options(database_url: str) -> Dict[str, Any]:
    """Keyword arguments for create_async_engine() appropriate to the URL's backend."""
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if database_url.startswith("sqlite"):
        return options
    options.update(
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        pool_recycle=3600,
    )
    return options


# ── Engine Configuration ──────────────────────────────────────────────────
engine: AsyncEngine = create_async_engine(
    settings.database_url,
    **engine_options(settings.database_url),
)

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: attributes stay readable after commit, which the
# response serialization relies on
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Registers models with a single metadata object, used by Alembic for
    migrations and by create_schema() for the startup bootstrap.
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler
        3. On success: commits the transaction
        4. On error: rolls back the transaction and re-raises
        5. Always: closes the session (returns connection to pool)

    Raises:
        Any database exceptions are propagated to the global error handler,
        which returns appropriate HTTP status codes.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def create_schema(bind: AsyncEngine = engine) -> None:
    """
    Create any missing tables (CREATE TABLE IF NOT EXISTS semantics).

    When:  Startup, if settings.auto_create_schema is enabled.
    Why:   A fresh database is usable without running Alembic first.
    """
    # Register models with Base.metadata before creating
    from pastebin.models.paste import Paste  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ensured")


async def dispose_engine() -> None:
    """Gracefully closes all connections in the pool (called on shutdown)."""
    await engine.dispose()
