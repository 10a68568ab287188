"""
Pastebin Backend — Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── engine:           aiosqlite engine on a fresh temporary database file
    ├── session_factory:  async_sessionmaker bound to that engine
    ├── app:              create_app() with get_db_session pointed at the test DB
    ├── test_client:      HTTPX AsyncClient talking to the app through ASGITransport
    └── mock_db_session:  AsyncMock session for error-path unit tests
"""

import os

# Override settings for testing BEFORE any pastebin imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["AUTO_CREATE_SCHEMA"] = "false"

from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402

from pastebin.database import create_schema, get_db_session  # noqa: E402
from pastebin.main import create_app  # noqa: E402


@pytest_asyncio.fixture
async def engine(tmp_path):
    """A fresh SQLite database with the pastes table, disposed after the test."""
    test_engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'pastes.db'}")
    await create_schema(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
def app(session_factory):
    """
    Application wired to the test database.

    A new app per test also means fresh rate limit counters.
    """
    application = create_app()

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    application.dependency_overrides[get_db_session] = override_get_db_session
    return application


@pytest_asyncio.fixture
async def test_client(app):
    """
    Async HTTP client for endpoint tests.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def mock_db_session():
    """
    A MagicMock that simulates AsyncSession behavior.

    Usage:
        mock_db_session.execute.side_effect = RuntimeError("connection reset")
        await paste_service.list_pastes(mock_db_session)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session
