"""
Snippetbox Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for error-propagation tests
    ├── db_engine:       fresh SQLite database (aiosqlite) with all tables
    ├── db_session:      AsyncSession bound to db_engine
    ├── app:             create_app() with get_db_session pointed at db_engine
    └── test_client:     HTTPX AsyncClient talking to `app` (keeps cookies)
"""

import os
import tempfile

# Settings are read at import time, so these must be set before any
# snippetbox import
_TEST_DIR = tempfile.mkdtemp(prefix="snippetbox_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR}/health.db"
os.environ["SESSION_SECRET"] = "test-session-secret-not-real"
os.environ["BCRYPT_COST"] = "4"  # cost 12 makes every signup take ~250ms
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

import snippetbox.models  # noqa: F401  (registers tables on Base.metadata)
from snippetbox.database import Base, get_db_session
from snippetbox.main import create_app


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_propagates(mock_db_session):
            mock_db_session.execute.side_effect = OperationalError(...)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """A throwaway SQLite database file with every table created."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'snippetbox.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest.fixture
def app(db_engine):
    """
    A fresh application whose request sessions use the test database.

    The override keeps the commit-on-success / rollback-on-error contract
    of snippetbox.database.get_db_session.
    """
    application = create_app()
    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db_session():
        async with factory() as session:
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
    HTTPX AsyncClient routed straight to the ASGI app.

    Redirects are not followed so tests can assert on 303s; the cookie jar
    carries the session between requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
