"""
Journal Backend — Test Configuration (conftest.py)
==================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: Mock AsyncSession for service unit tests
    ├── credential_service: CredentialService with a fixture secret
    ├── settings: Settings pointing at a per-test SQLite file
    ├── app: Fully built FastAPI app with the schema created
    ├── test_client: HTTPX AsyncClient talking to `app` in-process
    └── sign_in: Helper that signs up + signs in a user and returns auth headers
"""

import os
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Keep tests away from any real database or secret in the environment
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["TOKEN_SECRET"] = "test-secret-not-real"
os.environ["LOG_LEVEL"] = "WARNING"

from journal.config import Settings  # noqa: E402
from journal.database import Base  # noqa: E402
from journal.main import create_app  # noqa: E402
from journal.services.credential_service import CredentialService  # noqa: E402

# Register both tables on Base.metadata
import journal.models.entry  # noqa: E402,F401
import journal.models.user  # noqa: E402,F401

TEST_SECRET = "test-secret-not-real"


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value = result_with(entry)
        await entry_service.get_entry(mock_db_session, 1, owner_id=7)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_entry():
    """A stand-in for an Entry row (plain attributes, like an ORM instance)."""
    return SimpleNamespace(
        entry_id=1,
        user_id=7,
        title="Trip",
        notes="Fun",
        photo_url="http://x/y.jpg",
    )


@pytest.fixture
def credential_service():
    return CredentialService(TEST_SECRET)


@pytest.fixture
def settings(tmp_path):
    """Settings for an isolated app: its own SQLite file and a fixture secret."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'journal.db'}",
        token_secret=TEST_SECRET,
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def app(settings):
    """
    A fully wired application with the schema created.

    Production uses Alembic; tests create the tables straight from metadata.
    """
    application = create_app(settings)
    async with application.state.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield application
    await application.state.engine.dispose()


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient routed straight into the ASGI app.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def sign_in(test_client):
    """
    Returns an async helper: `headers = await sign_in("alice", "pw")`.

    Signs the user up (ignoring "already taken") and returns the
    Authorization header for their fresh session token.
    """

    async def _sign_in(username: str, password: str = "pw") -> dict:
        await test_client.post(
            "/api/auth/sign-up", json={"username": username, "password": password}
        )
        response = await test_client.post(
            "/api/auth/sign-in", json={"username": username, "password": password}
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _sign_in
