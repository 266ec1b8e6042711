"""
Ticklist Backend — Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: AsyncMock standing in for AsyncSession (unit tests)
    ├── database:        Database on a throwaway SQLite file, tables created
    ├── test_client:     HTTPX AsyncClient talking to an app bound to `database`
    └── crag_body / route_body / ascent_body: request payloads
"""

import os
import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Override settings for testing BEFORE any app imports
# ticklist.main builds a default app at import time from these values
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["RUN_MIGRATIONS_ON_STARTUP"] = "false"

from ticklist.database import Base, Database  # noqa: E402
from ticklist.main import create_app  # noqa: E402
import ticklist.models  # noqa: E402,F401


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite ignores REFERENCES clauses unless asked per connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def sqlite_db_url(tmp_path) -> str:
    """URL of a SQLite file private to the test; the file appears on first connect."""
    return f"sqlite+aiosqlite:///{tmp_path / 'ticklist.db'}"


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_list(mock_db_session):
            mock_db_session.execute.return_value.scalars.return_value.all.return_value = [row]
            rows = await crag_resource.list_all(mock_db_session)
    """
    session = AsyncMock()
    session.execute = AsyncMock(return_value=MagicMock())
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    return session


@pytest_asyncio.fixture
async def database(sqlite_db_url):
    """
    A Database bound to a fresh SQLite file with all tables created.

    A file (not :memory:) so that concurrent requests get separate connections
    that still see the same data. Foreign keys are enforced, as in PostgreSQL.
    """
    engine = create_async_engine(sqlite_db_url)
    event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    db = Database(engine)
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def test_client(database):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_ready(test_client):
            response = await test_client.get("/")
            assert response.status_code == 200
    """
    app = create_app(database=database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def crag_body():
    return {"name": "Peak District", "location": "UK"}


@pytest.fixture
def route_body():
    """crag_id must be replaced with a real crag id when foreign keys are enforced."""
    return {"crag_id": str(uuid.uuid4()), "name": "Right Unconquerable"}


@pytest.fixture
def ascent_body():
    return {"route_id": str(uuid.uuid4()), "date": "2024-05-18"}
