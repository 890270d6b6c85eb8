"""
Test configuration and fixtures for the waitlist API.

Every test function gets its own temporary SQLite database (aiosqlite), so
tests never see each other's signups.
"""

import os
import tempfile
from typing import Generator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

# Must be set before waitlist_api.platform.config is imported.
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{tempfile.mktemp(suffix='.db')}")
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="waitlist-logs-"))

from waitlist_api.main import create_app  # noqa: E402
from waitlist_api.platform.config import Settings  # noqa: E402
from waitlist_api.platform.db.session import Database  # noqa: E402


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'waitlist.db'}")


@pytest.fixture
def test_app(test_settings):
    """Create FastAPI test application backed by a fresh database."""
    return create_app(test_settings)


@pytest.fixture
def client(test_app) -> Generator[TestClient, None, None]:
    """
    TestClient used as a context manager so the lifespan runs: the database
    is connected before the first request and disposed afterwards.
    """
    with TestClient(test_app) as test_client:
        yield test_client


@pytest_asyncio.fixture
async def database(test_settings):
    db = Database(test_settings.DATABASE_URL)
    await db.connect()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def db_session(database):
    async with database.session() as session:
        yield session
