"""
Notekeeper Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixtures:
    ├── mock_db_session:    AsyncMock standing in for AsyncSession
    ├── memory_repository:  fresh InMemoryNoteRepository
    ├── sqlite_session:     real AsyncSession on a throwaway SQLite file
    ├── sample_note_data:   attribute dict for one note
    ├── test_client:        HTTPX AsyncClient wired to the app, with the
                            repository dependency pointing at memory_repository
    └── sqlite_client:      same, but over SQLAlchemyNoteRepository(sqlite_session)
"""

import os
import tempfile

# Settings are read at import time: configure before importing the app
_TEST_DIR = tempfile.mkdtemp(prefix="notekeeper_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR}/test.db"
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import datetime, timezone  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import AsyncClient, ASGITransport  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402

from app.database import create_tables  # noqa: E402
from app.repositories.notes import (  # noqa: E402
    InMemoryNoteRepository,
    SQLAlchemyNoteRepository,
    get_note_repository,
)


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = note
        repository = SQLAlchemyNoteRepository(mock_db_session)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def memory_repository():
    return InMemoryNoteRepository()


@pytest_asyncio.fixture
async def sqlite_session(tmp_path):
    """A real AsyncSession on an empty SQLite database with the notes table."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}")
    await create_tables(engine)
    factory = async_sessionmaker(engine, expire_on_commit=False)
    async with factory() as session:
        yield session
    await engine.dispose()


@pytest.fixture
def sample_note_data():
    now = datetime.now(timezone.utc)
    return {
        "id": 1,
        "title": "Shopping",
        "body": "Milk, eggs, bread",
        "user_id": 7,
        "created_at": now,
        "updated_at": now,
    }


@pytest_asyncio.fixture
async def test_client(memory_repository):
    """
    HTTPX AsyncClient talking to the FastAPI app through ASGITransport.

    Redirects are not followed so tests can assert on 303 responses.
    """
    from app.main import app

    app.dependency_overrides[get_note_repository] = lambda: memory_repository
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def sqlite_client(sqlite_session):
    """Like test_client, but every request goes through the real SQL repository."""
    from app.main import app

    app.dependency_overrides[get_note_repository] = lambda: SQLAlchemyNoteRepository(sqlite_session)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
