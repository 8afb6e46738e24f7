"""
Todo List — Test Configuration (conftest.py)
==============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for service unit tests (no DB)
    ├── sample_todo:     A detached Todo ORM instance
    ├── database:        Creates tables in a temporary SQLite file, drops them after
    ├── test_client:     httpx AsyncClient bound to the FastAPI app (needs `database`)
    └── todo_api_client: todo_client.TodoApi talking to the same app in-process
"""

import os
import tempfile
import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

# Settings are read at import time, so the environment is overridden
# before anything from todo_api is imported
_test_dir = tempfile.mkdtemp(prefix="todo_list_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_test_dir}/test.db"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["CORS_ORIGINS"] = "http://localhost:3000"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from todo_api.database import Base, engine  # noqa: E402
from todo_api.models.todo import Todo  # noqa: E402

API_URL = "http://test/api/todos"


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_update(mock_db_session, sample_todo):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = sample_todo
            result = await todo_service.update_todo(mock_db_session, str(sample_todo.id), payload)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_todo():
    created = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)
    return Todo(
        id=uuid.uuid4(),
        title="Buy milk",
        completed=False,
        created_at=created,
        updated_at=created,
    )


@pytest.fixture
def query_result():
    """Factory for the object returned by `await session.execute(...)`."""
    def make(scalar=None, rows=None):
        result = MagicMock()
        result.scalar_one_or_none.return_value = scalar
        result.scalars.return_value.all.return_value = rows or []
        return result
    return make


@pytest_asyncio.fixture
async def database():
    """
    Fresh `todos` table for each test.

    The engine is disposed afterwards so no pooled connection outlives the
    test's event loop.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def test_client(database):
    """
    HTTPX AsyncClient routed directly to the FastAPI app.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/api/todos")
    """
    from todo_api.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def todo_api_client(test_client):
    """todo_client.TodoApi using the in-process test client as its transport."""
    from todo_client.api import TodoApi
    yield TodoApi(api_url=API_URL, client=test_client)
