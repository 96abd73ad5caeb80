"""
Exercise Tracker: Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, fresh for each test):
    ├── test_settings: Settings pointed at in-memory SQLite
    ├── engine:        Async in-memory SQLite engine with tables created
    ├── store:         Real ExerciseStore on that engine
    ├── mock_store:    AsyncMock standing in for ExerciseStore (no DB at all)
    └── test_client:   HTTPX AsyncClient talking to an app built around `store`
"""

import os

# Keep tests away from any real database and quiet during runs
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from exercise_tracker.config import Settings  # noqa: E402
from exercise_tracker.database import Base, create_session_factory  # noqa: E402
from exercise_tracker.models import exercise, user  # noqa: E402,F401
from exercise_tracker.services.store import ExerciseStore  # noqa: E402


@pytest.fixture
def test_settings():
    """Settings for tests: SQLite URL, unique usernames on, legacy date rule off."""
    return Settings(
        database_url="sqlite+aiosqlite://",
        enforce_unique_username=True,
        reject_past_exercise_dates=False,
        storage_timeout=5.0,
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def engine():
    """
    In-memory SQLite engine with the schema created.

    StaticPool keeps one connection alive, so every session sees the same
    in-memory database for the duration of the test.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def store(engine):
    """A real ExerciseStore backed by the in-memory engine."""
    return ExerciseStore(create_session_factory(engine), timeout=5.0)


@pytest.fixture
def mock_store():
    """
    AsyncMock shaped like ExerciseStore.

    Usage:
        mock_store.find_user_by_id.return_value = None
        with pytest.raises(NotFoundError):
            await ExerciseService(mock_store).get_log("missing")
    """
    return AsyncMock(spec=ExerciseStore)


@pytest_asyncio.fixture
async def test_client(test_settings, store):
    """
    HTTPX AsyncClient wired to an app built around the in-memory store.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/api/users")
            assert response.status_code == 200
    """
    from exercise_tracker.main import create_app

    app = create_app(settings=test_settings, store=store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
