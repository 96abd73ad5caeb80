"""
Exercise Tracker: Persistence Gateway Tests
==============================================

What:  Tests for ExerciseStore against a real in-memory SQLite database,
       plus failure mapping with broken session factories.

What we test:
    ✅ User create / find by id / find by username / list
    ✅ Shared username resolves to the oldest user
    ✅ Exercise count is per user
    ✅ find_exercises: half-open or open-ended date range, ascending order, limit, per-user
    ✅ Driver failures and timeouts surface as StorageError
"""

import asyncio
from datetime import date, datetime

import pytest

from exercise_tracker.database import create_session_factory
from exercise_tracker.exceptions import StorageError
from exercise_tracker.models.user import User
from exercise_tracker.services.store import ExerciseStore


class TestUsers:

    @pytest.mark.asyncio
    async def test_create_and_find_by_id(self, store):
        created = await store.create_user("alice", "a" * 32)
        found = await store.find_user_by_id("a" * 32)

        assert created.id == "a" * 32
        assert found is not None
        assert found.username == "alice"

    @pytest.mark.asyncio
    async def test_find_missing_user_returns_none(self, store):
        assert await store.find_user_by_id("missing") is None
        assert await store.find_user_by_username("nobody") is None

    @pytest.mark.asyncio
    async def test_find_by_username(self, store):
        await store.create_user("bob", "b" * 32)
        found = await store.find_user_by_username("bob")
        assert found.id == "b" * 32

    @pytest.mark.asyncio
    async def test_shared_username_resolves_to_oldest(self, engine, store):
        session_factory = create_session_factory(engine)
        async with session_factory() as session:
            session.add(User(id="b" * 32, username="alice", created_at=datetime(2024, 2, 1)))
            session.add(User(id="a" * 32, username="alice", created_at=datetime(2024, 3, 1)))
            session.add(User(id="c" * 32, username="alice", created_at=datetime(2024, 1, 1)))
            await session.commit()

        found = await store.find_user_by_username("alice")
        assert found.id == "c" * 32

    @pytest.mark.asyncio
    async def test_list_users(self, store):
        await store.create_user("alice", "a" * 32)
        await store.create_user("bob", "b" * 32)

        users = await store.list_users()
        assert sorted(u.username for u in users) == ["alice", "bob"]


class TestExercises:

    @pytest.mark.asyncio
    async def test_count_is_per_user(self, store):
        await store.create_exercise("u1", "run", 30, date(2024, 1, 1))
        await store.create_exercise("u1", "swim", 45, date(2024, 1, 2))
        await store.create_exercise("u2", "bike", 60, date(2024, 1, 3))

        assert await store.count_exercises("u1") == 2
        assert await store.count_exercises("u2") == 1
        assert await store.count_exercises("u3") == 0

    @pytest.mark.asyncio
    async def test_find_filters_half_open_range(self, store):
        for day in (date(2024, 1, 1), date(2024, 2, 1), date(2024, 3, 1)):
            await store.create_exercise("u1", "run", 30, day)

        result = await store.find_exercises("u1", date(2024, 1, 15), date(2024, 2, 15))
        assert [e.date for e in result] == [date(2024, 2, 1)]

        # from is inclusive, to is exclusive
        result = await store.find_exercises("u1", date(2024, 2, 1), date(2024, 3, 1))
        assert [e.date for e in result] == [date(2024, 2, 1)]

    @pytest.mark.asyncio
    async def test_open_bounds_include_extreme_dates(self, store):
        for day in (date.min, date(2024, 1, 1), date.max):
            await store.create_exercise("u1", "run", 30, day)

        result = await store.find_exercises("u1", None, None)
        assert [e.date for e in result] == [date.min, date(2024, 1, 1), date.max]

        result = await store.find_exercises("u1", date(2024, 1, 1), None)
        assert [e.date for e in result] == [date(2024, 1, 1), date.max]

    @pytest.mark.asyncio
    async def test_find_orders_ascending_and_limits(self, store):
        for day in (5, 1, 4, 2, 3):
            await store.create_exercise("u1", f"day {day}", 10, date(2024, 1, day))

        result = await store.find_exercises("u1", None, None, limit=2)
        assert [e.date for e in result] == [date(2024, 1, 1), date(2024, 1, 2)]

        unbounded = await store.find_exercises("u1", None, None, limit=None)
        assert len(unbounded) == 5

    @pytest.mark.asyncio
    async def test_find_excludes_other_users(self, store):
        await store.create_exercise("u1", "run", 30, date(2024, 1, 1))
        await store.create_exercise("u2", "swim", 30, date(2024, 1, 1))

        result = await store.find_exercises("u1", None, None)
        assert [e.description for e in result] == ["run"]


class TestFailureMapping:

    @pytest.mark.asyncio
    async def test_driver_error_becomes_storage_error(self):
        def broken_factory():
            raise OSError("connection refused")

        store = ExerciseStore(broken_factory)

        with pytest.raises(StorageError) as exc_info:
            await store.list_users()
        assert exc_info.value.context["operation"] == "list_users"
        assert exc_info.value.context["error_type"] == "OSError"
        assert "connection refused" not in exc_info.value.message

    @pytest.mark.asyncio
    async def test_timeout_becomes_storage_error(self):
        class HangingSession:
            async def __aenter__(self):
                await asyncio.sleep(5)
                return self

            async def __aexit__(self, *exc_info):
                return False

        store = ExerciseStore(HangingSession, timeout=0.05)

        with pytest.raises(StorageError) as exc_info:
            await store.find_user_by_id("anything")
        assert exc_info.value.context["error_type"] == "timeout"
