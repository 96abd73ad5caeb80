"""
Exercise Tracker: Persistence Gateway
========================================

What:  ExerciseStore owns the users and exercises tables and performs every
       read and write the API needs, one store call per operation.
How:   Each operation opens its own AsyncSession from the injected factory,
       runs inside asyncio.wait_for(timeout), and converts any failure
       (driver error, lost connection, timeout) into StorageError. Callers
       never see a raw SQLAlchemy or asyncpg exception.
Who:   Constructed once per application (main.py lifespan, or by tests) and
       handed to ExerciseService.

Operations:
    create_user            INSERT users
    find_user_by_username  SELECT users WHERE username = :name
                             ORDER BY created_at, id LIMIT 1
    find_user_by_id        SELECT users WHERE id = :id
    list_users             SELECT users
    create_exercise        INSERT exercises (caller checks the user exists)
    count_exercises        SELECT COUNT(*) exercises WHERE user_id = :id
    find_exercises         SELECT exercises WHERE user_id = :id
                             [AND date >= :from] [AND date < :to]
                             ORDER BY date, id [LIMIT :limit]
    ping                   SELECT 1
"""

import asyncio
import logging
from datetime import date
from typing import Awaitable, Callable, List, Optional, TypeVar

from sqlalchemy import func, select, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from exercise_tracker.exceptions import StorageError
from exercise_tracker.models.exercise import Exercise
from exercise_tracker.models.user import User

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ExerciseStore:
    """
    Persistence gateway over an async SQLAlchemy session factory.

    Args:
        session_factory: Builds one AsyncSession per operation.
        timeout:         Upper bound in seconds on each operation.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        timeout: float = 10.0,
    ):
        self._session_factory = session_factory
        self._timeout = timeout

    async def _run(self, operation: str, work: Callable[[AsyncSession], Awaitable[T]]) -> T:
        """Run ``work`` in a fresh session, bounded by the timeout, mapping failures to StorageError."""

        async def in_session() -> T:
            async with self._session_factory() as session:
                return await work(session)

        try:
            return await asyncio.wait_for(in_session(), timeout=self._timeout)
        except asyncio.TimeoutError as e:
            logger.error("Store operation %s timed out after %.1fs", operation, self._timeout)
            raise StorageError(
                context={"operation": operation, "error_type": "timeout"},
            ) from e
        except Exception as e:
            logger.error("Store operation %s failed: %s", operation, str(e), exc_info=True)
            raise StorageError(
                context={"operation": operation, "error_type": type(e).__name__},
            ) from e

    # ── Users ─────────────────────────────────────────────────────────────

    async def create_user(self, username: str, user_id: str) -> User:
        async def work(session: AsyncSession) -> User:
            user = User(id=user_id, username=username)
            session.add(user)
            await session.commit()
            return user

        return await self._run("create_user", work)

    async def find_user_by_username(self, username: str) -> Optional[User]:
        async def work(session: AsyncSession) -> Optional[User]:
            result = await session.execute(
                select(User)
                .where(User.username == username)
                .order_by(User.created_at.asc(), User.id.asc())
                .limit(1)
            )
            return result.scalar_one_or_none()

        return await self._run("find_user_by_username", work)

    async def find_user_by_id(self, user_id: str) -> Optional[User]:
        async def work(session: AsyncSession) -> Optional[User]:
            return await session.get(User, user_id)

        return await self._run("find_user_by_id", work)

    async def list_users(self) -> List[User]:
        async def work(session: AsyncSession) -> List[User]:
            result = await session.execute(select(User))
            return list(result.scalars().all())

        return await self._run("list_users", work)

    # ── Exercises ─────────────────────────────────────────────────────────

    async def create_exercise(
        self,
        user_id: str,
        description: str,
        duration: int,
        exercise_date: date,
    ) -> Exercise:
        """Insert one exercise. Does not check that ``user_id`` exists."""

        async def work(session: AsyncSession) -> Exercise:
            exercise = Exercise(
                user_id=user_id,
                description=description,
                duration=duration,
                date=exercise_date,
            )
            session.add(exercise)
            await session.commit()
            return exercise

        return await self._run("create_exercise", work)

    async def count_exercises(self, user_id: str) -> int:
        async def work(session: AsyncSession) -> int:
            result = await session.execute(
                select(func.count(Exercise.id)).where(Exercise.user_id == user_id)
            )
            return result.scalar() or 0

        return await self._run("count_exercises", work)

    async def find_exercises(
        self,
        user_id: str,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> List[Exercise]:
        """
        Exercises of ``user_id`` dated in [date_from, date_to), oldest first.

        A bound of None leaves that side of the range open.

        ``limit`` of None means unbounded; otherwise it must be a positive int
        (LogQuery guarantees this).
        """

        async def work(session: AsyncSession) -> List[Exercise]:
            query = (
                select(Exercise)
                .where(Exercise.user_id == user_id)
                .order_by(Exercise.date.asc(), Exercise.id.asc())
            )
            if date_from is not None:
                query = query.where(Exercise.date >= date_from)
            if date_to is not None:
                query = query.where(Exercise.date < date_to)
            if limit is not None:
                query = query.limit(limit)
            result = await session.execute(query)
            return list(result.scalars().all())

        return await self._run("find_exercises", work)

    # ── Health ────────────────────────────────────────────────────────────

    async def ping(self) -> None:
        async def work(session: AsyncSession) -> None:
            await session.execute(text("SELECT 1"))

        await self._run("ping", work)
