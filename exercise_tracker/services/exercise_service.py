"""
Exercise Tracker: Exercise Service (Request Handling Logic)
==============================================================

What:  The business half of the three API operations plus the user listing:
       coerce raw input, validate, look things up, persist, shape responses.
How:   Composes the validation layer, the identity generator and an injected
       ExerciseStore. Routes stay thin and only pass raw strings in.
Who:   Built per request by routes.dependencies.get_exercise_service.

Orchestration (POST /api/users/{id}/exercises):
    ┌──────────┐    ┌──────────┐    ┌──────────────┐    ┌──────────┐
    │  Coerce  │───▶│ Validate │───▶│  Find user   │───▶│  Insert  │
    │  fields  │    │  (400)   │    │  (404)       │    │  (500)   │
    └──────────┘    └──────────┘    └──────────────┘    └──────────┘

Every client-error check runs before the first mutating store call, so a
rejected request never leaves a partial write behind.

Known race:
    With the unique-username policy on, create_user looks the name up and
    then inserts. Two concurrent requests for the same new name can both
    miss the lookup and both insert. This is accepted at this scale.
"""

import logging
from datetime import date
from typing import Callable, List, Optional

from exercise_tracker.exceptions import NotFoundError
from exercise_tracker.models.user import User
from exercise_tracker.schemas.exercise import ExerciseResponse, LogEntry, LogResponse
from exercise_tracker.schemas.user import UserResponse
from exercise_tracker.services.identity import generate_id
from exercise_tracker.services.store import ExerciseStore
from exercise_tracker.services.validation import parse_log_query, validate

logger = logging.getLogger(__name__)


def format_date(value: date) -> str:
    """Human-readable date as used in every response, e.g. 'Mon Jan 01 2024'."""
    return value.strftime("%a %b %d %Y")


class ExerciseService:
    """
    Request handling logic for users, exercises and logs.

    Args:
        store:                   Persistence gateway.
        enforce_unique_username: Return the existing user on a duplicate name.
        reject_past_dates:       Legacy rule refusing exercises dated before today.
        today:                   Clock for "today"; injectable for tests.

    Error Handling Strategy:
        ValidationError and NotFoundError are raised here; StorageError comes
        up from the store untouched. None of them is caught in this class.
    """

    def __init__(
        self,
        store: ExerciseStore,
        enforce_unique_username: bool = True,
        reject_past_dates: bool = False,
        today: Callable[[], date] = date.today,
    ):
        self.store = store
        self.enforce_unique_username = enforce_unique_username
        self.reject_past_dates = reject_past_dates
        self.today = today

    async def list_users(self) -> List[UserResponse]:
        users = await self.store.list_users()
        return [UserResponse.model_validate(user) for user in users]

    async def create_user(self, username: Optional[str]) -> UserResponse:
        """
        Create a user, or return the existing one under the unique-username policy.

        Raises:
            ValidationError: username empty or longer than 30 chars
            StorageError:    store failure
        """
        fields = validate("user", {"username": "" if username is None else str(username)})

        if self.enforce_unique_username:
            existing = await self.store.find_user_by_username(fields.username)
            if existing is not None:
                logger.info("Username '%s' already exists as %s", existing.username, existing.id)
                return UserResponse.model_validate(existing)

        user = await self.store.create_user(fields.username, generate_id())
        logger.info("User created: %s", user.id)
        return UserResponse(username=user.username, id=user.id)

    async def log_exercise(
        self,
        user_id: str,
        description: Optional[str],
        duration: Optional[str],
        exercise_date: Optional[str] = None,
    ) -> ExerciseResponse:
        """
        Log one exercise for ``user_id``.

        Coercion:
            description missing → "" (then rejected by validation)
            duration missing or empty → 0 (then rejected by validation)
            date missing or empty → today

        Raises:
            ValidationError: any field constraint violated (all messages reported)
            NotFoundError:   no user with ``user_id``
            StorageError:    store failure
        """
        today = self.today()
        fields = validate(
            "exercise",
            {
                "description": "" if description is None else str(description),
                "duration": duration if duration not in (None, "") else 0,
                "date": exercise_date or None,
            },
            reject_past_dates=self.reject_past_dates,
            today=today,
        )
        when = fields.date or today

        user = await self._require_user(user_id)
        await self.store.create_exercise(
            user_id=user.id,
            description=fields.description,
            duration=fields.duration,
            exercise_date=when,
        )
        logger.info("Exercise logged for user %s on %s", user.id, when.isoformat())

        return ExerciseResponse(
            id=user.id,
            username=user.username,
            date=format_date(when),
            duration=fields.duration,
            description=fields.description,
        )

    async def get_log(
        self,
        user_id: str,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        limit: Optional[str] = None,
    ) -> LogResponse:
        """
        The user's exercises in [from, to), oldest first, at most ``limit``.

        ``count`` is the user's total exercise count, not the length of the
        filtered log. ``from``/``to`` are echoed only when supplied.

        Raises:
            ValidationError: from/to present but not a valid date
            NotFoundError:   no user with ``user_id``
            StorageError:    store failure
        """
        query = parse_log_query(date_from, date_to, limit)
        user = await self._require_user(user_id)

        count = await self.store.count_exercises(user.id)
        exercises = await self.store.find_exercises(
            user.id,
            query.date_from,
            query.date_to,
            query.limit,
        )

        return LogResponse(
            username=user.username,
            count=count,
            id=user.id,
            log=[
                LogEntry(
                    description=exercise.description,
                    duration=exercise.duration,
                    date=format_date(exercise.date),
                )
                for exercise in exercises
            ],
            date_from=format_date(query.date_from) if query.date_from else None,
            date_to=format_date(query.date_to) if query.date_to else None,
        )

    async def _require_user(self, user_id: str) -> User:
        user = await self.store.find_user_by_id(user_id)
        if user is None:
            raise NotFoundError(resource="user", resource_id=user_id)
        return user
