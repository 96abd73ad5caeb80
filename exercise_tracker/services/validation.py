"""
Exercise Tracker: Validation Layer
=====================================

What:  Checks incoming field values before anything is persisted.
How:   Each kind of input maps to a pydantic model whose Field constraints
       encode the rules. Pydantic reports every violated constraint at once,
       which is exactly the all-messages (not abort-early) behaviour we need;
       its errors are flattened into "field: message" strings and raised as
       our own ValidationError.
Who:   Called by ExerciseService before any store call.

Rules:
    user:      username 1-30 chars
    exercise:  description 1-20 chars, duration integer 1-1440,
               date (optional) a valid calendar date, optionally not in the past
    log query: from/to valid dates when supplied; limit normalized

Everything here is a pure function of its input and never touches the store.
"""

from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Type

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from exercise_tracker.exceptions import ValidationError
from exercise_tracker.schemas.exercise import ExerciseCreate, LogQuery
from exercise_tracker.schemas.user import UserCreate

_SCHEMAS: Dict[str, Type[BaseModel]] = {
    "user": UserCreate,
    "exercise": ExerciseCreate,
}


def _format_errors(exc: PydanticValidationError) -> List[str]:
    """Flatten pydantic errors into human-readable 'field: message' strings."""
    messages = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"])
        messages.append(f"{field}: {error['msg']}" if field else error["msg"])
    return messages


def validate(
    kind: str,
    fields: Mapping[str, Any],
    *,
    reject_past_dates: bool = False,
    today: Optional[date] = None,
) -> BaseModel:
    """
    Validate ``fields`` as input of the given ``kind`` ("user" or "exercise").

    Returns:
        The validated pydantic model (UserCreate or ExerciseCreate).

    Raises:
        ValidationError: with one message per violated constraint.
        KeyError: for an unknown kind (programming error, not client input).
    """
    schema = _SCHEMAS[kind]
    context = {"reject_past_dates": reject_past_dates, "today": today}
    try:
        return schema.model_validate(dict(fields), context=context)
    except PydanticValidationError as exc:
        raise ValidationError(messages=_format_errors(exc), context={"kind": kind}) from exc


def parse_log_query(
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
    limit: Optional[str] = None,
) -> LogQuery:
    """
    Normalize raw log query parameters.

    Raises:
        ValidationError: if ``from`` or ``to`` is present but not a valid date.
    """
    try:
        return LogQuery.model_validate({"from": date_from, "to": date_to, "limit": limit})
    except PydanticValidationError as exc:
        raise ValidationError(messages=_format_errors(exc), context={"kind": "log_query"}) from exc
