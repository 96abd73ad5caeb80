"""
Exercise Tracker: Exercise & Log Schemas
===========================================

What:  Pydantic models for logging exercises and querying a user's log.
How:   Input models carry the field constraints the validation layer enforces;
       response models fix the JSON shape, with dates already rendered as
       human-readable strings ("Mon Jan 01 2024").

Input models:
    ExerciseCreate: description / duration / date for POST .../exercises
    LogQuery:       from / to / limit for GET .../logs, normalized

Response models:
    ExerciseResponse, LogEntry, LogResponse
"""

import datetime as dt
from typing import Any, List, Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator

# Largest LIMIT every supported driver binds as an integer
MAX_LIMIT = 2**31 - 1


def _date_part(v: Any) -> Any:
    """Reduce an ISO 8601 date-time string to its calendar date; leave anything else alone."""
    if isinstance(v, str) and len(v.strip()) > 10:
        try:
            return dt.datetime.fromisoformat(v.strip().replace("Z", "+00:00")).date()
        except ValueError:
            return v
    return v


# ══════════════════════════════════════════════════════════════════════════
# Input Models
# ══════════════════════════════════════════════════════════════════════════


class ExerciseCreate(BaseModel):
    """
    Validated input for POST /api/users/{id}/exercises.

    The legacy "no past dates" rule is driven by validation context:
    ``{"reject_past_dates": True, "today": date}``. Without that context any
    valid calendar date is accepted.
    """
    description: str = Field(min_length=1, max_length=20)
    duration: int = Field(ge=1, le=1440, description="Minutes")
    date: Optional[dt.date] = Field(default=None, description="Defaults to today")

    @field_validator("date", mode="before")
    @classmethod
    def truncate_datetime(cls, v: Any) -> Any:
        return _date_part(v)

    @field_validator("date")
    @classmethod
    def reject_past_dates(cls, v: Optional[dt.date], info: ValidationInfo) -> Optional[dt.date]:
        ctx = info.context or {}
        if v is not None and ctx.get("reject_past_dates"):
            today = ctx.get("today") or dt.date.today()
            if v < today:
                raise ValueError("date must not be in the past")
        return v


class LogQuery(BaseModel):
    """
    Normalized query parameters for GET /api/users/{id}/logs.

    from / to:  optional ISO dates, a date-time keeps its date part;
                empty strings count as absent, anything else that is not a
                date is a validation error
    limit:      positive integer, or None for "unbounded". Absent, non-numeric,
                non-positive and oversized (above MAX_LIMIT) values all
                normalize to None and never reach the query layer.
    """
    date_from: Optional[dt.date] = Field(default=None, alias="from")
    date_to: Optional[dt.date] = Field(default=None, alias="to")
    limit: Optional[int] = None

    model_config = {"populate_by_name": True}

    @field_validator("date_from", "date_to", mode="before")
    @classmethod
    def blank_as_absent(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return _date_part(v)

    @field_validator("limit", mode="before")
    @classmethod
    def normalize_limit(cls, v: Any) -> Optional[int]:
        if v is None:
            return None
        try:
            limit = int(v)
        except (TypeError, ValueError):
            return None
        return limit if 0 < limit <= MAX_LIMIT else None


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ExerciseResponse(BaseModel):
    """Returned by POST /api/users/{id}/exercises."""
    id: str = Field(description="Owning user's id")
    username: str
    date: str = Field(description="Human-readable date, e.g. 'Mon Jan 01 2024'")
    duration: int
    description: str


class LogEntry(BaseModel):
    """One item of a log response."""
    description: str
    duration: int
    date: str = Field(description="Human-readable date")


class LogResponse(BaseModel):
    """
    Returned by GET /api/users/{id}/logs.

    count is the user's total number of exercises, independent of the
    from/to/limit filters applied to ``log``. ``from`` and ``to`` are only
    present when the caller supplied them; routes serialize this model with
    exclude_none.
    """
    username: str
    count: int
    id: str
    log: List[LogEntry]
    date_from: Optional[str] = Field(default=None, alias="from")
    date_to: Optional[str] = Field(default=None, alias="to")

    model_config = {"populate_by_name": True}
