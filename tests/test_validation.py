"""
Exercise Tracker: Validation Layer Unit Tests
================================================

What:  Tests for validate() and parse_log_query().
How:   Pure function calls; no store, no HTTP.

What we test:
    ✅ Username length boundaries (0, 1, 30, 31)
    ✅ Description / duration boundaries
    ✅ All violations reported together
    ✅ Date parsing and the opt-in "no past dates" rule
    ✅ Log query normalization (blank dates, bad limits, oversized limits)
    ✅ ISO date-times reduced to their date
    ✅ Identity generator shape and uniqueness
"""

from datetime import date

import pytest

from exercise_tracker.exceptions import ValidationError
from exercise_tracker.schemas.exercise import MAX_LIMIT
from exercise_tracker.services.identity import generate_id
from exercise_tracker.services.validation import parse_log_query, validate


class TestUserValidation:
    """Rules for kind='user'."""

    def test_valid_username(self):
        result = validate("user", {"username": "alice"})
        assert result.username == "alice"

    def test_username_at_max_length(self):
        result = validate("user", {"username": "x" * 30})
        assert len(result.username) == 30

    def test_empty_username_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            validate("user", {"username": ""})
        assert exc_info.value.messages[0].startswith("username:")

    def test_username_too_long_rejected(self):
        with pytest.raises(ValidationError, match="username"):
            validate("user", {"username": "x" * 31})


class TestExerciseValidation:
    """Rules for kind='exercise'."""

    def test_valid_exercise(self):
        result = validate(
            "exercise",
            {"description": "run", "duration": "30", "date": "2024-01-01"},
        )
        assert result.description == "run"
        assert result.duration == 30
        assert result.date == date(2024, 1, 1)

    def test_date_is_optional(self):
        result = validate("exercise", {"description": "run", "duration": 30, "date": None})
        assert result.date is None

    def test_duration_boundaries(self):
        assert validate("exercise", {"description": "a", "duration": 1}).duration == 1
        assert validate("exercise", {"description": "a", "duration": 1440}).duration == 1440

    def test_duration_out_of_range_rejected(self):
        with pytest.raises(ValidationError, match="duration"):
            validate("exercise", {"description": "a", "duration": 0})
        with pytest.raises(ValidationError, match="duration"):
            validate("exercise", {"description": "a", "duration": 1441})

    def test_non_numeric_duration_rejected(self):
        with pytest.raises(ValidationError, match="duration"):
            validate("exercise", {"description": "a", "duration": "a while"})

    def test_description_too_long_rejected(self):
        with pytest.raises(ValidationError, match="description"):
            validate("exercise", {"description": "x" * 21, "duration": 10})

    def test_all_violations_reported(self):
        """Empty description, bad duration and bad date all show up at once."""
        with pytest.raises(ValidationError) as exc_info:
            validate("exercise", {"description": "", "duration": 5000, "date": "not-a-date"})

        fields = sorted(m.split(":")[0] for m in exc_info.value.messages)
        assert fields == ["date", "description", "duration"]

    def test_invalid_calendar_date_rejected(self):
        with pytest.raises(ValidationError, match="date"):
            validate("exercise", {"description": "a", "duration": 10, "date": "2024-02-30"})

    def test_datetime_truncated_to_date(self):
        result = validate(
            "exercise",
            {"description": "a", "duration": 10, "date": "2024-01-01T10:30:00"},
        )
        assert result.date == date(2024, 1, 1)

    def test_malformed_datetime_rejected(self):
        with pytest.raises(ValidationError, match="date"):
            validate("exercise", {"description": "a", "duration": 10, "date": "2024-01-01Tnoon"})

    def test_past_dates_accepted_by_default(self):
        result = validate(
            "exercise",
            {"description": "a", "duration": 10, "date": "2000-01-01"},
            today=date(2024, 6, 1),
        )
        assert result.date == date(2000, 1, 1)

    def test_past_dates_rejected_when_enabled(self):
        with pytest.raises(ValidationError, match="must not be in the past"):
            validate(
                "exercise",
                {"description": "a", "duration": 10, "date": "2024-05-31"},
                reject_past_dates=True,
                today=date(2024, 6, 1),
            )

    def test_today_allowed_when_past_dates_rejected(self):
        result = validate(
            "exercise",
            {"description": "a", "duration": 10, "date": "2024-06-01"},
            reject_past_dates=True,
            today=date(2024, 6, 1),
        )
        assert result.date == date(2024, 6, 1)


class TestLogQuery:
    """Normalization of from / to / limit."""

    def test_all_absent(self):
        query = parse_log_query()
        assert query.date_from is None
        assert query.date_to is None
        assert query.limit is None

    def test_dates_parsed(self):
        query = parse_log_query("2024-01-15", "2024-02-15", "3")
        assert query.date_from == date(2024, 1, 15)
        assert query.date_to == date(2024, 2, 15)
        assert query.limit == 3

    def test_blank_dates_are_absent(self):
        query = parse_log_query("", "  ")
        assert query.date_from is None
        assert query.date_to is None

    @pytest.mark.parametrize("raw", [None, "", "abc", "0", "-4", "2.5", "99999999999999999999"])
    def test_unusable_limit_means_unbounded(self, raw):
        assert parse_log_query(limit=raw).limit is None

    def test_limit_at_ceiling_kept(self):
        assert parse_log_query(limit=str(MAX_LIMIT)).limit == MAX_LIMIT
        assert parse_log_query(limit=str(MAX_LIMIT + 1)).limit is None

    def test_datetime_bounds_keep_date_part(self):
        query = parse_log_query("2024-01-01T10:30:00", "2024-02-01T23:59:59Z")
        assert query.date_from == date(2024, 1, 1)
        assert query.date_to == date(2024, 2, 1)

    def test_invalid_from_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_log_query(date_from="yesterday")
        assert exc_info.value.messages[0].startswith("from:")


class TestIdentityGenerator:

    def test_ids_are_hex_and_unique(self):
        ids = {generate_id() for _ in range(1000)}
        assert len(ids) == 1000
        for value in ids:
            assert len(value) == 32
            int(value, 16)
