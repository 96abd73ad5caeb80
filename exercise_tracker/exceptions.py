"""
Exercise Tracker: Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions for the three failure classes the API knows.
How:   Each exception carries a client-safe message and an optional context dict.
       Global exception handlers (registered in main.py) translate them into
       JSON error responses with the matching HTTP status code.
Who:   Raised by the validation layer, the store and ExerciseService.

Exception Hierarchy:
    ExerciseTrackerError (base)
    ├── ValidationError   → 400 Bad Request (client can fix)
    ├── NotFoundError     → 404 Not Found (unknown user id)
    └── StorageError      → 500 Internal Server Error (store unreachable or write rejected)
"""

from typing import Any, Dict, List, Optional


class ExerciseTrackerError(Exception):
    """
    Base exception for all Exercise Tracker errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(ExerciseTrackerError):
    """
    Raised when client input violates one or more field constraints.

    HTTP:    400 Bad Request

    Every violated constraint is collected into ``messages``; the first one
    doubles as ``message`` so the exception still reads well in logs.

    Example response (two violations):
        {"error": ["description: String should have at least 1 character",
                   "duration: Input should be less than or equal to 1440"]}
    """

    def __init__(
        self,
        messages: Optional[List[str]] = None,
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.messages = list(messages) if messages else ["Validation failed"]
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=self.messages[0], context=ctx)
        self.field = field


class NotFoundError(ExerciseTrackerError):
    """
    Raised when a referenced resource does not exist.

    When:    POST /api/users/{id}/exercises or GET /api/users/{id}/logs
             with an id no user owns.
    HTTP:    404 Not Found

    The store returns None for missing rows; ExerciseService converts
    that None into this exception before touching any field of the result.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class StorageError(ExerciseTrackerError):
    """
    Raised when a store operation fails or times out.

    When:    Connection lost, pool exhausted, constraint violation, STORAGE_TIMEOUT hit.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. The driver error
    (type, operation name) lives in ``context`` and is only logged server-side.
    """

    def __init__(
        self,
        message: str = "A storage error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
