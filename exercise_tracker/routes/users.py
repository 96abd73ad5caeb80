"""
Exercise Tracker: User, Exercise & Log Route Handlers
========================================================

What:  Handles every /api/users endpoint.
How:   Extracts raw form/query/path values, delegates to ExerciseService,
       returns the response model. All coercion and validation happens in
       the service; these handlers never inspect field values.

Endpoints:
    GET  /api/users                    list users
    POST /api/users                    create user (form: username)
    POST /api/users/{user_id}/exercises log exercise (form: description, duration, date?)
    GET  /api/users/{user_id}/logs      query log (query: from?, to?, limit?)
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Form, Query

from exercise_tracker.routes.dependencies import get_exercise_service
from exercise_tracker.schemas.common import ErrorResponse
from exercise_tracker.schemas.exercise import ExerciseResponse, LogResponse
from exercise_tracker.schemas.user import UserResponse
from exercise_tracker.services.exercise_service import ExerciseService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get(
    "",
    response_model=List[UserResponse],
    responses={500: {"description": "Storage error", "model": ErrorResponse}},
    summary="List all users",
)
async def list_users(
    service: ExerciseService = Depends(get_exercise_service),
) -> List[UserResponse]:
    return await service.list_users()


@router.post(
    "",
    response_model=UserResponse,
    responses={
        400: {"description": "Invalid username", "model": ErrorResponse},
        500: {"description": "Storage error", "model": ErrorResponse},
    },
    summary="Create a user",
    description=(
        "Creates a user with a 1-30 character username. With ENFORCE_UNIQUE_USERNAME "
        "on, an existing username returns the existing user instead."
    ),
)
async def create_user(
    username: Optional[str] = Form(default=None),
    service: ExerciseService = Depends(get_exercise_service),
) -> UserResponse:
    return await service.create_user(username)


@router.post(
    "/{user_id}/exercises",
    response_model=ExerciseResponse,
    responses={
        400: {"description": "Invalid exercise fields", "model": ErrorResponse},
        404: {"description": "Unknown user", "model": ErrorResponse},
        500: {"description": "Storage error", "model": ErrorResponse},
    },
    summary="Log an exercise for a user",
    description=(
        "description: 1-20 chars; duration: minutes, 1-1440; "
        "date: optional ISO 8601 date, defaults to today."
    ),
)
async def log_exercise(
    user_id: str,
    description: Optional[str] = Form(default=None),
    duration: Optional[str] = Form(default=None),
    date: Optional[str] = Form(default=None),
    service: ExerciseService = Depends(get_exercise_service),
) -> ExerciseResponse:
    return await service.log_exercise(user_id, description, duration, date)


@router.get(
    "/{user_id}/logs",
    response_model=LogResponse,
    response_model_exclude_none=True,
    responses={
        400: {"description": "Invalid from/to date", "model": ErrorResponse},
        404: {"description": "Unknown user", "model": ErrorResponse},
        500: {"description": "Storage error", "model": ErrorResponse},
    },
    summary="Query a user's exercise log",
    description=(
        "Exercises dated on or after `from` and before `to`, oldest first, at most "
        "`limit` entries. A missing or non-numeric limit means no limit."
    ),
)
async def get_log(
    user_id: str,
    date_from: Optional[str] = Query(default=None, alias="from"),
    date_to: Optional[str] = Query(default=None, alias="to"),
    limit: Optional[str] = Query(default=None),
    service: ExerciseService = Depends(get_exercise_service),
) -> LogResponse:
    return await service.get_log(user_id, date_from, date_to, limit)
