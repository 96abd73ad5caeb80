"""
Exercise Tracker: Route Dependencies
=======================================

What:  FastAPI dependencies that hand route handlers their collaborators.
How:   The ExerciseStore lives on app.state (set by create_app or the lifespan);
       a fresh, stateless ExerciseService is assembled around it per request.
"""

from fastapi import Request

from exercise_tracker.config import Settings
from exercise_tracker.services.exercise_service import ExerciseService
from exercise_tracker.services.store import ExerciseStore


def get_store(request: Request) -> ExerciseStore:
    return request.app.state.store


def get_exercise_service(request: Request) -> ExerciseService:
    """ExerciseService configured from the application's settings."""
    settings: Settings = request.app.state.settings
    return ExerciseService(
        store=get_store(request),
        enforce_unique_username=settings.enforce_unique_username,
        reject_past_dates=settings.reject_past_exercise_dates,
    )
