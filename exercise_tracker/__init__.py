"""
Exercise Tracker: Application Package Initializer
====================================================

Architecture Note:
    The backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │  ExerciseService (request handling) │  ← coercion, checks, response shape
    ├──────────────────┬──────────────────┤
    │ Validation layer │ Identity gen.    │  ← pure functions
    ├──────────────────┴──────────────────┤
    │    ExerciseStore (persistence)      │  ← async SQLAlchemy sessions
    ├─────────────────────────────────────┤
    │   Models (ORM) & Schemas (API)      │
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
