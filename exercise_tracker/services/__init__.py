# Services package init
"""
Exercise Tracker: Services Layer
===================================

Service Inventory:
    - identity.generate_id:  opaque id for new users
    - validation.validate / parse_log_query:  field rules, all violations at once
    - store.ExerciseStore:  persistence gateway (users, exercises)
    - exercise_service.ExerciseService:  request handling logic on top of the above

ExerciseService takes its store as a constructor argument, so unit tests
can hand it an AsyncMock and endpoint tests a real in-memory store.
"""
