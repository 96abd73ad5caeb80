# Routes package init
"""
Exercise Tracker: API Routes Package
=======================================

Route Inventory:
    - users.py:   GET  /api/users
                  POST /api/users
                  POST /api/users/{user_id}/exercises
                  GET  /api/users/{user_id}/logs
    - health.py:  GET  /health

Routes are thin: they pull raw values out of the request, call
ExerciseService, and return its response model. Coercion, validation and
store access live in the services package.
"""
