"""
Exercise Tracker: Identity Generator
=======================================

What:  Produces the opaque id assigned to each new user.
How:   122 random bits from uuid4, rendered as 32 lowercase hex characters.
       Collisions are improbable enough that concurrent callers need no
       coordination or central counter.
"""

import uuid


def generate_id() -> str:
    """Return a fresh, collision-improbable user id."""
    return uuid.uuid4().hex
