"""
Exercise Tracker: User Schemas
=================================

What:  Pydantic models for the user endpoints: the validated input and the
       public view returned by GET/POST /api/users.
"""

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    """Validated input for POST /api/users."""
    username: str = Field(min_length=1, max_length=30, description="Display name, 1-30 chars")


class UserResponse(BaseModel):
    """
    Public view of a user.

    Returned by POST /api/users (newly created or, under the unique-username
    policy, the existing record) and as the items of GET /api/users.
    """
    username: str = Field(description="Display name")
    id: str = Field(description="Opaque user id")

    model_config = {"from_attributes": True}
