"""
User model definitions for the CycleCare tracker.
"""
from typing import Optional
from pydantic import BaseModel, Field

from src.models.cycle import CycleProfile


class User(BaseModel):
    """
    Represents a tracked person. The email address is the lookup key.
    """
    user_id: str
    email: str = Field(..., min_length=3, pattern=r"^[^@\s]+@[^@\s]+$")
    name: str = ""
    profile: Optional[CycleProfile] = None
    created_at: int  # epoch milliseconds

    @property
    def has_profile(self) -> bool:
        """Check if cycle data has been entered for this user."""
        return self.profile is not None


class Session(BaseModel):
    """
    The currently signed-in user.
    """
    email: str
    name: str = ""
