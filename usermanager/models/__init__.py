"""Data models for usermanager."""

from usermanager.models.user import User, UserCreate, UserUpdate

__all__ = [
    "User",
    "UserCreate",
    "UserUpdate",
]
