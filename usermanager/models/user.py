"""User data model for usermanager."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class User(BaseModel):
    """Canonical User model."""

    id: int = Field(..., description="Unique user identifier (assigned by the database)")
    email: str = Field(..., description="User email address")
    name: Optional[str] = Field(None, description="User display name")
    created_at: datetime = Field(..., description="User creation timestamp")
    updated_at: datetime = Field(..., description="User last update timestamp")


class UserCreate(BaseModel):
    """Input shape for creating a user.

    Identity and timestamps are assigned by the database, so they are not
    accepted here.
    """

    model_config = ConfigDict(extra="forbid")

    email: str = Field(..., description="User email address")
    name: Optional[str] = Field(None, description="User display name")


class UserUpdate(BaseModel):
    """Patch for an existing user.

    Only fields that were explicitly set are applied.
    """

    model_config = ConfigDict(extra="forbid")

    email: Optional[str] = Field(None, description="New email address")
    name: Optional[str] = Field(None, description="New display name")

    @field_validator("email")
    @classmethod
    def email_not_null(cls, value: Optional[str]) -> str:
        # Omitted is fine; an explicit null would blank a required column.
        if value is None:
            raise ValueError("email cannot be null")
        return value

    def changes(self) -> dict:
        """Return the fields supplied by the caller."""
        return self.model_dump(exclude_unset=True)
