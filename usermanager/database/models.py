"""SQLAlchemy database models for usermanager."""

from datetime import datetime
from sqlalchemy import Column, String, Integer, DateTime

from usermanager.database.database import Base

# Largest id every supported backend accepts in an INTEGER column (Postgres is 32-bit).
MAX_USER_ID = 2**31 - 1


class UserDB(Base):
    """Database model for User."""

    __tablename__ = "users"

    # Primary key (assigned by the database on insert)
    id = Column(Integer, primary_key=True, autoincrement=True)

    # User profile
    email = Column(String, nullable=False, unique=True)
    name = Column(String, nullable=True)

    # Timestamps
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from usermanager.models.user import User
        return User(
            id=self.id,
            email=self.email,
            name=self.name,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_pydantic(cls, data, now: datetime):
        """Create database model from a UserCreate payload.

        Both timestamps come from the same clock reading.
        """
        return cls(
            email=data.email,
            name=data.name,
            created_at=now,
            updated_at=now,
        )
