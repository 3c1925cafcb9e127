"""Repository for User database operations."""

import logging
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session

from usermanager.models.user import User, UserCreate, UserUpdate
from usermanager.database.models import MAX_USER_ID, UserDB

logger = logging.getLogger(__name__)


class UserNotFoundError(ValueError):
    """Raised when an operation targets a user id that does not exist."""

    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__(f"User {user_id} not found")


class UserRepository:
    """Repository for User database operations."""

    def __init__(self, db: Session):
        self.db = db

    def _get_db(self, user_id: int) -> Optional[UserDB]:
        # Ids outside the column range were never assigned.
        if not 1 <= user_id <= MAX_USER_ID:
            return None
        return self.db.query(UserDB).filter(UserDB.id == user_id).first()

    def create(self, data: UserCreate) -> User:
        """Create a new user.

        The database assigns the id; created_at and updated_at are equal.
        """
        try:
            user_db = UserDB.from_pydantic(data, now=datetime.utcnow())
            self.db.add(user_db)
            self.db.commit()
            self.db.refresh(user_db)
            logger.debug(f"Created user {user_db.id}: {user_db.email}")
            return user_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create user {data.email}: {type(e).__name__}: {str(e)}")
            raise

    def find_all(self) -> List[User]:
        """Get all users in insertion order."""
        users_db = self.db.query(UserDB).order_by(UserDB.id).all()
        return [user_db.to_pydantic() for user_db in users_db]

    def find_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        user_db = self._get_db(user_id)
        return user_db.to_pydantic() if user_db else None

    def update(self, user_id: int, data: UserUpdate) -> User:
        """Apply a partial update to an existing user.

        Only fields set on `data` are written; updated_at is always refreshed.

        Raises:
            UserNotFoundError: If no user has this id
        """
        user_db = self._get_db(user_id)
        if not user_db:
            raise UserNotFoundError(user_id)

        for field, value in data.changes().items():
            setattr(user_db, field, value)
        user_db.updated_at = datetime.utcnow()

        try:
            self.db.commit()
            self.db.refresh(user_db)
            logger.debug(f"Updated user {user_id}: {user_db.email}")
            return user_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update user {user_id}: {type(e).__name__}: {str(e)}")
            raise

    def delete(self, user_id: int) -> User:
        """Permanently delete a user and return the removed record.

        Raises:
            UserNotFoundError: If no user has this id
        """
        user_db = self._get_db(user_id)
        if not user_db:
            raise UserNotFoundError(user_id)

        deleted = user_db.to_pydantic()
        try:
            self.db.delete(user_db)
            self.db.commit()
            logger.debug(f"Deleted user {user_id}")
            return deleted
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete user {user_id}: {type(e).__name__}: {str(e)}")
            raise
