"""Service layer for users.

Every method forwards to the matching UserRepository method unchanged, so the
API depends on this class rather than on the persistence technology.
"""

from typing import List, Optional

from usermanager.database.user_repository import UserRepository
from usermanager.models.user import User, UserCreate, UserUpdate


class UserService:
    """User operations exposed to the API layer."""

    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    def create(self, data: UserCreate) -> User:
        return self.user_repository.create(data)

    def find_all(self) -> List[User]:
        return self.user_repository.find_all()

    def find_one(self, user_id: int) -> Optional[User]:
        return self.user_repository.find_by_id(user_id)

    def update(self, user_id: int, data: UserUpdate) -> User:
        return self.user_repository.update(user_id, data)

    def remove(self, user_id: int) -> User:
        return self.user_repository.delete(user_id)
