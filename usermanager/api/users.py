"""User CRUD endpoints."""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from usermanager.database.database import get_db
from usermanager.database.user_repository import UserRepository
from usermanager.models.user import User, UserCreate, UserUpdate
from usermanager.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


# Response models
class UserResponse(BaseModel):
    """Response wrapping a single user."""
    user: User


class UserListResponse(BaseModel):
    """Response for the user list."""
    users: List[User]
    count: int


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    """Build the request-scoped service on top of the request's session."""
    return UserService(UserRepository(db))


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(data: UserCreate, service: UserService = Depends(get_user_service)):
    """Create a user."""
    return UserResponse(user=service.create(data))


@router.get("", response_model=UserListResponse)
def list_users(service: UserService = Depends(get_user_service)):
    """List all users."""
    users = service.find_all()
    return UserListResponse(users=users, count=len(users))


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: int, service: UserService = Depends(get_user_service)):
    """Get a single user."""
    user = service.find_one(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"User {user_id} not found")
    return UserResponse(user=user)


@router.patch("/{user_id}", response_model=UserResponse)
def update_user(user_id: int, data: UserUpdate, service: UserService = Depends(get_user_service)):
    """Partially update a user."""
    return UserResponse(user=service.update(user_id, data))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: int, service: UserService = Depends(get_user_service)):
    """Permanently delete a user."""
    service.remove(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
