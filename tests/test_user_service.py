"""Tests for UserService forwarding."""

from unittest.mock import MagicMock

import pytest

from usermanager.database.user_repository import UserNotFoundError, UserRepository
from usermanager.models.user import UserCreate, UserUpdate
from usermanager.services.user_service import UserService


@pytest.fixture
def mock_repository():
    return MagicMock(spec=UserRepository)


def test_create_forwards_to_repository(mock_repository):
    service = UserService(mock_repository)
    data = UserCreate(email="ann@example.com")

    result = service.create(data)

    mock_repository.create.assert_called_once_with(data)
    assert result is mock_repository.create.return_value


def test_find_all_forwards_to_repository(mock_repository):
    service = UserService(mock_repository)

    result = service.find_all()

    mock_repository.find_all.assert_called_once_with()
    assert result is mock_repository.find_all.return_value


def test_find_one_forwards_to_find_by_id(mock_repository):
    service = UserService(mock_repository)

    result = service.find_one(7)

    mock_repository.find_by_id.assert_called_once_with(7)
    assert result is mock_repository.find_by_id.return_value


def test_update_forwards_to_repository(mock_repository):
    service = UserService(mock_repository)
    patch = UserUpdate(name="Annie")

    result = service.update(7, patch)

    mock_repository.update.assert_called_once_with(7, patch)
    assert result is mock_repository.update.return_value


def test_remove_forwards_to_delete(mock_repository):
    service = UserService(mock_repository)

    result = service.remove(7)

    mock_repository.delete.assert_called_once_with(7)
    assert result is mock_repository.delete.return_value


def test_errors_propagate_unchanged(mock_repository):
    mock_repository.delete.side_effect = UserNotFoundError(7)
    service = UserService(mock_repository)

    with pytest.raises(UserNotFoundError) as exc_info:
        service.remove(7)
    assert exc_info.value is mock_repository.delete.side_effect


def test_service_against_real_repository(user_service, sample_user_data):
    """End-to-end through the service with the in-memory database."""
    created = user_service.create(sample_user_data)
    assert user_service.find_one(created.id) == created
    assert user_service.find_all() == [created]

    updated = user_service.update(created.id, UserUpdate(email="annie@example.com"))
    assert updated.email == "annie@example.com"

    user_service.remove(created.id)
    assert user_service.find_one(created.id) is None
