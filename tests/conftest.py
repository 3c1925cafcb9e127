"""Pytest fixtures and configuration for usermanager tests."""

import os

# Keep the application's module-level engine off the on-disk dev database.
os.environ["DATABASE_URL"] = "sqlite:///:memory:"

import pytest
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from usermanager.database.database import Base, build_engine, get_db
from usermanager.database import models  # noqa: F401
from usermanager.database.user_repository import UserRepository
from usermanager.models.user import UserCreate
from usermanager.services.user_service import UserService


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def db_session():
    """Create a database session for testing.

    Uses an in-memory SQLite database that is created fresh for each test.
    """
    engine = build_engine(TEST_DATABASE_URL)

    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def user_repository(db_session: Session):
    """Create a UserRepository instance for testing."""
    return UserRepository(db_session)


@pytest.fixture
def user_service(user_repository):
    """Create a UserService backed by the test repository."""
    return UserService(user_repository)


@pytest.fixture
def sample_user_data():
    """Create a sample UserCreate payload."""
    return UserCreate(email="ann@example.com", name="Ann")


@pytest.fixture
def test_client(db_session: Session):
    """Create a FastAPI test client with overridden database dependency."""
    from usermanager.api.app import app

    # Override the get_db dependency to use our test database session
    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Don't close the session here, let the fixture handle it

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
