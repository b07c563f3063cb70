"""
Test configuration and fixtures for the SnapLink API.
This centralizes all test setup, making individual tests clean.
"""

import os

# Point the app at a throwaway database before any app module is imported
os.environ["DATABASE_URL"] = "sqlite:///./test.db"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from main import app
from snaplink_app.database.connection import Base, SessionLocal, engine


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    This ensures tests are isolated and don't affect each other.
    """
    # Create tables
    Base.metadata.create_all(bind=engine)

    # Create session
    db = SessionLocal()

    try:
        yield db
    finally:
        # Cleanup
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """
    Create a test client on an empty database.
    Each request gets its own session, as in production.
    """
    with TestClient(app) as test_client:
        yield test_client

    # Clean up overrides
    app.dependency_overrides.clear()


class BrokenSession:
    """Session stand-in whose every query fails like a lost connection"""

    def _fail(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection lost"))

    execute = _fail
    scalars = _fail
    commit = _fail
    refresh = _fail

    def add(self, instance):
        pass

    def rollback(self):
        pass

    def close(self):
        pass


@pytest.fixture
def broken_session():
    return BrokenSession()


class DeadConnectionSession(BrokenSession):
    """Broken session whose rollback fails as well"""

    rollback = BrokenSession._fail


class LostAfterCommitSession(BrokenSession):
    """Commit goes through, then the connection drops before the reload"""

    def commit(self):
        pass


@pytest.fixture
def dead_connection_session():
    return DeadConnectionSession()


@pytest.fixture
def lost_after_commit_session():
    return LostAfterCommitSession()
