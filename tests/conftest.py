"""
tests/conftest.py

pytest fixtures for database-backed tests.
"""

from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from tests.fixtures import TEST_USER_ID, build_session_factory
from tracker.deps import get_session
from tracker.main import app


@pytest.fixture
def session_factory():
    return build_session_factory()


@pytest.fixture
def session(session_factory) -> Generator[Session, None, None]:
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(session_factory) -> Generator[TestClient, None, None]:
    """API client bound to the in-memory database, authenticated as TEST_USER_ID."""

    def _override_session() -> Generator[Session, None, None]:
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_session] = _override_session
    # No context manager: the startup hook would create tables on the real engine
    test_client = TestClient(app, headers={"X-User-Id": TEST_USER_ID})
    yield test_client
    app.dependency_overrides.clear()
