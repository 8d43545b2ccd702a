from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from tracklog.app.app import app
from tracklog.app.dependencies import get_session_manager
from tracklog.app.sessions import SessionManager
from tracklog.db.memory import InMemoryStore

TEST_USER_ID = "user_test_1"


@pytest.fixture
def manager(store: InMemoryStore) -> SessionManager:
    return SessionManager(store, live_timeout=1.0)


@pytest.fixture
def client(manager: SessionManager) -> Iterator[TestClient]:
    """Test client without a user header (for testing the header requirement)."""
    app.dependency_overrides[get_session_manager] = lambda: manager
    yield TestClient(app)
    app.dependency_overrides.clear()
    manager.end_all()


@pytest.fixture
def user_client(client: TestClient) -> TestClient:
    """Test client acting as TEST_USER_ID."""
    client.headers["X-User-Id"] = TEST_USER_ID
    return client
