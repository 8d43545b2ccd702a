"""Tests for store selection and the unauthenticated endpoints."""

import pytest
from fastapi.testclient import TestClient

from tracklog.app.dependencies import build_store
from tracklog.app.env_loader import get_store_backend, validate_required_env_vars
from tracklog.db.memory import InMemoryStore
from tracklog.db.postgres import PostgresStore


class TestStoreSelection:
    """Test TRACKLOG_STORE handling."""

    def test_defaults_to_memory(self, monkeypatch):
        monkeypatch.delenv("TRACKLOG_STORE", raising=False)
        assert get_store_backend() == "memory"
        assert isinstance(build_store(), InMemoryStore)

    def test_postgres_backend(self, monkeypatch):
        monkeypatch.setenv("TRACKLOG_STORE", "Postgres")
        assert isinstance(build_store(), PostgresStore)

    def test_invalid_backend(self, monkeypatch):
        monkeypatch.setenv("TRACKLOG_STORE", "sqlite")
        with pytest.raises(ValueError):
            get_store_backend()

    def test_postgres_requires_database_url(self, monkeypatch):
        monkeypatch.setenv("TRACKLOG_STORE", "postgres")
        monkeypatch.delenv("DATABASE_URL", raising=False)
        with pytest.raises(SystemExit):
            validate_required_env_vars()


class TestOpenEndpoints:
    """Endpoints that need no user header."""

    def test_health(self, client: TestClient):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_environment(self, client: TestClient, monkeypatch):
        monkeypatch.setenv("ENV", "staging")
        assert client.get("/environment").json() == {"environment": "staging"}
