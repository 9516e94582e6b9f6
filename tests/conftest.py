"""Pytest configuration and fixtures."""

import asyncio
import os
import tempfile

# Settings and the engine are created at import time: point them at a
# throwaway SQLite file before anything from `app` is imported.
_DB_DIR = tempfile.mkdtemp(prefix="people-api-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_DIR}/test.db"
os.environ["APP_ENV"] = "test"

import pytest
from fastapi.testclient import TestClient

from app.db.base import drop_tables
from app.main import create_app


@pytest.fixture
def client():
    """TestClient on a fresh schema; tables are dropped after each test."""
    with TestClient(create_app()) as test_client:
        yield test_client
    asyncio.run(drop_tables())


@pytest.fixture
def create_person(client):
    """Create a person through the API and return its JSON representation."""

    def _create(**fields):
        resp = client.post("/api/v1/people", json=fields)
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]

    return _create
