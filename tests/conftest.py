"""
Pytest configuration for the school management API.

Provides fixtures for:
- An in-memory SQLite record store
- A FastAPI test client wired to that store
"""

from __future__ import annotations

import os
from typing import Generator

import pytest

# Keep the application away from a real MySQL server during tests.
os.environ.setdefault("DATABASE_URL", "sqlite://")

from fastapi.testclient import TestClient

from schoolmap.api.dependencies import get_school_repository
from schoolmap.main import app
from schoolmap.repositories.sql import SqlSchoolRepository


@pytest.fixture(scope="function")
def repository() -> Generator[SqlSchoolRepository, None, None]:
    """
    Fresh in-memory SQLite repository with the schools table created.
    """
    repo = SqlSchoolRepository(url="sqlite://")
    repo.ensure_schema()
    try:
        yield repo
    finally:
        repo.close()


@pytest.fixture(scope="function")
def client(repository: SqlSchoolRepository) -> Generator[TestClient, None, None]:
    """
    Test client whose repository dependency points at the in-memory store.
    """
    app.dependency_overrides[get_school_repository] = lambda: repository
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
