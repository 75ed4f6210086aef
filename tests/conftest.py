"""Shared fixtures for the bookstore tests."""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from bookstore.config import Settings
from bookstore.main import create_app
from bookstore.repository import InMemoryBookRepository


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    return Settings(
        BOOKS_FILE=str(tmp_path / "data" / "books.json"),
        LOGS_DIR=str(tmp_path / "logs"),
        LOG_FILE=str(tmp_path / "logs" / "app.log"),
    )


@pytest.fixture
def memory_repo() -> InMemoryBookRepository:
    return InMemoryBookRepository()


@pytest.fixture
def client(test_settings: Settings, memory_repo: InMemoryBookRepository) -> TestClient:
    app = create_app(settings=test_settings, repository=memory_repo)
    return TestClient(app)
