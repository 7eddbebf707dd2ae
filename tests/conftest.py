"""Common pytest fixtures.

Each test gets its own SQLite file under ``tmp_path`` and a freshly built
application. Assertions on stored rows go through a synchronous SQLModel
engine pointed at the same file.
"""

import os
from collections.abc import Iterator

# Configure logging BEFORE importing the app
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import Engine
from sqlmodel import create_engine

from rental_admin.config.settings import Settings
from rental_admin.main import create_app

from helpers import TEST_SECRET, bearer, login


@pytest.fixture
def db_path(tmp_path) -> str:
    return str(tmp_path / "test.db")


@pytest.fixture
def settings_overrides() -> dict:
    """Parametrize this fixture to change settings for a single test."""
    return {}


@pytest.fixture
def settings(db_path, settings_overrides) -> Settings:
    values = {
        "DATABASE_URL": f"sqlite+aiosqlite:///{db_path}",
        "JWT_SECRET": TEST_SECRET,
        "SEED_SAMPLE_LISTINGS": False,
        "LOG_TO_FILE": False,
    }
    values.update(settings_overrides)
    return Settings(**values)


@pytest.fixture
def client(settings) -> Iterator[TestClient]:
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def engine(client, db_path) -> Iterator[Engine]:
    # Depends on client so the schema and seed admin exist first
    sync_engine = create_engine(f"sqlite:///{db_path}")
    yield sync_engine
    sync_engine.dispose()


@pytest.fixture
def admin_headers(client) -> dict:
    return bearer(login(client))
