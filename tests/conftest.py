"""Shared fixtures: temporary databases and an API client bound to them."""

import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from matchcast.api.app import create_app
from matchcast.api.dependencies import get_connection
from matchcast.database import get_connection as open_connection
from matchcast.database import get_db, init_db


@pytest.fixture
def db_path():
    """Create a temporary database file with the schema applied."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        path = Path(f.name)

    init_db(path)

    yield path

    for suffix in ("", "-wal", "-shm"):
        Path(f"{path}{suffix}").unlink(missing_ok=True)


@pytest.fixture
def conn(db_path):
    """Open connection to the temporary database."""
    connection = open_connection(db_path)
    yield connection
    connection.close()


@pytest.fixture
def app(db_path):
    """Application whose routes use the temporary database."""
    application = create_app()

    def _override_connection():
        with get_db(db_path) as connection:
            yield connection

    application.dependency_overrides[get_connection] = _override_connection
    return application


@pytest.fixture
def client(app):
    """HTTP client for the application (lifespan not started)."""
    return TestClient(app)
