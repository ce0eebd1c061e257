"""Shared FastAPI dependencies."""

from collections.abc import Generator
from sqlite3 import Connection

from matchcast.database import get_db


def get_connection() -> Generator[Connection, None, None]:
    """Get database connection."""
    with get_db() as conn:
        yield conn
