"""Database connection management.

Simple SQLite connection handling with schema initialization.
"""

import logging
import sqlite3
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

from matchcast.config import get_database_path

logger = logging.getLogger(__name__)

# Schema file location
SCHEMA_PATH = Path(__file__).parent / "schema.sql"


def get_connection(db_path: Path | str | None = None) -> sqlite3.Connection:
    """Get a database connection.

    Args:
        db_path: Path to database file. Uses the configured DATABASE_PATH if not specified.

    Returns:
        SQLite connection with row factory set to sqlite3.Row
    """
    path = Path(db_path) if db_path else Path(get_database_path())

    # check_same_thread=False: FastAPI runs sync dependencies in a threadpool
    conn = sqlite3.connect(path, timeout=30.0, check_same_thread=False)
    conn.row_factory = sqlite3.Row

    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA busy_timeout=30000")

    # Needed for commentary ON DELETE CASCADE
    conn.execute("PRAGMA foreign_keys = ON")

    return conn


@contextmanager
def get_db(db_path: Path | str | None = None) -> Generator[sqlite3.Connection, None, None]:
    """Context manager for database connections.

    Usage:
        with get_db() as conn:
            matches = list_matches(conn, limit=10)
    """
    conn = get_connection(db_path)
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db(db_path: Path | str | None = None) -> None:
    """Initialize database with schema.

    Creates tables if they don't exist. Safe to call multiple times.

    Args:
        db_path: Path to database file. Uses the configured DATABASE_PATH if not specified.
    """
    path = Path(db_path) if db_path else Path(get_database_path())
    path.parent.mkdir(parents=True, exist_ok=True)

    schema_sql = SCHEMA_PATH.read_text()
    with get_db(path) as conn:
        conn.executescript(schema_sql)

    logger.info("[DB] Schema initialized at %s", path)


def reset_db(db_path: Path | str | None = None) -> None:
    """Drop all tables and re-create the schema.

    WARNING: Deletes all matches and commentary.
    """
    path = Path(db_path) if db_path else Path(get_database_path())
    with get_db(path) as conn:
        conn.execute("DROP TABLE IF EXISTS commentary")
        conn.execute("DROP TABLE IF EXISTS matches")

    logger.warning("[DB] Database reset at %s", path)
    init_db(path)
