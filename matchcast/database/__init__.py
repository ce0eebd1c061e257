"""Database layer."""

from matchcast.database.commentary import (
    create_commentary,
    delete_commentary,
    get_commentary,
    list_commentary,
)
from matchcast.database.connection import get_connection, get_db, init_db, reset_db
from matchcast.database.matches import (
    create_match,
    delete_match,
    get_match,
    list_matches,
    list_unfinished_matches,
    update_match_score,
    update_match_status,
)

__all__ = [
    # Commentary
    "create_commentary",
    "delete_commentary",
    "get_commentary",
    "list_commentary",
    # Connection
    "get_connection",
    "get_db",
    "init_db",
    "reset_db",
    # Matches
    "create_match",
    "delete_match",
    "get_match",
    "list_matches",
    "list_unfinished_matches",
    "update_match_score",
    "update_match_status",
]
