"""Database CRUD operations for live commentary entries."""

import json
import logging
from sqlite3 import Connection, Row
from typing import Any

from matchcast.core.types import Commentary
from matchcast.utilities.tz import parse_datetime

logger = logging.getLogger(__name__)


def _row_to_commentary(row: Row) -> Commentary:
    """Convert a database row to Commentary."""
    metadata = json.loads(row["metadata"]) if row["metadata"] else None
    tags = json.loads(row["tags"]) if row["tags"] else []
    return Commentary(
        id=row["id"],
        match_id=row["match_id"],
        minute=row["minute"],
        sequence=row["sequence"],
        period=row["period"],
        event_type=row["event_type"],
        actor=row["actor"],
        team=row["team"],
        message=row["message"],
        metadata=metadata,
        tags=tags,
        created_at=parse_datetime(row["created_at"]),
    )


def get_commentary(conn: Connection, commentary_id: int) -> Commentary | None:
    """Get a single commentary entry by ID."""
    row = conn.execute(
        "SELECT * FROM commentary WHERE id = ?",
        (commentary_id,),
    ).fetchone()
    return _row_to_commentary(row) if row else None


def list_commentary(conn: Connection, match_id: int, limit: int) -> list[Commentary]:
    """List commentary for a match in play order.

    Entries without a sequence number sort after numbered ones, then by ID.
    """
    rows = conn.execute(
        """
        SELECT * FROM commentary
        WHERE match_id = ?
        ORDER BY sequence IS NULL, sequence, id
        LIMIT ?
        """,
        (match_id, limit),
    ).fetchall()
    return [_row_to_commentary(row) for row in rows]


def create_commentary(
    conn: Connection,
    match_id: int,
    event_type: str,
    message: str,
    minute: int | None = None,
    sequence: int | None = None,
    period: str | None = None,
    actor: str | None = None,
    team: str | None = None,
    metadata: dict[str, Any] | None = None,
    tags: list[str] | None = None,
) -> Commentary:
    """Create a commentary entry for a match.

    Raises:
        sqlite3.IntegrityError: If the match does not exist
    """
    cursor = conn.execute(
        """
        INSERT INTO commentary (
            match_id, minute, sequence, period, event_type,
            actor, team, message, metadata, tags
        )
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            match_id,
            minute,
            sequence,
            period,
            event_type,
            actor,
            team,
            message,
            json.dumps(metadata) if metadata is not None else None,
            json.dumps(tags) if tags else None,
        ),
    )
    conn.commit()

    logger.debug("[COMMENTARY] Match %d: %s (%s)", match_id, event_type, cursor.lastrowid)
    return get_commentary(conn, cursor.lastrowid)


def delete_commentary(conn: Connection, commentary_id: int) -> bool:
    """Delete a commentary entry.

    Returns:
        True if deleted, False if not found
    """
    cursor = conn.execute("DELETE FROM commentary WHERE id = ?", (commentary_id,))
    conn.commit()
    return cursor.rowcount > 0
