"""Database CRUD operations for matches."""

import logging
from datetime import datetime
from sqlite3 import Connection, Row

from matchcast.core.types import DEFAULT_MATCH_STATUS, Match, MatchStatus
from matchcast.utilities.tz import format_iso, parse_datetime

logger = logging.getLogger(__name__)

UNFINISHED_STATUSES = (MatchStatus.SCHEDULED.value, MatchStatus.LIVE.value)


def _row_to_match(row: Row) -> Match:
    """Convert a database row to Match."""
    return Match(
        id=row["id"],
        sport=row["sport"],
        home_team=row["home_team"],
        away_team=row["away_team"],
        status=MatchStatus(row["status"]),
        start_time=parse_datetime(row["start_time"]),
        end_time=parse_datetime(row["end_time"]),
        home_score=row["home_score"],
        away_score=row["away_score"],
        created_at=parse_datetime(row["created_at"]),
    )


def get_match(conn: Connection, match_id: int) -> Match | None:
    """Get a single match by ID."""
    row = conn.execute(
        "SELECT * FROM matches WHERE id = ?",
        (match_id,),
    ).fetchone()
    return _row_to_match(row) if row else None


def list_matches(conn: Connection, limit: int) -> list[Match]:
    """List matches, newest first.

    Args:
        conn: Database connection
        limit: Maximum number of matches to return

    Returns:
        List of Match objects ordered by created_at descending
    """
    rows = conn.execute(
        "SELECT * FROM matches ORDER BY created_at DESC, id DESC LIMIT ?",
        (limit,),
    ).fetchall()
    return [_row_to_match(row) for row in rows]


def list_unfinished_matches(conn: Connection) -> list[Match]:
    """List every match whose stored status is scheduled or live."""
    rows = conn.execute(
        "SELECT * FROM matches WHERE status IN (?, ?) ORDER BY start_time, id",
        UNFINISHED_STATUSES,
    ).fetchall()
    return [_row_to_match(row) for row in rows]


def create_match(
    conn: Connection,
    sport: str,
    home_team: str,
    away_team: str,
    start_time: datetime,
    end_time: datetime | None = None,
    status: MatchStatus = DEFAULT_MATCH_STATUS,
    home_score: int = 0,
    away_score: int = 0,
) -> Match:
    """Create a new match.

    Returns:
        Created Match, re-read from the database so defaults are populated
    """
    cursor = conn.execute(
        """
        INSERT INTO matches (
            sport, home_team, away_team, status,
            start_time, end_time, home_score, away_score
        )
        VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            sport,
            home_team,
            away_team,
            MatchStatus(status).value,
            format_iso(start_time),
            format_iso(end_time) if end_time else None,
            home_score,
            away_score,
        ),
    )
    conn.commit()

    match_id = cursor.lastrowid
    logger.info(
        "[MATCHES] Created match %d: %s vs %s (%s)",
        match_id,
        home_team,
        away_team,
        MatchStatus(status).value,
    )
    return get_match(conn, match_id)


def update_match_status(conn: Connection, match_id: int, status: MatchStatus) -> bool:
    """Persist a new status for a match.

    Returns:
        True if a row was updated
    """
    cursor = conn.execute(
        "UPDATE matches SET status = ? WHERE id = ?",
        (MatchStatus(status).value, match_id),
    )
    conn.commit()

    if cursor.rowcount > 0:
        logger.info("[MATCHES] Match %d status -> %s", match_id, MatchStatus(status).value)
        return True
    return False


def update_match_score(
    conn: Connection,
    match_id: int,
    home_score: int,
    away_score: int,
) -> Match | None:
    """Set both scores of a match.

    Returns:
        Updated Match or None if not found
    """
    cursor = conn.execute(
        "UPDATE matches SET home_score = ?, away_score = ? WHERE id = ?",
        (home_score, away_score, match_id),
    )
    conn.commit()

    if cursor.rowcount == 0:
        return None

    logger.debug("[MATCHES] Match %d score %d-%d", match_id, home_score, away_score)
    return get_match(conn, match_id)


def delete_match(conn: Connection, match_id: int) -> bool:
    """Delete a match (its commentary is removed by cascade).

    Returns:
        True if deleted, False if not found
    """
    cursor = conn.execute("DELETE FROM matches WHERE id = ?", (match_id,))
    conn.commit()

    if cursor.rowcount > 0:
        logger.info("[MATCHES] Deleted match %d", match_id)
        return True
    return False
