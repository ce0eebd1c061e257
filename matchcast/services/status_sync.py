"""Match status reconciliation against the database.

Wraps sync_match_status with a writer that persists through the matches
table, so stored statuses only change when the clock says they should.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from sqlite3 import Connection

from matchcast.core.types import Match, MatchStatus
from matchcast.database.matches import list_unfinished_matches, update_match_status
from matchcast.utilities.match_status import sync_match_status

logger = logging.getLogger(__name__)


class MatchNotFoundError(LookupError):
    """Raised when a status write targets a match that no longer exists."""


@dataclass
class SyncResult:
    """Outcome of a bulk status sync."""

    checked: int = 0
    updated: int = 0
    changes: dict[int, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dict for JSON serialization."""
        return {
            "checked": self.checked,
            "updated": self.updated,
            "changes": {str(k): v for k, v in self.changes.items()},
        }


async def sync_match(
    conn: Connection,
    match: Match,
    now: datetime | None = None,
) -> MatchStatus:
    """Reconcile one match's stored status, writing only on change.

    Raises:
        MatchNotFoundError: If the match row disappeared before the write
    """

    def persist(status: MatchStatus) -> None:
        if not update_match_status(conn, match.id, status):
            raise MatchNotFoundError(f"Match {match.id} not found")

    return await sync_match_status(match, persist, now)


async def sync_unfinished_matches(
    conn: Connection,
    now: datetime | None = None,
) -> SyncResult:
    """Reconcile every scheduled or live match.

    Matches deleted while the run is in progress are skipped and still
    count as checked.
    """
    result = SyncResult()

    for match in list_unfinished_matches(conn):
        result.checked += 1
        before = match.status
        try:
            after = await sync_match(conn, match, now)
        except MatchNotFoundError:
            logger.warning("[SYNC] Match %d was deleted during sync, skipping", match.id)
            continue
        if after != before:
            result.updated += 1
            result.changes[match.id] = MatchStatus(after).value

    if result.updated:
        logger.info("[SYNC] Updated %d of %d matches", result.updated, result.checked)
    else:
        logger.debug("[SYNC] %d matches already in sync", result.checked)

    return result
