"""Service layer.

Business operations used by the API layer and scripts.
"""

from matchcast.services.status_sync import (
    MatchNotFoundError,
    SyncResult,
    sync_match,
    sync_unfinished_matches,
)

__all__ = [
    "MatchNotFoundError",
    "SyncResult",
    "sync_match",
    "sync_unfinished_matches",
]
