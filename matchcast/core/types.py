"""Core data types for Matchcast.

All data structures are dataclasses with attribute access.
Timestamps are timezone-aware UTC datetimes.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from matchcast.utilities.tz import format_iso


class MatchStatus(str, Enum):
    """Lifecycle state of a match.

    Values are the exact strings persisted in the database and returned by
    the API.
    """

    SCHEDULED = "scheduled"
    LIVE = "live"
    FINISHED = "finished"


# Status applied by callers when a match's times cannot be classified
DEFAULT_MATCH_STATUS = MatchStatus.SCHEDULED


@dataclass
class Match:
    """A single sporting match."""

    id: int
    sport: str
    home_team: str
    away_team: str
    status: MatchStatus
    start_time: datetime | None
    end_time: datetime | None = None
    home_score: int = 0
    away_score: int = 0
    created_at: datetime | None = None

    def to_dict(self) -> dict:
        """Convert to dict for JSON serialization."""
        return {
            "id": self.id,
            "sport": self.sport,
            "home_team": self.home_team,
            "away_team": self.away_team,
            "status": MatchStatus(self.status).value,
            "start_time": format_iso(self.start_time) if self.start_time else None,
            "end_time": format_iso(self.end_time) if self.end_time else None,
            "home_score": self.home_score,
            "away_score": self.away_score,
            "created_at": format_iso(self.created_at) if self.created_at else None,
        }


@dataclass
class Commentary:
    """A single live commentary entry for a match."""

    id: int
    match_id: int
    event_type: str
    message: str
    minute: int | None = None
    sequence: int | None = None
    period: str | None = None
    actor: str | None = None
    team: str | None = None
    metadata: dict[str, Any] | None = None
    tags: list[str] = field(default_factory=list)
    created_at: datetime | None = None

    def to_dict(self) -> dict:
        """Convert to dict for JSON serialization."""
        return {
            "id": self.id,
            "match_id": self.match_id,
            "minute": self.minute,
            "sequence": self.sequence,
            "period": self.period,
            "event_type": self.event_type,
            "actor": self.actor,
            "team": self.team,
            "message": self.message,
            "metadata": self.metadata,
            "tags": list(self.tags),
            "created_at": format_iso(self.created_at) if self.created_at else None,
        }
