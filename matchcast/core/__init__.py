"""Core types."""

from matchcast.core.types import Commentary, Match, MatchStatus

__all__ = [
    "Commentary",
    "Match",
    "MatchStatus",
]
