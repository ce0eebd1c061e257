"""Pydantic models for API requests and responses."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from matchcast.config import Config
from matchcast.core.types import Commentary, Match
from matchcast.utilities.tz import parse_datetime

# =============================================================================
# Matches
# =============================================================================


class ListMatchesQuery(BaseModel):
    """Query string for listing matches."""

    limit: int | None = Field(
        None,
        gt=0,
        le=Config.MATCHES_MAX_LIMIT,
        description="Maximum number of matches to return",
    )


class MatchCreate(BaseModel):
    """Request body for creating a match.

    Times are ISO-8601 strings; end_time must be strictly after start_time.
    """

    sport: str = Field(..., min_length=1, description="Sport (e.g., 'soccer')")
    home_team: str = Field(..., min_length=1)
    away_team: str = Field(..., min_length=1)
    start_time: str = Field(..., description="ISO-8601 kickoff time")
    end_time: str = Field(..., description="ISO-8601 end time")
    home_score: int | None = Field(None, ge=0)
    away_score: int | None = Field(None, ge=0)

    @field_validator("start_time")
    @classmethod
    def _start_is_iso_date(cls, value: str) -> str:
        if parse_datetime(value) is None:
            raise ValueError("start_time must be a valid ISO date string")
        return value

    @field_validator("end_time")
    @classmethod
    def _end_is_iso_date_after_start(cls, value: str, info: ValidationInfo) -> str:
        end = parse_datetime(value)
        if end is None:
            raise ValueError("end_time must be a valid ISO date string")

        # start_time is absent from info.data if it failed its own validation
        start = parse_datetime(info.data.get("start_time"))
        if start is not None and end <= start:
            raise ValueError("end_time must be chronologically after start_time")
        return value

    @property
    def start(self) -> datetime:
        return parse_datetime(self.start_time)

    @property
    def end(self) -> datetime:
        return parse_datetime(self.end_time)


class ScoreUpdate(BaseModel):
    """Request body for updating a match score."""

    home_score: int = Field(..., ge=0)
    away_score: int = Field(..., ge=0)


class MatchResponse(BaseModel):
    """Response body for a single match."""

    id: int
    sport: str
    home_team: str
    away_team: str
    status: str
    start_time: str | None
    end_time: str | None
    home_score: int
    away_score: int
    created_at: str | None = None

    @classmethod
    def from_db(cls, match: Match) -> "MatchResponse":
        return cls(**match.to_dict())


class MatchEnvelope(BaseModel):
    data: MatchResponse


class MatchListResponse(BaseModel):
    data: list[MatchResponse]


class SyncResponse(BaseModel):
    """Result of reconciling stored statuses."""

    checked: int
    updated: int
    changes: dict[str, str] = Field(default_factory=dict)


# =============================================================================
# Commentary
# =============================================================================


class CommentaryCreate(BaseModel):
    """Request body for adding a commentary entry to a match."""

    event_type: str = Field(..., min_length=1, description="e.g., 'goal', 'yellow_card'")
    message: str = Field(..., min_length=1)
    minute: int | None = Field(None, ge=0)
    sequence: int | None = Field(None, ge=0)
    period: str | None = Field(None, description="e.g., '1', 'H2', 'OT'")
    actor: str | None = None
    team: str | None = None
    metadata: dict[str, Any] | None = None
    tags: list[str] | None = None


class CommentaryResponse(BaseModel):
    """Response body for a commentary entry."""

    id: int
    match_id: int
    minute: int | None
    sequence: int | None
    period: str | None
    event_type: str
    actor: str | None
    team: str | None
    message: str
    metadata: dict[str, Any] | None
    tags: list[str]
    created_at: str | None = None

    @classmethod
    def from_db(cls, entry: Commentary) -> "CommentaryResponse":
        return cls(**entry.to_dict())


class CommentaryEnvelope(BaseModel):
    data: CommentaryResponse


class CommentaryListResponse(BaseModel):
    data: list[CommentaryResponse]
