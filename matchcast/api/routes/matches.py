"""API routes for matches."""

import asyncio
import logging
import sqlite3
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Request

from matchcast.api.dependencies import get_connection
from matchcast.api.models import (
    ListMatchesQuery,
    MatchCreate,
    MatchEnvelope,
    MatchListResponse,
    MatchResponse,
    ScoreUpdate,
    SyncResponse,
)
from matchcast.config import get_matches_limit
from matchcast.core.types import DEFAULT_MATCH_STATUS
from matchcast.database.matches import (
    create_match,
    delete_match,
    get_match,
    list_matches,
    update_match_score,
)
from matchcast.services.status_sync import (
    MatchNotFoundError,
    sync_match,
    sync_unfinished_matches,
)
from matchcast.utilities.match_status import get_match_status

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/matches", tags=["Matches"])

MatchId = Annotated[int, Path(gt=0, description="Match ID")]


@router.get("", response_model=MatchListResponse)
def list_all_matches(
    query: Annotated[ListMatchesQuery, Query()],
    conn: sqlite3.Connection = Depends(get_connection),
):
    """List matches, newest first."""
    limit = get_matches_limit(query.limit)
    try:
        matches = list_matches(conn, limit=limit)
    except sqlite3.Error:
        logger.exception("[MATCHES] Failed to list matches")
        raise HTTPException(status_code=500, detail="Failed to list matches.")

    return MatchListResponse(data=[MatchResponse.from_db(m) for m in matches])


@router.post("", response_model=MatchEnvelope, status_code=201)
def create_new_match(
    body: MatchCreate,
    request: Request,
    conn: sqlite3.Connection = Depends(get_connection),
):
    """Create a match with its initial status derived from its times."""
    # Unclassifiable times fall back to scheduled so status is never NULL
    status = get_match_status(body.start, body.end) or DEFAULT_MATCH_STATUS

    try:
        match = create_match(
            conn,
            sport=body.sport,
            home_team=body.home_team,
            away_team=body.away_team,
            start_time=body.start,
            end_time=body.end,
            status=status,
            home_score=body.home_score or 0,
            away_score=body.away_score or 0,
        )
    except sqlite3.Error:
        logger.exception("[MATCHES] Failed to create match")
        raise HTTPException(status_code=500, detail="Failed to create match.")

    broadcast = getattr(request.app.state, "broadcast_match_created", None)
    if broadcast:
        try:
            broadcast(match)
        except Exception as e:
            logger.warning(f"[MATCHES] Broadcast for match {match.id} failed: {e}")

    return MatchEnvelope(data=MatchResponse.from_db(match))


@router.post("/sync", response_model=SyncResponse)
def sync_all_statuses(conn: sqlite3.Connection = Depends(get_connection)):
    """Reconcile the stored status of every scheduled or live match."""
    # Plain def: runs in the threadpool, so the SQLite writes stay off the server loop
    result = asyncio.run(sync_unfinished_matches(conn))
    return SyncResponse(**result.to_dict())


@router.get("/{match_id}", response_model=MatchEnvelope)
def get_match_by_id(
    match_id: MatchId,
    conn: sqlite3.Connection = Depends(get_connection),
):
    """Get a single match, reconciling its status first."""
    match = get_match(conn, match_id)
    if not match:
        raise HTTPException(status_code=404, detail="Match not found")

    try:
        asyncio.run(sync_match(conn, match))
    except MatchNotFoundError:
        # Deleted between the read and the status write
        raise HTTPException(status_code=404, detail="Match not found")

    return MatchEnvelope(data=MatchResponse.from_db(match))


@router.patch("/{match_id}/score", response_model=MatchEnvelope)
def update_score(
    match_id: MatchId,
    body: ScoreUpdate,
    conn: sqlite3.Connection = Depends(get_connection),
):
    """Set both scores of a match."""
    match = update_match_score(
        conn,
        match_id,
        home_score=body.home_score,
        away_score=body.away_score,
    )
    if not match:
        raise HTTPException(status_code=404, detail="Match not found")
    return MatchEnvelope(data=MatchResponse.from_db(match))


@router.delete("/{match_id}", status_code=204)
def delete_match_by_id(
    match_id: MatchId,
    conn: sqlite3.Connection = Depends(get_connection),
):
    """Delete a match and its commentary."""
    if not delete_match(conn, match_id):
        raise HTTPException(status_code=404, detail="Match not found")
