"""API routes for live commentary."""

import logging
import sqlite3
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Request

from matchcast.api.dependencies import get_connection
from matchcast.api.models import (
    CommentaryCreate,
    CommentaryEnvelope,
    CommentaryListResponse,
    CommentaryResponse,
)
from matchcast.config import get_commentary_limit
from matchcast.database.commentary import (
    create_commentary,
    delete_commentary,
    get_commentary,
    list_commentary,
)
from matchcast.database.matches import get_match

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/matches/{match_id}/commentary", tags=["Commentary"])

MatchId = Annotated[int, Path(gt=0, description="Match ID")]


@router.get("", response_model=CommentaryListResponse)
def list_match_commentary(
    match_id: MatchId,
    limit: int | None = Query(None, gt=0, description="Maximum entries to return"),
    conn: sqlite3.Connection = Depends(get_connection),
):
    """List a match's commentary in play order."""
    if not get_match(conn, match_id):
        raise HTTPException(status_code=404, detail="Match not found")

    entries = list_commentary(conn, match_id, limit=get_commentary_limit(limit))
    return CommentaryListResponse(data=[CommentaryResponse.from_db(e) for e in entries])


@router.post("", response_model=CommentaryEnvelope, status_code=201)
def add_commentary(
    match_id: MatchId,
    body: CommentaryCreate,
    request: Request,
    conn: sqlite3.Connection = Depends(get_connection),
):
    """Add a commentary entry to a match."""
    if not get_match(conn, match_id):
        raise HTTPException(status_code=404, detail="Match not found")

    try:
        entry = create_commentary(conn, match_id, **body.model_dump())
    except sqlite3.Error:
        logger.exception("[COMMENTARY] Failed to add commentary to match %d", match_id)
        raise HTTPException(status_code=500, detail="Failed to create commentary.")

    broadcast = getattr(request.app.state, "broadcast_commentary", None)
    if broadcast:
        try:
            broadcast(entry)
        except Exception as e:
            logger.warning(f"[COMMENTARY] Broadcast for entry {entry.id} failed: {e}")

    return CommentaryEnvelope(data=CommentaryResponse.from_db(entry))


@router.delete("/{entry_id}", status_code=204)
def remove_commentary(
    match_id: MatchId,
    entry_id: Annotated[int, Path(gt=0, description="Commentary entry ID")],
    conn: sqlite3.Connection = Depends(get_connection),
):
    """Delete one commentary entry of a match."""
    entry = get_commentary(conn, entry_id)
    # An entry addressed through another match's URL does not exist there
    if not entry or entry.match_id != match_id:
        raise HTTPException(status_code=404, detail="Commentary entry not found")

    delete_commentary(conn, entry_id)
    logger.info("[COMMENTARY] Deleted entry %d from match %d", entry_id, match_id)
