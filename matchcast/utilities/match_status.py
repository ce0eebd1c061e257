"""Match status utilities.

Single source of truth for deriving a match's lifecycle status from its
start/end times, and for reconciling a stored status against that derivation.
"""

import inspect
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import Any, Protocol

from matchcast.core.types import MatchStatus
from matchcast.utilities.tz import now_utc, parse_datetime

logger = logging.getLogger(__name__)

StatusUpdater = Callable[[MatchStatus], Awaitable[None] | None]


class SupportsMatchStatus(Protocol):
    """Anything with start/end times and a mutable status (e.g. Match)."""

    start_time: Any
    end_time: Any
    status: Any


def get_match_status(
    start_time: Any,
    end_time: Any,
    now: datetime | str | int | float | None = None,
) -> MatchStatus | None:
    """Determine a match's status from its start and end times.

    The live window is the half-open interval [start_time, end_time):
    a match is live exactly at start_time and already finished at end_time.
    No ordering between start and end is enforced; if end_time <= start_time
    the match is never reported live.

    Args:
        start_time: Match start (datetime, ISO-8601 string or Unix timestamp)
        end_time: Match end (same accepted forms)
        now: Reference time, defaults to the current UTC time

    Returns:
        SCHEDULED if now < start, FINISHED if now >= end, LIVE otherwise.
        None if either boundary is not a valid point in time; callers pick
        their own fallback.
    """
    start = parse_datetime(start_time)
    end = parse_datetime(end_time)
    if start is None or end is None:
        return None

    reference = now_utc() if now is None else parse_datetime(now)
    if reference is None:
        return None

    if reference < start:
        return MatchStatus.SCHEDULED

    if reference >= end:
        return MatchStatus.FINISHED

    return MatchStatus.LIVE


async def sync_match_status(
    match: SupportsMatchStatus,
    update_status: StatusUpdater,
    now: datetime | None = None,
) -> MatchStatus:
    """Make a match's status reflect its time-based status.

    update_status is only called when the derived status differs from the
    stored one, and match.status is only changed after update_status
    completes. If update_status raises, the exception propagates and
    match.status keeps its previous value.

    Args:
        match: Record with start_time, end_time and status; status may be mutated
        update_status: Persists the new status; may be sync or async
        now: Reference time, defaults to the current UTC time

    Returns:
        The match's status after synchronization
    """
    next_status = get_match_status(match.start_time, match.end_time, now)
    if next_status is None:
        logger.debug("[SYNC] Invalid times on match, keeping status %s", match.status)
        return match.status

    if match.status == next_status:
        return match.status

    result = update_status(next_status)
    if inspect.isawaitable(result):
        await result

    match.status = next_status
    return next_status
