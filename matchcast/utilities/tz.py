"""Timezone and timestamp utilities.

Single source of truth for turning caller-supplied time values into
comparable datetimes. Everything stored or compared is timezone-aware UTC.
"""

from datetime import UTC, datetime

from dateutil import parser

__all__ = [
    "format_iso",
    "now_utc",
    "parse_datetime",
    "to_utc",
]

TimeValue = datetime | str | int | float


def now_utc() -> datetime:
    """Get current time in UTC."""
    return datetime.now(UTC)


def to_utc(dt: datetime) -> datetime:
    """Convert a datetime to UTC.

    Naive datetimes are assumed to already be UTC.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def parse_datetime(value: object) -> datetime | None:
    """Normalize a time value into an aware UTC datetime.

    Accepts datetime objects, ISO-8601 strings and Unix timestamps in seconds.

    Returns:
        Aware UTC datetime, or None if the value is not a valid point in time
    """
    # bool is an int subclass; True is not a timestamp
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        return to_utc(value)

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return to_utc(parser.isoparse(text))
        except (ValueError, OverflowError):
            return None

    if isinstance(value, int | float):
        try:
            return datetime.fromtimestamp(value, UTC)
        except (ValueError, OverflowError, OSError):
            return None

    return None


def format_iso(dt: datetime) -> str:
    """Format a datetime as an ISO-8601 UTC string (e.g. '2025-03-01T10:00:00Z')."""
    return to_utc(dt).isoformat().replace("+00:00", "Z")
