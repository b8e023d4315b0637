"""UTC timestamp helpers for values written to the database."""

from datetime import datetime, timedelta, timezone
from typing import Optional


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(dt: datetime) -> datetime:
    """Return ``dt`` in UTC, treating naive datetimes as already UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_db_timestamp(dt: datetime) -> str:
    """Format a datetime as fixed-width ISO 8601 UTC text with a ``Z`` suffix.

    The fixed width (always with microseconds) keeps lexical order equal
    to chronological order, so ``ORDER BY`` on the text column works.

    Example:
        >>> to_db_timestamp(datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc))
        '2025-01-02T03:04:05.000000Z'
    """
    return as_utc(dt).isoformat(timespec="microseconds").replace("+00:00", "Z")


def next_timestamp(previous: Optional[datetime] = None) -> datetime:
    """Return the current time, bumped past ``previous`` if the clock has not moved."""
    now = utc_now()
    if previous is not None:
        floor = as_utc(previous) + timedelta(microseconds=1)
        if now < floor:
            return floor
    return now
