"""
Time helpers.

All timestamps are stored and compared in UTC. Some drivers (SQLite in
tests) hand back naive datetimes for timezone-aware columns; ensure_utc()
normalizes those before arithmetic.
"""

from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive datetimes, convert aware ones to UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def isoformat(value: Optional[datetime]) -> Optional[str]:
    """ISO-8601 string in UTC, or None."""
    value = ensure_utc(value)
    return value.isoformat() if value else None
