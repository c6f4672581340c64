"""Wall clock used by the game services.

Tests patch ``now`` to move time around lock windows.
"""

from datetime import datetime, timezone


def now() -> datetime:
    """Current UTC time."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes (SQLite drops tzinfo)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
