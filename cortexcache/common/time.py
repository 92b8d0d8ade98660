"""
Time Helpers

Timestamps are written to and compared in the database as naive UTC; every
value handed to templates or domain models is UTC-aware.
"""

from datetime import datetime, timezone
from typing import Optional

UTC = timezone.utc

HUMAN_DATE_FORMAT = "%d %b %Y at %H:%M"


def utc_now() -> datetime:
    return datetime.now(UTC)


def utc_now_naive() -> datetime:
    """Current UTC time without tzinfo, for database columns and filters."""
    return datetime.now(UTC).replace(tzinfo=None)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive values (as read from the database); convert aware ones."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def human_date(dt: Optional[datetime]) -> str:
    """
    Template filter: "17 Mar 2024 at 10:15"

    Always rendered in UTC; None renders as an empty string.
    """
    if dt is None:
        return ""
    return ensure_utc(dt).strftime(HUMAN_DATE_FORMAT)
