"""Datetime normalization helpers.

SQLite hands back naive datetimes even for ``DateTime(timezone=True)``
columns; everything stored by this app is UTC, so naive values are read as UTC.
"""
from datetime import datetime, timezone
from typing import Optional

import pytz


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_utc_aware(dt: Optional[datetime]) -> Optional[datetime]:
    """Normalize any datetime to UTC-aware. Naive datetimes are assumed UTC."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_local(dt: datetime, tz_name: str) -> datetime:
    """Convert a (possibly naive, UTC) datetime to the given IANA timezone."""
    return to_utc_aware(dt).astimezone(pytz.timezone(tz_name))
