# app/utils/clock.py
"""
Time helpers.

Reservation timestamps are stored as naive UTC datetimes so the same values
compare correctly on PostgreSQL ``timestamp`` columns and on SQLite.
"""

from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Current instant as a naive UTC datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Normalise an aware datetime to naive UTC; naive input is assumed UTC."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
