"""Datetime utilities for timezone-aware UTC timestamps.

This module is the default clock for the order service. Order timestamps are
always produced through ``utc_now()`` so tests can swap in a deterministic
clock.

Usage:
    from foodybuddy_orders.utils.datetime_utils import utc_now

    timestamp = utc_now()

    # For SQLAlchemy Column defaults
    created_at = Column(DateTime, default=utc_now)
"""

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Return current UTC time as timezone-aware datetime.

    Returns:
        Current UTC datetime with timezone info
    """
    return datetime.now(timezone.utc)


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to a naive datetime.

    SQLite hands back naive datetimes even when aware values were written,
    so anything read from the store goes through here before comparison.

    Args:
        value: Datetime to normalize (None is passed through)

    Returns:
        Timezone-aware datetime in UTC, or None
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
