"""Time helpers shared by the transport components."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

# A clock returns the current instant as a timezone-aware datetime
Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Default wall clock."""
    return datetime.now(timezone.utc)


def ensure_utc(moment: datetime) -> datetime:
    """Treat naive datetimes as UTC; aware ones are converted to UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC with second precision, e.g. 2024-05-01T12:00:00Z."""
    return ensure_utc(moment).strftime("%Y-%m-%dT%H:%M:%SZ")
