"""UTC helpers shared by entities, mappers and reports."""

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Normalize a datetime to UTC.

    Naive values are taken to already be UTC; aware values are converted.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_iso_utc(value: Optional[datetime]) -> str:
    """Round-trip ISO-8601 string with a trailing ``Z`` (empty string for None)."""
    if value is None:
        return ""
    return ensure_utc(value).isoformat().replace("+00:00", "Z")
