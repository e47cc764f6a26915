"""Common types and helpers shared across models."""

from datetime import UTC, datetime, timedelta, timezone
from enum import StrEnum

SECONDS_PER_HOUR = 3600


class SourceKind(StrEnum):
    HOURLY = "hourly"
    TRI_HOURLY = "tri_hourly"
    DAILY = "daily"
    DEFAULT = "default"


def utc_now() -> datetime:
    return datetime.now(UTC)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def offset_tz(utc_offset_seconds: int) -> timezone:
    """Build a fixed-offset tzinfo. Raises ValueError outside +-24h."""
    return timezone(timedelta(seconds=utc_offset_seconds))


def from_epoch(ts: int, tz: timezone) -> datetime:
    return datetime.fromtimestamp(ts, tz)
