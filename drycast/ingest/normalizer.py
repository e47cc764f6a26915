"""Forecast normalizer: provider records -> canonical HourlyRecords."""

import logging
import math
from datetime import datetime, timedelta, timezone

from drycast.models.common import SourceKind, clamp, from_epoch
from drycast.models.forecast import (
    HourlyRecord,
    RawDailyRecord,
    RawHourlyRecord,
    RawRecord,
    RawTriHourlyRecord,
)

logger = logging.getLogger(__name__)

DEFAULT_TEMP_C = 25.0
DEFAULT_RH = 60.0
DEFAULT_WIND_MS = 2.0
DEFAULT_CLOUD = 0.5
DEFAULT_RAIN_P = 0.0
DEFAULT_RAIN_MM = 0.0

HOURS_PER_BUCKET = 3
DAILY_BINS = 8  # eight 3-hour bins per day
DAYLIGHT_START_HOUR = 6
DAYLIGHT_END_HOUR = 18


def default_record(ts: datetime) -> HourlyRecord:
    """Fallback hour used when no source covers a target hour."""
    return HourlyRecord(
        timestamp=ts,
        temp_c=DEFAULT_TEMP_C,
        rh=DEFAULT_RH,
        wind_ms=DEFAULT_WIND_MS,
        cloud=DEFAULT_CLOUD,
        rain_p=DEFAULT_RAIN_P,
        rain_mm=DEFAULT_RAIN_MM,
        source=SourceKind.DEFAULT,
    )


def from_hourly(raw: RawHourlyRecord, tz: timezone) -> HourlyRecord:
    return _bounded(
        timestamp=_timestamp(raw.dt, tz),
        temp_c=_or(raw.temp, DEFAULT_TEMP_C),
        rh=_or(raw.humidity, DEFAULT_RH),
        wind_ms=_or(raw.wind_speed, DEFAULT_WIND_MS),
        cloud=_percent(raw.clouds),
        rain_p=_or(raw.pop, DEFAULT_RAIN_P),
        rain_mm=_or(raw.rain_1h, DEFAULT_RAIN_MM),
        source=SourceKind.HOURLY,
    )


def expand_tri_hourly(raw: RawTriHourlyRecord, tz: timezone) -> list[HourlyRecord]:
    """Split one 3-hour bucket into three hours.

    Conditions are replicated unchanged; the bucket's rain total is spread
    evenly across the three hours.
    """
    base = _timestamp(raw.dt, tz)
    rain_each = _or(raw.rain_3h, DEFAULT_RAIN_MM) / HOURS_PER_BUCKET
    return [
        _bounded(
            timestamp=base + timedelta(hours=i),
            temp_c=_or(raw.temp, DEFAULT_TEMP_C),
            rh=_or(raw.humidity, DEFAULT_RH),
            wind_ms=_or(raw.wind_speed, DEFAULT_WIND_MS),
            cloud=_percent(raw.clouds),
            rain_p=_or(raw.pop, DEFAULT_RAIN_P),
            rain_mm=rain_each,
            source=SourceKind.TRI_HOURLY,
        )
        for i in range(HOURS_PER_BUCKET)
    ]


def synthesize_daily(
    raw: RawDailyRecord, hour_of_day: int, tz: timezone
) -> HourlyRecord:
    """Synthesize one hour from a daily summary.

    Daylight hours (06:00-17:59) are warmer, drier and clearer than the daily
    mean; night hours the reverse. Daily rain figures are split over eight
    3-hour bins.
    """
    hour_of_day %= 24
    daylight = DAYLIGHT_START_HOUR <= hour_of_day < DAYLIGHT_END_HOUR
    sign = 1.0 if daylight else -1.0

    ts = _timestamp(raw.dt, tz).replace(hour=hour_of_day, minute=0, second=0)
    return _bounded(
        timestamp=ts,
        temp_c=_or(raw.temp_day, DEFAULT_TEMP_C) + sign * 1.0,
        rh=_or(raw.humidity, DEFAULT_RH) - sign * 5.0,
        wind_ms=_or(raw.wind_speed, DEFAULT_WIND_MS),
        cloud=_percent(raw.clouds) - sign * 0.1,
        rain_p=_or(raw.pop, DEFAULT_RAIN_P) / DAILY_BINS,
        rain_mm=_or(raw.rain, DEFAULT_RAIN_MM) / DAILY_BINS,
        source=SourceKind.DAILY,
    )


def to_hourly(
    raw: RawRecord, tz: timezone, hour_of_day: int = 0
) -> list[HourlyRecord]:
    """Normalize any raw record. `hour_of_day` only applies to daily records."""
    if isinstance(raw, RawHourlyRecord):
        return [from_hourly(raw, tz)]
    elif isinstance(raw, RawTriHourlyRecord):
        return expand_tri_hourly(raw, tz)
    elif isinstance(raw, RawDailyRecord):
        return [synthesize_daily(raw, hour_of_day, tz)]
    else:
        raise TypeError(f"Unknown raw record type: {type(raw).__name__}")


def _bounded(
    timestamp: datetime,
    temp_c: float,
    rh: float,
    wind_ms: float,
    cloud: float,
    rain_p: float,
    rain_mm: float,
    source: SourceKind,
) -> HourlyRecord:
    return HourlyRecord(
        timestamp=timestamp,
        temp_c=temp_c,
        rh=clamp(rh, 0.0, 100.0),
        wind_ms=max(wind_ms, 0.0),
        cloud=clamp(cloud, 0.0, 1.0),
        rain_p=clamp(rain_p, 0.0, 1.0),
        rain_mm=max(rain_mm, 0.0),
        source=source,
    )


def _or(value: float | None, default: float) -> float:
    if value is None:
        return default
    try:
        f = float(value)
    except (TypeError, ValueError):
        logger.debug("Non-numeric forecast value %r, using %s", value, default)
        return default
    if not math.isfinite(f):
        logger.debug("Non-finite forecast value %r, using %s", value, default)
        return default
    return f


def _percent(clouds: float | None) -> float:
    if clouds is None:
        return DEFAULT_CLOUD
    return _or(clouds, DEFAULT_CLOUD * 100.0) / 100.0


def _timestamp(dt: int | None, tz: timezone) -> datetime:
    if dt is None:
        return from_epoch(0, tz)
    try:
        return from_epoch(int(dt), tz)
    except (TypeError, ValueError, OverflowError, OSError):
        logger.debug("Invalid forecast timestamp %r", dt)
        return from_epoch(0, tz)
