"""Timeline fuser: one contiguous 168-hour timeline from up to three sources."""

import dataclasses
import logging
from collections import Counter
from collections.abc import Sequence
from datetime import UTC, datetime, timedelta, timezone

from drycast.ingest.normalizer import (
    default_record,
    expand_tri_hourly,
    from_hourly,
    synthesize_daily,
)
from drycast.models.common import SECONDS_PER_HOUR, offset_tz, utc_now
from drycast.models.forecast import (
    HourlyRecord,
    RawDailyRecord,
    RawHourlyRecord,
    RawTriHourlyRecord,
)
from drycast.models.window import TIMELINE_HOURS, Timeline

logger = logging.getLogger(__name__)

BUCKET_SECONDS = 3 * SECONDS_PER_HOUR
TRI_HOURLY_HORIZON_HOURS = 120
HOURLY_HORIZON_HOURS = 48
FALLBACK_UTC_OFFSET_SECONDS = 7 * 3600


def fuse(
    hourly: Sequence[RawHourlyRecord] | None,
    tri_hourly: Sequence[RawTriHourlyRecord] | None,
    daily: Sequence[RawDailyRecord] | None,
    utc_offset_seconds: int,
    now: datetime | None = None,
) -> Timeline:
    """Build the canonical timeline starting at the current hour.

    Per target hour h, the first applicable rule wins:
      1. h <= 120 and a 3-hour bucket covers h's 3-hour boundary
      2. h <= 48 and the hourly source has an entry at index h
      3. the daily source has an entry for day h // 24, synthesized for
         the target hour's local clock hour
      4. the default record
    """
    tz = _resolve_tz(utc_offset_seconds)
    start = _current_hour(now, tz)
    buckets = _index_buckets(tri_hourly or [])
    hourly = hourly or []
    daily = daily or []

    hours: list[HourlyRecord] = []
    for h in range(TIMELINE_HOURS):
        target = start + timedelta(hours=h)
        record = _select(h, target, tz, buckets, hourly, daily)
        hours.append(dataclasses.replace(record, timestamp=target))

    coverage = Counter(r.source.value for r in hours)
    logger.debug("Fused timeline from %s: %s", start.isoformat(), dict(coverage))
    return Timeline(tuple(hours))


def _select(
    h: int,
    target: datetime,
    tz: timezone,
    buckets: dict[int, RawTriHourlyRecord],
    hourly: Sequence[RawHourlyRecord],
    daily: Sequence[RawDailyRecord],
) -> HourlyRecord:
    target_ts = int(target.timestamp())
    bucket_ts = (target_ts // BUCKET_SECONDS) * BUCKET_SECONDS

    if h <= TRI_HOURLY_HORIZON_HOURS and bucket_ts in buckets:
        expanded = expand_tri_hourly(buckets[bucket_ts], tz)
        return expanded[(target_ts - bucket_ts) // SECONDS_PER_HOUR]

    if h <= HOURLY_HORIZON_HOURS and h < len(hourly):
        return from_hourly(hourly[h], tz)

    day = h // 24
    if day < len(daily):
        return synthesize_daily(daily[day], target.hour, tz)

    return default_record(target)


def _index_buckets(
    tri_hourly: Sequence[RawTriHourlyRecord],
) -> dict[int, RawTriHourlyRecord]:
    """Key each bucket by its epoch time floored to a 3-hour boundary."""
    buckets: dict[int, RawTriHourlyRecord] = {}
    skipped = 0
    for item in tri_hourly:
        if item.dt is None:
            skipped += 1
            continue
        buckets[(int(item.dt) // BUCKET_SECONDS) * BUCKET_SECONDS] = item
    if skipped:
        logger.warning("Skipped %d 3-hour buckets without a timestamp", skipped)
    return buckets


def _resolve_tz(utc_offset_seconds: int) -> timezone:
    try:
        return offset_tz(utc_offset_seconds)
    except (TypeError, ValueError, OverflowError):
        logger.warning(
            "Invalid UTC offset %r, falling back to %ds",
            utc_offset_seconds, FALLBACK_UTC_OFFSET_SECONDS,
        )
        return offset_tz(FALLBACK_UTC_OFFSET_SECONDS)


def _current_hour(now: datetime | None, tz: timezone) -> datetime:
    if now is None:
        now = utc_now()
    elif now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    return now.astimezone(tz).replace(minute=0, second=0, microsecond=0)
