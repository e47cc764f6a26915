"""OpenWeather payload parsing into raw forecast records.

Payloads arrive already fetched and JSON-decoded; this module only reads
them. Anything malformed is logged and skipped or left as None so that the
normalizer can substitute its defaults.
"""

import logging
import math
from typing import Any

from drycast.models.forecast import (
    ForecastBundle,
    RawDailyRecord,
    RawHourlyRecord,
    RawTriHourlyRecord,
)

logger = logging.getLogger(__name__)

DEFAULT_UTC_OFFSET_SECONDS = 7 * 3600


def parse_onecall(
    raw: dict,
) -> tuple[list[RawHourlyRecord], list[RawDailyRecord], int | None]:
    """Extract hourly and daily records from a One Call response."""
    if not isinstance(raw, dict):
        logger.warning("One Call payload is not an object, ignoring")
        return [], [], None

    hourly: list[RawHourlyRecord] = []
    for h in _entries(raw, "hourly"):
        hourly.append(
            RawHourlyRecord(
                dt=_int(h.get("dt")),
                temp=_num(h.get("temp")),
                humidity=_num(h.get("humidity")),
                wind_speed=_num(h.get("wind_speed")),
                clouds=_num(h.get("clouds")),
                pop=_num(h.get("pop")),
                rain_1h=_num(_sub(h.get("rain"), "1h")),
            )
        )

    daily: list[RawDailyRecord] = []
    for d in _entries(raw, "daily"):
        temp = d.get("temp")
        daily.append(
            RawDailyRecord(
                dt=_int(d.get("dt")),
                temp_day=_num(_sub(temp, "day") if isinstance(temp, dict) else temp),
                humidity=_num(d.get("humidity")),
                wind_speed=_num(d.get("wind_speed")),
                clouds=_num(d.get("clouds")),
                pop=_num(d.get("pop")),
                rain=_num(d.get("rain")),
            )
        )

    return hourly, daily, _int(raw.get("timezone_offset"))


def parse_forecast3h(raw: dict) -> tuple[list[RawTriHourlyRecord], int | None]:
    """Extract 3-hour buckets from a 5 day / 3 hour forecast response."""
    if not isinstance(raw, dict):
        logger.warning("3-hour forecast payload is not an object, ignoring")
        return [], None

    items: list[RawTriHourlyRecord] = []
    for item in _entries(raw, "list"):
        main = item.get("main")
        items.append(
            RawTriHourlyRecord(
                dt=_int(item.get("dt")),
                temp=_num(_sub(main, "temp")),
                humidity=_num(_sub(main, "humidity")),
                wind_speed=_num(_sub(item.get("wind"), "speed")),
                clouds=_num(_sub(item.get("clouds"), "all")),
                pop=_num(item.get("pop")),
                rain_3h=_num(_sub(item.get("rain"), "3h")),
            )
        )

    city = raw.get("city")
    return items, _int(_sub(city, "timezone"))


def build_bundle(
    onecall: dict | None = None,
    forecast3h: dict | None = None,
    utc_offset_seconds: int | None = None,
    default_utc_offset_seconds: int = DEFAULT_UTC_OFFSET_SECONDS,
) -> ForecastBundle:
    """Combine parsed payloads into a ForecastBundle.

    The UTC offset is taken from the argument, then the One Call payload,
    then the 3-hour payload, then `default_utc_offset_seconds`.
    """
    hourly: list[RawHourlyRecord] | None = None
    daily: list[RawDailyRecord] | None = None
    tri_hourly: list[RawTriHourlyRecord] | None = None
    offsets: list[int | None] = [utc_offset_seconds]

    if onecall is not None:
        hourly, daily, tz = parse_onecall(onecall)
        offsets.append(tz)
    if forecast3h is not None:
        tri_hourly, tz = parse_forecast3h(forecast3h)
        offsets.append(tz)

    offset = next((o for o in offsets if o is not None), default_utc_offset_seconds)
    logger.debug(
        "Bundle: %d hourly, %d tri-hourly, %d daily entries, offset %ds",
        len(hourly or []), len(tri_hourly or []), len(daily or []), offset,
    )
    return ForecastBundle(
        hourly=hourly or None,
        tri_hourly=tri_hourly or None,
        daily=daily or None,
        utc_offset_seconds=offset,
    )


def _entries(raw: dict, key: str) -> list[dict]:
    value = raw.get(key) or []
    if not isinstance(value, list):
        logger.warning("Expected a list under %r, got %s", key, type(value).__name__)
        return []
    entries = [v for v in value if isinstance(v, dict)]
    if len(entries) != len(value):
        logger.warning(
            "Skipped %d malformed entries under %r", len(value) - len(entries), key
        )
    return entries


def _sub(obj: Any, key: str) -> Any:
    if isinstance(obj, dict):
        return obj.get(key)
    return None


def _num(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        f = float(value)
    except (TypeError, ValueError):
        return None
    return f if math.isfinite(f) else None


def _int(value: Any) -> int | None:
    f = _num(value)
    return int(f) if f is not None else None
