"""Window aggregator: slice a timeline into fixed-width drying windows."""

from collections.abc import Sequence
from datetime import datetime, timedelta

from drycast.models.forecast import HourlyRecord
from drycast.models.window import WeatherFeatures, Window


def group(timeline: Sequence[HourlyRecord], width_hours: int) -> list[Window]:
    """Partition the timeline left-to-right into windows of `width_hours`.

    The final window keeps whatever hours remain, so no hour is dropped.
    """
    if width_hours < 1:
        raise ValueError(f"width_hours must be >= 1, got {width_hours}")

    hours = list(timeline)
    windows: list[Window] = []
    for i in range(0, len(hours), width_hours):
        chunk = tuple(hours[i : i + width_hours])
        start = chunk[0].timestamp
        windows.append(
            Window(
                id=window_id(start, width_hours),
                start_time=start,
                end_time=chunk[-1].timestamp + timedelta(hours=1),
                width_hours=width_hours,
                hours=chunk,
                weather=aggregate(chunk),
            )
        )
    return windows


def aggregate(hours: Sequence[HourlyRecord]) -> WeatherFeatures:
    """Means for conditions, max for rain probability, sum for rain total.

    A single risky hour is enough to flag the whole window.
    """
    if not hours:
        raise ValueError("Cannot aggregate an empty window")
    n = len(hours)
    return WeatherFeatures(
        temp_c=sum(h.temp_c for h in hours) / n,
        rh=sum(h.rh for h in hours) / n,
        wind_ms=sum(h.wind_ms for h in hours) / n,
        cloud=sum(h.cloud for h in hours) / n,
        rain_p=max(0.0, *(h.rain_p for h in hours)),
        rain_mm=sum(h.rain_mm for h in hours),
    )


def window_id(start: datetime, width_hours: int) -> str:
    """Stable id so feedback can be correlated with the window it rates."""
    return f"window_{int(start.timestamp())}_{width_hours}"
