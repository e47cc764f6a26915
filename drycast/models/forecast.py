"""Forecast data models: provider-shaped raw records and the canonical hour."""

from dataclasses import dataclass
from datetime import datetime
from typing import TypeAlias

from drycast.models.common import SourceKind


@dataclass(frozen=True)
class HourlyRecord:
    """One canonical hour of weather.

    Units: temperature in Celsius, humidity in percent (0-100), wind in m/s,
    cloud cover and rain probability as fractions (0-1), rain in millimetres.
    """

    timestamp: datetime
    temp_c: float
    rh: float
    wind_ms: float
    cloud: float
    rain_p: float
    rain_mm: float
    source: SourceKind = SourceKind.DEFAULT


@dataclass(frozen=True)
class RawHourlyRecord:
    """One entry of a native hourly forecast (OpenWeather One Call `hourly`)."""

    dt: int | None = None
    temp: float | None = None
    humidity: float | None = None  # percent
    wind_speed: float | None = None
    clouds: float | None = None  # percent
    pop: float | None = None  # fraction
    rain_1h: float | None = None


@dataclass(frozen=True)
class RawTriHourlyRecord:
    """One 3-hour bucket (OpenWeather 5 day / 3 hour `list`)."""

    dt: int | None = None
    temp: float | None = None
    humidity: float | None = None
    wind_speed: float | None = None
    clouds: float | None = None
    pop: float | None = None
    rain_3h: float | None = None


@dataclass(frozen=True)
class RawDailyRecord:
    """One day of a daily forecast (OpenWeather One Call `daily`)."""

    dt: int | None = None
    temp_day: float | None = None
    humidity: float | None = None
    wind_speed: float | None = None
    clouds: float | None = None
    pop: float | None = None
    rain: float | None = None


RawRecord: TypeAlias = RawHourlyRecord | RawTriHourlyRecord | RawDailyRecord


@dataclass(frozen=True)
class ForecastBundle:
    """Everything the fuser needs for one location."""

    hourly: list[RawHourlyRecord] | None = None
    tri_hourly: list[RawTriHourlyRecord] | None = None
    daily: list[RawDailyRecord] | None = None
    utc_offset_seconds: int = 7 * 3600

    @property
    def has_any_source(self) -> bool:
        return bool(self.hourly or self.tri_hourly or self.daily)
