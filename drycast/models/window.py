"""Timeline and window models."""

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime, timedelta

from drycast.models.forecast import HourlyRecord

TIMELINE_HOURS = 168


@dataclass(frozen=True)
class WeatherFeatures:
    temp_c: float
    rh: float
    wind_ms: float
    cloud: float
    rain_p: float
    rain_mm: float


@dataclass(frozen=True)
class Timeline:
    """Contiguous hourly weather, hour 0 = the current hour."""

    hours: tuple[HourlyRecord, ...]

    def __post_init__(self) -> None:
        for prev, cur in zip(self.hours, self.hours[1:]):
            if cur.timestamp - prev.timestamp != timedelta(hours=1):
                raise ValueError(
                    f"Timeline gap between {prev.timestamp.isoformat()} "
                    f"and {cur.timestamp.isoformat()}"
                )

    def __len__(self) -> int:
        return len(self.hours)

    def __iter__(self) -> Iterator[HourlyRecord]:
        return iter(self.hours)

    def __getitem__(self, index):
        return self.hours[index]

    @property
    def start(self) -> datetime | None:
        return self.hours[0].timestamp if self.hours else None


@dataclass(frozen=True)
class Window:
    id: str
    start_time: datetime
    end_time: datetime  # exclusive
    width_hours: int
    hours: tuple[HourlyRecord, ...]
    weather: WeatherFeatures

    @property
    def duration_hours(self) -> int:
        return len(self.hours)
