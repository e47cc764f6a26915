"""Shared test fixtures."""

from datetime import UTC, datetime
from pathlib import Path

import pytest
import yaml

from drycast.config.schema import DryerConfig
from drycast.models.scoring import WeightVector

# 2026-02-11T00:00:00Z, a 3-hour boundary
NOW = datetime(2026, 2, 11, 0, 0, 0, tzinfo=UTC)
NOW_TS = 1770768000
UTC7 = 7 * 3600


def make_onecall(
    start_ts: int = NOW_TS,
    hours: int = 48,
    days: int = 8,
    offset: int = UTC7,
    **hourly_overrides,
) -> dict:
    """One Call shaped payload with constant, pleasant weather."""
    hourly = []
    for h in range(hours):
        entry = {
            "dt": start_ts + h * 3600,
            "temp": 28.0,
            "humidity": 50,
            "wind_speed": 3.0,
            "clouds": 20,
            "pop": 0.1,
        }
        entry.update(hourly_overrides)
        hourly.append(entry)
    daily = [
        {
            "dt": start_ts + d * 86400,
            "temp": {"day": 30.0, "min": 24.0, "max": 33.0},
            "humidity": 70,
            "wind_speed": 4.0,
            "clouds": 40,
            "pop": 0.8,
            "rain": 4.0,
        }
        for d in range(days)
    ]
    return {
        "lat": 13.75,
        "lon": 100.5,
        "timezone": "Asia/Bangkok",
        "timezone_offset": offset,
        "hourly": hourly,
        "daily": daily,
    }


def make_forecast3h(
    start_ts: int = NOW_TS, buckets: int = 40, offset: int = UTC7, **overrides
) -> dict:
    """5 day / 3 hour shaped payload."""
    items = []
    for i in range(buckets):
        item = {
            "dt": start_ts + i * 3 * 3600,
            "main": {"temp": 31.0, "humidity": 45},
            "wind": {"speed": 5.0},
            "clouds": {"all": 10},
            "pop": 0.05,
            "rain": {"3h": 0.3},
        }
        item.update(overrides)
        items.append(item)
    return {"cod": "200", "list": items, "city": {"name": "Bangkok", "timezone": offset}}


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def onecall_payload() -> dict:
    return make_onecall()


@pytest.fixture
def forecast3h_payload() -> dict:
    return make_forecast3h()


@pytest.fixture
def default_weights() -> WeightVector:
    return WeightVector()


@pytest.fixture
def default_config() -> DryerConfig:
    return DryerConfig()


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "windows": {"width_hours": 3, "max_windows": 5},
        "learner": {"learning_rate": 0.05},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def onecall_factory():
    return make_onecall


@pytest.fixture
def forecast3h_factory():
    return make_forecast3h
