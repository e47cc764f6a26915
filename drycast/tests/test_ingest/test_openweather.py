"""Tests for OpenWeather payload parsing."""

import json
from pathlib import Path

from drycast.ingest.openweather import (
    DEFAULT_UTC_OFFSET_SECONDS,
    build_bundle,
    parse_forecast3h,
    parse_onecall,
)

FIXTURE_DIR = Path(__file__).parent.parent / "fixtures"


def _load(name: str) -> dict:
    with open(FIXTURE_DIR / name) as f:
        return json.load(f)


class TestParseOneCall:
    def test_hourly_fields(self):
        hourly, _, offset = parse_onecall(_load("onecall_bangkok.json"))
        assert offset == 25200
        assert hourly[0].dt == 1770768000
        assert hourly[0].temp == 27.4
        assert hourly[0].humidity == 62
        assert hourly[0].clouds == 40
        assert hourly[0].rain_1h is None
        assert hourly[1].rain_1h == 0.12

    def test_malformed_entries(self):
        hourly, _, _ = parse_onecall(_load("onecall_bangkok.json"))
        # the string entry is skipped, the bad temperature becomes None
        assert len(hourly) == 3
        assert hourly[2].temp is None
        assert hourly[2].clouds is None

    def test_daily_fields(self):
        _, daily, _ = parse_onecall(_load("onecall_bangkok.json"))
        assert len(daily) == 2
        assert daily[0].temp_day == 31.2
        assert daily[0].pop == 0.56
        assert daily[0].rain == 2.4
        assert daily[1].rain is None

    def test_not_a_dict(self):
        assert parse_onecall([]) == ([], [], None)  # type: ignore[arg-type]

    def test_hourly_not_a_list(self):
        hourly, daily, _ = parse_onecall({"hourly": {"dt": 1}, "daily": None})
        assert hourly == []
        assert daily == []


class TestParseForecast3h:
    def test_items(self):
        items, offset = parse_forecast3h(_load("forecast3h_bangkok.json"))
        assert offset == 25200
        assert len(items) == 3
        assert items[0].temp == 29.0
        assert items[0].humidity == 60
        assert items[0].wind_speed == 3.0
        assert items[0].clouds == 20
        assert items[0].rain_3h is None
        assert items[1].rain_3h == 1.8
        assert items[1].pop == 0.65

    def test_missing_timestamp_kept_as_none(self):
        items, _ = parse_forecast3h(_load("forecast3h_bangkok.json"))
        assert items[2].dt is None

    def test_missing_city(self):
        items, offset = parse_forecast3h({"list": []})
        assert items == []
        assert offset is None


class TestBuildBundle:
    def test_both_payloads(self):
        bundle = build_bundle(
            _load("onecall_bangkok.json"), _load("forecast3h_bangkok.json")
        )
        assert bundle.hourly is not None and len(bundle.hourly) == 3
        assert bundle.daily is not None and len(bundle.daily) == 2
        assert bundle.tri_hourly is not None and len(bundle.tri_hourly) == 3
        assert bundle.utc_offset_seconds == 25200
        assert bundle.has_any_source

    def test_explicit_offset_wins(self):
        bundle = build_bundle(_load("onecall_bangkok.json"), utc_offset_seconds=3600)
        assert bundle.utc_offset_seconds == 3600

    def test_forecast3h_offset_used_without_onecall(self):
        payload = _load("forecast3h_bangkok.json")
        payload["city"]["timezone"] = -18000
        bundle = build_bundle(forecast3h=payload)
        assert bundle.utc_offset_seconds == -18000
        assert bundle.hourly is None

    def test_nothing_supplied(self):
        bundle = build_bundle()
        assert not bundle.has_any_source
        assert bundle.utc_offset_seconds == DEFAULT_UTC_OFFSET_SECONDS

    def test_configured_default_offset(self):
        bundle = build_bundle(default_utc_offset_seconds=0)
        assert bundle.utc_offset_seconds == 0
