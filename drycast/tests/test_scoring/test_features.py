"""Tests for VPD and feature normalization."""

import math
import random

import pytest

from drycast.models.window import WeatherFeatures
from drycast.scoring.features import calculate_vpd_kpa, normalize_features


def _weather(**kwargs) -> WeatherFeatures:
    values = {"temp_c": 25.0, "rh": 60.0, "wind_ms": 2.0, "cloud": 0.5,
              "rain_p": 0.0, "rain_mm": 0.0}
    values.update(kwargs)
    return WeatherFeatures(**values)


class TestVPD:
    def test_typical_value(self):
        vpd = calculate_vpd_kpa(25.0, 60.0)
        assert 0.0 < vpd < 5.0
        assert vpd == pytest.approx(1.267, abs=0.01)

    def test_saturated_air_has_no_deficit(self):
        assert calculate_vpd_kpa(25.0, 100.0) == pytest.approx(0.0)

    def test_drier_air_has_larger_deficit(self):
        assert calculate_vpd_kpa(25.0, 30.0) > calculate_vpd_kpa(25.0, 70.0)

    def test_warmer_air_has_larger_deficit(self):
        assert calculate_vpd_kpa(35.0, 50.0) > calculate_vpd_kpa(15.0, 50.0)

    @pytest.mark.parametrize("temp", [-500.0, -237.3, -100.0, 80.0, 1000.0])
    def test_extreme_temperatures_are_finite(self, temp):
        vpd = calculate_vpd_kpa(temp, 40.0)
        assert math.isfinite(vpd)
        assert vpd >= 0.0

    @pytest.mark.parametrize("rh", [-20.0, 150.0])
    def test_humidity_out_of_range(self, rh):
        vpd = calculate_vpd_kpa(25.0, rh)
        assert vpd >= 0.0
        assert math.isfinite(vpd)


class TestNormalizeFeatures:
    def test_known_values(self):
        features, vpd = normalize_features(_weather())
        assert features.f_temp == pytest.approx(10.0 / 15.0)
        assert features.f_hum == pytest.approx(1.0 - 0.6**0.7)
        assert features.f_wind == pytest.approx(2.0 / 6.0)
        assert features.f_cloud == pytest.approx(0.5)
        assert features.f_rain == pytest.approx(1.0)
        assert features.f_vpd == pytest.approx(vpd / 2.5)

    def test_saturation(self):
        features, _ = normalize_features(
            _weather(temp_c=45.0, rh=0.0, wind_ms=12.0, cloud=0.0)
        )
        assert features.f_temp == 1.0
        assert features.f_hum == 1.0
        assert features.f_wind == 1.0
        assert features.f_cloud == 1.0
        assert features.f_vpd == 1.0

    def test_as_vector_has_bias(self):
        features, _ = normalize_features(_weather())
        vec = features.as_vector()
        assert len(vec) == 7
        assert vec[0] == 1.0
        assert vec[1] == features.f_temp

    def test_random_inputs_stay_in_unit_range(self):
        rng = random.Random(20260211)
        for _ in range(2000):
            weather = WeatherFeatures(
                temp_c=rng.uniform(-120.0, 120.0),
                rh=rng.uniform(-50.0, 200.0),
                wind_ms=rng.uniform(-5.0, 60.0),
                cloud=rng.uniform(-1.0, 2.0),
                rain_p=rng.uniform(-1.0, 2.0),
                rain_mm=rng.uniform(0.0, 50.0),
            )
            features, vpd = normalize_features(weather)
            assert vpd >= 0.0 and math.isfinite(vpd)
            for value in features.as_vector()[1:]:
                assert 0.0 <= value <= 1.0
