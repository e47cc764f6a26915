"""Feature normalization and vapor-pressure deficit."""

import math

from drycast.models.common import clamp
from drycast.models.scoring import NormalizedFeatures
from drycast.models.window import WeatherFeatures

# Physical range for the Tetens formula; keeps T + 237.3 well away from zero
VPD_MIN_TEMP_C = -90.0
VPD_MAX_TEMP_C = 60.0

TEMP_FLOOR_C = 15.0
TEMP_SPAN_C = 15.0
HUMIDITY_EXPONENT = 0.7
WIND_SATURATION_MS = 6.0
VPD_SATURATION_KPA = 2.5


def calculate_vpd_kpa(temp_c: float, rh: float) -> float:
    """Vapor-pressure deficit in kPa (Tetens approximation).

    Args:
        temp_c: Air temperature in Celsius.
        rh: Relative humidity in percent.

    Returns:
        Saturation minus actual vapor pressure, never negative.
    """
    t = clamp(temp_c, VPD_MIN_TEMP_C, VPD_MAX_TEMP_C)
    es = 0.6108 * math.exp((17.27 * t) / (t + 237.3))
    e = es * (clamp(rh, 0.0, 100.0) / 100.0)
    return max(es - e, 0.0)


def normalize_features(weather: WeatherFeatures) -> tuple[NormalizedFeatures, float]:
    """Map raw window weather onto [0, 1] features. Returns (features, vpd_kpa)."""
    vpd_kpa = calculate_vpd_kpa(weather.temp_c, weather.rh)
    humidity = clamp(weather.rh, 0.0, 100.0) / 100.0

    features = NormalizedFeatures(
        f_temp=clamp((weather.temp_c - TEMP_FLOOR_C) / TEMP_SPAN_C, 0.0, 1.0),
        f_hum=1.0 - humidity**HUMIDITY_EXPONENT,
        f_wind=clamp(weather.wind_ms / WIND_SATURATION_MS, 0.0, 1.0),
        f_cloud=1.0 - clamp(weather.cloud, 0.0, 1.0),
        f_rain=1.0 - clamp(weather.rain_p, 0.0, 1.0),
        f_vpd=clamp(vpd_kpa / VPD_SATURATION_KPA, 0.0, 1.0),
    )
    return features, vpd_kpa
