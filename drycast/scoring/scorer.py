"""Drying scorer: hard veto, weighted sum, soft penalties."""

from collections.abc import Sequence

from drycast.models.scoring import UNSAFE_SCORE, DryingScore, WeightVector
from drycast.models.window import WeatherFeatures, Window
from drycast.scoring.features import normalize_features

VETO_RAIN_PROBABILITY = 0.50
VETO_RAIN_MM = 0.2

COLD_TEMP_C = 18.0
COLD_PENALTY = 0.15
CALM_WIND_MS = 1.0
CALM_PENALTY = 0.10


def is_unsafe(weather: WeatherFeatures) -> bool:
    return weather.rain_p > VETO_RAIN_PROBABILITY or weather.rain_mm > VETO_RAIN_MM


def calculate_drying_score(
    weather: WeatherFeatures, weights: WeightVector
) -> DryingScore:
    """Score a window's weather.

    Windows with meaningful rain risk are vetoed outright with the sentinel
    score -1.0 and never compete on the linear scale. Otherwise the score is
    the weighted feature sum minus the fixed cold and calm-air penalties.
    """
    features, vpd_kpa = normalize_features(weather)

    if is_unsafe(weather):
        return DryingScore(
            score=UNSAFE_SCORE,
            unsafe=True,
            features=features,
            raw=weather,
            vpd_kpa=vpd_kpa,
        )

    score = sum(w * x for w, x in zip(weights.as_list(), features.as_vector()))

    if weather.temp_c < COLD_TEMP_C:
        score -= COLD_PENALTY
    if weather.wind_ms < CALM_WIND_MS:
        score -= CALM_PENALTY

    return DryingScore(
        score=score,
        unsafe=False,
        features=features,
        raw=weather,
        vpd_kpa=vpd_kpa,
    )


def score_windows(
    windows: Sequence[Window], weights: WeightVector
) -> list[tuple[Window, DryingScore]]:
    """Score every window, preserving timeline order."""
    return [(w, calculate_drying_score(w.weather, weights)) for w in windows]
