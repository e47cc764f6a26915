"""Recommendation pipeline: fuse, group, score, rank."""

import logging
import time
import uuid
from collections import Counter
from datetime import datetime

from drycast.config.loader import config_hash
from drycast.config.schema import DryerConfig
from drycast.fusion.timeline import fuse
from drycast.fusion.windows import group
from drycast.models.common import utc_now
from drycast.models.forecast import ForecastBundle
from drycast.models.reporting import RankedWindow, RecommendationRun
from drycast.models.scoring import DryingScore, NormalizedFeatures, WeightVector
from drycast.models.window import WeatherFeatures, Window
from drycast.scoring.learner import update_weights
from drycast.scoring.scorer import score_windows

logger = logging.getLogger(__name__)

RAINY_MM = 0.1
CLOUDY_FRACTION = 0.8
SUNNY_FRACTION = 0.3


def conditions_label(weather: WeatherFeatures) -> str:
    if weather.rain_mm > RAINY_MM:
        return "Rainy"
    elif weather.cloud > CLOUDY_FRACTION:
        return "Cloudy"
    elif weather.cloud < SUNNY_FRACTION:
        return "Sunny"
    else:
        return "Partly Cloudy"


def recommendation_label(score: DryingScore) -> str:
    if score.unsafe:
        return "Unsafe - rain expected"
    elif score.score > 0.8:
        return "Excellent drying conditions!"
    elif score.score > 0.6:
        return "Good drying conditions"
    elif score.score > 0.4:
        return "Fair drying conditions"
    else:
        return "Poor drying conditions"


def rank(
    scored: list[tuple[Window, DryingScore]], limit: int | None = None
) -> list[RankedWindow]:
    """Order windows best-first; ties keep timeline order."""
    ordered = sorted(scored, key=lambda pair: pair[1].score, reverse=True)
    if limit is not None:
        ordered = ordered[:limit]
    return [
        RankedWindow(
            window=w,
            score=s,
            conditions=conditions_label(w.weather),
            recommendation=recommendation_label(s),
        )
        for w, s in ordered
    ]


class RecommendPipeline:
    def __init__(self, config: DryerConfig):
        self.config = config

    def run(
        self,
        bundle: ForecastBundle,
        weights: WeightVector,
        now: datetime | None = None,
        width_hours: int | None = None,
        max_windows: int | None = None,
    ) -> RecommendationRun:
        """Produce ranked drying windows for one location."""
        start_time = time.monotonic()
        width = self.config.windows.width_hours if width_hours is None else width_hours
        limit = self.config.windows.max_windows if max_windows is None else max_windows

        run = RecommendationRun(
            run_id=str(uuid.uuid4()),
            generated_at=utc_now(),
            width_hours=width,
            config_hash=config_hash(self.config),
        )

        if not bundle.has_any_source:
            logger.warning("No forecast sources supplied, using default weather")

        timeline = fuse(
            bundle.hourly,
            bundle.tri_hourly,
            bundle.daily,
            bundle.utc_offset_seconds,
            now=now,
        )
        run.source_hours = dict(Counter(h.source.value for h in timeline))

        windows = group(timeline, width)
        scored = score_windows(windows, weights)
        run.windows_scored = len(scored)
        run.unsafe_windows = sum(1 for _, s in scored if s.unsafe)
        run.ranked = rank(scored, limit)
        run.duration_seconds = time.monotonic() - start_time

        best = run.best
        logger.info(
            "Scored %d windows (%dh), %d unsafe, best=%s",
            run.windows_scored,
            width,
            run.unsafe_windows,
            f"{best.window.id} {best.score.score:.3f}" if best else "none",
        )
        return run

    def submit_feedback(
        self,
        weights: WeightVector,
        features: NormalizedFeatures | WeatherFeatures,
        label: float,
    ) -> WeightVector:
        """Fold one piece of user feedback into `weights` (mutated and returned)."""
        before = weights.as_list()
        update_weights(
            weights,
            features,
            label,
            learning_rate=self.config.learner.learning_rate,
            l2=self.config.learner.l2,
        )
        logger.info(
            "Feedback label=%.2f moved weights by %s",
            label,
            [round(a - b, 5) for a, b in zip(weights.as_list(), before)],
        )
        return weights
