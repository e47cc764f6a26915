"""Recommendation output models."""

from dataclasses import dataclass, field
from datetime import datetime

from drycast.models.scoring import DryingScore
from drycast.models.window import Window


@dataclass(frozen=True)
class RankedWindow:
    window: Window
    score: DryingScore
    conditions: str
    recommendation: str


@dataclass
class RecommendationRun:
    run_id: str
    generated_at: datetime
    width_hours: int
    config_hash: str = ""
    windows_scored: int = 0
    unsafe_windows: int = 0
    source_hours: dict[str, int] = field(default_factory=dict)
    ranked: list[RankedWindow] = field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def best(self) -> RankedWindow | None:
        return self.ranked[0] if self.ranked else None
