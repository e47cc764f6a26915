"""Scoring models: normalized features, weights and drying scores."""

from dataclasses import astuple, dataclass, fields

from drycast.models.common import clamp
from drycast.models.window import WeatherFeatures

UNSAFE_SCORE = -1.0

# (low, high) per weight, in w0..w6 order
WEIGHT_BOUNDS: tuple[tuple[float, float], ...] = (
    (-0.5, 0.5),  # bias
    (0.0, 0.5),  # temperature
    (0.0, 0.5),  # humidity
    (0.0, 0.5),  # wind
    (0.0, 0.3),  # cloud
    (0.0, 0.3),  # rain
    (0.0, 0.5),  # vpd
)


@dataclass(frozen=True)
class NormalizedFeatures:
    f_temp: float
    f_hum: float
    f_wind: float
    f_cloud: float
    f_rain: float
    f_vpd: float

    def as_vector(self) -> list[float]:
        """Design vector with a leading bias term."""
        return [1.0, *astuple(self)]


@dataclass
class WeightVector:
    """Bias plus one weight per normalized feature.

    Mutable and owned by the caller; only the learner writes to it.
    """

    w0: float = 0.0
    w1: float = 0.25
    w2: float = 0.25
    w3: float = 0.20
    w4: float = 0.10
    w5: float = 0.15
    w6: float = 0.25

    def as_list(self) -> list[float]:
        return list(astuple(self))

    def assign(self, values: list[float]) -> None:
        if len(values) != len(WEIGHT_BOUNDS):
            raise ValueError(
                f"Expected {len(WEIGHT_BOUNDS)} weights, got {len(values)}"
            )
        for f, v in zip(fields(self), values):
            setattr(self, f.name, float(v))

    def clamp_to_bounds(self) -> None:
        self.assign(
            [clamp(v, lo, hi) for v, (lo, hi) in zip(self.as_list(), WEIGHT_BOUNDS)]
        )

    def copy(self) -> "WeightVector":
        return WeightVector(*self.as_list())

    def to_dict(self) -> dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class DryingScore:
    score: float
    unsafe: bool
    features: NormalizedFeatures
    raw: WeatherFeatures
    vpd_kpa: float
