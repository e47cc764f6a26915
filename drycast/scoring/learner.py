"""Online weight learning: single-sample logistic SGD with L2 and hard bounds."""

import logging

from scipy.special import expit

from drycast.models.common import clamp
from drycast.models.scoring import NormalizedFeatures, WeightVector
from drycast.models.window import WeatherFeatures
from drycast.scoring.features import normalize_features

logger = logging.getLogger(__name__)

DEFAULT_LEARNING_RATE = 0.05
DEFAULT_L2 = 1e-4


def update_weights(
    weights: WeightVector,
    features: NormalizedFeatures | WeatherFeatures,
    feedback: float,
    learning_rate: float = DEFAULT_LEARNING_RATE,
    l2: float = DEFAULT_L2,
) -> None:
    """Apply one SGD step toward the feedback label, in place.

    Args:
        weights: Weight vector to mutate. Callers must not update the same
            vector concurrently.
        features: Normalized features, or raw window weather to normalize.
        feedback: 1.0 for "dried well", 0.0 for "did not"; values in between
            are treated as soft labels, values outside are clamped.
        learning_rate: SGD step size.
        l2: L2 regularization strength.
    """
    if isinstance(features, WeatherFeatures):
        features, _ = normalize_features(features)
    label = clamp(float(feedback), 0.0, 1.0)

    x = features.as_vector()
    w = weights.as_list()
    z = sum(wi * xi for wi, xi in zip(w, x))
    p = float(expit(z))
    error = p - label

    weights.assign(
        [wi - learning_rate * (error * xi + 2.0 * l2 * wi) for wi, xi in zip(w, x)]
    )
    # Standing invariant: bounds hold after every update
    weights.clamp_to_bounds()

    logger.debug(
        "SGD update label=%.2f p=%.4f error=%+.4f weights=%s",
        label, p, error, [round(v, 4) for v in weights.as_list()],
    )
