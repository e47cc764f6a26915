"""YAML config loader, weight files and runtime get/set."""

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from drycast.config.schema import DryerConfig, WeightsConfig
from drycast.models.scoring import WeightVector


def load_config(path: str | Path) -> DryerConfig:
    """Load and validate config from a YAML file. An empty file yields defaults."""
    path = Path(path)
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    return DryerConfig(**raw)


def config_hash(config: DryerConfig) -> str:
    """Compute a deterministic SHA256 hash of the config."""
    data = config.model_dump_json(indent=None)
    return hashlib.sha256(data.encode()).hexdigest()[:16]


def load_weights(path: str | Path, fallback: WeightsConfig | None = None) -> WeightVector:
    """Load a weight vector from YAML.

    A missing or empty file yields `fallback` (or the default weights).
    Stored values are validated against the learner bounds.
    """
    path = Path(path)
    raw: dict = {}
    if path.exists():
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
    if not raw:
        return (fallback or WeightsConfig()).to_vector()
    return WeightsConfig(**raw).to_vector()


def save_weights(path: str | Path, weights: WeightVector) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.safe_dump(weights.to_dict(), f, sort_keys=True)


def get_config_value(config: DryerConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'windows.width_hours'."""
    parts = dotted_key.split(".")
    obj: Any = config
    for part in parts:
        if isinstance(obj, list):
            obj = obj[int(part)]
        elif hasattr(obj, part):
            obj = getattr(obj, part)
        elif isinstance(obj, dict):
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj


def set_config_value(config: DryerConfig, dotted_key: str, value: Any) -> DryerConfig:
    """Set a config value by dotted key path and re-validate.

    Returns a new DryerConfig instance.
    """
    data = json.loads(config.model_dump_json())
    parts = dotted_key.split(".")
    target = data
    for part in parts[:-1]:
        target = target[part]
    if parts[-1] not in target:
        raise KeyError(f"Config key not found: {dotted_key}")
    # Attempt type coercion for common cases
    old_value = target.get(parts[-1])
    if isinstance(old_value, int) and isinstance(value, str):
        value = int(value)
    elif isinstance(old_value, float) and isinstance(value, str):
        value = float(value)
    target[parts[-1]] = value
    return DryerConfig(**data)


def save_config(path: str | Path, config: DryerConfig) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.safe_dump(json.loads(config.model_dump_json()), f, sort_keys=False)
