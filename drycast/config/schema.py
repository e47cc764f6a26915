"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field

from drycast.models.scoring import WeightVector


class FusionConfig(BaseModel):
    model_config = {"extra": "forbid"}

    # Used when neither the caller nor the payloads supply an offset
    default_utc_offset_seconds: int = Field(default=7 * 3600, ge=-86399, le=86399)


class WindowConfig(BaseModel):
    model_config = {"extra": "forbid"}

    width_hours: int = Field(default=3, ge=1, le=24)
    max_windows: int = Field(default=10, ge=1)


class WeightsConfig(BaseModel):
    model_config = {"extra": "forbid"}

    w0: float = Field(default=0.0, ge=-0.5, le=0.5)
    w1: float = Field(default=0.25, ge=0.0, le=0.5)
    w2: float = Field(default=0.25, ge=0.0, le=0.5)
    w3: float = Field(default=0.20, ge=0.0, le=0.5)
    w4: float = Field(default=0.10, ge=0.0, le=0.3)
    w5: float = Field(default=0.15, ge=0.0, le=0.3)
    w6: float = Field(default=0.25, ge=0.0, le=0.5)

    def to_vector(self) -> WeightVector:
        return WeightVector(**self.model_dump())


class LearnerConfig(BaseModel):
    model_config = {"extra": "forbid"}

    learning_rate: float = Field(default=0.05, gt=0.0, le=1.0)
    l2: float = Field(default=1e-4, ge=0.0)


class DryerConfig(BaseModel):
    model_config = {"extra": "forbid"}

    fusion: FusionConfig = FusionConfig()
    windows: WindowConfig = WindowConfig()
    weights: WeightsConfig = WeightsConfig()
    learner: LearnerConfig = LearnerConfig()
