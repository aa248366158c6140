"""Stage weight configuration schema."""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field, model_validator

WEIGHT_TOTAL = 100.0


class WeightConfig(BaseModel):
    """Percentage contribution of each stage to the confidence score.

    The three weights are non-negative and must add up to exactly 100.
    """

    psychometric: float = Field(default=20.0, ge=0.0, allow_inf_nan=False)
    technical: float = Field(default=40.0, ge=0.0, allow_inf_nan=False)
    final: float = Field(default=40.0, ge=0.0, allow_inf_nan=False)

    model_config = ConfigDict(extra="forbid", frozen=True)

    @model_validator(mode="after")
    def check_total(self) -> "WeightConfig":
        total = self.total
        if total != WEIGHT_TOTAL:
            raise ValueError(f"weights must total {WEIGHT_TOTAL:g}, got {total:g}")
        return self

    @property
    def total(self) -> float:
        return math.fsum((self.psychometric, self.technical, self.final))

    def for_stage(self, stage: str) -> float:
        return float(getattr(self, stage))


DEFAULT_WEIGHTS = WeightConfig()
