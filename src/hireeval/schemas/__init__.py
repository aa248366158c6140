"""Pydantic schema definitions for evaluation inputs and configuration."""

from __future__ import annotations

from .candidate import Candidate
from .stage import StageSubmission
from .weights import DEFAULT_WEIGHTS, WeightConfig

__all__ = [
    "Candidate",
    "StageSubmission",
    "WeightConfig",
    "DEFAULT_WEIGHTS",
]
