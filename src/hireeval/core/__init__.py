"""Core evaluation engine components."""

from __future__ import annotations

# NOTE: keep imports explicit for export clarity.
from .confidence import (
    ConfidenceCalculator,
    ConfidenceReport,
    StageBreakdown,
    StageFeedback,
    build_narrative,
)
from .stages import (
    DEFAULT_CRITERIA,
    STAGE_LABELS,
    STAGE_ORDER,
    FinalStageRecord,
    StageCatalog,
    StageRecord,
)
from .state import EvaluationState, WorkflowPhase
from .weights import WeightManager, parse_weights

__all__ = [
    "ConfidenceCalculator",
    "ConfidenceReport",
    "StageBreakdown",
    "StageFeedback",
    "build_narrative",
    "DEFAULT_CRITERIA",
    "STAGE_LABELS",
    "STAGE_ORDER",
    "StageCatalog",
    "StageRecord",
    "FinalStageRecord",
    "EvaluationState",
    "WorkflowPhase",
    "WeightManager",
    "parse_weights",
]
