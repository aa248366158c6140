"""Evaluation session: the command/query boundary for one live evaluation."""

from __future__ import annotations

import threading
from typing import Any, Mapping

from .core import (
    ConfidenceCalculator,
    ConfidenceReport,
    STAGE_ORDER,
    EvaluationState,
    StageCatalog,
    WeightManager,
)
from .logging import get_logger
from .schemas import Candidate, StageSubmission, WeightConfig


class EvaluationSession:
    """Owns the single live EvaluationState and serializes every command.

    Commands either return the new snapshot or raise an ``EvaluationError``
    subclass, in which case the current snapshot is left untouched.
    """

    def __init__(
        self,
        *,
        weights: WeightManager,
        calculator: ConfidenceCalculator | None = None,
        catalog: StageCatalog | None = None,
    ) -> None:
        self._weights = weights
        self._calculator = calculator or ConfidenceCalculator()
        self._catalog = catalog or StageCatalog()
        self._lock = threading.RLock()
        self._state = EvaluationState(weights=weights.active)
        self._logger = get_logger(__name__)

    @property
    def catalog(self) -> StageCatalog:
        return self._catalog

    def current_state(self) -> EvaluationState:
        return self._state

    def can_access(self, screen: str) -> bool:
        return self._state.can_access(screen)

    def set_candidate(self, data: Candidate | Mapping[str, Any]) -> EvaluationState:
        with self._lock:
            state = self._state.set_candidate(data)
            self._state = state
        self._logger.info("candidate.set", phase=state.phase.value)
        return state

    def submit_stage(
        self,
        stage_key: str,
        payload: StageSubmission | Mapping[str, Any],
    ) -> EvaluationState:
        with self._lock:
            criteria = self._catalog.criteria(stage_key) if stage_key in STAGE_ORDER else ()
            state = self._state.submit_stage(stage_key, payload, criteria=criteria)
            self._state = state
        self._logger.info(
            "stage.submitted",
            stage=stage_key,
            average=state.stage(stage_key).average,
            phase=state.phase.value,
        )
        return state

    def update_weights(self, candidate: WeightConfig | Mapping[str, Any]) -> WeightConfig:
        if isinstance(candidate, WeightConfig):
            candidate = candidate.model_dump()
        with self._lock:
            weights = self._weights.update(candidate)
            self._state = self._state.with_weights(weights)
        return weights

    def confidence(self) -> ConfidenceReport:
        """Return the cached report, computing it against the active weights."""
        with self._lock:
            if self._state.weights != self._weights.active:
                self._state = self._state.with_weights(self._weights.active)
            cached = self._state.confidence
            if cached is not None:
                return cached
            report = self._calculator.compute(self._state)
            self._state = self._state.with_confidence(report)
        return report

    def chart_series(self) -> list[tuple[str, float]]:
        return self.confidence().chart_series

    def reset(self) -> EvaluationState:
        """Start a fresh evaluation; the active weights carry over."""
        with self._lock:
            self._state = EvaluationState(weights=self._weights.active)
        self._logger.info("evaluation.reset")
        return self._state
