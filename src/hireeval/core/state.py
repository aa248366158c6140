"""Evaluation state and the stage-gating state machine."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, Any, Mapping, Sequence

from pydantic import ValidationError

from ..errors import IncompleteCandidate, IncompleteStage, StageOutOfOrder
from ..schemas import Candidate, StageSubmission, WeightConfig
from .stages import STAGE_ORDER, FinalStageRecord, StageRecord

if TYPE_CHECKING:
    from .confidence import ConfidenceReport


class WorkflowPhase(str, Enum):
    NO_CANDIDATE = "no_candidate"
    CANDIDATE_SET = "candidate_set"
    PSYCHOMETRIC_DONE = "psychometric_done"
    TECHNICAL_DONE = "technical_done"
    FINAL_DONE = "final_done"


_STAGE_PHASES: dict[str, WorkflowPhase] = {
    "psychometric": WorkflowPhase.PSYCHOMETRIC_DONE,
    "technical": WorkflowPhase.TECHNICAL_DONE,
    "final": WorkflowPhase.FINAL_DONE,
}

# Stage that must be complete before the key can be submitted; None means a
# registered candidate is enough.
STAGE_PREREQUISITES: dict[str, str | None] = {
    "psychometric": None,
    "technical": "psychometric",
    "final": "technical",
}

_CANDIDATE_FIELDS = ("first_name", "last_name", "email", "phone")


@dataclass(frozen=True, slots=True)
class EvaluationState:
    """Immutable snapshot of one candidate's evaluation.

    Every transition returns a new snapshot; a rejected command raises and the
    caller keeps the snapshot it already had.
    """

    weights: WeightConfig = field(default_factory=WeightConfig)
    candidate: Candidate | None = None
    psychometric: StageRecord = field(default_factory=StageRecord)
    technical: StageRecord = field(default_factory=StageRecord)
    final: FinalStageRecord = field(default_factory=FinalStageRecord)
    confidence: "ConfidenceReport | None" = None

    @property
    def stages(self) -> dict[str, StageRecord]:
        return {key: self.stage(key) for key in STAGE_ORDER}

    @property
    def phase(self) -> WorkflowPhase:
        if self.candidate is None:
            return WorkflowPhase.NO_CANDIDATE
        phase = WorkflowPhase.CANDIDATE_SET
        for key in STAGE_ORDER:
            if not self.is_complete(key):
                break
            phase = _STAGE_PHASES[key]
        return phase

    def stage(self, key: str) -> StageRecord:
        if key not in STAGE_ORDER:
            raise KeyError(f"Unknown stage: {key!r}")
        return getattr(self, key)

    def is_complete(self, key: str) -> bool:
        return self.stage(key).is_complete

    def can_access(self, screen: str) -> bool:
        if screen in ("candidate", "weights"):
            return True
        if screen == "confidence":
            return self.candidate is not None and self.is_complete("final")
        if screen not in STAGE_PREREQUISITES:
            return False
        return self._prerequisite_met(screen)

    def set_candidate(self, data: Candidate | Mapping[str, Any]) -> "EvaluationState":
        """Register or correct the candidate identity; scored stages are kept."""
        if isinstance(data, Candidate):
            candidate = data
        else:
            try:
                candidate = Candidate.model_validate(dict(data))
            except (TypeError, ValueError) as exc:
                unexpected = _unexpected_fields(exc)
                if unexpected:
                    raise IncompleteCandidate(
                        unexpected,
                        message=_unexpected_message("candidate details", unexpected),
                    ) from exc
                raise IncompleteCandidate(_invalid_fields(exc, _CANDIDATE_FIELDS)) from exc
        return replace(self, candidate=candidate)

    def submit_stage(
        self,
        stage_key: str,
        payload: StageSubmission | Mapping[str, Any],
        *,
        criteria: Sequence[str],
    ) -> "EvaluationState":
        """Record a stage after checking that its predecessor is complete."""
        if stage_key not in STAGE_PREREQUISITES:
            raise StageOutOfOrder(stage_key, message=f"Unknown stage: {stage_key!r}")
        if not self._prerequisite_met(stage_key):
            raise StageOutOfOrder(stage_key, STAGE_PREREQUISITES[stage_key] or "candidate")

        if isinstance(payload, StageSubmission):
            submission = payload
        else:
            try:
                submission = StageSubmission.model_validate(dict(payload))
            except (TypeError, ValueError) as exc:
                unexpected = _unexpected_fields(exc)
                if unexpected:
                    raise IncompleteStage(
                        stage_key,
                        unexpected,
                        message=_unexpected_message("stage submission", unexpected),
                    ) from exc
                raise IncompleteStage(stage_key, _invalid_fields(exc)) from exc

        if stage_key == "final":
            record: StageRecord = FinalStageRecord.submit(
                criteria,
                submission.scores,
                submission.comments,
                salary_range=submission.salary_range,
                notice_period=submission.notice_period,
                final_comments=submission.final_comments,
            )
        else:
            record = StageRecord.submit(
                criteria,
                submission.scores,
                submission.comments,
                stage=stage_key,
            )
        return replace(self, confidence=None, **{stage_key: record})

    def with_weights(self, weights: WeightConfig) -> "EvaluationState":
        return replace(self, weights=weights, confidence=None)

    def with_confidence(self, report: "ConfidenceReport") -> "EvaluationState":
        return replace(self, confidence=report)

    def _prerequisite_met(self, stage_key: str) -> bool:
        if self.candidate is None:
            return False
        required = STAGE_PREREQUISITES[stage_key]
        return required is None or self.is_complete(required)


def _invalid_fields(exc: Exception, fallback: Sequence[str] = ()) -> list[str]:
    if isinstance(exc, ValidationError):
        return sorted({str(error["loc"][0]) for error in exc.errors() if error["loc"]})
    return list(fallback)


def _unexpected_fields(exc: Exception) -> list[str]:
    if not isinstance(exc, ValidationError):
        return []
    return sorted(
        {
            str(error["loc"][0])
            for error in exc.errors()
            if error["type"] == "extra_forbidden" and error["loc"]
        }
    )


def _unexpected_message(subject: str, fields: Sequence[str]) -> str:
    return f"Unexpected field(s) in {subject}: {', '.join(fields)}."
