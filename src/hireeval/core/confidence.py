"""Weighted confidence score and recommendation for a completed evaluation."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any

from ..errors import StageOutOfOrder
from ..logging import get_logger
from ..schemas import WeightConfig
from .rounding import round2, round_whole, to_decimal
from .stages import RATING_MAX, STAGE_LABELS, STAGE_ORDER, FinalStageRecord, StageRecord

if TYPE_CHECKING:
    from .state import EvaluationState

FEEDBACK_SEPARATOR = " • "
FEEDBACK_PLACEHOLDER = "No comments captured for this stage."


@dataclass(frozen=True, slots=True)
class StageBreakdown:
    """One stage's share of the overall score."""

    key: str
    label: str
    average: float
    normalized: float
    weight: float
    contribution: float


@dataclass(frozen=True, slots=True)
class StageFeedback:
    key: str
    label: str
    narrative: str


@dataclass(frozen=True, slots=True)
class ConfidenceReport:
    """Complete confidence payload for the presentation layer."""

    per_stage: tuple[StageBreakdown, ...]
    overall: int
    recommendation: str
    feedback: tuple[StageFeedback, ...]

    @property
    def chart_series(self) -> list[tuple[str, float]]:
        """(label, average) pairs on the fixed 0-5 rating scale."""
        return [(stage.label, stage.average) for stage in self.per_stage]

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["per_stage"] = list(payload["per_stage"])
        payload["feedback"] = list(payload["feedback"])
        payload["chart"] = [
            {"label": label, "average": average} for label, average in self.chart_series
        ]
        return payload


class ConfidenceCalculator:
    """Turns completed stage averages into a weighted confidence score."""

    DEFAULT_THRESHOLDS: dict[str, float] = {
        "Highly Recommend": 85,
        "Recommend": 70,
        "Borderline": 55,
    }
    FALLBACK_RECOMMENDATION = "Not Recommended"

    def __init__(self, *, thresholds: dict[str, float] | None = None) -> None:
        merged = dict(self.DEFAULT_THRESHOLDS)
        if thresholds:
            merged.update(thresholds)
        # Evaluated top-down, so keep the highest bound first.
        self._thresholds = sorted(merged.items(), key=lambda item: item[1], reverse=True)
        self._logger = get_logger(__name__)

    def compute(
        self,
        state: "EvaluationState",
        weights: WeightConfig | None = None,
    ) -> ConfidenceReport:
        if not state.can_access("confidence"):
            raise StageOutOfOrder("confidence", "final")
        if weights is None:
            weights = state.weights

        breakdown: list[StageBreakdown] = []
        feedback: list[StageFeedback] = []
        for key in STAGE_ORDER:
            record = state.stage(key)
            breakdown.append(self._stage_breakdown(key, record, weights.for_stage(key)))
            feedback.append(
                StageFeedback(key=key, label=STAGE_LABELS[key], narrative=build_narrative(record))
            )

        overall = round_whole(sum(to_decimal(item.contribution) for item in breakdown))
        report = ConfidenceReport(
            per_stage=tuple(breakdown),
            overall=overall,
            recommendation=self.recommend(overall),
            feedback=tuple(feedback),
        )
        self._logger.info(
            "confidence.computed",
            overall=report.overall,
            recommendation=report.recommendation,
        )
        return report

    def recommend(self, score: float) -> str:
        for tier, lower_bound in self._thresholds:
            if score >= lower_bound:
                return tier
        return self.FALLBACK_RECOMMENDATION

    @staticmethod
    def _stage_breakdown(key: str, record: StageRecord, weight: float) -> StageBreakdown:
        average = to_decimal(record.average)
        normalized = average / RATING_MAX * 100
        contribution = round2(normalized * to_decimal(weight) / 100)
        return StageBreakdown(
            key=key,
            label=STAGE_LABELS[key],
            average=float(record.average),
            normalized=float(normalized),
            weight=float(weight),
            contribution=contribution,
        )


def build_narrative(record: StageRecord) -> str:
    """Join non-empty comments; the final interview appends its extra notes."""
    parts = [comment for comment in record.comments.values() if comment]
    if isinstance(record, FinalStageRecord):
        if record.salary_range:
            parts.append(f"Expected Salary: {record.salary_range}")
        if record.notice_period:
            parts.append(f"Notice Period: {record.notice_period}")
        if record.final_comments:
            parts.append(record.final_comments)
    return FEEDBACK_SEPARATOR.join(parts)
