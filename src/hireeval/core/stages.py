"""Stage definitions, criteria catalog and per-stage score records."""

from __future__ import annotations

import re
from typing import Any, Literal, Mapping, Sequence

from pydantic import BaseModel, ConfigDict, Field

from ..errors import IncompleteStage
from .rounding import round2, to_decimal

StageKey = Literal["psychometric", "technical", "final"]

STAGE_ORDER: tuple[StageKey, ...] = ("psychometric", "technical", "final")

STAGE_LABELS: dict[StageKey, str] = {
    "psychometric": "Psychometric",
    "technical": "Technical",
    "final": "Final Interview",
}

RATING_MIN = 1
RATING_MAX = 5

DEFAULT_CRITERIA: dict[StageKey, tuple[str, ...]] = {
    "psychometric": (
        "cognitive_ability",
        "personality_fit",
        "emotional_intelligence",
        "work_style",
    ),
    "technical": (
        "problem_solving",
        "technical_knowledge",
        "code_quality",
        "system_design",
    ),
    "final": (
        "communication",
        "culture_fit",
        "leadership",
        "motivation",
    ),
}

_INTEGER_PATTERN = re.compile(r"[+-]?\d+")


class StageCatalog:
    """Criteria known to each stage."""

    def __init__(self, criteria: Mapping[str, Sequence[str]] | None = None) -> None:
        merged: dict[str, tuple[str, ...]] = dict(DEFAULT_CRITERIA)
        for stage, names in (criteria or {}).items():
            if stage not in STAGE_ORDER:
                raise ValueError(f"Unknown stage in criteria config: {stage!r}")
            cleaned = tuple(name.strip() for name in names if name and name.strip())
            if not cleaned:
                raise ValueError(f"Stage {stage!r} must define at least one criterion")
            merged[stage] = cleaned
        self._criteria = merged

    def criteria(self, stage: str) -> tuple[str, ...]:
        try:
            return self._criteria[stage]
        except KeyError as exc:
            raise KeyError(f"Unknown stage: {stage!r}") from exc

    def as_dict(self) -> dict[str, list[str]]:
        return {stage: list(names) for stage, names in self._criteria.items()}


def parse_score(value: Any) -> int | None:
    """Return the rating for a raw score, or None when it is not on the scale.

    Zero counts as "not yet scored".
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        score = value
    elif isinstance(value, float):
        if not value.is_integer():
            return None
        score = int(value)
    elif isinstance(value, str):
        text = value.strip()
        if not _INTEGER_PATTERN.fullmatch(text):
            return None
        score = int(text)
    else:
        return None
    if score < RATING_MIN or score > RATING_MAX:
        return None
    return score


class StageRecord(BaseModel):
    """Scores and comments captured for one stage.

    ``average`` stays unset until every criterion of the stage is scored.
    """

    scores: dict[str, int] = Field(default_factory=dict)
    comments: dict[str, str] = Field(default_factory=dict)
    average: float | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def is_complete(self) -> bool:
        return self.average is not None

    @classmethod
    def submit(
        cls,
        criteria: Sequence[str],
        raw_scores: Mapping[str, Any],
        raw_comments: Mapping[str, Any] | None = None,
        *,
        stage: str = "",
        **extra: Any,
    ) -> "StageRecord":
        """Build a complete record, rejecting the whole submission on any gap."""
        if not criteria:
            raise IncompleteStage(stage, [])

        scores: dict[str, int] = {}
        missing: list[str] = []
        for criterion in criteria:
            score = parse_score(raw_scores.get(criterion))
            if score is None:
                missing.append(criterion)
                continue
            scores[criterion] = score
        if missing:
            raise IncompleteStage(stage, missing)

        raw_comments = raw_comments or {}
        comments = {
            criterion: str(raw_comments.get(criterion) or "").strip()
            for criterion in criteria
        }
        average = round2(to_decimal(sum(scores.values())) / len(scores))
        return cls(scores=scores, comments=comments, average=average, **extra)


class FinalStageRecord(StageRecord):
    """Final interview record; the extra fields never affect the average."""

    salary_range: str = ""
    notice_period: str = ""
    final_comments: str = ""

    @classmethod
    def submit(
        cls,
        criteria: Sequence[str],
        raw_scores: Mapping[str, Any],
        raw_comments: Mapping[str, Any] | None = None,
        *,
        stage: str = "final",
        salary_range: str = "",
        notice_period: str = "",
        final_comments: str = "",
        **extra: Any,
    ) -> "FinalStageRecord":
        return super().submit(
            criteria,
            raw_scores,
            raw_comments,
            stage=stage,
            salary_range=(salary_range or "").strip(),
            notice_period=(notice_period or "").strip(),
            final_comments=(final_comments or "").strip(),
            **extra,
        )
