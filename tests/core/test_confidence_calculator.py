from __future__ import annotations

import json

import pytest

from hireeval.core import ConfidenceCalculator, EvaluationState, FinalStageRecord, StageRecord
from hireeval.core.confidence import FEEDBACK_SEPARATOR, build_narrative
from hireeval.errors import StageOutOfOrder
from hireeval.schemas import Candidate, WeightConfig


def build_state(
    averages: dict[str, float],
    *,
    weights: WeightConfig | None = None,
    final_extra: dict | None = None,
) -> EvaluationState:
    return EvaluationState(
        weights=weights or WeightConfig(),
        candidate=Candidate(
            first_name="Grace",
            last_name="Hopper",
            email="grace@example.com",
            phone="555-0100",
        ),
        psychometric=StageRecord(scores={"a": 4}, average=averages["psychometric"]),
        technical=StageRecord(scores={"a": 4}, average=averages["technical"]),
        final=FinalStageRecord(scores={"a": 4}, average=averages["final"], **(final_extra or {})),
    )


def test_worked_example_recommend():
    state = build_state({"psychometric": 4.0, "technical": 3.5, "final": 4.5})

    report = ConfidenceCalculator().compute(state)

    assert [stage.normalized for stage in report.per_stage] == [80.0, 70.0, 90.0]
    assert [stage.contribution for stage in report.per_stage] == [16.0, 28.0, 36.0]
    assert report.overall == 80
    assert report.recommendation == "Recommend"


def test_contributions_are_rounded_then_summed():
    state = build_state({"psychometric": 3.33, "technical": 3.67, "final": 4.25})

    report = ConfidenceCalculator().compute(state)

    assert [stage.contribution for stage in report.per_stage] == [13.32, 29.36, 34.0]
    # 76.68 rounds up to 77
    assert report.overall == 77


def test_overall_rounds_half_up():
    weights = WeightConfig(psychometric=50, technical=50, final=0)
    # 3.25 -> 65 * 0.5 = 32.5 ; 3.0 -> 60 * 0.5 = 30.0 ; total 62.5
    state = build_state({"psychometric": 3.25, "technical": 3.0, "final": 5.0}, weights=weights)

    report = ConfidenceCalculator().compute(state)

    assert report.overall == 63
    assert report.recommendation == "Borderline"


@pytest.mark.parametrize(
    "score, expected",
    [
        (100, "Highly Recommend"),
        (85, "Highly Recommend"),
        (84, "Recommend"),
        (70, "Recommend"),
        (69, "Borderline"),
        (55, "Borderline"),
        (54, "Not Recommended"),
        (0, "Not Recommended"),
    ],
)
def test_recommendation_tiers(score, expected):
    assert ConfidenceCalculator().recommend(score) == expected


def test_threshold_overrides():
    calculator = ConfidenceCalculator(thresholds={"Recommend": 75})

    assert calculator.recommend(72) == "Borderline"
    assert calculator.recommend(75) == "Recommend"


def test_explicit_weights_take_precedence_over_state():
    state = build_state({"psychometric": 5.0, "technical": 1.0, "final": 1.0})

    report = ConfidenceCalculator().compute(
        state, WeightConfig(psychometric=100, technical=0, final=0)
    )

    assert report.overall == 100
    assert [stage.weight for stage in report.per_stage] == [100.0, 0.0, 0.0]


def test_compute_is_idempotent():
    state = build_state(
        {"psychometric": 4.25, "technical": 2.75, "final": 3.5},
        final_extra={"comments": {"a": "Calm"}, "salary_range": "90k"},
    )
    calculator = ConfidenceCalculator()

    first = calculator.compute(state)
    second = calculator.compute(state)

    assert first == second
    assert json.dumps(first.to_dict(), sort_keys=True) == json.dumps(second.to_dict(), sort_keys=True)


def test_compute_requires_final_stage():
    state = build_state({"psychometric": 4.0, "technical": 4.0, "final": 4.0})
    incomplete = EvaluationState(
        weights=state.weights,
        candidate=state.candidate,
        psychometric=state.psychometric,
        technical=state.technical,
    )

    with pytest.raises(StageOutOfOrder):
        ConfidenceCalculator().compute(incomplete)


def test_final_narrative_appends_extras_after_comments():
    record = FinalStageRecord(
        scores={"communication": 4, "culture_fit": 5},
        comments={"communication": "Clear speaker", "culture_fit": ""},
        average=4.5,
        salary_range="90k",
        notice_period="30 days",
        final_comments="Strong culture fit",
    )

    narrative = build_narrative(record)

    assert narrative == FEEDBACK_SEPARATOR.join(
        [
            "Clear speaker",
            "Expected Salary: 90k",
            "Notice Period: 30 days",
            "Strong culture fit",
        ]
    )


def test_narrative_empty_without_comments():
    assert build_narrative(StageRecord(scores={"a": 3}, comments={"a": ""}, average=3.0)) == ""


def test_chart_series_pairs_labels_with_averages():
    state = build_state({"psychometric": 4.0, "technical": 3.5, "final": 4.5})

    report = ConfidenceCalculator().compute(state)

    assert report.chart_series == [
        ("Psychometric", 4.0),
        ("Technical", 3.5),
        ("Final Interview", 4.5),
    ]
    assert report.to_dict()["chart"][2] == {"label": "Final Interview", "average": 4.5}
