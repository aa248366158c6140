"""Serialization of a finished evaluation for downstream consumers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pendulum

from . import __version__
from .core import EvaluationState
from .core.stages import STAGE_ORDER


def build_report(state: EvaluationState) -> dict[str, Any]:
    """Assemble the JSON-ready document for a state with a computed result."""
    candidate = state.candidate.model_dump(mode="json") if state.candidate else None
    return {
        "metadata": {
            "timestamp": pendulum.now().to_iso8601_string(),
            "app_version": __version__,
            "phase": state.phase.value,
        },
        "candidate": candidate,
        "weights": state.weights.model_dump(),
        "stages": {key: state.stage(key).model_dump(mode="json") for key in STAGE_ORDER},
        "confidence": state.confidence.to_dict() if state.confidence else None,
    }


class ReportWriter:
    """Persist evaluation reports."""

    def write(self, path: Path, payload: dict[str, Any]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
