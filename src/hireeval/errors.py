"""Typed, user-correctable validation failures raised by workflow commands."""

from __future__ import annotations

from typing import Sequence


class EvaluationError(ValueError):
    """Base class for recoverable evaluation input errors."""

    code = "evaluation_error"
    default_message = "Evaluation input is invalid."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class IncompleteCandidate(EvaluationError):
    code = "incomplete_candidate"
    default_message = "Please complete all required candidate details."

    def __init__(self, missing: Sequence[str] = (), message: str | None = None):
        super().__init__(message)
        self.missing = list(missing)


class IncompleteStage(EvaluationError):
    """Raised when any criterion of a stage lacks a score on the rating scale."""

    code = "incomplete_stage"
    default_message = "Please score every criterion before saving."

    def __init__(self, stage: str, missing: Sequence[str], message: str | None = None):
        super().__init__(message)
        self.stage = stage
        self.missing = list(missing)


class StageOutOfOrder(EvaluationError):
    """Raised when a stage is submitted before its predecessor is complete."""

    code = "stage_out_of_order"
    default_message = "Save the previous stage before proceeding."

    def __init__(self, stage: str, required: str | None = None, message: str | None = None):
        super().__init__(message)
        self.stage = stage
        self.required = required


class InvalidWeights(EvaluationError):
    code = "invalid_weights"
    default_message = "Weights must be numeric and total 100%."


__all__ = [
    "EvaluationError",
    "IncompleteCandidate",
    "IncompleteStage",
    "StageOutOfOrder",
    "InvalidWeights",
]
