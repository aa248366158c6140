"""Raw stage submission payload accepted at the command boundary."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class StageSubmission(BaseModel):
    """Unvalidated scores and comments for one stage, as entered by a reviewer.

    Scores stay raw here; they are parsed against the stage criteria when the
    stage record is built. Final-interview fields are ignored for other stages.
    """

    scores: dict[str, Any] = Field(default_factory=dict)
    comments: dict[str, Any] = Field(default_factory=dict)
    salary_range: str = Field(
        default="",
        validation_alias=AliasChoices("salary_range", "salaryRange"),
    )
    notice_period: str = Field(
        default="",
        validation_alias=AliasChoices("notice_period", "noticePeriod"),
    )
    final_comments: str = Field(
        default="",
        validation_alias=AliasChoices("final_comments", "finalComments"),
    )

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    @field_validator("salary_range", "notice_period", "final_comments", mode="before")
    @classmethod
    def none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value
