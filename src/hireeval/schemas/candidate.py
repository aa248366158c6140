"""Candidate identity schema."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Candidate(BaseModel):
    """Identity record of the candidate under evaluation."""

    first_name: str = Field(
        min_length=1,
        validation_alias=AliasChoices("first_name", "firstName"),
    )
    last_name: str = Field(
        min_length=1,
        validation_alias=AliasChoices("last_name", "lastName"),
    )
    email: str = Field(min_length=1)
    phone: str = Field(min_length=1)

    model_config = ConfigDict(extra="forbid", frozen=True, str_strip_whitespace=True)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
