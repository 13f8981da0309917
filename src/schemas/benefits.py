"""Pydantic schemas for benefit records and a user's questionnaire answers.

Pure data classes shared by the loader, the matcher and the renderer.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.models.enums import Circumstance


class BenefitRecord(BaseModel):
    """One benefit program row from the data source.

    Gating flags default to False: an unset flag imposes no restriction.
    """

    model_config = ConfigDict(frozen=True)

    # Display only, never used in matching
    service: str | None = None
    description: str | None = None
    url: str | None = None
    department: str | None = None

    # Eligibility gating
    age_restricted: bool = False
    age_min: int | None = None
    age_max: int | None = None
    income_restricted: bool = False
    own_housing_required: bool = False
    disability_required: bool = False
    veteran_required: bool = False


class UserResponses(BaseModel):
    """Finalized answers for one session, built once on submission.

    Enumerated answers are kept as plain strings: an unrecognized value is
    representable and simply fails any restriction that depends on it.
    """

    model_config = ConfigDict(frozen=True)

    age_bracket: str | None = None
    income_level: str | None = None
    household: str | None = None      # pass-through, no rule reads it
    employment: str | None = None     # pass-through, no rule reads it
    housing_status: str | None = None
    circumstances: frozenset[str] = Field(default_factory=frozenset)

    @field_validator("circumstances")
    @classmethod
    def drop_tags_when_none(cls, v: frozenset[str]) -> frozenset[str]:
        """"none" is exclusive: its presence empties the effective set."""
        if Circumstance.NONE.value in v:
            return frozenset()
        return v
