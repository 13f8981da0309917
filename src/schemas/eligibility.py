"""Pydantic schemas for the eligibility matcher output.

Used for audit logging and for explaining why a benefit was excluded.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from src.schemas.benefits import BenefitRecord


class RuleCondition(BaseModel):
    """Outcome of one eligibility axis for one benefit."""

    name: str                          # "age", "income", "housing", "circumstances"
    description: str
    met: bool
    value: str | None = None           # the user answer the axis looked at


class BenefitMatchResult(BaseModel):
    """All axis outcomes for a single benefit."""

    benefit: BenefitRecord
    eligible: bool
    conditions: list[RuleCondition] = Field(default_factory=list)
    ineligibility_reason: str | None = None


class EligibilityResult(BaseModel):
    """Full evaluation of a record set against one set of answers."""

    results: list[BenefitMatchResult]
    matches: list[BenefitRecord]       # eligible records, input order
    answers_summary: dict[str, Any] = Field(default_factory=dict)
