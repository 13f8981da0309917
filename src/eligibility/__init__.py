"""Eligibility matcher — fixed per-axis predicates over benefit records."""

from src.eligibility.engine import evaluate_benefit, evaluate_benefits, match_benefits
from src.eligibility.rules import (
    age_eligible,
    circumstances_eligible,
    housing_eligible,
    income_eligible,
)
from src.schemas.benefits import BenefitRecord, UserResponses
from src.schemas.eligibility import BenefitMatchResult, EligibilityResult, RuleCondition

__all__ = [
    "match_benefits",
    "evaluate_benefit",
    "evaluate_benefits",
    "age_eligible",
    "income_eligible",
    "housing_eligible",
    "circumstances_eligible",
    "BenefitRecord",
    "UserResponses",
    "RuleCondition",
    "BenefitMatchResult",
    "EligibilityResult",
]
