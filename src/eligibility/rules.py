"""Per-axis eligibility criteria.

Each criterion answers "is this user NOT disqualified on this axis?" for one
benefit. A benefit that does not restrict an axis always passes it. Pure
functions, no I/O, answers are never mutated.
"""

from __future__ import annotations

from collections.abc import Callable

from src.eligibility.brackets import (
    DISABILITY_TAG,
    HOMEOWNER_STATUS,
    QUALIFYING_INCOME_LEVELS,
    VETERAN_TAG,
    bracket_range,
)
from src.schemas.benefits import BenefitRecord, UserResponses
from src.schemas.eligibility import RuleCondition

# ── Leaf predicates ───────────────────────────────────────────────────────


def age_eligible(benefit: BenefitRecord, answers: UserResponses) -> bool:
    """Bracket interval must overlap the benefit's [age_min, age_max].

    Either bound may be absent (unbounded on that side). An unknown bracket
    fails, but only when the benefit is age-restricted.
    """
    if not benefit.age_restricted:
        return True

    user_range = bracket_range(answers.age_bracket)
    if user_range is None:
        return False
    user_min, user_max = user_range

    if benefit.age_min is not None and user_max < benefit.age_min:
        return False
    if benefit.age_max is not None and user_min > benefit.age_max:
        return False
    return True


def income_eligible(benefit: BenefitRecord, answers: UserResponses) -> bool:
    if not benefit.income_restricted:
        return True
    return answers.income_level in QUALIFYING_INCOME_LEVELS


def housing_eligible(benefit: BenefitRecord, answers: UserResponses) -> bool:
    if not benefit.own_housing_required:
        return True
    return answers.housing_status == HOMEOWNER_STATUS


def circumstances_eligible(benefit: BenefitRecord, answers: UserResponses) -> bool:
    """Disability and veteran requirements are checked independently."""
    if benefit.disability_required and DISABILITY_TAG not in answers.circumstances:
        return False
    if benefit.veteran_required and VETERAN_TAG not in answers.circumstances:
        return False
    return True


# ── Condition builders ────────────────────────────────────────────────────


def check_age(benefit: BenefitRecord, answers: UserResponses) -> RuleCondition:
    if benefit.age_restricted:
        lo = "" if benefit.age_min is None else str(benefit.age_min)
        hi = "" if benefit.age_max is None else str(benefit.age_max)
        description = f"Age must fall within {lo or '0'}-{hi or 'any'}"
    else:
        description = "No age restriction"
    return RuleCondition(
        name="age",
        description=description,
        met=age_eligible(benefit, answers),
        value=answers.age_bracket,
    )


def check_income(benefit: BenefitRecord, answers: UserResponses) -> RuleCondition:
    return RuleCondition(
        name="income",
        description=(
            "Income must be low or moderate" if benefit.income_restricted else "No income restriction"
        ),
        met=income_eligible(benefit, answers),
        value=answers.income_level,
    )


def check_housing(benefit: BenefitRecord, answers: UserResponses) -> RuleCondition:
    return RuleCondition(
        name="housing",
        description=(
            "Applicant must own their home" if benefit.own_housing_required else "No housing restriction"
        ),
        met=housing_eligible(benefit, answers),
        value=answers.housing_status,
    )


def check_circumstances(benefit: BenefitRecord, answers: UserResponses) -> RuleCondition:
    required = []
    if benefit.disability_required:
        required.append(DISABILITY_TAG)
    if benefit.veteran_required:
        required.append(VETERAN_TAG)

    description = (
        f"Applicant must report: {', '.join(required)}" if required else "No special circumstances required"
    )
    return RuleCondition(
        name="circumstances",
        description=description,
        met=circumstances_eligible(benefit, answers),
        value=",".join(sorted(answers.circumstances)) or None,
    )


# ── Rule registry ─────────────────────────────────────────────────────────

# Evaluation order only affects the order of conditions in results
RULE_CHECKS: list[Callable[[BenefitRecord, UserResponses], RuleCondition]] = [
    check_age,
    check_income,
    check_housing,
    check_circumstances,
]
