"""Questionnaire step definitions.

The questionnaire is a fixed, linear sequence of six slides. Each step
collects one answer field; only the circumstances step is multiple choice.
"""

from __future__ import annotations

from src.models.enums import (
    AgeBracket,
    Circumstance,
    EmploymentStatus,
    HouseholdType,
    HousingStatus,
    IncomeLevel,
    InputKind,
)
from src.schemas.questionnaire import StepDefinition, StepOption


def _opt(value: str, label: str) -> StepOption:
    return StepOption(value=value, label=label)


STEPS: tuple[StepDefinition, ...] = (
    StepDefinition(
        number=1,
        field="age",
        prompt="What is your age?",
        options=(
            _opt(AgeBracket.UNDER_18.value, "Under 18"),
            _opt(AgeBracket.ADULT.value, "18 to 64"),
            _opt(AgeBracket.SENIOR.value, "65 or older"),
        ),
    ),
    StepDefinition(
        number=2,
        field="income",
        prompt="How would you describe your household income?",
        options=(
            _opt(IncomeLevel.LOW.value, "Low income"),
            _opt(IncomeLevel.MODERATE.value, "Moderate income"),
            _opt(IncomeLevel.HIGH.value, "Higher income"),
        ),
    ),
    StepDefinition(
        number=3,
        field="household",
        prompt="Who lives in your household?",
        options=(
            _opt(HouseholdType.SINGLE.value, "Just me"),
            _opt(HouseholdType.COUPLE.value, "Me and a partner"),
            _opt(HouseholdType.FAMILY.value, "Family with children"),
            _opt(HouseholdType.SHARED.value, "Shared with others"),
        ),
    ),
    StepDefinition(
        number=4,
        field="employment",
        prompt="What is your employment status?",
        options=(
            _opt(EmploymentStatus.EMPLOYED.value, "Employed"),
            _opt(EmploymentStatus.SELF_EMPLOYED.value, "Self-employed"),
            _opt(EmploymentStatus.UNEMPLOYED.value, "Unemployed"),
            _opt(EmploymentStatus.RETIRED.value, "Retired"),
            _opt(EmploymentStatus.STUDENT.value, "Student"),
        ),
    ),
    StepDefinition(
        number=5,
        field="housing",
        prompt="What is your housing situation?",
        options=(
            _opt(HousingStatus.OWNER.value, "I own my home"),
            _opt(HousingStatus.RENTER.value, "I rent"),
            _opt(HousingStatus.OTHER.value, "Other"),
        ),
    ),
    StepDefinition(
        number=6,
        field="circumstances",
        prompt="Do any of these apply to you?",
        kind=InputKind.MULTIPLE,
        required=False,
        options=(
            _opt(Circumstance.DISABILITY.value, "I have a disability"),
            _opt(Circumstance.VETERAN.value, "I am a veteran"),
            _opt(Circumstance.NONE.value, "None of the above"),
        ),
    ),
)

TOTAL_STEPS: int = len(STEPS)

STEPS_BY_FIELD: dict[str, StepDefinition] = {s.field: s for s in STEPS}

VALIDATION_MESSAGE = "Please select an option before continuing."


def get_step(number: int) -> StepDefinition:
    """Return the step with the given 1-based number."""
    if not 1 <= number <= TOTAL_STEPS:
        msg = f"Step {number} out of range 1..{TOTAL_STEPS}"
        raise ValueError(msg)
    return STEPS[number - 1]
