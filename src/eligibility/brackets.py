"""Answer-to-rule mappings used by the eligibility criteria."""

from __future__ import annotations

from src.models.enums import AgeBracket, Circumstance, HousingStatus, IncomeLevel

# Concrete age interval (inclusive) each bracket stands for
AGE_BRACKET_RANGES: dict[AgeBracket, tuple[int, int]] = {
    AgeBracket.UNDER_18: (0, 17),
    AgeBracket.ADULT: (18, 64),
    AgeBracket.SENIOR: (65, 120),
}

# Income-restricted benefits accept these levels only
QUALIFYING_INCOME_LEVELS: frozenset[str] = frozenset({
    IncomeLevel.LOW.value,
    IncomeLevel.MODERATE.value,
})

HOMEOWNER_STATUS: str = HousingStatus.OWNER.value

DISABILITY_TAG: str = Circumstance.DISABILITY.value
VETERAN_TAG: str = Circumstance.VETERAN.value


def bracket_range(bracket: str | None) -> tuple[int, int] | None:
    """Return the age interval for a bracket, or None if it is unknown."""
    if bracket is None:
        return None
    try:
        return AGE_BRACKET_RANGES[AgeBracket(bracket)]
    except ValueError:
        return None
