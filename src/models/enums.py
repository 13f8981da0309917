"""Domain enums used across the questionnaire, the matcher and the schemas.

All enums use the str mixin so they compare equal to the raw answer strings
posted by forms and JSON clients.
"""

from __future__ import annotations

from enum import Enum


class AgeBracket(str, Enum):
    """Coarse age ranges offered on the first question."""

    UNDER_18 = "under18"
    ADULT = "18-64"
    SENIOR = "65plus"


class IncomeLevel(str, Enum):
    """Self-reported household income level."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class HouseholdType(str, Enum):
    """Household composition — collected, not used by any rule yet."""

    SINGLE = "single"
    COUPLE = "couple"
    FAMILY = "family"
    SHARED = "shared"


class EmploymentStatus(str, Enum):
    """Employment situation — collected, not used by any rule yet."""

    EMPLOYED = "employed"
    SELF_EMPLOYED = "self-employed"
    UNEMPLOYED = "unemployed"
    RETIRED = "retired"
    STUDENT = "student"


class HousingStatus(str, Enum):
    """Housing situation — only OWNER unlocks homeownership benefits."""

    OWNER = "owner"
    RENTER = "renter"
    OTHER = "other"


class Circumstance(str, Enum):
    """Special circumstance tags; NONE excludes every other tag."""

    DISABILITY = "disability"
    VETERAN = "veteran"
    NONE = "none"


class InputKind(str, Enum):
    """How a questionnaire step collects its answer."""

    SINGLE = "single"      # radio group, exactly one selection
    MULTIPLE = "multiple"  # checkbox group, zero or more selections


class CatalogStatus(str, Enum):
    """Load status of the benefits catalog."""

    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class ScreenerSection(str, Enum):
    """The one page section visible to a session at a time."""

    LOADING = "loading"
    QUESTIONNAIRE = "questionnaire"
    RESULTS = "results"
    ERROR = "error"
