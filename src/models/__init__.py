"""Domain enums shared by the screener modules."""

from __future__ import annotations

from src.models.enums import (
    AgeBracket,
    CatalogStatus,
    Circumstance,
    EmploymentStatus,
    HouseholdType,
    HousingStatus,
    IncomeLevel,
    InputKind,
    ScreenerSection,
)

__all__ = [
    "AgeBracket",
    "CatalogStatus",
    "Circumstance",
    "EmploymentStatus",
    "HouseholdType",
    "HousingStatus",
    "IncomeLevel",
    "InputKind",
    "ScreenerSection",
]
