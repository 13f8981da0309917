"""Tests for the eligibility matcher.

Each test builds BenefitRecords and UserResponses and asserts which
benefits survive the four criteria.
"""

from __future__ import annotations

import pytest

from src.eligibility import (
    age_eligible,
    circumstances_eligible,
    evaluate_benefits,
    housing_eligible,
    income_eligible,
    match_benefits,
)
from src.schemas.benefits import BenefitRecord, UserResponses


def _answers(**overrides) -> UserResponses:
    base = {
        "age_bracket": "18-64",
        "income_level": "moderate",
        "household": "single",
        "employment": "employed",
        "housing_status": "renter",
        "circumstances": frozenset(),
    }
    base.update(overrides)
    return UserResponses(**base)


class TestPermissiveDefaults:
    """A record that restricts nothing passes every axis for any answers."""

    @pytest.fixture()
    def open_benefit(self):
        return BenefitRecord(service="Library Card")

    @pytest.mark.parametrize("answers", [
        UserResponses(),
        _answers(age_bracket="under18", income_level="high", housing_status="other"),
        _answers(age_bracket="unknown", circumstances=frozenset({"veteran"})),
    ])
    def test_every_axis_passes(self, open_benefit, answers):
        assert age_eligible(open_benefit, answers)
        assert income_eligible(open_benefit, answers)
        assert housing_eligible(open_benefit, answers)
        assert circumstances_eligible(open_benefit, answers)
        assert match_benefits([open_benefit], answers) == [open_benefit]


class TestAgeCriterion:

    def test_senior_only_benefit(self):
        benefit = BenefitRecord(age_restricted=True, age_min=65)
        assert age_eligible(benefit, _answers(age_bracket="65plus"))
        assert not age_eligible(benefit, _answers(age_bracket="18-64"))
        assert not age_eligible(benefit, _answers(age_bracket="under18"))

    def test_youth_only_benefit(self):
        benefit = BenefitRecord(age_restricted=True, age_max=17)
        assert age_eligible(benefit, _answers(age_bracket="under18"))
        assert not age_eligible(benefit, _answers(age_bracket="18-64"))
        assert not age_eligible(benefit, _answers(age_bracket="65plus"))

    def test_partial_overlap_passes(self):
        # 60-70 overlaps both the adult and the senior bracket
        benefit = BenefitRecord(age_restricted=True, age_min=60, age_max=70)
        assert age_eligible(benefit, _answers(age_bracket="18-64"))
        assert age_eligible(benefit, _answers(age_bracket="65plus"))
        assert not age_eligible(benefit, _answers(age_bracket="under18"))

    def test_boundary_touch_counts_as_overlap(self):
        benefit = BenefitRecord(age_restricted=True, age_min=64, age_max=64)
        assert age_eligible(benefit, _answers(age_bracket="18-64"))
        assert not age_eligible(benefit, _answers(age_bracket="65plus"))

    def test_restricted_without_bounds_accepts_any_known_bracket(self):
        benefit = BenefitRecord(age_restricted=True)
        for bracket in ("under18", "18-64", "65plus"):
            assert age_eligible(benefit, _answers(age_bracket=bracket))

    @pytest.mark.parametrize("bracket", [None, "", "40", "senior"])
    def test_unknown_bracket_fails_only_restricted(self, bracket):
        restricted = BenefitRecord(age_restricted=True)
        unrestricted = BenefitRecord(age_restricted=False, age_min=65)
        answers = _answers(age_bracket=bracket)
        assert not age_eligible(restricted, answers)
        assert age_eligible(unrestricted, answers)

    def test_bounds_ignored_when_not_restricted(self):
        benefit = BenefitRecord(age_restricted=False, age_min=65, age_max=120)
        assert age_eligible(benefit, _answers(age_bracket="under18"))


class TestIncomeCriterion:

    @pytest.mark.parametrize("level,expected", [
        ("low", True),
        ("moderate", True),
        ("high", False),
        ("Low", False),
        (None, False),
    ])
    def test_allowlist(self, level, expected):
        benefit = BenefitRecord(income_restricted=True)
        assert income_eligible(benefit, _answers(income_level=level)) is expected


class TestHousingCriterion:

    @pytest.mark.parametrize("status,expected", [
        ("owner", True),
        ("renter", False),
        ("other", False),
        (None, False),
    ])
    def test_owner_required(self, status, expected):
        benefit = BenefitRecord(own_housing_required=True)
        assert housing_eligible(benefit, _answers(housing_status=status)) is expected


class TestCircumstancesCriterion:

    def test_disability_required(self):
        benefit = BenefitRecord(disability_required=True)
        assert circumstances_eligible(benefit, _answers(circumstances=frozenset({"disability"})))
        assert not circumstances_eligible(benefit, _answers(circumstances=frozenset({"veteran"})))
        assert not circumstances_eligible(benefit, _answers())

    def test_veteran_required(self):
        benefit = BenefitRecord(veteran_required=True)
        assert circumstances_eligible(benefit, _answers(circumstances=frozenset({"veteran"})))
        assert not circumstances_eligible(benefit, _answers(circumstances=frozenset({"disability"})))

    def test_both_required_needs_superset(self):
        benefit = BenefitRecord(disability_required=True, veteran_required=True)
        both = _answers(circumstances=frozenset({"disability", "veteran"}))
        assert circumstances_eligible(benefit, both)
        assert not circumstances_eligible(benefit, _answers(circumstances=frozenset({"disability"})))
        assert not circumstances_eligible(benefit, _answers(circumstances=frozenset({"veteran"})))

    def test_none_tag_empties_the_set(self):
        answers = _answers(circumstances=frozenset({"none", "disability"}))
        assert answers.circumstances == frozenset()
        assert not circumstances_eligible(BenefitRecord(disability_required=True), answers)


class TestMatchBenefits:

    @pytest.fixture()
    def records(self):
        return [
            BenefitRecord(service="Senior Discount", age_restricted=True, age_min=65),
            BenefitRecord(service="Energy Assistance", income_restricted=True),
            BenefitRecord(service="Property Tax Relief", own_housing_required=True),
            BenefitRecord(service="Veteran Pension", veteran_required=True),
            BenefitRecord(service="Transit Pass"),
            BenefitRecord(service="Disabled Veteran Grant", disability_required=True, veteran_required=True),
        ]

    def test_adult_renter_low_income(self, records):
        result = match_benefits(records, _answers(income_level="low"))
        assert [b.service for b in result] == ["Energy Assistance", "Transit Pass"]

    def test_senior_owner_disabled_veteran(self, records):
        answers = _answers(
            age_bracket="65plus",
            income_level="high",
            housing_status="owner",
            circumstances=frozenset({"disability", "veteran"}),
        )
        result = match_benefits(records, answers)
        assert [b.service for b in result] == [
            "Senior Discount",
            "Property Tax Relief",
            "Veteran Pension",
            "Transit Pass",
            "Disabled Veteran Grant",
        ]

    def test_output_is_subsequence_of_input(self, records):
        result = match_benefits(records, _answers(income_level="low", housing_status="owner"))
        it = iter(records)
        assert all(any(b is r for r in it) for b in result)
        assert len(result) == len({id(b) for b in result})

    def test_empty_records(self):
        assert match_benefits([], _answers()) == []

    def test_deterministic(self, records):
        answers = _answers(income_level="low")
        assert match_benefits(records, answers) == match_benefits(records, answers)

    def test_answers_not_mutated(self, records):
        answers = _answers(circumstances=frozenset({"veteran"}))
        before = answers.model_dump()
        match_benefits(records, answers)
        assert answers.model_dump() == before


class TestScenarios:

    def test_senior_benefit_excludes_adult(self):
        records = [BenefitRecord(age_restricted=True, age_min=65, age_max=None, income_restricted=False)]
        assert match_benefits(records, _answers(age_bracket="18-64")) == []

    def test_disability_benefit_includes_disabled_user(self):
        records = [BenefitRecord(disability_required=True, veteran_required=False)]
        answers = _answers(circumstances=frozenset({"disability"}))
        assert match_benefits(records, answers) == records

    def test_income_benefit_excludes_high_income(self):
        records = [BenefitRecord(income_restricted=True)]
        assert match_benefits(records, _answers(income_level="high")) == []


class TestEvaluateBenefits:

    def test_conditions_and_reason(self):
        benefit = BenefitRecord(service="Home Repair", own_housing_required=True, income_restricted=True)
        result = evaluate_benefits([benefit], _answers(income_level="high"))

        evaluated = result.results[0]
        assert evaluated.eligible is False
        assert [c.name for c in evaluated.conditions] == ["age", "income", "housing", "circumstances"]
        assert [c.met for c in evaluated.conditions] == [True, False, False, True]
        assert evaluated.ineligibility_reason == "Income must be low or moderate"
        assert result.matches == []

    def test_matches_agree_with_match_benefits(self):
        records = [
            BenefitRecord(service="A", income_restricted=True),
            BenefitRecord(service="B"),
            BenefitRecord(service="C", veteran_required=True),
        ]
        answers = _answers(income_level="low")
        assert evaluate_benefits(records, answers).matches == match_benefits(records, answers)

    def test_summary(self):
        records = [BenefitRecord(), BenefitRecord(income_restricted=True)]
        result = evaluate_benefits(records, _answers(income_level="high"))
        assert result.answers_summary["records_evaluated"] == 2
        assert result.answers_summary["records_matched"] == 1
        assert result.answers_summary["income_level"] == "high"
        assert result.results[0].ineligibility_reason is None
