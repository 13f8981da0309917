"""Eligibility engine — filters benefit records against one set of answers.

Pure Python. No I/O, no ranking: a benefit is either in or out, and the
output keeps the input order.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from src.eligibility.rules import RULE_CHECKS
from src.schemas.benefits import BenefitRecord, UserResponses
from src.schemas.eligibility import BenefitMatchResult, EligibilityResult


def _first_failed(result: BenefitMatchResult) -> str | None:
    for c in result.conditions:
        if not c.met:
            return c.description
    return None


def evaluate_benefit(benefit: BenefitRecord, answers: UserResponses) -> BenefitMatchResult:
    """Run every criterion on one benefit and keep the per-axis outcomes."""
    conditions = [check(benefit, answers) for check in RULE_CHECKS]
    result = BenefitMatchResult(
        benefit=benefit,
        eligible=all(c.met for c in conditions),
        conditions=conditions,
    )
    if not result.eligible:
        result.ineligibility_reason = _first_failed(result)
    return result


def _answers_summary(answers: UserResponses, total: int, matched: int) -> dict[str, Any]:
    """Build a summary dict for audit logging."""
    return {
        "age_bracket": answers.age_bracket,
        "income_level": answers.income_level,
        "household": answers.household,
        "employment": answers.employment,
        "housing_status": answers.housing_status,
        "circumstances": sorted(answers.circumstances),
        "records_evaluated": total,
        "records_matched": matched,
    }


def evaluate_benefits(records: Sequence[BenefitRecord], answers: UserResponses) -> EligibilityResult:
    """Evaluate every record and collect the eligible ones in input order."""
    results = [evaluate_benefit(benefit, answers) for benefit in records]
    matches = [r.benefit for r in results if r.eligible]
    return EligibilityResult(
        results=results,
        matches=matches,
        answers_summary=_answers_summary(answers, len(results), len(matches)),
    )


def match_benefits(records: Sequence[BenefitRecord], answers: UserResponses) -> list[BenefitRecord]:
    """Return the records for which every eligibility axis passes.

    A stable filter: the result is a subsequence of ``records``.
    """
    return [
        benefit for benefit in records
        if all(check(benefit, answers).met for check in RULE_CHECKS)
    ]
