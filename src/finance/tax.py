from __future__ import annotations

from typing import Any, Mapping

from domain.models import DeductionOpportunity, TaxRegime, TaxResult
from finance.errors import InvalidInputError
from finance.numeric import require_non_negative, round_currency

STANDARD_DEDUCTION = 50_000
CESS_RATE = 0.04
SENIOR_CITIZEN_AGE = 60

SECTION_80C_LIMIT = 150_000
SECTION_80D_LIMIT = 25_000
SECTION_80D_SENIOR_LIMIT = 50_000
NPS_LIMIT = 50_000

# (lower bound, rate) pairs, highest bracket first.
OLD_REGIME_BRACKETS: tuple[tuple[float, float], ...] = (
    (1_000_000, 0.30),
    (500_000, 0.20),
    (250_000, 0.05),
)
NEW_REGIME_BRACKETS: tuple[tuple[float, float], ...] = (
    (1_500_000, 0.30),
    (1_200_000, 0.25),
    (900_000, 0.20),
    (600_000, 0.15),
    (300_000, 0.10),
    (250_000, 0.05),
)

DEFAULT_MARGINAL_RATE = 0.30


def _coerce_regime(regime: TaxRegime | str) -> TaxRegime:
    try:
        return TaxRegime(regime)
    except ValueError as exc:
        raise InvalidInputError(f"Unknown tax regime: {regime!r}") from exc


def _claimed(deductions: Mapping[str, Any], code: str) -> float:
    return require_non_negative(f"deductions[{code}]", deductions.get(code) or 0)


def section_80d_limit(age: float) -> int:
    return SECTION_80D_SENIOR_LIMIT if age >= SENIOR_CITIZEN_AGE else SECTION_80D_LIMIT


def old_regime_deductions(age: float, deductions: Mapping[str, Any]) -> float:
    # Unknown codes do not count, but must still be valid amounts.
    for code in deductions:
        _claimed(deductions, code)
    return (
        STANDARD_DEDUCTION
        + min(_claimed(deductions, "80C"), SECTION_80C_LIMIT)
        + min(_claimed(deductions, "80D"), section_80d_limit(age))
        + _claimed(deductions, "HRA")
        + min(_claimed(deductions, "NPS"), NPS_LIMIT)
    )


def apply_brackets(taxable_income: float, brackets: tuple[tuple[float, float], ...]) -> float:
    tax = 0.0
    remaining = taxable_income
    for lower_bound, rate in brackets:
        if remaining > lower_bound:
            tax += (remaining - lower_bound) * rate
            remaining = lower_bound
    return tax


def compute_tax(
    annual_income: float,
    regime: TaxRegime | str,
    age: float,
    deductions: Mapping[str, Any] | None = None,
) -> TaxResult:
    annual_income = require_non_negative("annual_income", annual_income)
    age = require_non_negative("age", age)
    regime = _coerce_regime(regime)
    deductions = deductions or {}

    if regime is TaxRegime.OLD:
        total_deductions = old_regime_deductions(age, deductions)
        brackets = OLD_REGIME_BRACKETS
    else:
        total_deductions = float(STANDARD_DEDUCTION)
        brackets = NEW_REGIME_BRACKETS

    taxable_income = max(0.0, annual_income - total_deductions)
    tax = apply_brackets(taxable_income, brackets)
    tax += tax * CESS_RATE
    return TaxResult(tax=round_currency(tax), deductions=total_deductions, taxable_income=taxable_income)


def compare_regimes(annual_income: float, age: float, deductions: Mapping[str, Any] | None = None) -> dict[str, Any]:
    old = compute_tax(annual_income, TaxRegime.OLD, age, deductions)
    new = compute_tax(annual_income, TaxRegime.NEW, age, deductions)
    recommended = TaxRegime.OLD if old.tax < new.tax else TaxRegime.NEW
    return {
        "old": old,
        "new": new,
        "take_home": {
            TaxRegime.OLD.value: round(annual_income - old.tax, 2),
            TaxRegime.NEW.value: round(annual_income - new.tax, 2),
        },
        "recommended_regime": recommended,
        "annual_savings": abs(old.tax - new.tax),
    }


def deduction_opportunities(
    age: float,
    deductions: Mapping[str, Any] | None = None,
    marginal_rate: float = DEFAULT_MARGINAL_RATE,
) -> list[DeductionOpportunity]:
    """Unused headroom in the capped sections and the tax it could save at `marginal_rate`."""
    age = require_non_negative("age", age)
    marginal_rate = require_non_negative("marginal_rate", marginal_rate)
    deductions = deductions or {}

    limits = (
        ("80C", SECTION_80C_LIMIT),
        ("80D", section_80d_limit(age)),
        ("NPS", NPS_LIMIT),
    )
    opportunities: list[DeductionOpportunity] = []
    for section, limit in limits:
        current = _claimed(deductions, section)
        remaining = max(0.0, limit - current)
        savings = round_currency(remaining * marginal_rate)
        if savings > 0:
            opportunities.append(
                DeductionOpportunity(
                    section=section,
                    limit=limit,
                    current=current,
                    remaining=remaining,
                    estimated_savings=savings,
                )
            )
    return opportunities
