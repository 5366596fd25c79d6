from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, Literal

from pydantic import Field

from calculators.base import Calculator, CalculatorArgs
from calculators.registry import register_calculator
from finance.tax import compare_regimes, compute_tax, deduction_opportunities


class IncomeTaxArgs(CalculatorArgs):
    annual_income: float
    regime: Literal["old", "new"] = "new"
    age: float = 30
    deductions: Dict[str, float] = Field(
        default_factory=dict,
        description="Annual amounts claimed per section: 80C, 80D, HRA, NPS.",
    )


class RegimeComparisonArgs(CalculatorArgs):
    annual_income: float
    age: float = 30
    deductions: Dict[str, float] = Field(default_factory=dict)


@register_calculator
class IncomeTaxCalculator(Calculator):
    name = "tax.income_tax"
    description = "Income tax under the old or new slab regime, including 4% cess."
    args_model = IncomeTaxArgs

    def compute(self, args: IncomeTaxArgs) -> dict[str, Any]:
        result = compute_tax(args.annual_income, args.regime, args.age, args.deductions)
        return {"regime": args.regime, **asdict(result)}


@register_calculator
class RegimeComparisonCalculator(Calculator):
    name = "tax.regime_comparison"
    description = "Compare old and new regime tax, take-home pay and unused deduction headroom."
    args_model = RegimeComparisonArgs

    def compute(self, args: RegimeComparisonArgs) -> dict[str, Any]:
        comparison = compare_regimes(args.annual_income, args.age, args.deductions)
        return {
            "old": asdict(comparison["old"]),
            "new": asdict(comparison["new"]),
            "take_home": comparison["take_home"],
            "recommended_regime": comparison["recommended_regime"].value,
            "annual_savings": comparison["annual_savings"],
            "opportunities": [asdict(o) for o in deduction_opportunities(args.age, args.deductions)],
        }
