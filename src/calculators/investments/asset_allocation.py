from __future__ import annotations

from dataclasses import asdict
from typing import Any, Literal

from calculators.base import Calculator, CalculatorArgs
from calculators.registry import register_calculator
from finance.investments import allocate_surplus


class AssetAllocationArgs(CalculatorArgs):
    income: float
    expenses: float
    risk_tolerance: Literal["low", "medium", "high"] = "medium"


@register_calculator
class AssetAllocationCalculator(Calculator):
    name = "investments.asset_allocation"
    description = "Split the monthly investable surplus across asset classes by risk tolerance."
    args_model = AssetAllocationArgs

    def compute(self, args: AssetAllocationArgs) -> dict[str, Any]:
        slices = allocate_surplus(args.income, args.expenses, args.risk_tolerance)
        return {
            "risk_tolerance": args.risk_tolerance,
            "investable_surplus": round(max(0.0, args.income - args.expenses), 2),
            "allocation": [asdict(s) for s in slices],
        }
