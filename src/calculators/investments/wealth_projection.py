from __future__ import annotations

from dataclasses import asdict
from typing import Any, List

from pydantic import Field

from calculators.base import Calculator, CalculatorArgs
from calculators.registry import register_calculator
from finance.investments import SCENARIO_HORIZONS, compare_scenarios, project_wealth


class WealthProjectionArgs(CalculatorArgs):
    monthly_savings: float
    annual_return_percent: float = 12
    inflation_percent: float = 6
    years: int = 30


class ScenarioArgs(CalculatorArgs):
    income: float = Field(description="Monthly income.")
    expenses: float = Field(description="Monthly expenses.")
    annual_return_percent: float = 12
    inflation_percent: float = 6
    horizons: List[int] = Field(default_factory=lambda: list(SCENARIO_HORIZONS))


@register_calculator
class WealthProjectionCalculator(Calculator):
    name = "investments.wealth_projection"
    description = "Year-by-year inflation-adjusted wealth from a fixed monthly saving."
    args_model = WealthProjectionArgs

    def compute(self, args: WealthProjectionArgs) -> dict[str, Any]:
        points = project_wealth(args.monthly_savings, args.annual_return_percent, args.inflation_percent, args.years)
        return {
            "real_return_percent": round(args.annual_return_percent - args.inflation_percent, 2),
            "projection": [asdict(point) for point in points],
            "final_value": points[-1].value,
        }


@register_calculator
class ScenarioComparisonCalculator(Calculator):
    name = "investments.scenarios"
    description = "Compare conservative, current and optimistic savings scenarios at fixed horizons."
    args_model = ScenarioArgs

    def compute(self, args: ScenarioArgs) -> dict[str, Any]:
        scenarios = compare_scenarios(
            args.income,
            args.expenses,
            args.annual_return_percent,
            args.inflation_percent,
            args.horizons,
        )
        return {"scenarios": scenarios}
