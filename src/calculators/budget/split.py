from __future__ import annotations

from dataclasses import asdict
from typing import Any, Optional

from pydantic import Field, model_validator

from calculators.base import Calculator, CalculatorArgs
from calculators.registry import register_calculator
from finance.budget import after_tax_income, budget_insights, compute_budget_split


class BudgetSplitArgs(CalculatorArgs):
    after_tax_income: Optional[float] = Field(default=None, description="Monthly take-home income.")
    monthly_income: Optional[float] = Field(
        default=None,
        description="Gross monthly income; take-home is derived with a flat 30% tax assumption.",
    )
    monthly_expenses: Optional[float] = Field(default=None, description="When given, insights are included.")

    @model_validator(mode="after")
    def require_income(self) -> "BudgetSplitArgs":
        if self.after_tax_income is None and self.monthly_income is None:
            raise ValueError("after_tax_income or monthly_income is required")
        return self


@register_calculator
class BudgetSplitCalculator(Calculator):
    name = "budget.split"
    description = "50/30/20 split of take-home income into essentials, wants and savings."
    args_model = BudgetSplitArgs

    def compute(self, args: BudgetSplitArgs) -> dict[str, Any]:
        net_income = args.after_tax_income
        if net_income is None:
            net_income = after_tax_income(args.monthly_income)
        split = compute_budget_split(net_income)
        result: dict[str, Any] = {"after_tax_income": round(net_income, 2), **asdict(split)}
        if args.monthly_income is not None and args.monthly_expenses is not None:
            result["insights"] = budget_insights(args.monthly_income, args.monthly_expenses, split)
        return result
