from __future__ import annotations

from dataclasses import asdict
from typing import Any, List, Literal, Optional

from pydantic import Field

from calculators.base import Calculator, CalculatorArgs
from calculators.registry import register_calculator
from domain.schemas import Debt
from finance.debt import plan_debt_payoff, rank_debts_by_strategy, summarize_debts


class DebtPayoffArgs(CalculatorArgs):
    debts: List[Debt] = Field(default_factory=list)
    strategy: Literal["avalanche", "snowball"] = "avalanche"
    extra_payment: float = Field(default=0, description="Monthly amount paid on top of all minimum payments.")
    monthly_income: Optional[float] = Field(default=None, description="Used for the debt-to-income ratio.")


@register_calculator
class DebtPayoffCalculator(Calculator):
    name = "loans.debt_payoff"
    description = (
        "Order debts by the avalanche (highest rate first) or snowball (smallest balance first) strategy "
        "and simulate the payoff month by month."
    )
    args_model = DebtPayoffArgs

    def compute(self, args: DebtPayoffArgs) -> dict[str, Any]:
        ordered = rank_debts_by_strategy(args.debts, args.strategy)
        plan = plan_debt_payoff(args.debts, args.strategy, args.extra_payment)
        return {
            "strategy": plan.strategy.value,
            "order": [debt.name for debt in ordered],
            "monthly_budget": plan.monthly_budget,
            "total_months": plan.total_months,
            "total_interest": plan.total_interest,
            "schedule": [asdict(entry) for entry in plan.schedule],
            "summary": summarize_debts(args.debts, args.monthly_income),
        }
