from __future__ import annotations

from typing import Any

from domain.models import BudgetSplit
from finance.errors import InvalidInputError
from finance.numeric import require_non_negative, round_currency

ESSENTIALS_SHARE = 0.5
WANTS_SHARE = 0.3
SAVINGS_SHARE = 0.2

# Flat tax assumption used to derive after-tax income from gross monthly income.
ASSUMED_TAX_RATE = 0.30
EMERGENCY_FUND_MONTHS = 6


def compute_budget_split(after_tax_income: float) -> BudgetSplit:
    """50/30/20 split of monthly after-tax income, each part rounded to a whole unit."""
    after_tax_income = require_non_negative("after_tax_income", after_tax_income)
    return BudgetSplit(
        essentials=round_currency(after_tax_income * ESSENTIALS_SHARE),
        wants=round_currency(after_tax_income * WANTS_SHARE),
        savings=round_currency(after_tax_income * SAVINGS_SHARE),
    )


def after_tax_income(monthly_income: float, assumed_tax_rate: float = ASSUMED_TAX_RATE) -> float:
    monthly_income = require_non_negative("monthly_income", monthly_income)
    assumed_tax_rate = require_non_negative("assumed_tax_rate", assumed_tax_rate)
    if assumed_tax_rate > 1:
        raise InvalidInputError(f"assumed_tax_rate must be <= 1, got {assumed_tax_rate}")
    return monthly_income * (1 - assumed_tax_rate)


def budget_insights(income: float, expenses: float, budget: BudgetSplit | Any | None = None) -> dict[str, Any]:
    """Savings rate, surplus, emergency fund target and recommended-vs-current rows."""
    income = require_non_negative("income", income)
    expenses = require_non_negative("expenses", expenses)
    net_income = after_tax_income(income)
    if net_income == 0:
        raise InvalidInputError("income must be > 0 to derive budget insights")
    if budget is None:
        budget = compute_budget_split(net_income)

    essentials = float(budget.essentials)
    wants = float(budget.wants)
    savings = float(budget.savings)
    surplus = income - expenses
    current_wants = max(0.0, expenses - essentials)

    return {
        "after_tax_income": round(net_income, 2),
        "savings_rate_percent": round_currency(savings / net_income * 100),
        "monthly_surplus": round(surplus, 2),
        "emergency_fund": round(essentials * EMERGENCY_FUND_MONTHS, 2),
        "comparison": [
            {"category": "essentials", "recommended": essentials, "current": expenses,
             "difference": round(essentials - expenses, 2)},
            {"category": "wants", "recommended": wants, "current": current_wants,
             "difference": round(wants - current_wants, 2)},
            {"category": "savings", "recommended": savings, "current": surplus,
             "difference": round(savings - surplus, 2)},
        ],
    }
