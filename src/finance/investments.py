from __future__ import annotations

from typing import Any, Iterable

from domain.models import AllocationSlice, RiskTolerance, SIPResult, WealthPoint
from finance.errors import InvalidInputError
from finance.numeric import require_finite, require_non_negative, require_positive, round_currency

# Percent of investable surplus per asset class, by risk tolerance.
ALLOCATION_TABLE: dict[RiskTolerance, dict[str, int]] = {
    RiskTolerance.LOW: {"equity": 30, "debt": 50, "gold": 10, "reits": 5, "cash": 5},
    RiskTolerance.MEDIUM: {"equity": 60, "debt": 25, "gold": 10, "reits": 5, "cash": 0},
    RiskTolerance.HIGH: {"equity": 80, "debt": 10, "gold": 5, "reits": 5, "cash": 0},
}

SCENARIO_HORIZONS = (10, 20, 30)


def compute_sip_future_value(monthly_investment: float, annual_return_percent: float, years: float) -> SIPResult:
    """Future value of a monthly SIP, contributions at the start of each month (annuity-due)."""
    monthly_investment = require_non_negative("monthly_investment", monthly_investment)
    annual_return_percent = require_non_negative("annual_return_percent", annual_return_percent)
    years = require_positive("years", years)
    if annual_return_percent == 0:
        raise InvalidInputError("annual_return_percent must be > 0 for SIP future value")

    r = annual_return_percent / 100 / 12
    months = years * 12
    future_value = monthly_investment * (((1 + r) ** months - 1) / r) * (1 + r)
    total_investment = monthly_investment * months
    return SIPResult(
        future_value=future_value,
        total_investment=total_investment,
        total_returns=future_value - total_investment,
    )


def project_wealth(
    monthly_savings: float,
    annual_return_percent: float,
    inflation_percent: float,
    years: int,
) -> list[WealthPoint]:
    monthly_savings = require_non_negative("monthly_savings", monthly_savings)
    annual_return_percent = require_non_negative("annual_return_percent", annual_return_percent)
    inflation_percent = require_non_negative("inflation_percent", inflation_percent)
    years = int(require_positive("years", years))
    if years < 1:
        raise InvalidInputError("years must be at least 1")

    real_return = (annual_return_percent - inflation_percent) / 100
    annual_contribution = monthly_savings * 12

    points: list[WealthPoint] = []
    value = 0.0
    for year in range(1, years + 1):
        value = value * (1 + real_return) + annual_contribution
        contributed = annual_contribution * year
        points.append(
            WealthPoint(
                year=year,
                value=round(value, 2),
                cumulative_contribution=round(contributed, 2),
                cumulative_returns=round(value - contributed, 2),
            )
        )
    return points


def compare_scenarios(
    income: float,
    expenses: float,
    annual_return_percent: float,
    inflation_percent: float,
    horizons: Iterable[int] = SCENARIO_HORIZONS,
) -> list[dict[str, Any]]:
    """Project conservative/current/optimistic variants of the user's savings plan."""
    income = require_non_negative("income", income)
    expenses = require_non_negative("expenses", expenses)
    horizons = sorted({int(require_positive("horizon", h)) for h in horizons})
    if not horizons:
        raise InvalidInputError("at least one horizon is required")

    scenarios = [
        {"name": "conservative", "income": income, "expenses": expenses * 1.1, "return": 8.0},
        {"name": "current", "income": income, "expenses": expenses, "return": annual_return_percent},
        {"name": "optimistic", "income": income * 1.2, "expenses": expenses * 0.9, "return": 15.0},
    ]

    results: list[dict[str, Any]] = []
    for scenario in scenarios:
        monthly_savings = max(0.0, scenario["income"] - scenario["expenses"])
        points = project_wealth(monthly_savings, scenario["return"], inflation_percent, horizons[-1])
        by_year = {p.year: p.value for p in points}
        results.append(
            {
                "name": scenario["name"],
                "income": round(scenario["income"], 2),
                "expenses": round(scenario["expenses"], 2),
                "annual_return_percent": scenario["return"],
                "monthly_savings": round(monthly_savings, 2),
                "projected_values": {str(h): by_year[h] for h in horizons},
            }
        )
    return results


def _coerce_risk(risk_tolerance: RiskTolerance | str) -> RiskTolerance:
    try:
        return RiskTolerance(risk_tolerance)
    except ValueError as exc:
        raise InvalidInputError(f"Unknown risk tolerance: {risk_tolerance!r}") from exc


def asset_allocation(risk_tolerance: RiskTolerance | str) -> dict[str, int]:
    return dict(ALLOCATION_TABLE[_coerce_risk(risk_tolerance)])


def allocate_surplus(income: float, expenses: float, risk_tolerance: RiskTolerance | str) -> list[AllocationSlice]:
    income = require_non_negative("income", income)
    expenses = require_non_negative("expenses", expenses)
    investable = max(0.0, income - expenses)
    return [
        AllocationSlice(asset=asset, percent=percent, amount=round_currency(investable * percent / 100))
        for asset, percent in asset_allocation(risk_tolerance).items()
        if percent > 0
    ]


def investable_surplus(income: float, expenses: float) -> float:
    return max(0.0, require_finite("income", income) - require_finite("expenses", expenses))
