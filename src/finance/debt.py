from __future__ import annotations

import logging
from typing import Any, Iterable, Sequence, TypeVar

from domain.models import DebtPayoffEntry, DebtPayoffPlan, DebtStrategy
from finance.errors import InvalidInputError
from finance.loans import monthly_rate
from finance.numeric import require_non_negative, require_positive

logger = logging.getLogger(__name__)

MAX_PAYOFF_MONTHS = 1200
# Balances below this are treated as settled (float residue after the final payment).
SETTLED_EPSILON = 0.005

T = TypeVar("T")


def _coerce_strategy(strategy: DebtStrategy | str) -> DebtStrategy:
    try:
        return DebtStrategy(strategy)
    except ValueError as exc:
        raise InvalidInputError(f"Unknown debt strategy: {strategy!r}") from exc


def _validate_debt(debt: Any) -> None:
    require_non_negative(f"{debt.name}.principal", debt.principal)
    require_non_negative(f"{debt.name}.rate", debt.rate)
    require_non_negative(f"{debt.name}.min_payment", debt.min_payment)


def rank_debts_by_strategy(debts: Iterable[T], strategy: DebtStrategy | str) -> list[T]:
    """
    Order debts for payoff.

    avalanche: highest annual rate first.
    snowball:  smallest outstanding principal first.
    Ties keep their input order; the input is never mutated.
    """
    strategy = _coerce_strategy(strategy)
    items = list(debts)
    for debt in items:
        _validate_debt(debt)
    if strategy is DebtStrategy.AVALANCHE:
        return sorted(items, key=lambda d: -float(d.rate))
    return sorted(items, key=lambda d: float(d.principal))


def plan_debt_payoff(debts: Sequence[Any], strategy: DebtStrategy | str, extra_payment: float = 0) -> DebtPayoffPlan:
    """
    Month-by-month payoff simulation.

    Every open debt receives its minimum payment. The extra payment, plus the
    minimums released by debts already cleared, goes to the first open debt in
    strategy order.
    """
    strategy = _coerce_strategy(strategy)
    extra_payment = require_non_negative("extra_payment", extra_payment)
    ordered = rank_debts_by_strategy(debts, strategy)

    monthly_budget = sum(float(d.min_payment) for d in ordered) + extra_payment
    balances = [float(d.principal) for d in ordered]
    interest_paid = [0.0] * len(ordered)
    payments = [0.0] * len(ordered)
    cleared_in: list[int | None] = [0 if b <= SETTLED_EPSILON else None for b in balances]

    if ordered and any(c is None for c in cleared_in) and monthly_budget <= 0:
        raise InvalidInputError("debts cannot be paid off with a zero monthly payment")

    month = 0
    while any(c is None for c in cleared_in):
        month += 1
        if month > MAX_PAYOFF_MONTHS:
            raise InvalidInputError(
                f"debts are not paid off within {MAX_PAYOFF_MONTHS} months; increase the payments"
            )

        for i, debt in enumerate(ordered):
            if cleared_in[i] is None:
                interest = balances[i] * monthly_rate(float(debt.rate))
                balances[i] += interest
                interest_paid[i] += interest

        available = monthly_budget
        for i, debt in enumerate(ordered):
            if cleared_in[i] is None:
                paid = min(float(debt.min_payment), balances[i], available)
                balances[i] -= paid
                payments[i] += paid
                available -= paid

        for i in range(len(ordered)):
            if available <= 0:
                break
            if cleared_in[i] is None:
                paid = min(available, balances[i])
                balances[i] -= paid
                payments[i] += paid
                available -= paid

        for i in range(len(ordered)):
            if cleared_in[i] is None and balances[i] <= SETTLED_EPSILON:
                cleared_in[i] = month

    schedule = [
        DebtPayoffEntry(
            name=debt.name,
            months=cleared_in[i] or 0,
            interest=round(interest_paid[i], 2),
            total_paid=round(payments[i], 2),
        )
        for i, debt in enumerate(ordered)
    ]
    logger.debug("Debt payoff simulated strategy=%s debts=%d months=%d", strategy.value, len(ordered), month)
    return DebtPayoffPlan(
        strategy=strategy,
        monthly_budget=round(monthly_budget, 2),
        total_months=month,
        total_interest=round(sum(interest_paid), 2),
        schedule=schedule,
    )


def summarize_debts(debts: Sequence[Any], monthly_income: float | None = None) -> dict[str, Any]:
    for debt in debts:
        _validate_debt(debt)

    total_principal = sum(float(d.principal) for d in debts)
    total_min_payment = sum(float(d.min_payment) for d in debts)
    monthly_interest = sum(float(d.principal) * monthly_rate(float(d.rate)) for d in debts)

    summary: dict[str, Any] = {
        "debt_count": len(debts),
        "total_principal": round(total_principal, 2),
        "total_min_payment": round(total_min_payment, 2),
        "monthly_interest": round(monthly_interest, 2),
        # No outstanding debt means no interest burden.
        "monthly_interest_percent": round(monthly_interest / total_principal * 100, 2) if total_principal > 0 else 0.0,
    }
    if monthly_income is not None:
        annual_income = require_positive("monthly_income", monthly_income) * 12
        summary["debt_to_income_percent"] = round(total_principal / annual_income * 100, 2)
    return summary
