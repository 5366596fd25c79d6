from __future__ import annotations

from domain.models import EMIResult
from finance.numeric import require_non_negative, require_positive

MONTHS_PER_YEAR = 12


def monthly_rate(annual_rate_percent: float) -> float:
    return annual_rate_percent / 100 / MONTHS_PER_YEAR


def compute_emi(principal: float, annual_rate_percent: float, tenure_years: float) -> EMIResult:
    """
    Equated monthly installment for an amortizing loan.

    emi = P * r * (1 + r)^n / ((1 + r)^n - 1), r = monthly rate, n = months.
    A zero rate has a zero denominator; the installment is then simply P / n.
    """
    principal = require_non_negative("principal", principal)
    annual_rate_percent = require_non_negative("annual_rate_percent", annual_rate_percent)
    tenure_years = require_positive("tenure_years", tenure_years)

    months = tenure_years * MONTHS_PER_YEAR
    if annual_rate_percent == 0:
        return EMIResult(emi=principal / months, total_amount=principal, total_interest=0.0)

    r = monthly_rate(annual_rate_percent)
    growth = (1 + r) ** months
    emi = principal * r * growth / (growth - 1)
    total_amount = emi * months
    return EMIResult(emi=emi, total_amount=total_amount, total_interest=total_amount - principal)
