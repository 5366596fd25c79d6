from __future__ import annotations

from typing import Any

from pydantic import Field

from calculators.base import Calculator, CalculatorArgs
from calculators.registry import register_calculator
from finance.loans import compute_emi


class EMIArgs(CalculatorArgs):
    principal: float = Field(description="Loan amount.")
    annual_rate_percent: float = Field(description="Annual interest rate in percent, e.g. 8.5.")
    tenure_years: float = Field(description="Loan tenure in years.")


class _EMICalculatorBase(Calculator):
    description = "Monthly installment, total payable and total interest for an amortizing loan."
    args_model = EMIArgs

    def compute(self, args: EMIArgs) -> dict[str, Any]:
        result = compute_emi(args.principal, args.annual_rate_percent, args.tenure_years)
        return {
            "emi": round(result.emi, 2),
            "total_amount": round(result.total_amount, 2),
            "total_interest": round(result.total_interest, 2),
            "months": int(round(args.tenure_years * 12)),
        }


@register_calculator
class EMICalculator(_EMICalculatorBase):
    name = "loans.emi"


@register_calculator
class HomeLoanEMICalculator(_EMICalculatorBase):
    name = "loans.home_loan_emi"


@register_calculator
class CarLoanEMICalculator(_EMICalculatorBase):
    name = "loans.car_loan_emi"


@register_calculator
class PersonalLoanEMICalculator(_EMICalculatorBase):
    name = "loans.personal_loan_emi"
