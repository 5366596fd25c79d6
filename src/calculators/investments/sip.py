from __future__ import annotations

from typing import Any

from pydantic import Field

from calculators.base import Calculator, CalculatorArgs
from calculators.registry import register_calculator
from finance.investments import compute_sip_future_value


class SIPArgs(CalculatorArgs):
    monthly_investment: float = Field(description="Amount invested at the start of every month.")
    annual_return_percent: float = Field(description="Expected annual return in percent, e.g. 12.")
    years: float = Field(description="Investment period in years.")


@register_calculator
class SIPCalculator(Calculator):
    name = "investments.sip"
    description = "Future value, amount invested and gains for a monthly systematic investment plan."
    args_model = SIPArgs

    def compute(self, args: SIPArgs) -> dict[str, Any]:
        result = compute_sip_future_value(args.monthly_investment, args.annual_return_percent, args.years)
        return {
            "future_value": round(result.future_value, 2),
            "total_investment": round(result.total_investment, 2),
            "total_returns": round(result.total_returns, 2),
        }
