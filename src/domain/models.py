from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class RiskTolerance(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaxRegime(str, Enum):
    OLD = "old"
    NEW = "new"


class DebtStrategy(str, Enum):
    AVALANCHE = "avalanche"
    SNOWBALL = "snowball"


class AdviceCategory(str, Enum):
    SAVINGS = "savings"
    INVESTMENT = "investment"
    INSURANCE = "insurance"
    TAX = "tax"
    DEFAULT = "default"


@dataclass(frozen=True)
class EMIResult:
    emi: float
    total_amount: float
    total_interest: float


@dataclass(frozen=True)
class SIPResult:
    future_value: float
    total_investment: float
    total_returns: float


@dataclass(frozen=True)
class TaxResult:
    tax: int
    deductions: float
    taxable_income: float


@dataclass(frozen=True)
class WealthPoint:
    year: int
    value: float
    cumulative_contribution: float
    cumulative_returns: float


@dataclass(frozen=True)
class BudgetSplit:
    essentials: int
    wants: int
    savings: int

    @property
    def total(self) -> int:
        return self.essentials + self.wants + self.savings


@dataclass(frozen=True)
class AllocationSlice:
    asset: str
    percent: int
    amount: int


@dataclass(frozen=True)
class DeductionOpportunity:
    section: str
    limit: float
    current: float
    remaining: float
    estimated_savings: int


@dataclass(frozen=True)
class DebtPayoffEntry:
    name: str
    months: int
    interest: float
    total_paid: float


@dataclass
class DebtPayoffPlan:
    strategy: DebtStrategy
    monthly_budget: float
    total_months: int
    total_interest: float
    schedule: list[DebtPayoffEntry] = field(default_factory=list)


@dataclass(frozen=True)
class GoalAssessment:
    goal_id: str
    required_monthly_savings: float
    feasible: bool
    adjusted_timeline_years: int | float | None
