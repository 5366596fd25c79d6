from __future__ import annotations

from dataclasses import asdict
from typing import Any, List

from calculators.base import Calculator, CalculatorArgs
from calculators.registry import register_calculator
from domain.schemas import Goal
from finance.goals import assess_goal


class GoalFeasibilityArgs(CalculatorArgs):
    goals: List[Goal]
    monthly_savings: float


@register_calculator
class GoalFeasibilityCalculator(Calculator):
    name = "goals.feasibility"
    description = "Required monthly saving per goal and whether current savings reach it on time."
    args_model = GoalFeasibilityArgs

    def compute(self, args: GoalFeasibilityArgs) -> dict[str, Any]:
        assessments = [assess_goal(goal, args.monthly_savings) for goal in args.goals]
        return {
            "assessments": [asdict(a) for a in assessments],
            "total_required_monthly_savings": round(sum(a.required_monthly_savings for a in assessments), 2),
            "all_feasible": all(a.feasible for a in assessments),
        }
