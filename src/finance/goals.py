from __future__ import annotations

import math
from typing import Any

from domain.models import GoalAssessment
from finance.numeric import require_finite, require_non_negative, require_positive


def required_monthly_savings(amount: float, timeline_years: float) -> float:
    amount = require_non_negative("amount", amount)
    timeline_years = require_positive("timeline_years", timeline_years)
    return amount / (timeline_years * 12)


def assess_goal(goal: Any, monthly_savings: float) -> GoalAssessment:
    """
    Check whether `monthly_savings` funds `goal` on time.

    When it does not, the adjusted timeline is the whole number of years the
    current savings need; None when nothing is being saved.
    """
    monthly_savings = require_finite("monthly_savings", monthly_savings)
    required = required_monthly_savings(goal.amount, goal.timeline)
    feasible = required <= monthly_savings

    if feasible:
        adjusted: int | float | None = goal.timeline
    elif monthly_savings > 0:
        adjusted = math.ceil(goal.amount / (monthly_savings * 12))
    else:
        adjusted = None

    return GoalAssessment(
        goal_id=goal.id,
        required_monthly_savings=round(required, 2),
        feasible=feasible,
        adjusted_timeline_years=adjusted,
    )
