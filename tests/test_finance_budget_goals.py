from __future__ import annotations

import unittest

from domain.schemas import Goal
from finance.budget import after_tax_income, budget_insights, compute_budget_split
from finance.errors import InvalidInputError
from finance.goals import assess_goal, required_monthly_savings


class BudgetSplitTests(unittest.TestCase):
    def test_fifty_thirty_twenty_scenario(self) -> None:
        split = compute_budget_split(50_000 * 0.7)

        self.assertEqual(split.essentials, 17_500)
        self.assertEqual(split.wants, 10_500)
        self.assertEqual(split.savings, 7_000)

    def test_parts_sum_to_income_within_rounding(self) -> None:
        for income in (0, 1, 3, 7, 99.99, 12_345.67, 35_000, 1_000_001, 2.5):
            with self.subTest(income=income):
                split = compute_budget_split(income)
                self.assertLessEqual(abs(split.total - income), 2)

    def test_half_units_round_up(self) -> None:
        split = compute_budget_split(5)
        self.assertEqual((split.essentials, split.wants, split.savings), (3, 2, 1))

    def test_negative_income_raises(self) -> None:
        with self.assertRaises(InvalidInputError):
            compute_budget_split(-100)

    def test_after_tax_income_uses_flat_assumption(self) -> None:
        self.assertAlmostEqual(after_tax_income(50_000), 35_000)
        self.assertAlmostEqual(after_tax_income(50_000, assumed_tax_rate=0.1), 45_000)
        with self.assertRaises(InvalidInputError):
            after_tax_income(50_000, assumed_tax_rate=1.5)


class BudgetInsightsTests(unittest.TestCase):
    def test_insights_for_standard_profile(self) -> None:
        insights = budget_insights(50_000, 30_000)

        self.assertEqual(insights["savings_rate_percent"], 20)
        self.assertEqual(insights["monthly_surplus"], 20_000)
        self.assertEqual(insights["emergency_fund"], 105_000)
        rows = {row["category"]: row for row in insights["comparison"]}
        self.assertEqual(rows["essentials"]["difference"], 17_500 - 30_000)
        self.assertEqual(rows["wants"]["current"], 12_500)
        self.assertEqual(rows["savings"]["current"], 20_000)

    def test_zero_income_is_rejected(self) -> None:
        with self.assertRaises(InvalidInputError):
            budget_insights(0, 10_000)


class GoalTests(unittest.TestCase):
    def test_required_monthly_savings(self) -> None:
        self.assertEqual(required_monthly_savings(120_000, 2), 5_000)
        self.assertEqual(required_monthly_savings(6_000, 0.5), 1_000)
        with self.assertRaises(InvalidInputError):
            required_monthly_savings(1_000, 0)

    def test_feasible_goal_keeps_timeline(self) -> None:
        goal = Goal(id="g1", name="Car", amount=120_000, timeline=2)
        assessment = assess_goal(goal, 6_000)

        self.assertTrue(assessment.feasible)
        self.assertEqual(assessment.goal_id, "g1")
        self.assertEqual(assessment.adjusted_timeline_years, 2)

    def test_infeasible_goal_gets_longer_timeline(self) -> None:
        goal = Goal(id="g2", name="House", amount=120_000, timeline=2)
        assessment = assess_goal(goal, 4_000)

        self.assertFalse(assessment.feasible)
        self.assertEqual(assessment.required_monthly_savings, 5_000)
        self.assertEqual(assessment.adjusted_timeline_years, 3)

    def test_no_savings_means_no_timeline(self) -> None:
        goal = Goal(name="Trip", amount=50_000, timeline=1)
        self.assertIsNone(assess_goal(goal, 0).adjusted_timeline_years)


if __name__ == "__main__":
    unittest.main()
