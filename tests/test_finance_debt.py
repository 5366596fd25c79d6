from __future__ import annotations

import unittest
from collections import Counter

from domain.models import DebtStrategy
from domain.schemas import Debt
from finance.errors import InvalidInputError
from finance.debt import plan_debt_payoff, rank_debts_by_strategy, summarize_debts


def _debts() -> list[Debt]:
    return [
        Debt(name="Credit Card", principal=50_000, rate=18, min_payment=2_500, type="credit_card"),
        Debt(name="Personal Loan", principal=200_000, rate=12, min_payment=5_000, type="personal_loan"),
        Debt(name="Car Loan", principal=300_000, rate=8, min_payment=8_000, type="car_loan"),
        Debt(name="Store Card", principal=10_000, rate=6, min_payment=500, type="credit_card"),
    ]


class RankDebtsTests(unittest.TestCase):
    def test_avalanche_orders_by_rate_descending(self) -> None:
        ordered = rank_debts_by_strategy(_debts(), DebtStrategy.AVALANCHE)
        self.assertEqual([d.name for d in ordered], ["Credit Card", "Personal Loan", "Car Loan", "Store Card"])

    def test_snowball_orders_by_balance_ascending(self) -> None:
        ordered = rank_debts_by_strategy(_debts(), "snowball")
        self.assertEqual([d.name for d in ordered], ["Store Card", "Credit Card", "Personal Loan", "Car Loan"])

    def test_result_is_a_permutation_and_input_is_untouched(self) -> None:
        debts = _debts()
        before = [d.model_copy() for d in debts]
        for strategy in ("avalanche", "snowball"):
            with self.subTest(strategy=strategy):
                ordered = rank_debts_by_strategy(debts, strategy)
                self.assertIsNot(ordered, debts)
                self.assertEqual(Counter(d.name for d in ordered), Counter(d.name for d in debts))
                self.assertEqual(ordered, rank_debts_by_strategy(debts, strategy))
        self.assertEqual(debts, before)

    def test_ties_keep_input_order(self) -> None:
        debts = [
            Debt(name="A", principal=100, rate=10, min_payment=10),
            Debt(name="B", principal=100, rate=10, min_payment=10),
        ]
        for strategy in ("avalanche", "snowball"):
            with self.subTest(strategy=strategy):
                self.assertEqual([d.name for d in rank_debts_by_strategy(debts, strategy)], ["A", "B"])

    def test_unknown_strategy_raises(self) -> None:
        with self.assertRaises(InvalidInputError):
            rank_debts_by_strategy(_debts(), "lottery")


class PlanDebtPayoffTests(unittest.TestCase):
    def test_interest_free_debt_with_extra_payment(self) -> None:
        plan = plan_debt_payoff([Debt(name="Loan", principal=1_200, rate=0, min_payment=100)], "avalanche", 100)

        self.assertEqual(plan.total_months, 6)
        self.assertEqual(plan.total_interest, 0)
        self.assertEqual(plan.schedule[0].months, 6)
        self.assertEqual(plan.schedule[0].total_paid, 1_200)

    def test_freed_minimums_roll_over_to_next_debt(self) -> None:
        debts = [
            Debt(name="Small", principal=200, rate=0, min_payment=100),
            Debt(name="Large", principal=1_000, rate=0, min_payment=100),
        ]
        plan = plan_debt_payoff(debts, "snowball")

        months = {entry.name: entry.months for entry in plan.schedule}
        self.assertEqual(months["Small"], 2)
        # 200 paid on Large in months 1-2, then 200/month: 800 left -> 4 more months
        self.assertEqual(months["Large"], 6)
        self.assertEqual(plan.total_months, 6)

    def test_avalanche_never_costs_more_interest_than_snowball(self) -> None:
        avalanche = plan_debt_payoff(_debts(), "avalanche", 5_000)
        snowball = plan_debt_payoff(_debts(), "snowball", 5_000)

        self.assertLessEqual(avalanche.total_interest, snowball.total_interest)
        self.assertGreater(avalanche.total_interest, 0)
        for entry in avalanche.schedule:
            self.assertGreater(entry.months, 0)
            self.assertGreaterEqual(entry.total_paid, entry.interest)

    def test_empty_debt_list(self) -> None:
        plan = plan_debt_payoff([], "avalanche", 1_000)
        self.assertEqual(plan.total_months, 0)
        self.assertEqual(plan.schedule, [])

    def test_payment_below_interest_never_pays_off(self) -> None:
        debts = [Debt(name="Card", principal=100_000, rate=24, min_payment=1_500)]
        with self.assertRaises(InvalidInputError):
            plan_debt_payoff(debts, "avalanche")

    def test_zero_payment_raises(self) -> None:
        with self.assertRaises(InvalidInputError):
            plan_debt_payoff([Debt(name="Loan", principal=100, rate=0, min_payment=0)], "snowball")


class SummarizeDebtsTests(unittest.TestCase):
    def test_summary_totals_and_ratios(self) -> None:
        debts = [Debt(name="Card", principal=60_000, rate=12, min_payment=3_000)]
        summary = summarize_debts(debts, monthly_income=50_000)

        self.assertEqual(summary["total_principal"], 60_000)
        self.assertEqual(summary["total_min_payment"], 3_000)
        self.assertEqual(summary["monthly_interest"], 600)
        self.assertEqual(summary["monthly_interest_percent"], 1)
        self.assertEqual(summary["debt_to_income_percent"], 10)

    def test_no_debt_has_zero_interest_ratio(self) -> None:
        summary = summarize_debts([])
        self.assertEqual(summary["monthly_interest_percent"], 0)
        self.assertNotIn("debt_to_income_percent", summary)

    def test_zero_income_is_rejected(self) -> None:
        with self.assertRaises(InvalidInputError):
            summarize_debts(_debts(), monthly_income=0)


if __name__ == "__main__":
    unittest.main()
