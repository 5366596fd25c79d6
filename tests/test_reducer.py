from __future__ import annotations

import unittest

from application.reducer import DuplicateGoalError, reduce
from domain.schemas import (
    AddGoalAction,
    AppendChatMessageAction,
    Budget,
    ChatMessage,
    FinancialState,
    Goal,
    Profile,
    ReplaceStateAction,
    SetBudgetAction,
    SetProfileAction,
    UpdateGoalAction,
    parse_action,
)


def _profile(**overrides) -> Profile:
    data = {
        "income": 50_000,
        "expenses": 30_000,
        "debts": 100_000,
        "savings": 200_000,
        "riskTolerance": "medium",
        "age": 30,
        "dependents": 1,
        "taxRegime": "new",
        "deductions": {"80C": 50_000},
    }
    data.update(overrides)
    return Profile.model_validate(data)


class ReducerTests(unittest.TestCase):
    def test_set_profile_derives_budget(self) -> None:
        state = reduce(FinancialState(), SetProfileAction(payload=_profile()))

        self.assertEqual(state.profile.income, 50_000)
        self.assertEqual(state.budget, Budget(essentials=17_500, wants=10_500, savings=7_000))

    def test_budget_follows_income_changes(self) -> None:
        state = reduce(FinancialState(), SetProfileAction(payload=_profile()))
        state = reduce(state, SetProfileAction(payload=_profile(income=100_000)))

        self.assertEqual(state.budget.essentials, 35_000)

    def test_transforms_do_not_mutate_previous_state(self) -> None:
        initial = reduce(FinancialState(), SetProfileAction(payload=_profile()))
        snapshot = initial.model_dump()

        after_goal = reduce(initial, AddGoalAction(payload=Goal(id="g1", name="Car", amount=500_000, timeline=3)))
        after_chat = reduce(after_goal, AppendChatMessageAction(payload=ChatMessage(text="hi", sender="user")))
        reduce(after_chat, SetBudgetAction(payload=Budget(essentials=1, wants=2, savings=3)))

        self.assertEqual(initial.model_dump(), snapshot)
        self.assertEqual(initial.profile.goals, [])
        self.assertEqual(after_goal.chat_history, [])
        self.assertIsNot(after_goal, initial)

    def test_set_budget_replaces_budget(self) -> None:
        budget = Budget(essentials=1, wants=2, savings=3)
        state = reduce(FinancialState(), SetBudgetAction(payload=budget))
        self.assertEqual(state.budget, budget)

    def test_add_goal_without_profile_is_noop(self) -> None:
        state = FinancialState()
        self.assertIs(reduce(state, AddGoalAction(payload=Goal(name="Trip", amount=1, timeline=1))), state)

    def test_add_goal_with_duplicate_id_raises(self) -> None:
        state = reduce(FinancialState(), SetProfileAction(payload=_profile()))
        goal = Goal(id="g1", name="Car", amount=500_000, timeline=3)
        state = reduce(state, AddGoalAction(payload=goal))

        with self.assertRaises(DuplicateGoalError):
            reduce(state, AddGoalAction(payload=goal))

    def test_update_goal_replaces_matching_record(self) -> None:
        state = reduce(FinancialState(), SetProfileAction(payload=_profile()))
        state = reduce(state, AddGoalAction(payload=Goal(id="g1", name="Car", amount=500_000, timeline=3)))
        state = reduce(state, AddGoalAction(payload=Goal(id="g2", name="Trip", amount=80_000, timeline=1)))

        updated = Goal(id="g1", name="Bigger car", amount=800_000, timeline=4, priority="high", progress=25)
        state = reduce(state, UpdateGoalAction(payload=updated))

        self.assertEqual(state.profile.goals[0], updated)
        self.assertEqual(state.profile.goals[1].name, "Trip")

    def test_update_unknown_goal_returns_same_state(self) -> None:
        state = reduce(FinancialState(), SetProfileAction(payload=_profile()))
        state = reduce(state, AddGoalAction(payload=Goal(id="g1", name="Car", amount=500_000, timeline=3)))

        result = reduce(state, UpdateGoalAction(payload=Goal(id="nope", name="Ghost", amount=1, timeline=1)))

        self.assertIs(result, state)
        self.assertIs(result.profile.goals, state.profile.goals)

    def test_update_goal_without_profile_is_noop(self) -> None:
        state = FinancialState()
        self.assertIs(reduce(state, UpdateGoalAction(payload=Goal(name="x", amount=1, timeline=1))), state)

    def test_append_chat_message_keeps_order(self) -> None:
        state = FinancialState()
        for text in ("first", "second"):
            state = reduce(state, AppendChatMessageAction(payload=ChatMessage(text=text, sender="user")))
        self.assertEqual([m.text for m in state.chat_history], ["first", "second"])

    def test_replace_state(self) -> None:
        replacement = FinancialState(budget=Budget(essentials=5, wants=3, savings=2))
        self.assertIs(reduce(FinancialState(), ReplaceStateAction(payload=replacement)), replacement)


class ParseActionTests(unittest.TestCase):
    def test_parses_wire_payload_by_type(self) -> None:
        action = parse_action({"type": "set_budget", "payload": {"essentials": 1, "wants": 2, "savings": 3}})
        self.assertIsInstance(action, SetBudgetAction)

    def test_chat_message_accepts_wire_alias(self) -> None:
        action = parse_action(
            {"type": "append_chat_message", "payload": {"message": "hello", "sender": "ai"}}
        )
        self.assertEqual(action.payload.text, "hello")

    def test_unknown_type_is_rejected(self) -> None:
        from pydantic import ValidationError

        with self.assertRaises(ValidationError):
            parse_action({"type": "delete_everything", "payload": {}})


if __name__ == "__main__":
    unittest.main()
