from __future__ import annotations

from typing import Any, Callable

from domain.schemas import (
    Budget,
    ChatMessage,
    FinancialState,
    Goal,
    Profile,
)
from finance.budget import after_tax_income, compute_budget_split


class DuplicateGoalError(ValueError):
    pass


def derive_budget(profile: Profile) -> Budget:
    split = compute_budget_split(after_tax_income(profile.income))
    return Budget(essentials=split.essentials, wants=split.wants, savings=split.savings)


def set_profile(state: FinancialState, profile: Profile) -> FinancialState:
    # Budget is derived from income and is always recomputed alongside the profile.
    return state.model_copy(update={"profile": profile, "budget": derive_budget(profile)})


def set_budget(state: FinancialState, budget: Budget) -> FinancialState:
    return state.model_copy(update={"budget": budget})


def add_goal(state: FinancialState, goal: Goal) -> FinancialState:
    if state.profile is None:
        return state
    if any(existing.id == goal.id for existing in state.profile.goals):
        raise DuplicateGoalError(f"Goal id already exists: {goal.id}")
    profile = state.profile.model_copy(update={"goals": [*state.profile.goals, goal]})
    return state.model_copy(update={"profile": profile})


def update_goal(state: FinancialState, goal: Goal) -> FinancialState:
    if state.profile is None or all(existing.id != goal.id for existing in state.profile.goals):
        return state
    goals = [goal if existing.id == goal.id else existing for existing in state.profile.goals]
    profile = state.profile.model_copy(update={"goals": goals})
    return state.model_copy(update={"profile": profile})


def append_chat_message(state: FinancialState, message: ChatMessage) -> FinancialState:
    return state.model_copy(update={"chat_history": [*state.chat_history, message]})


def replace_state(state: FinancialState, new_state: FinancialState) -> FinancialState:
    return new_state


_TRANSFORMS: dict[str, Callable[[FinancialState, Any], FinancialState]] = {
    "set_profile": set_profile,
    "set_budget": set_budget,
    "add_goal": add_goal,
    "update_goal": update_goal,
    "append_chat_message": append_chat_message,
    "replace_state": replace_state,
}


def reduce(state: FinancialState, action: Any) -> FinancialState:
    """Apply one store action. Returns a new state, or `state` itself when nothing changes."""
    try:
        transform = _TRANSFORMS[action.type]
    except KeyError as exc:
        raise ValueError(f"Unknown store action: {action.type!r}") from exc
    return transform(state, action.payload)
