from __future__ import annotations

import logging
import threading

from pydantic import ValidationError

from application.reducer import reduce
from domain.schemas import (
    AddGoalAction,
    AppendChatMessageAction,
    ChatMessage,
    FinancialState,
    Goal,
    Profile,
    ProfileForm,
    SetProfileAction,
    UpdateGoalAction,
)
from infrastructure.persistence.snapshot_store import SnapshotError, SnapshotStore

logger = logging.getLogger(__name__)


class ProfileStore:
    """
    Holds the single FinancialState and applies store actions to it.

    State is restored from the snapshot store once, at construction, and the
    full state is written back after every dispatch.
    """

    def __init__(self, snapshot_store: SnapshotStore):
        self._snapshots = snapshot_store
        self._lock = threading.RLock()
        self._state = self._restore()

    @property
    def state(self) -> FinancialState:
        return self._state

    def dispatch(self, action) -> FinancialState:
        with self._lock:
            previous = self._state
            new_state = reduce(previous, action)
            self._state = new_state
            logger.info("ProfileStore dispatch action=%s changed=%s", action.type, new_state is not previous)
            self._persist(new_state)
            return new_state

    # ---- convenience wrappers used by the interface layer ----

    def save_profile(self, form: ProfileForm) -> FinancialState:
        current = self._state.profile
        profile = Profile.from_form(form, goals=current.goals if current else [])
        return self.dispatch(SetProfileAction(payload=profile))

    def add_goal(self, goal: Goal) -> FinancialState:
        return self.dispatch(AddGoalAction(payload=goal))

    def update_goal(self, goal: Goal) -> FinancialState:
        return self.dispatch(UpdateGoalAction(payload=goal))

    def append_chat_message(self, message: ChatMessage) -> FinancialState:
        return self.dispatch(AppendChatMessageAction(payload=message))

    # ---- persistence boundary ----

    def _restore(self) -> FinancialState:
        try:
            snapshot = self._snapshots.load()
        except SnapshotError as exc:
            logger.warning("ProfileStore could not read saved state; starting empty: %s", exc)
            return FinancialState()
        if snapshot is None:
            logger.info("ProfileStore no saved state found; starting empty")
            return FinancialState()
        try:
            state = FinancialState.model_validate(snapshot)
        except ValidationError as exc:
            logger.warning("ProfileStore saved state has an unexpected shape; starting empty: %s", exc)
            return FinancialState()
        logger.info(
            "ProfileStore restored state profile=%s goals=%d chat_messages=%d",
            state.profile is not None,
            len(state.profile.goals) if state.profile else 0,
            len(state.chat_history),
        )
        return state

    def _persist(self, state: FinancialState) -> None:
        try:
            self._snapshots.save(state.to_snapshot())
        except (OSError, SnapshotError, TypeError, ValueError):
            logger.exception("ProfileStore failed to persist state; continuing with in-memory state")
