from __future__ import annotations

import logging
import os
import threading
from collections import deque
from typing import Callable

from application.advisor import generate_response
from application.store import ProfileStore
from domain.schemas import ChatMessage, Profile

logger = logging.getLogger(__name__)

Responder = Callable[[Profile | None, str], str]


class _PendingReply:
    __slots__ = ("text", "timer")

    def __init__(self, text: str):
        self.text = text
        self.timer: threading.Timer | None = None


class ChatService:
    """
    Appends user messages and the advisor's canned reply to the chat log.

    Every message gets its own reply, appended after a fixed delay on a timer
    thread. Replies are delivered in the order the messages were sent: when a
    timer fires, any earlier reply still waiting is flushed first. A delay <= 0
    appends the reply before `send` returns.
    """

    def __init__(
        self,
        store: ProfileStore,
        reply_delay_seconds: float | None = None,
        responder: Responder | None = None,
    ):
        self._store = store
        self._responder = responder or generate_response
        if reply_delay_seconds is None:
            reply_delay_seconds = float(os.getenv("WEALTHWISE_CHAT_DELAY_SECONDS", "1.5"))
        self._delay = reply_delay_seconds
        self._pending: deque[_PendingReply] = deque()
        # Held while delivering so concurrent timers append in FIFO order.
        self._lock = threading.Lock()

    @property
    def has_pending_reply(self) -> bool:
        with self._lock:
            return bool(self._pending)

    def send(self, text: str) -> ChatMessage:
        text = text.strip()
        if not text:
            raise ValueError("message must not be empty")

        # Computed before the user message is appended, from the profile as of the question.
        reply_text = self._responder(self._store.state.profile, text)
        user_message = ChatMessage(text=text, sender="user")
        self._store.append_chat_message(user_message)

        if self._delay <= 0:
            with self._lock:
                self._append_reply(reply_text)
            return user_message

        pending = _PendingReply(reply_text)
        timer = threading.Timer(self._delay, self._deliver, args=(pending,))
        timer.daemon = True
        pending.timer = timer
        with self._lock:
            self._pending.append(pending)
            queued = len(self._pending)
        timer.start()
        logger.info("ChatService reply scheduled in %.2fs pending=%d", self._delay, queued)
        return user_message

    def cancel_pending(self) -> bool:
        """Drop every reply not yet delivered. Returns False when nothing was pending."""
        with self._lock:
            dropped = list(self._pending)
            self._pending.clear()
        for pending in dropped:
            pending.timer.cancel()
        if dropped:
            logger.info("ChatService cancelled pending replies count=%d", len(dropped))
        return bool(dropped)

    def wait_for_reply(self, timeout: float | None = None) -> bool:
        """Block until every pending reply is delivered. Returns False on timeout."""
        with self._lock:
            timers = [pending.timer for pending in self._pending]
        for timer in timers:
            timer.join(timeout)
        return not any(timer.is_alive() for timer in timers)

    def _deliver(self, pending: _PendingReply) -> None:
        with self._lock:
            if pending in self._pending:
                self._flush_through(pending)

    def _flush_through(self, target: _PendingReply) -> None:
        # Caller holds self._lock.
        while self._pending:
            head = self._pending.popleft()
            if head is not target:
                head.timer.cancel()
            self._append_reply(head.text)
            if head is target:
                return

    def _append_reply(self, reply_text: str) -> None:
        self._store.append_chat_message(ChatMessage(text=reply_text, sender="ai"))
        logger.info("ChatService reply appended chars=%d", len(reply_text))
