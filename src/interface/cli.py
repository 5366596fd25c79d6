from __future__ import annotations

from dataclasses import dataclass

from application.calculator_executor import CalculatorExecutor
from application.chat import ChatService
from application.store import ProfileStore
from calculators.registry import registry
from infrastructure.persistence.snapshot_store import JsonFileSnapshotStore, SnapshotStore


@dataclass
class Services:
    store: ProfileStore
    chat: ChatService
    calculators: CalculatorExecutor


def build_services(
    snapshot_store: SnapshotStore | None = None,
    reply_delay_seconds: float | None = None,
) -> Services:
    import calculators  # noqa: F401

    store = ProfileStore(snapshot_store or JsonFileSnapshotStore())
    return Services(
        store=store,
        chat=ChatService(store, reply_delay_seconds=reply_delay_seconds),
        calculators=CalculatorExecutor(registry),
    )


def main(argv: list[str] | None = None) -> None:
    message = " ".join(argv or []).strip() or input("WealthWise > ").strip()
    if not message:
        message = "How much should I save each month?"

    services = build_services()
    services.chat.send(message)
    services.chat.wait_for_reply()
    reply = services.store.state.chat_history[-1]
    print(reply.text)


if __name__ == "__main__":
    main()
