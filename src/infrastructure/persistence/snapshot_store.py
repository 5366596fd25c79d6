from __future__ import annotations

import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_STATE_KEY = "wealthwise-state"


class SnapshotError(RuntimeError):
    pass


class SnapshotStore(ABC):
    """Durable key-value slot holding the whole application state as one JSON object."""

    key: str = DEFAULT_STATE_KEY

    @abstractmethod
    def load(self) -> dict[str, Any] | None:
        raise NotImplementedError

    @abstractmethod
    def save(self, snapshot: dict[str, Any]) -> None:
        raise NotImplementedError


class InMemorySnapshotStore(SnapshotStore):
    def __init__(self, key: str = DEFAULT_STATE_KEY, initial: dict[str, Any] | None = None) -> None:
        self.key = key
        self._store: dict[str, str] = {}
        if initial is not None:
            self.save(initial)

    def put_raw(self, raw: str) -> None:
        self._store[self.key] = raw

    def get_raw(self) -> str | None:
        return self._store.get(self.key)

    def load(self) -> dict[str, Any] | None:
        raw = self.get_raw()
        if raw is None:
            return None
        return _decode(raw, source=f"memory:{self.key}")

    def save(self, snapshot: dict[str, Any]) -> None:
        self.put_raw(json.dumps(snapshot))


class JsonFileSnapshotStore(SnapshotStore):
    """
    Stores snapshots inside a JSON object file, one entry per key.

    The whole file is rewritten on every save through a temp file + rename so
    a crash mid-write leaves the previous snapshot intact.
    """

    def __init__(self, path: str | Path | None = None, key: str | None = None) -> None:
        self._path = Path(path or os.getenv("WEALTHWISE_STATE_PATH", ".wealthwise/state.json"))
        self.key = key or os.getenv("WEALTHWISE_STATE_KEY", DEFAULT_STATE_KEY)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> dict[str, Any] | None:
        entries = self._read_entries()
        raw = entries.get(self.key)
        if raw is None:
            return None
        if not isinstance(raw, str):
            raise SnapshotError(f"Snapshot entry {self.key!r} in {self._path} is not a string")
        return _decode(raw, source=f"{self._path}:{self.key}")

    def save(self, snapshot: dict[str, Any]) -> None:
        try:
            entries = self._read_entries()
        except SnapshotError:
            logger.warning("Snapshot file %s unreadable; overwriting", self._path)
            entries = {}
        entries[self.key] = json.dumps(snapshot)

        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(entries, indent=2), encoding="utf-8")
        os.replace(tmp_path, self._path)
        logger.debug("Snapshot written path=%s key=%s", self._path, self.key)

    def _read_entries(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            entries = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise SnapshotError(f"Could not read snapshot file {self._path}: {exc}") from exc
        if not isinstance(entries, dict):
            raise SnapshotError(f"Snapshot file {self._path} does not contain a JSON object")
        return entries


def _decode(raw: str, source: str) -> dict[str, Any]:
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SnapshotError(f"Snapshot at {source} is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise SnapshotError(f"Snapshot at {source} is a {type(payload).__name__}, expected an object")
    return payload
