"""
VariableStore: name -> value registry with a revision counter.

set_many applies a whole batch and bumps the revision once, under one lock,
so readers never see a half-applied batch. Subscribers are notified after the
lock is released, with the new revision; by then get_all() already reflects it.
"""

import copy
import logging
import threading
from collections.abc import Callable, Mapping
from typing import Any

from ..values import JsonValue, normalize_value

_log = logging.getLogger(__name__)

RevisionListener = Callable[[int], None]


class VariableStore:
    def __init__(self) -> None:
        self._values: dict[str, JsonValue] = {}
        self._revision = 0
        self._lock = threading.Lock()
        self._listeners: list[RevisionListener] = []
        self._listeners_lock = threading.Lock()

    def set_many(self, bindings: Mapping[str, Any]) -> int:
        """Merge *bindings* (last write wins), bump the revision once, notify. Returns the new revision."""
        normalized = {str(k): normalize_value(v) for k, v in bindings.items()}
        with self._lock:
            self._values.update(normalized)
            self._revision += 1
            revision = self._revision
        _log.debug("Variables set (revision %d): %s", revision, list(normalized))
        self._notify(revision)
        return revision

    def remove(self, name: str) -> bool:
        """Drop *name*. Returns False (and does not bump the revision) if it was unknown."""
        with self._lock:
            if name not in self._values:
                return False
            del self._values[name]
            self._revision += 1
            revision = self._revision
        self._notify(revision)
        return True

    def get(self, name: str) -> JsonValue:
        """Value of *name*, or None for an unknown name. Use ``name in store`` to tell them apart."""
        with self._lock:
            return copy.deepcopy(self._values.get(name))

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._values

    def get_all(self) -> dict[str, JsonValue]:
        """Snapshot; later mutations of the store never change it."""
        with self._lock:
            return copy.deepcopy(self._values)

    def snapshot(self) -> tuple[int, dict[str, JsonValue]]:
        """Revision and values read together."""
        with self._lock:
            return self._revision, copy.deepcopy(self._values)

    def names(self) -> list[str]:
        with self._lock:
            return list(self._values)

    def revision(self) -> int:
        with self._lock:
            return self._revision

    def subscribe(self, listener: RevisionListener) -> Callable[[], None]:
        """Call *listener(revision)* after every mutation. Returns an unsubscribe function."""
        with self._listeners_lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._listeners_lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, revision: int) -> None:
        with self._listeners_lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(revision)
            except Exception:
                _log.exception("Variable listener failed at revision %d", revision)
