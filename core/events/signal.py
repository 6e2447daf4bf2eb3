from __future__ import annotations

import logging
from threading import RLock
from typing import Callable, Generic, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


class Signal(Generic[T]):
    """
    Framework-agnostic signal/slot primitive used for domain events.
    Subscribers are UI collaborators; the core only emits.
    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._subscribers: list[Callable[[T], None]] = []
        self._lock: RLock = RLock()

    def connect(self, callback: Callable[[T], None]) -> None:
        with self._lock:
            if callback not in self._subscribers:
                self._subscribers.append(callback)

    def disconnect(self, callback: Callable[[T], None]) -> None:
        with self._lock:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def emit(self, payload: T) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
        stale: list[Callable[[T], None]] = []
        for callback in subscribers:
            try:
                callback(payload)
            except RuntimeError as exc:
                # Widget-bound slots can outlive their widget ("already deleted").
                msg = str(exc).lower()
                if "already deleted" in msg or "has been deleted" in msg:
                    stale.append(callback)
                    continue
                raise
            except ReferenceError:
                stale.append(callback)
        if stale:
            logger.debug("Pruning %d stale subscriber(s) from signal %s", len(stale), self.name)
            with self._lock:
                for callback in stale:
                    if callback in self._subscribers:
                        self._subscribers.remove(callback)


__all__ = ["Signal"]
