"""Calculator events and the bus that carries them from the model to the window."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable, DefaultDict, FrozenSet, Iterable

logger = logging.getLogger(__name__)

RESULT_UPDATED = "result_updated"
RESULT_CLEARED = "result_cleared"
VALIDATION_FAILED = "validation_failed"
HISTORY_CHANGED = "history_changed"

CALCULATOR_EVENTS: FrozenSet[str] = frozenset({RESULT_UPDATED, RESULT_CLEARED, VALIDATION_FAILED, HISTORY_CHANGED})

EventCallback = Callable[..., None]


class EventBus:
    """Dispatches calculator events to subscribers on the publishing thread.

    Only names in *events* may be subscribed to or published; a misspelt event
    name raises :class:`ValueError` instead of silently never firing.
    """

    def __init__(self, events: Iterable[str] = CALCULATOR_EVENTS) -> None:
        self.events: FrozenSet[str] = frozenset(events)
        self._subscribers: DefaultDict[str, list[EventCallback]] = defaultdict(list)

    def _check(self, event: str) -> None:
        if event not in self.events:
            raise ValueError(f"Unknown calculator event {event!r}")

    def subscribe(self, event: str, callback: EventCallback) -> Callable[[], None]:
        """Register *callback* for *event* and return a handle that removes it again."""

        self._check(event)
        self._subscribers[event].append(callback)

        def _unsubscribe() -> None:
            callbacks = self._subscribers.get(event)
            if not callbacks or callback not in callbacks:
                return
            callbacks.remove(callback)
            if not callbacks:
                del self._subscribers[event]

        return _unsubscribe

    def subscriber_count(self, event: str) -> int:
        return len(self._subscribers.get(event, ()))

    def publish(self, event: str, **payload: Any) -> int:
        """Deliver *payload* to every subscriber of *event* and return how many succeeded.

        A subscriber that raises is logged and skipped.
        """

        self._check(event)
        delivered = 0
        for callback in tuple(self._subscribers.get(event, ())):
            try:
                callback(**payload)
            except Exception:
                logger.exception("Subscriber %r failed while handling %s", callback, event)
                continue
            delivered += 1
        return delivered


__all__ = [
    "CALCULATOR_EVENTS",
    "EventBus",
    "EventCallback",
    "HISTORY_CHANGED",
    "RESULT_CLEARED",
    "RESULT_UPDATED",
    "VALIDATION_FAILED",
]
