"""Observer registry fed after every engine mutation."""
from __future__ import annotations

import inspect
from typing import Callable, List

from .metrics import LiveMetrics
from .state import StateSnapshot

Subscriber = Callable[[StateSnapshot, LiveMetrics], None]
Unsubscribe = Callable[[], bool]


def _same_callback(a: Subscriber, b: Subscriber) -> bool:
    if a is b:
        return True
    # Each attribute access creates a new bound method object.
    return (
        inspect.ismethod(a)
        and inspect.ismethod(b)
        and a.__self__ is b.__self__
        and a.__func__ is b.__func__
    )


class SubscriptionRegistry:
    """Ordered set of ``(state, metrics)`` callbacks, compared by identity.

    Callbacks need not be hashable. Delivery iterates over a copy taken when
    the notification starts, so a callback that unsubscribes itself or another
    subscriber mid-delivery does not cause anyone to be skipped or called
    twice.
    """

    def __init__(self) -> None:
        self._subscribers: List[Subscriber] = []

    def __len__(self) -> int:
        return len(self._subscribers)

    def __contains__(self, callback: Subscriber) -> bool:
        return any(_same_callback(cb, callback) for cb in self._subscribers)

    def subscribe(self, callback: Subscriber) -> Unsubscribe:
        if callback not in self:
            self._subscribers.append(callback)

        def unsubscribe() -> bool:
            for index, cb in enumerate(self._subscribers):
                if _same_callback(cb, callback):
                    del self._subscribers[index]
                    return True
            return False

        return unsubscribe

    def notify(self, state: StateSnapshot, metrics: LiveMetrics) -> int:
        delivered = 0
        for callback in list(self._subscribers):
            callback(state, metrics)
            delivered += 1
        return delivered

    def clear(self) -> None:
        self._subscribers.clear()


__all__ = ["Subscriber", "SubscriptionRegistry", "Unsubscribe"]
