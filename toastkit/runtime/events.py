"""In-process bus carrying toast state changes to subscribers."""

from __future__ import annotations

from collections.abc import Callable
from itertools import count
from typing import Any

from toastkit.api.events import Subscription

_Handler = Callable[[Any], None]


class RuntimeEventBus:
    """Handlers are grouped per event class and matched through the event MRO."""

    def __init__(self) -> None:
        self._ids = count(1)
        self._handlers: dict[type, dict[int, _Handler]] = {}
        self._published = 0

    @property
    def published_count(self) -> int:
        return self._published

    def subscribe[TEvent](self, event_type: type[TEvent], handler: Callable[[TEvent], None]) -> Subscription:
        subscription = Subscription(next(self._ids), event_type)
        self._handlers.setdefault(event_type, {})[subscription.id] = handler
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        handlers = self._handlers.get(subscription.event_type)
        if handlers is None:
            return
        handlers.pop(subscription.id, None)
        if not handlers:
            del self._handlers[subscription.event_type]

    def publish(self, event: object) -> int:
        """Run matching handlers on a snapshot taken before the first call."""
        self._published += 1
        matched = sorted(
            (
                (sub_id, handler)
                for cls in type(event).__mro__
                for sub_id, handler in self._handlers.get(cls, {}).items()
            ),
            key=lambda item: item[0],
        )
        for _sub_id, handler in matched:
            handler(event)
        return len(matched)
