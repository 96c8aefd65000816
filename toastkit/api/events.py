"""Lifecycle notification bus contracts."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class Subscription:
    """Token returned by ``subscribe``; pass it back to ``unsubscribe``."""

    id: int
    event_type: type


class EventBus(Protocol):
    """Synchronous pub/sub keyed by event class.

    A handler registered for a class also receives instances of its
    subclasses. Handlers run in subscription order.
    """

    def subscribe[TEvent](self, event_type: type[TEvent], handler: Callable[[TEvent], None]) -> Subscription: ...

    def unsubscribe(self, subscription: Subscription) -> None: ...

    def publish(self, event: object) -> int:
        """Deliver ``event`` and return how many handlers ran."""
        ...


def create_event_bus() -> EventBus:
    from toastkit.runtime.events import RuntimeEventBus

    return RuntimeEventBus()
