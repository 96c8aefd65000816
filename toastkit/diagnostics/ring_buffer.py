"""Fixed-capacity ring buffer for diagnostics events."""

from __future__ import annotations

from collections import deque


class RingBuffer[T]:
    """Drop-oldest buffer keeping the most recent ``capacity`` items."""

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be > 0")
        self._items: deque[T] = deque(maxlen=int(capacity))

    @property
    def capacity(self) -> int:
        return self._items.maxlen or 0

    @property
    def size(self) -> int:
        return len(self._items)

    def append(self, value: T) -> None:
        self._items.append(value)

    def clear(self) -> None:
        self._items.clear()

    def snapshot(self, *, limit: int | None = None) -> list[T]:
        """Return items oldest-first, optionally only the newest ``limit``."""
        out = list(self._items)
        if limit is None or limit >= len(out):
            return out
        return out[len(out) - max(0, int(limit)) :]
