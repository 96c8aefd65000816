"""Wall-clock helpers for hosts that pump the scheduler in real time."""

from __future__ import annotations

from collections.abc import Callable
from time import monotonic


class PumpClock:
    """Monotonic clock reporting non-negative millisecond deltas between ticks."""

    def __init__(self, *, time_source: Callable[[], float] | None = None) -> None:
        self._time_source = time_source or monotonic
        self._last_seconds: float | None = None
        self._elapsed_ms = 0.0

    @property
    def elapsed_ms(self) -> float:
        return self._elapsed_ms

    def next_delta_ms(self) -> float:
        """Return milliseconds since the previous call (0 on the first call)."""
        now = self._time_source()
        if self._last_seconds is None:
            delta = 0.0
        else:
            delta = max(0.0, now - self._last_seconds) * 1000.0
        self._last_seconds = now
        self._elapsed_ms += delta
        return delta
