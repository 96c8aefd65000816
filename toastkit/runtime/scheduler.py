"""Deferred task scheduler on a millisecond clock."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from heapq import heappop, heappush

TaskCallback = Callable[[], None]


@dataclass(slots=True)
class _Task:
    task_id: int
    due_ms: float
    callback: TaskCallback
    cancelled: bool = False


class Scheduler:
    """Single-threaded one-shot scheduler.

    The clock only moves when the host calls ``advance`` or ``run_due``;
    callbacks run to completion one at a time, in due order and then in
    scheduling order for equal due times.
    """

    def __init__(self) -> None:
        self._now_ms = 0.0
        self._next_task_id = 1
        self._tasks: dict[int, _Task] = {}
        self._queue: list[tuple[float, int]] = []

    @property
    def now_ms(self) -> float:
        return self._now_ms

    @property
    def queued_task_count(self) -> int:
        """Return count of active queued tasks."""
        return sum(1 for task in self._tasks.values() if not task.cancelled)

    def call_later(self, delay_ms: float, callback: TaskCallback) -> int:
        """Schedule a one-shot callback after delay."""
        if delay_ms < 0.0:
            raise ValueError("delay_ms must be >= 0")
        task_id = self._next_task_id
        self._next_task_id += 1
        due_ms = self._now_ms + delay_ms
        self._tasks[task_id] = _Task(task_id=task_id, due_ms=due_ms, callback=callback)
        heappush(self._queue, (due_ms, task_id))
        return task_id

    def cancel(self, task_id: int) -> None:
        """Cancel a scheduled task if it exists."""
        task = self._tasks.get(task_id)
        if task is not None:
            task.cancelled = True

    def is_pending(self, task_id: int) -> bool:
        task = self._tasks.get(task_id)
        return task is not None and not task.cancelled

    def advance(self, delta_ms: float) -> int:
        """Advance the clock and run due callbacks."""
        if delta_ms < 0.0:
            raise ValueError("delta_ms must be >= 0")
        return self.run_due(self._now_ms + delta_ms)

    def run_due(self, now_ms: float) -> int:
        """Run callbacks due at or before ``now_ms``.

        Each callback observes ``now_ms`` equal to its own due time, so
        chained delays stay exact when the host advances in large steps.
        If a callback raises, the remaining due callbacks still run and the
        clock still reaches ``now_ms`` before the exception propagates.
        """
        if now_ms < self._now_ms:
            raise ValueError("now_ms cannot move backwards")
        executed = 0
        try:
            while self._queue and self._queue[0][0] <= now_ms:
                due_ms, task_id = heappop(self._queue)
                task = self._tasks.pop(task_id, None)
                if task is None or task.cancelled:
                    continue
                self._now_ms = max(self._now_ms, due_ms)
                task.callback()
                executed += 1
        except Exception:
            self.run_due(now_ms)
            raise
        self._now_ms = now_ms
        return executed
