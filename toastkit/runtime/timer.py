"""Auto-dismiss countdowns with hover pause/resume."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from toastkit.runtime.entity import ToastEntity
from toastkit.runtime.scheduler import Scheduler

ExpireCallback = Callable[[], None]


@dataclass(slots=True)
class _Countdown:
    task_id: int
    started_at_ms: float


class TimerController:
    """Owns at most one scheduler task per toast.

    ``remaining_ms`` on the entity is authoritative while paused and is
    refreshed from elapsed scheduler time on every pause.
    """

    def __init__(self, scheduler: Scheduler) -> None:
        self._scheduler = scheduler
        self._running: dict[int, _Countdown] = {}
        self._paused: set[int] = set()

    def is_running(self, entity: ToastEntity) -> bool:
        return entity.id in self._running

    def is_paused(self, entity: ToastEntity) -> bool:
        return entity.id in self._paused

    def start(self, entity: ToastEntity, on_expire: ExpireCallback) -> None:
        """Start the full countdown; no-op for persistent toasts."""
        if entity.config.duration_ms == 0:
            return
        self.cancel(entity)
        entity.remaining_ms = float(entity.config.duration_ms)
        self._arm(entity, on_expire)

    def pause(self, entity: ToastEntity) -> None:
        countdown = self._running.pop(entity.id, None)
        if countdown is None:
            return
        self._scheduler.cancel(countdown.task_id)
        elapsed = self._scheduler.now_ms - countdown.started_at_ms
        entity.remaining_ms = max(0.0, entity.remaining_ms - elapsed)
        self._paused.add(entity.id)

    def resume(self, entity: ToastEntity, on_expire: ExpireCallback) -> None:
        """Continue a paused countdown from its remaining time."""
        if entity.id not in self._paused:
            return
        self._paused.discard(entity.id)
        self._arm(entity, on_expire)

    def cancel(self, entity: ToastEntity) -> None:
        self._paused.discard(entity.id)
        countdown = self._running.pop(entity.id, None)
        if countdown is not None:
            self._scheduler.cancel(countdown.task_id)

    def _arm(self, entity: ToastEntity, on_expire: ExpireCallback) -> None:
        def fire() -> None:
            self._running.pop(entity.id, None)
            entity.remaining_ms = 0.0
            on_expire()

        task_id = self._scheduler.call_later(entity.remaining_ms, fire)
        self._running[entity.id] = _Countdown(task_id=task_id, started_at_ms=self._scheduler.now_ms)
