"""Drive the toast scheduler from the Qt event loop."""

from __future__ import annotations

import logging

from toastkit.api.errors import RenderFailure
from toastkit.runtime.scheduler import Scheduler
from toastkit.runtime.time import PumpClock

try:
    from PyQt6.QtCore import QObject, QTimer
except ImportError as exc:  # pragma: no cover
    raise RuntimeError("PyQt6 is required for the Qt scheduler pump. Install dependency 'PyQt6'.") from exc

_LOG = logging.getLogger(__name__)


class QtSchedulerPump(QObject):
    """Advances a ``Scheduler`` by real elapsed time on every timer tick."""

    def __init__(
        self,
        scheduler: Scheduler,
        *,
        interval_ms: int = 16,
        clock: PumpClock | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._scheduler = scheduler
        self._clock = clock or PumpClock()
        self._timer = QTimer(self)
        self._timer.setInterval(max(1, int(interval_ms)))
        self._timer.timeout.connect(self.tick)

    @property
    def active(self) -> bool:
        return self._timer.isActive()

    def start(self) -> None:
        self._clock.next_delta_ms()
        self._timer.start()

    def stop(self) -> None:
        self._timer.stop()

    def tick(self) -> int:
        """Run every task that became due since the previous tick."""
        try:
            return self._scheduler.advance(self._clock.next_delta_ms())
        except RenderFailure as exc:
            _LOG.error("toast %s: %s", exc.toast_id, exc)
            return 0
        except Exception:
            # The scheduler already ran every due task; a Qt slot must not raise.
            _LOG.exception("scheduled toast task failed")
            return 0
