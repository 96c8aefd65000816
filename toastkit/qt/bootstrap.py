"""Qt toaster wiring."""

from __future__ import annotations

from dataclasses import dataclass

from toastkit.api.toaster import Toaster
from toastkit.qt.pump import QtSchedulerPump
from toastkit.qt.renderer import QtToastRenderer
from toastkit.runtime.config import ToasterSettings
from toastkit.runtime.scheduler import Scheduler
from toastkit.runtime.toaster import RuntimeToaster

try:
    from PyQt6.QtWidgets import QWidget
except ImportError as exc:  # pragma: no cover
    raise RuntimeError("PyQt6 is required for the Qt toaster. Install dependency 'PyQt6'.") from exc


@dataclass(frozen=True, slots=True)
class QtToasterBundle:
    toaster: Toaster
    renderer: QtToastRenderer
    pump: QtSchedulerPump


def create_qt_toaster(
    host: QWidget,
    *,
    settings: ToasterSettings | None = None,
    interval_ms: int = 16,
    start: bool = True,
) -> QtToasterBundle:
    """Build a toaster rendering over ``host`` and pumped by a QTimer."""
    scheduler = Scheduler()
    renderer = QtToastRenderer(host)
    toaster = RuntimeToaster(renderer, scheduler=scheduler, settings=settings)
    renderer.watch_resize(toaster.relayout)
    pump = QtSchedulerPump(scheduler, interval_ms=interval_ms, parent=host)
    if start:
        pump.start()
    return QtToasterBundle(toaster=toaster, renderer=renderer, pump=pump)
