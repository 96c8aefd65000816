"""PyQt6 adapter for the toast engine."""

from toastkit.qt.bootstrap import QtToasterBundle, create_qt_toaster
from toastkit.qt.pump import QtSchedulerPump
from toastkit.qt.renderer import QtToastRenderer, ToastFrame

__all__ = [
    "QtSchedulerPump",
    "QtToastRenderer",
    "QtToasterBundle",
    "ToastFrame",
    "create_qt_toaster",
]
