"""PyQt6 renderer: frameless toast frames floating over a host widget."""

from __future__ import annotations

import re
from collections.abc import Callable

from toastkit.api.layout import Extent, OffsetSpec
from toastkit.api.options import EffectiveConfig, InvokeAction, NavigateAction, Position, resolve_click_action
from toastkit.api.render import Materialized, ToastSink

try:
    from PyQt6.QtCore import QEasingCurve, QEvent, QObject, QPropertyAnimation, Qt, QUrl
    from PyQt6.QtGui import QDesktopServices, QPixmap
    from PyQt6.QtWidgets import QFrame, QGraphicsOpacityEffect, QHBoxLayout, QLabel, QPushButton, QWidget
except ImportError as exc:  # pragma: no cover
    raise RuntimeError("PyQt6 is required for the Qt renderer. Install dependency 'PyQt6'.") from exc

TRANSITION_MS = 400
_PX = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*px\s*$")

TYPE_ACCENTS: dict[str, str] = {
    "default": "#334155",
    "success": "#15803d",
    "error": "#b91c1c",
    "info": "#1d4ed8",
    "warning": "#b45309",
}


def px_value(length: str) -> float:
    """Return the pixel amount of a ``"<n>px"`` length; other units count as 0."""
    match = _PX.match(length)
    return float(match.group(1)) if match else 0.0


def style_sheet(config: EffectiveConfig) -> str:
    accent = TYPE_ACCENTS.get(config.type.value, TYPE_ACCENTS["default"])
    rules = [f"background: {accent};", "color: #f8fafc;", "border-radius: 4px;", "padding: 8px 12px;"]
    rules.extend(f"{key}: {value};" for key, value in config.style.items() if value)
    return "ToastFrame { " + " ".join(rules) + " }"


class ToastFrame(QFrame):
    """One toast node; reports hover, clicks and close requests to the sink."""

    def __init__(self, toast_id: int, config: EffectiveConfig, sink: ToastSink, parent: QWidget) -> None:
        super().__init__(parent)
        self.toast_id = toast_id
        self.detached = False
        self._config = config
        self._sink = sink
        self.setObjectName("toast")
        self.setProperty("toastType", config.type.value)
        self.setProperty("toastClass", config.class_name)
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        self.setStyleSheet(style_sheet(config))
        if config.aria_live:
            self.setAccessibleDescription(config.aria_live)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(8, 6, 8, 6)
        layout.setSpacing(8)

        if isinstance(config.node, QWidget):
            layout.addWidget(config.node)
        else:
            message = QLabel(config.text, self)
            message.setObjectName("toast_message")
            message.setTextFormat(
                Qt.TextFormat.PlainText if config.escape_markup else Qt.TextFormat.RichText
            )
            message.setWordWrap(True)
            layout.addWidget(message)
            if config.avatar:
                avatar = QLabel(self)
                avatar.setObjectName("toast_avatar")
                avatar.setPixmap(QPixmap(config.avatar).scaled(32, 32, Qt.AspectRatioMode.KeepAspectRatio))
                layout.insertWidget(0 if config.position is Position.LEFT else layout.count(), avatar)

        if config.close:
            close_button = QPushButton("×", self)
            close_button.setObjectName("toast_close")
            close_button.setAccessibleName("Close")
            close_button.setFlat(True)
            close_button.clicked.connect(lambda: self._sink.request_close(self.toast_id))
            layout.addWidget(close_button)

        self.opacity = QGraphicsOpacityEffect(self)
        self.opacity.setOpacity(0.0)
        self.setGraphicsEffect(self.opacity)
        self._animation: QPropertyAnimation | None = None

    def fade_to(self, value: float, duration_ms: int) -> None:
        if self._animation is not None:
            self._animation.stop()
        self._animation = QPropertyAnimation(self.opacity, b"opacity", self)
        self._animation.setDuration(duration_ms)
        self._animation.setStartValue(self.opacity.opacity())
        self._animation.setEndValue(value)
        self._animation.setEasingCurve(QEasingCurve.Type.OutQuad)
        self._animation.start()

    def enterEvent(self, event) -> None:  # type: ignore[override]
        self._sink.pointer_entered(self.toast_id)
        super().enterEvent(event)

    def leaveEvent(self, event) -> None:  # type: ignore[override]
        self._sink.pointer_left(self.toast_id)
        super().leaveEvent(event)

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        if not self.detached:
            self._sink.extent_ready(self.toast_id, Extent(width=self.width(), height=self.height()))
        super().resizeEvent(event)

    def mousePressEvent(self, event) -> None:  # type: ignore[override]
        action = resolve_click_action(self._config)
        if isinstance(action, NavigateAction):
            QDesktopServices.openUrl(QUrl(action.destination))
        elif isinstance(action, InvokeAction):
            action.callback()
        super().mousePressEvent(event)


class _ResizeWatcher(QObject):
    def __init__(self, host: QWidget, on_resize: Callable[[], None]) -> None:
        super().__init__(host)
        self._on_resize = on_resize
        host.installEventFilter(self)

    def eventFilter(self, watched, event) -> bool:  # type: ignore[override]
        if event.type() == QEvent.Type.Resize:
            self._on_resize()
        return False


class QtToastRenderer:
    """Renderer port implementation for a PyQt6 host widget."""

    def __init__(self, host: QWidget, *, transition_ms: int = TRANSITION_MS) -> None:
        self._host = host
        self._transition_ms = transition_ms
        self._watcher: _ResizeWatcher | None = None

    @property
    def host(self) -> QWidget:
        return self._host

    def watch_resize(self, on_resize: Callable[[], None]) -> None:
        """Call ``on_resize`` whenever the host widget changes size."""
        self._watcher = _ResizeWatcher(self._host, on_resize)

    def materialize(self, toast_id: int, config: EffectiveConfig, sink: ToastSink) -> Materialized:
        parent = config.selector if isinstance(config.selector, QWidget) else self._host
        frame = ToastFrame(toast_id, config, sink, parent)
        frame.adjustSize()
        frame.show()
        frame.raise_()
        return Materialized(handle=frame, extent=Extent(width=frame.width(), height=frame.height()))

    def apply_offset(self, handle: object, spec: OffsetSpec) -> None:
        frame = _frame(handle)
        if frame.detached:
            return
        surface = frame.parentWidget() or self._host
        if spec.top is not None:
            y = spec.top
        else:
            y = surface.height() - spec.edge_px - frame.height()
        if spec.centered:
            x = (surface.width() - frame.width()) / 2
        elif spec.left is not None:
            x = spec.left
        else:
            x = surface.width() - (spec.inset_px or 0.0) - frame.width()
        x += px_value(spec.translate_x)
        y += px_value(spec.translate_y)
        frame.move(int(round(x)), int(round(y)))

    def set_visible(self, handle: object, visible: bool) -> None:
        frame = _frame(handle)
        if frame.detached:
            return
        frame.fade_to(1.0 if visible else 0.0, self._transition_ms)

    def detach(self, handle: object) -> None:
        frame = _frame(handle)
        if frame.detached:
            return
        frame.detached = True
        frame.hide()
        frame.setParent(None)
        frame.deleteLater()

    def viewport_width(self) -> float:
        return float(self._host.width())

    def frames(self) -> list[ToastFrame]:
        return [child for child in self._host.findChildren(ToastFrame) if not child.detached]


def _frame(handle: object) -> ToastFrame:
    if not isinstance(handle, ToastFrame):
        raise TypeError(f"not a Qt toast handle: {handle!r}")
    return handle
