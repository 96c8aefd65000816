"""Public toast option types and the resolved per-toast configuration."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType

OffsetValue = int | float | str
ToastCallback = Callable[[], None]


class ToastType(StrEnum):
    DEFAULT = "default"
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"
    WARNING = "warning"


class Gravity(StrEnum):
    """Viewport edge a toast anchors to."""

    TOP = "top"
    BOTTOM = "bottom"


class Position(StrEnum):
    """Horizontal anchor within the gravity edge."""

    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"


@dataclass(frozen=True, slots=True)
class FineOffset:
    """Caller-supplied nudge, expressed as "move inward/downward"."""

    x: OffsetValue = 0
    y: OffsetValue = 0


def _empty_style() -> Mapping[str, str]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class EffectiveConfig:
    """Immutable configuration resolved once per toast.

    Only ``type``, ``gravity``, ``position``, ``duration_ms``,
    ``stop_on_focus`` and ``offset`` drive the lifecycle and layout engine.
    Everything else is handed to the renderer untouched.
    """

    type: ToastType = ToastType.DEFAULT
    gravity: Gravity = Gravity.TOP
    position: Position = Position.RIGHT
    duration_ms: int = 3000
    stop_on_focus: bool = True
    offset: FineOffset = field(default_factory=FineOffset)
    text: str = ""
    node: object | None = None
    escape_markup: bool = True
    aria_live: str = "polite"
    avatar: str = ""
    close: bool = False
    on_click: ToastCallback | None = None
    destination: str | None = None
    new_window: bool = False
    callback: ToastCallback | None = None
    style: Mapping[str, str] = field(default_factory=_empty_style)
    class_name: str = ""
    selector: object | None = None

    @property
    def bucket(self) -> tuple[Gravity, Position]:
        return (self.gravity, self.position)


@dataclass(frozen=True, slots=True)
class NavigateAction:
    """Click opens ``destination``."""

    destination: str
    new_window: bool = False


@dataclass(frozen=True, slots=True)
class InvokeAction:
    """Click invokes the caller's ``on_click``."""

    callback: ToastCallback


ClickAction = NavigateAction | InvokeAction


def resolve_click_action(config: EffectiveConfig) -> ClickAction | None:
    """Return what a click on the toast body should do.

    A configured ``destination`` takes precedence over ``on_click``.
    """
    if config.destination:
        return NavigateAction(destination=config.destination, new_window=config.new_window)
    if config.on_click is not None:
        return InvokeAction(callback=config.on_click)
    return None
