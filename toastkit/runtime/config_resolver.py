"""Merge caller toast options over defaults into an EffectiveConfig."""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping
from enum import StrEnum
from types import MappingProxyType

from toastkit.api.errors import InvalidConfig
from toastkit.api.options import EffectiveConfig, FineOffset, Gravity, Position, ToastType

POSITION_LEFT_DEPRECATION = "Option `position_left` is deprecated. Use `position='left'` instead."

DEFAULT_OPTIONS: Mapping[str, object] = MappingProxyType(
    {
        "type": ToastType.DEFAULT,
        "gravity": Gravity.TOP,
        "position": Position.RIGHT,
        "position_left": False,
        "duration_ms": 3000,
        "stop_on_focus": True,
        "offset": FineOffset(),
        "text": "toastkit is awesome!",
        "node": None,
        "escape_markup": True,
        "aria_live": "polite",
        "avatar": "",
        "close": False,
        "on_click": None,
        "destination": None,
        "new_window": False,
        "callback": None,
        "style": MappingProxyType({}),
        "class_name": "",
        "selector": None,
        "background_color": "",
    }
)


def resolve_config(
    options: Mapping[str, object] | None = None,
    *,
    warn: Callable[[str], None] | None = None,
) -> EffectiveConfig:
    """Return the effective configuration for one toast.

    Keys whose value is ``None`` count as absent. Raises ``InvalidConfig``
    for unknown keys and for values outside the enumerated domains.
    """
    supplied = {key: value for key, value in dict(options or {}).items() if value is not None}
    unknown = sorted(set(supplied) - set(DEFAULT_OPTIONS))
    if unknown:
        raise InvalidConfig(f"unknown toast option(s): {', '.join(unknown)}")
    merged = {**DEFAULT_OPTIONS, **supplied}

    position = _enum(Position, merged["position"], "position")
    if merged["position_left"]:
        position = Position.LEFT
        if warn is not None:
            warn(POSITION_LEFT_DEPRECATION)

    style = _style(merged["style"])
    background = merged["background_color"]
    if background:
        style["background"] = str(background)

    on_click = merged["on_click"]
    callback = merged["callback"]
    for name, value in (("on_click", on_click), ("callback", callback)):
        if value is not None and not callable(value):
            raise InvalidConfig(f"{name} must be callable, got {value!r}")

    return EffectiveConfig(
        type=_enum(ToastType, merged["type"], "type"),
        gravity=_enum(Gravity, merged["gravity"], "gravity"),
        position=position,
        duration_ms=_duration(merged["duration_ms"]),
        stop_on_focus=bool(merged["stop_on_focus"]),
        offset=_offset(merged["offset"]),
        text=str(merged["text"]),
        node=merged["node"],
        escape_markup=bool(merged["escape_markup"]),
        aria_live=str(merged["aria_live"]),
        avatar=str(merged["avatar"]),
        close=bool(merged["close"]),
        on_click=on_click,
        destination=str(merged["destination"]) if merged["destination"] else None,
        new_window=bool(merged["new_window"]),
        callback=callback,
        style=MappingProxyType(style),
        class_name=str(merged["class_name"]),
        selector=merged["selector"],
    )


def _enum[TEnum: StrEnum](kind: type[TEnum], value: object, name: str) -> TEnum:
    if isinstance(value, kind):
        return value
    if isinstance(value, str):
        try:
            return kind(value)
        except ValueError:
            pass
    allowed = ", ".join(member.value for member in kind)
    raise InvalidConfig(f"{name} must be one of {allowed}; got {value!r}")


def _duration(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidConfig(f"duration_ms must be a non-negative integer; got {value!r}")
    return value


def _offset_value(value: object, axis: str) -> int | float | str:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise InvalidConfig(f"offset.{axis} must be a number or a length string; got {value!r}")
    if isinstance(value, float) and not math.isfinite(value):
        raise InvalidConfig(f"offset.{axis} must be finite; got {value!r}")
    return value


def _offset(value: object) -> FineOffset:
    if isinstance(value, FineOffset):
        return FineOffset(x=_offset_value(value.x, "x"), y=_offset_value(value.y, "y"))
    if not isinstance(value, Mapping):
        raise InvalidConfig(f"offset must be a mapping with x/y keys; got {value!r}")
    extra = sorted(set(value) - {"x", "y"})
    if extra:
        raise InvalidConfig(f"offset accepts only x and y; got {', '.join(map(str, extra))}")
    x = value.get("x")
    y = value.get("y")
    return FineOffset(
        x=0 if x is None else _offset_value(x, "x"),
        y=0 if y is None else _offset_value(y, "y"),
    )


def _style(value: object) -> dict[str, str]:
    if not isinstance(value, Mapping):
        raise InvalidConfig(f"style must be a mapping; got {value!r}")
    return {str(key): str(item) for key, item in value.items()}
