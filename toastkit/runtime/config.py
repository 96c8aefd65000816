"""Toaster settings sourced from the environment."""

from __future__ import annotations

import os
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Mapping

from toastkit.api.layout import LayoutMetrics


@dataclass(frozen=True, slots=True)
class ToasterSettings:
    """Process-level stacking and timing constants."""

    base_margin_px: float = 15.0
    spacing_px: float = 15.0
    narrow_viewport_px: float = 360.0
    entry_delay_ms: float = 10.0
    exit_delay_ms: float = 400.0
    oldest_first: bool = True
    diagnostics_capacity: int = 1000
    log_level: str = "INFO"

    def layout_metrics(self) -> LayoutMetrics:
        return LayoutMetrics(
            base_margin=self.base_margin_px,
            spacing=self.spacing_px,
            narrow_viewport=self.narrow_viewport_px,
        )


_SETTINGS: ContextVar[ToasterSettings | None] = ContextVar("toastkit_settings", default=None)


def _raw(name: str, *, env: Mapping[str, str] | None = None) -> str | None:
    value = os.getenv(name) if env is None else env.get(name)
    return None if value is None else str(value)


def _flag(name: str, default: bool, *, env: Mapping[str, str] | None = None) -> bool:
    raw = _raw(name, env=env)
    if raw is None:
        return bool(default)
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return bool(default)


def _int(
    name: str,
    default: int,
    *,
    minimum: int | None = None,
    env: Mapping[str, str] | None = None,
) -> int:
    raw = _raw(name, env=env)
    if raw is None:
        value = int(default)
    else:
        try:
            value = int(raw.strip())
        except ValueError:
            value = int(default)
    if minimum is None:
        return value
    return max(int(minimum), value)


def _float(
    name: str,
    default: float,
    *,
    minimum: float | None = None,
    env: Mapping[str, str] | None = None,
) -> float:
    raw = _raw(name, env=env)
    if raw is None:
        value = float(default)
    else:
        try:
            value = float(raw.strip())
        except ValueError:
            value = float(default)
    if minimum is None:
        return value
    return max(float(minimum), value)


def resolve_log_level_name(default: str = "INFO", *, env: Mapping[str, str] | None = None) -> str:
    """Resolve log level with package-prefixed override."""
    value = _raw("TOASTKIT_LOG_LEVEL", env=env)
    if value is None:
        value = _raw("LOG_LEVEL", env=env) or default
    return value.strip().upper()


def load_toaster_settings(*, env: Mapping[str, str] | None = None) -> ToasterSettings:
    return ToasterSettings(
        base_margin_px=_float("TOASTKIT_BASE_MARGIN_PX", 15.0, minimum=0.0, env=env),
        spacing_px=_float("TOASTKIT_SPACING_PX", 15.0, minimum=0.0, env=env),
        narrow_viewport_px=_float("TOASTKIT_NARROW_VIEWPORT_PX", 360.0, minimum=0.0, env=env),
        entry_delay_ms=_float("TOASTKIT_ENTRY_DELAY_MS", 10.0, minimum=0.0, env=env),
        exit_delay_ms=_float("TOASTKIT_EXIT_DELAY_MS", 400.0, minimum=0.0, env=env),
        oldest_first=_flag("TOASTKIT_OLDEST_FIRST", True, env=env),
        diagnostics_capacity=_int("TOASTKIT_DIAGNOSTICS_CAPACITY", 1000, minimum=1, env=env),
        log_level=resolve_log_level_name(env=env),
    )


def initialize_toaster_settings(*, env: Mapping[str, str] | None = None) -> ToasterSettings:
    settings = load_toaster_settings(env=env)
    _SETTINGS.set(settings)
    return settings


def set_toaster_settings(settings: ToasterSettings) -> ToasterSettings:
    _SETTINGS.set(settings)
    return settings


def get_toaster_settings() -> ToasterSettings:
    settings = _SETTINGS.get()
    if settings is not None:
        return settings
    return initialize_toaster_settings()


__all__ = [
    "ToasterSettings",
    "get_toaster_settings",
    "initialize_toaster_settings",
    "load_toaster_settings",
    "resolve_log_level_name",
    "set_toaster_settings",
]
