"""Public toastkit API contracts."""

from toastkit.api.diagnostics import DiagnosticsPort, create_diagnostics
from toastkit.api.errors import InvalidConfig, NotInitialized, RenderFailure, ToastError
from toastkit.api.events import EventBus, Subscription, create_event_bus
from toastkit.api.layout import Extent, LayoutMetrics, OffsetSpec
from toastkit.api.lifecycle import ACTIVE_STATES, ToastState, ToastStateChanged
from toastkit.api.logging import JsonFormatter, ToastLoggingConfig
from toastkit.api.options import (
    ClickAction,
    EffectiveConfig,
    FineOffset,
    Gravity,
    InvokeAction,
    NavigateAction,
    Position,
    ToastType,
    resolve_click_action,
)
from toastkit.api.render import Materialized, ToastRenderer, ToastSink
from toastkit.api.toaster import ToastHandle, Toaster, create_toaster

__all__ = [
    "ACTIVE_STATES",
    "ClickAction",
    "DiagnosticsPort",
    "EffectiveConfig",
    "EventBus",
    "Extent",
    "FineOffset",
    "Gravity",
    "InvalidConfig",
    "InvokeAction",
    "JsonFormatter",
    "LayoutMetrics",
    "Materialized",
    "NavigateAction",
    "NotInitialized",
    "OffsetSpec",
    "Position",
    "RenderFailure",
    "Subscription",
    "ToastError",
    "ToastHandle",
    "ToastLoggingConfig",
    "ToastRenderer",
    "ToastSink",
    "ToastState",
    "ToastStateChanged",
    "ToastType",
    "Toaster",
    "create_diagnostics",
    "create_event_bus",
    "create_toaster",
    "resolve_click_action",
]
