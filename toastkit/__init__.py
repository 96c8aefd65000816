"""Stacked toast notifications: lifecycle, timing and layout engine."""

from toastkit.api import (
    Extent,
    Gravity,
    InvalidConfig,
    NotInitialized,
    OffsetSpec,
    Position,
    RenderFailure,
    ToastHandle,
    ToastState,
    ToastType,
    create_toaster,
)

__version__ = "1.0.0"

__all__ = [
    "Extent",
    "Gravity",
    "InvalidConfig",
    "NotInitialized",
    "OffsetSpec",
    "Position",
    "RenderFailure",
    "ToastHandle",
    "ToastState",
    "ToastType",
    "create_toaster",
]
