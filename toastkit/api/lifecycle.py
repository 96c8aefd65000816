"""Public toast lifecycle states and notifications."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ToastState(StrEnum):
    """Toast lifecycle states, in the only order they can be visited."""

    CREATED = "created"
    SHOWN = "shown"
    VISIBLE = "visible"
    DISMISSING = "dismissing"
    REMOVED = "removed"


ACTIVE_STATES: frozenset[ToastState] = frozenset(
    {ToastState.SHOWN, ToastState.VISIBLE, ToastState.DISMISSING}
)


@dataclass(frozen=True, slots=True)
class ToastStateChanged:
    """Published on the event bus after every lifecycle transition."""

    toast_id: int
    source: ToastState
    target: ToastState
    trigger: str
    at_ms: float
