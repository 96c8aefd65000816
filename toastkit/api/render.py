"""Renderer boundary contracts consumed by the toast engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from toastkit.api.layout import Extent, OffsetSpec
from toastkit.api.options import EffectiveConfig


@dataclass(frozen=True, slots=True)
class Materialized:
    """Result of materializing one toast node."""

    handle: object
    extent: Extent | None = None


@runtime_checkable
class ToastSink(Protocol):
    """Feedback channel renderers use to report node events."""

    def extent_ready(self, toast_id: int, extent: Extent) -> None:
        """Report measured dimensions once the node is laid out."""

    def request_close(self, toast_id: int) -> None:
        """Report a click on the close affordance."""

    def pointer_entered(self, toast_id: int) -> None:
        """Report the pointer moving over the node."""

    def pointer_left(self, toast_id: int) -> None:
        """Report the pointer leaving the node."""


class ToastRenderer(Protocol):
    """Rendering capabilities the engine needs from a surface."""

    def materialize(self, toast_id: int, config: EffectiveConfig, sink: ToastSink) -> Materialized:
        """Build and attach a node; extent may be unknown at this point."""

    def apply_offset(self, handle: object, spec: OffsetSpec) -> None:
        """Place a node; called repeatedly with updated values."""

    def set_visible(self, handle: object, visible: bool) -> None:
        """Play the entry (True) or exit (False) transition."""

    def detach(self, handle: object) -> None:
        """Remove a node from the surface. Must be idempotent."""

    def viewport_width(self) -> float:
        """Return the current surface width."""
