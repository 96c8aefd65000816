"""Public layout primitives shared by the stacking engine and renderers."""

from __future__ import annotations

from dataclasses import dataclass

from toastkit.api.options import Gravity, Position


@dataclass(frozen=True, slots=True)
class Extent:
    """Rendered size of a toast node in surface units."""

    width: float
    height: float


@dataclass(frozen=True, slots=True)
class LayoutMetrics:
    """Stacking constants applied by every layout pass."""

    base_margin: float = 15.0
    spacing: float = 15.0
    narrow_viewport: float = 360.0


@dataclass(frozen=True, slots=True)
class OffsetSpec:
    """Computed placement of one toast.

    ``edge_px`` is the distance from the gravity edge. ``inset_px`` is the
    distance from the left or right surface edge and is ``None`` for
    centered toasts, which renderers center horizontally themselves.
    """

    gravity: Gravity
    edge_px: float
    position: Position
    inset_px: float | None
    translate_x: str = "0px"
    translate_y: str = "0px"

    @property
    def top(self) -> float | None:
        return self.edge_px if self.gravity is Gravity.TOP else None

    @property
    def bottom(self) -> float | None:
        return self.edge_px if self.gravity is Gravity.BOTTOM else None

    @property
    def left(self) -> float | None:
        return self.inset_px if self.position is Position.LEFT else None

    @property
    def right(self) -> float | None:
        return self.inset_px if self.position is Position.RIGHT else None

    @property
    def centered(self) -> bool:
        return self.position is Position.CENTER

    def transform(self) -> str:
        """Return the CSS-style transform for this placement."""
        nudge = f"translate({self.translate_x}, {self.translate_y})"
        if self.centered:
            return f"translateX(-50%) {nudge}"
        return nudge
