"""Stacking layout: per-bucket offsets for every active toast."""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import Protocol

from toastkit.api.layout import LayoutMetrics, OffsetSpec
from toastkit.api.options import EffectiveConfig, Gravity, OffsetValue, Position

Bucket = tuple[Gravity, Position]

DEFAULT_METRICS = LayoutMetrics()


class Stackable(Protocol):
    """What the layout pass reads from a toast."""

    @property
    def id(self) -> int: ...

    @property
    def config(self) -> EffectiveConfig: ...

    @property
    def stack_extent(self) -> float: ...


def bucket_for(config: EffectiveConfig, viewport_width: float, metrics: LayoutMetrics = DEFAULT_METRICS) -> Bucket:
    """Return the effective bucket, collapsing to center on narrow surfaces."""
    if viewport_width <= metrics.narrow_viewport:
        return (config.gravity, Position.CENTER)
    return (config.gravity, config.position)


def recompute(
    toasts: Iterable[Stackable],
    viewport_width: float,
    *,
    metrics: LayoutMetrics = DEFAULT_METRICS,
) -> dict[int, OffsetSpec]:
    """Compute placement for each toast, in iteration order.

    Every bucket starts at ``metrics.base_margin`` and grows by each toast's
    extent plus ``metrics.spacing``. Nothing is carried between calls.
    """
    accumulators: dict[Bucket, float] = {}
    placements: dict[int, OffsetSpec] = {}
    for toast in toasts:
        gravity, position = bucket_for(toast.config, viewport_width, metrics)
        edge_px = accumulators.get((gravity, position), metrics.base_margin)
        translate_x, translate_y = _nudge(toast.config, gravity, position)
        placements[toast.id] = OffsetSpec(
            gravity=gravity,
            edge_px=edge_px,
            position=position,
            inset_px=None if position is Position.CENTER else metrics.base_margin,
            translate_x=translate_x,
            translate_y=translate_y,
        )
        accumulators[(gravity, position)] = edge_px + toast.stack_extent + metrics.spacing
    return placements


def axis_length(value: OffsetValue) -> str:
    """Render one fine-offset component as a CSS length."""
    if not value:
        return "0px"
    if isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            return value
        # "nan" and "inf" parse as floats but are not lengths.
        return _px(number) if math.isfinite(number) else value
    return _px(value)


def negate_length(length: str) -> str:
    if length in ("0px", "0"):
        return length
    if length.startswith("-"):
        return length[1:]
    return f"-{length}"


def _nudge(config: EffectiveConfig, gravity: Gravity, position: Position) -> tuple[str, str]:
    x = axis_length(config.offset.x)
    y = axis_length(config.offset.y)
    if position is Position.CENTER:
        x = "0px"
    elif position is Position.RIGHT:
        x = negate_length(x)
    if gravity is Gravity.BOTTOM:
        y = negate_length(y)
    return x, y


def _px(number: int | float) -> str:
    if isinstance(number, float) and number.is_integer():
        number = int(number)
    return f"{number}px"
