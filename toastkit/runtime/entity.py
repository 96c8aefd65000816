"""Toast entity state and the ordered set of active toasts."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from toastkit.api.layout import Extent
from toastkit.api.lifecycle import ACTIVE_STATES, ToastState
from toastkit.api.options import EffectiveConfig


@dataclass(slots=True, eq=False)
class ToastEntity:
    """One notification's identity, configuration and mutable runtime state."""

    id: int
    config: EffectiveConfig
    created_at_ms: float
    state: ToastState = ToastState.CREATED
    remaining_ms: float = 0.0
    render_handle: object | None = None
    extent: Extent | None = None
    hovered: bool = False

    @property
    def is_active(self) -> bool:
        return self.state in ACTIVE_STATES

    @property
    def stack_extent(self) -> float:
        """Height along the gravity axis, zero until the renderer measured it."""
        return self.extent.height if self.extent is not None else 0.0


class ActiveToastSet:
    """Insertion-ordered collection of entities currently on the surface."""

    def __init__(self, *, oldest_first: bool = True) -> None:
        self._oldest_first = bool(oldest_first)
        self._entities: dict[int, ToastEntity] = {}

    @property
    def oldest_first(self) -> bool:
        return self._oldest_first

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[ToastEntity]:
        return iter(tuple(self._entities.values()))

    def __contains__(self, toast_id: object) -> bool:
        return toast_id in self._entities

    def get(self, toast_id: int) -> ToastEntity | None:
        return self._entities.get(toast_id)

    def ids(self) -> tuple[int, ...]:
        return tuple(self._entities)

    def add(self, entity: ToastEntity) -> None:
        """Insert at the tail (oldest-first) or at the head (newest-first)."""
        if entity.id in self._entities:
            raise ValueError(f"toast {entity.id} is already active")
        if self._oldest_first:
            self._entities[entity.id] = entity
            return
        self._entities = {entity.id: entity, **self._entities}

    def evict(self, toast_id: int) -> ToastEntity | None:
        return self._entities.pop(toast_id, None)
