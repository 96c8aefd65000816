"""Public caller-facing toaster API."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from toastkit.api.layout import OffsetSpec
from toastkit.api.lifecycle import ToastState

if TYPE_CHECKING:
    from toastkit.api.diagnostics import DiagnosticsPort
    from toastkit.api.events import EventBus
    from toastkit.api.render import ToastRenderer
    from toastkit.runtime.config import ToasterSettings
    from toastkit.runtime.scheduler import Scheduler


class ToastControl(Protocol):
    def hide(self, handle: ToastHandle | int) -> None: ...

    def state_of(self, handle: ToastHandle | int) -> ToastState: ...


@dataclass(frozen=True, slots=True)
class ToastHandle:
    """Caller's reference to one shown toast."""

    id: int
    owner: ToastControl = field(repr=False, compare=False)

    @property
    def state(self) -> ToastState:
        return self.owner.state_of(self)

    def hide(self) -> None:
        self.owner.hide(self)


class Toaster(ToastControl, Protocol):
    """Show and retire stacked toasts on one rendering surface."""

    def show(self, options: Mapping[str, object] | None = None, /, **overrides: object) -> ToastHandle:
        """Resolve options, render the toast and start its lifecycle."""

    def active_ids(self) -> tuple[int, ...]:
        """Return ids of toasts currently on the surface, in stacking order."""

    def layout(self) -> dict[int, OffsetSpec]:
        """Return the offsets applied by the latest layout pass."""

    def relayout(self) -> dict[int, OffsetSpec]:
        """Recompute offsets, e.g. after the surface was resized."""

    def clear(self) -> None:
        """Dismiss every toast that is not already leaving."""


def create_toaster(
    renderer: ToastRenderer,
    *,
    scheduler: Scheduler | None = None,
    diagnostics: DiagnosticsPort | None = None,
    settings: ToasterSettings | None = None,
    event_bus: EventBus | None = None,
) -> Toaster:
    """Create default toaster implementation."""
    from toastkit.runtime.toaster import RuntimeToaster

    return RuntimeToaster(
        renderer,
        scheduler=scheduler,
        diagnostics=diagnostics,
        settings=settings,
        event_bus=event_bus,
    )
