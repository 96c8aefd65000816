"""Toast manager owning the active set for one rendering surface."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from toastkit.api.diagnostics import DiagnosticsPort
from toastkit.api.errors import NotInitialized
from toastkit.api.events import EventBus
from toastkit.api.layout import Extent, OffsetSpec
from toastkit.api.lifecycle import ToastState
from toastkit.api.render import ToastRenderer
from toastkit.api.toaster import ToastHandle
from toastkit.diagnostics.hub import DiagnosticHub
from toastkit.runtime.config import ToasterSettings, get_toaster_settings
from toastkit.runtime.config_resolver import resolve_config
from toastkit.runtime.diagnostics import HubDiagnostics
from toastkit.runtime.entity import ActiveToastSet, ToastEntity
from toastkit.runtime.events import RuntimeEventBus
from toastkit.runtime.lifecycle import (
    CloseRequested,
    ExtentReported,
    LifecycleController,
    LifecycleMessage,
    PointerEntered,
    PointerLeft,
)
from toastkit.runtime.scheduler import Scheduler

_LOG = logging.getLogger(__name__)


class RuntimeToaster:
    """Caller API plus the sink renderers report node events to."""

    def __init__(
        self,
        renderer: ToastRenderer,
        *,
        scheduler: Scheduler | None = None,
        diagnostics: DiagnosticsPort | None = None,
        settings: ToasterSettings | None = None,
        event_bus: EventBus | None = None,
        hub: DiagnosticHub | None = None,
    ) -> None:
        self._settings = settings or get_toaster_settings()
        self._scheduler = scheduler or Scheduler()
        self._hub = hub or DiagnosticHub(capacity=self._settings.diagnostics_capacity)
        self._diagnostics = diagnostics or HubDiagnostics(self._hub, clock=lambda: self._scheduler.now_ms)
        self._event_bus = event_bus or RuntimeEventBus()
        self._active = ActiveToastSet(oldest_first=self._settings.oldest_first)
        self._lifecycle = LifecycleController(
            renderer=renderer,
            scheduler=self._scheduler,
            active=self._active,
            event_bus=self._event_bus,
            hub=self._hub,
            metrics=self._settings.layout_metrics(),
            entry_delay_ms=self._settings.entry_delay_ms,
            exit_delay_ms=self._settings.exit_delay_ms,
        )
        self._next_id = 1
        self._admitted: set[int] = set()
        self._warned: set[str] = set()

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def hub(self) -> DiagnosticHub:
        return self._hub

    @property
    def event_bus(self) -> EventBus:
        return self._event_bus

    @property
    def settings(self) -> ToasterSettings:
        return self._settings

    def show(self, options: Mapping[str, object] | None = None, /, **overrides: object) -> ToastHandle:
        config = resolve_config({**dict(options or {}), **overrides}, warn=self._warn_once)
        entity = ToastEntity(id=self._next_id, config=config, created_at_ms=self._scheduler.now_ms)
        self._next_id += 1
        self._lifecycle.admit(entity, self)
        self._admitted.add(entity.id)
        _LOG.debug("toast %s shown in bucket %s/%s", entity.id, config.gravity, config.position)
        return ToastHandle(entity.id, self)

    def hide(self, handle: ToastHandle | int) -> None:
        self._lifecycle.dispatch(CloseRequested(_toast_id(handle), reason="hide"))

    def state_of(self, handle: ToastHandle | int) -> ToastState:
        toast_id = _toast_id(handle)
        entity = self._active.get(toast_id)
        if entity is not None:
            return entity.state
        if toast_id in self._admitted:
            return ToastState.REMOVED
        raise NotInitialized(toast_id)

    def active_ids(self) -> tuple[int, ...]:
        return self._active.ids()

    def remaining_ms(self, handle: ToastHandle | int) -> float:
        """Return the countdown left as of the last timer start or pause."""
        toast_id = _toast_id(handle)
        entity = self._active.get(toast_id)
        if entity is None:
            raise NotInitialized(toast_id)
        return entity.remaining_ms

    def layout(self) -> dict[int, OffsetSpec]:
        return self._lifecycle.layout

    def relayout(self) -> dict[int, OffsetSpec]:
        return self._lifecycle.relayout()

    def clear(self) -> None:
        for entity in self._active:
            if entity.state is not ToastState.DISMISSING:
                self._lifecycle.dispatch(CloseRequested(entity.id, reason="clear"))

    def extent_ready(self, toast_id: int, extent: Extent) -> None:
        self._deliver(ExtentReported(toast_id, extent))

    def request_close(self, toast_id: int) -> None:
        self._deliver(CloseRequested(toast_id, reason="close"))

    def pointer_entered(self, toast_id: int) -> None:
        self._deliver(PointerEntered(toast_id))

    def pointer_left(self, toast_id: int) -> None:
        self._deliver(PointerLeft(toast_id))

    def _deliver(self, message: LifecycleMessage) -> None:
        # Renderers may report late events for nodes that are already gone.
        if message.toast_id not in self._active:
            _LOG.debug("dropping %s for inactive toast", type(message).__name__)
            return
        self._lifecycle.dispatch(message)

    def _warn_once(self, message: str) -> None:
        if message in self._warned:
            return
        self._warned.add(message)
        self._diagnostics.warn(message)


def _toast_id(handle: ToastHandle | int) -> int:
    return handle.id if isinstance(handle, ToastHandle) else int(handle)
