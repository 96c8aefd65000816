"""Toast lifecycle state machine.

Every state change goes through the transition table below, and every
external stimulus (timer expiry, pointer hover, close clicks, measured
extents, scheduled entry/exit delays) arrives as a message handled by
``LifecycleController.dispatch``. Handlers run to completion, so layout
passes always observe the active set after the add or evict that
triggered them.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from toastkit.api.errors import NotInitialized, RenderFailure
from toastkit.api.events import EventBus
from toastkit.api.layout import Extent, LayoutMetrics, OffsetSpec
from toastkit.api.lifecycle import ToastState, ToastStateChanged
from toastkit.api.render import ToastRenderer, ToastSink
from toastkit.diagnostics.hub import DiagnosticHub
from toastkit.runtime.entity import ActiveToastSet, ToastEntity
from toastkit.runtime.errors import RECOVERABLE_RENDER_ERRORS, log_recoverable
from toastkit.runtime.flow import FlowProgram, FlowTransition
from toastkit.runtime.layout import recompute
from toastkit.runtime.scheduler import Scheduler
from toastkit.runtime.timer import TimerController

_LOG = logging.getLogger(__name__)

LIFECYCLE = FlowProgram[ToastState](
    (
        FlowTransition("show", ToastState.CREATED, ToastState.SHOWN),
        FlowTransition("reveal", ToastState.SHOWN, ToastState.VISIBLE),
        FlowTransition("dismiss", ToastState.SHOWN, ToastState.DISMISSING),
        FlowTransition("dismiss", ToastState.VISIBLE, ToastState.DISMISSING),
        FlowTransition("detach", ToastState.DISMISSING, ToastState.REMOVED),
    )
)


@dataclass(frozen=True, slots=True)
class RevealDue:
    toast_id: int


@dataclass(frozen=True, slots=True)
class TimerExpired:
    toast_id: int


@dataclass(frozen=True, slots=True)
class CloseRequested:
    toast_id: int
    reason: str = "close"


@dataclass(frozen=True, slots=True)
class PointerEntered:
    toast_id: int


@dataclass(frozen=True, slots=True)
class PointerLeft:
    toast_id: int


@dataclass(frozen=True, slots=True)
class ExtentReported:
    toast_id: int
    extent: Extent


@dataclass(frozen=True, slots=True)
class DetachDue:
    toast_id: int


LifecycleMessage = (
    RevealDue | TimerExpired | CloseRequested | PointerEntered | PointerLeft | ExtentReported | DetachDue
)


class LifecycleController:
    """Sole writer of toast states and of the active set."""

    def __init__(
        self,
        *,
        renderer: ToastRenderer,
        scheduler: Scheduler,
        active: ActiveToastSet,
        event_bus: EventBus,
        hub: DiagnosticHub,
        metrics: LayoutMetrics,
        entry_delay_ms: float,
        exit_delay_ms: float,
    ) -> None:
        self._renderer = renderer
        self._scheduler = scheduler
        self._active = active
        self._event_bus = event_bus
        self._hub = hub
        self._metrics = metrics
        self._entry_delay_ms = entry_delay_ms
        self._exit_delay_ms = exit_delay_ms
        self._timers = TimerController(scheduler)
        self._reveal_tasks: dict[int, int] = {}
        self._layout: dict[int, OffsetSpec] = {}
        self._viewport_width = math.inf
        self._handlers: dict[type, Callable[[ToastEntity, Any], None]] = {
            RevealDue: self._on_reveal_due,
            TimerExpired: self._on_timer_expired,
            CloseRequested: self._on_close_requested,
            PointerEntered: self._on_pointer_entered,
            PointerLeft: self._on_pointer_left,
            ExtentReported: self._on_extent_reported,
            DetachDue: self._on_detach_due,
        }

    @property
    def timers(self) -> TimerController:
        return self._timers

    @property
    def layout(self) -> dict[int, OffsetSpec]:
        return dict(self._layout)

    def admit(self, entity: ToastEntity, sink: ToastSink) -> None:
        """Materialize a created toast and move it to SHOWN."""
        if entity.state is not ToastState.CREATED:
            raise ValueError(f"toast {entity.id} was already admitted")
        try:
            materialized = self._renderer.materialize(entity.id, entity.config, sink)
        except RECOVERABLE_RENDER_ERRORS as exc:
            _LOG.exception("renderer failed to materialize toast %s", entity.id)
            self._emit("render.failure", entity.id, level="error", operation="materialize")
            raise RenderFailure(entity.id, "materialize") from exc
        entity.render_handle = materialized.handle
        entity.extent = materialized.extent
        self._active.add(entity)
        self._transition(entity, "show")
        self.relayout()
        self._reveal_tasks[entity.id] = self._scheduler.call_later(
            self._entry_delay_ms,
            lambda: self.dispatch(RevealDue(entity.id)),
        )

    def dispatch(self, message: LifecycleMessage) -> None:
        """Handle one lifecycle message to completion."""
        entity = self._active.get(message.toast_id)
        if entity is None:
            raise NotInitialized(message.toast_id)
        self._handlers[type(message)](entity, message)

    def relayout(self) -> dict[int, OffsetSpec]:
        """Recompute every offset from scratch and push it to the renderer."""
        try:
            self._viewport_width = self._renderer.viewport_width()
        except RECOVERABLE_RENDER_ERRORS:
            log_recoverable(_LOG, f"renderer failed to report its width; keeping {self._viewport_width}")
        self._layout = recompute(self._active, self._viewport_width, metrics=self._metrics)
        for toast_id, spec in self._layout.items():
            entity = self._active.get(toast_id)
            if entity is None or entity.render_handle is None:
                continue
            try:
                self._renderer.apply_offset(entity.render_handle, spec)
            except RECOVERABLE_RENDER_ERRORS:
                log_recoverable(_LOG, f"renderer failed to place toast {toast_id}")
        return dict(self._layout)

    def _on_reveal_due(self, entity: ToastEntity, _message: LifecycleMessage) -> None:
        self._reveal_tasks.pop(entity.id, None)
        if not self._transition(entity, "reveal"):
            return
        self._set_visible(entity, True)
        self._timers.start(entity, self._expiry_for(entity))
        if entity.hovered and self._pauses_on_hover(entity):
            self._timers.pause(entity)

    def _on_timer_expired(self, entity: ToastEntity, _message: LifecycleMessage) -> None:
        self._dismiss(entity, "timeout")

    def _on_close_requested(self, entity: ToastEntity, message: CloseRequested) -> None:
        self._dismiss(entity, message.reason)

    def _on_pointer_entered(self, entity: ToastEntity, _message: LifecycleMessage) -> None:
        entity.hovered = True
        if entity.state is ToastState.VISIBLE and self._pauses_on_hover(entity):
            self._timers.pause(entity)

    def _on_pointer_left(self, entity: ToastEntity, _message: LifecycleMessage) -> None:
        entity.hovered = False
        if entity.state is ToastState.VISIBLE and self._pauses_on_hover(entity):
            self._timers.resume(entity, self._expiry_for(entity))

    def _on_extent_reported(self, entity: ToastEntity, message: ExtentReported) -> None:
        if entity.extent == message.extent:
            return
        entity.extent = message.extent
        self.relayout()

    def _on_detach_due(self, entity: ToastEntity, _message: LifecycleMessage) -> None:
        if not self._transition(entity, "detach"):
            return
        handle = entity.render_handle
        entity.render_handle = None
        failure: BaseException | None = None
        try:
            self._renderer.detach(handle)
        except RECOVERABLE_RENDER_ERRORS as exc:
            failure = exc
            _LOG.exception("renderer failed to detach toast %s", entity.id)
            self._emit("render.failure", entity.id, level="error", operation="detach")
        callback = entity.config.callback
        if callback is not None:
            try:
                callback()
            except Exception:
                _LOG.exception("completion callback of toast %s failed", entity.id)
                self._emit("callback.failure", entity.id, level="error")
        self.relayout()
        if failure is not None:
            raise RenderFailure(entity.id, "detach") from failure

    def _dismiss(self, entity: ToastEntity, reason: str) -> None:
        if entity.state is ToastState.DISMISSING:
            _LOG.debug("toast %s already dismissing; ignoring %s", entity.id, reason)
            return
        if not self._transition(entity, "dismiss", reason=reason):
            return
        self._timers.cancel(entity)
        reveal_task = self._reveal_tasks.pop(entity.id, None)
        if reveal_task is not None:
            self._scheduler.cancel(reveal_task)
        self._set_visible(entity, False)
        self._scheduler.call_later(self._exit_delay_ms, lambda: self.dispatch(DetachDue(entity.id)))

    def _transition(self, entity: ToastEntity, trigger: str, *, reason: str | None = None) -> bool:
        source = entity.state
        target = LIFECYCLE.resolve(source, trigger)
        if target is None:
            _LOG.debug("toast %s: %s not allowed from %s", entity.id, trigger, source)
            return False
        entity.state = target
        if target is ToastState.REMOVED:
            self._active.evict(entity.id)
        now_ms = self._scheduler.now_ms
        _LOG.debug("toast %s: %s -> %s (%s)", entity.id, source, target, reason or trigger)
        self._emit(
            f"toast.{target.value}",
            entity.id,
            source=source.value,
            trigger=trigger,
            reason=reason or trigger,
        )
        self._event_bus.publish(
            ToastStateChanged(
                toast_id=entity.id,
                source=source,
                target=target,
                trigger=reason or trigger,
                at_ms=now_ms,
            )
        )
        return True

    def _set_visible(self, entity: ToastEntity, visible: bool) -> None:
        try:
            self._renderer.set_visible(entity.render_handle, visible)
        except RECOVERABLE_RENDER_ERRORS:
            log_recoverable(_LOG, f"renderer failed to toggle visibility of toast {entity.id}")

    def _expiry_for(self, entity: ToastEntity) -> Callable[[], None]:
        return lambda: self.dispatch(TimerExpired(entity.id))

    @staticmethod
    def _pauses_on_hover(entity: ToastEntity) -> bool:
        return entity.config.stop_on_focus and entity.config.duration_ms > 0

    def _emit(self, name: str, toast_id: int, *, level: str = "info", **metadata: object) -> None:
        self._hub.emit_fast(
            category="toast",
            name=name,
            at_ms=self._scheduler.now_ms,
            level=level,
            toast_id=toast_id,
            metadata=metadata,
        )
