from __future__ import annotations

import logging

import pytest

from toastkit.api.errors import InvalidConfig, NotInitialized, RenderFailure
from toastkit.api.layout import Extent
from toastkit.api.lifecycle import ToastState, ToastStateChanged
from toastkit.api.toaster import ToastHandle, create_toaster
from toastkit.runtime.config import ToasterSettings
from toastkit.runtime.config_resolver import POSITION_LEFT_DEPRECATION
from toastkit.runtime.events import RuntimeEventBus
from toastkit.runtime.scheduler import Scheduler
from toastkit.runtime.toaster import RuntimeToaster


def test_show_materializes_and_lays_out_before_reveal(toaster, renderer) -> None:
    handle = toaster.show(text="hello")

    assert isinstance(handle, ToastHandle)
    assert handle.state is ToastState.SHOWN
    assert renderer.calls[:2] == [("materialize", handle.id), ("apply_offset", handle.id)]
    assert renderer.nodes[handle.id].config.text == "hello"
    assert toaster.layout()[handle.id].edge_px == 15


def test_reveal_after_entry_delay(toaster, renderer, scheduler) -> None:
    handle = toaster.show()

    scheduler.advance(9)
    assert handle.state is ToastState.SHOWN
    scheduler.advance(1)
    assert handle.state is ToastState.VISIBLE
    assert renderer.nodes[handle.id].visible


def test_toast_expires_and_is_removed_after_exit_delay(toaster, renderer, scheduler) -> None:
    handle = toaster.show(duration_ms=1000)

    scheduler.advance(1009)
    assert handle.state is ToastState.VISIBLE
    scheduler.advance(1)
    assert handle.state is ToastState.DISMISSING
    assert not renderer.nodes[handle.id].visible
    assert handle.id in toaster.active_ids()

    scheduler.advance(399)
    assert handle.state is ToastState.DISMISSING
    scheduler.advance(1)
    assert handle.state is ToastState.REMOVED
    assert renderer.nodes[handle.id].detached
    assert toaster.active_ids() == ()


def test_ids_are_unique_and_increasing(toaster) -> None:
    ids = [toaster.show().id for _ in range(4)]
    assert ids == sorted(set(ids))


def test_invalid_config_creates_nothing(toaster, renderer) -> None:
    with pytest.raises(InvalidConfig):
        toaster.show(gravity="middle")
    assert renderer.calls == []
    assert toaster.active_ids() == ()


def test_show_merges_mapping_and_keyword_overrides(toaster, renderer) -> None:
    handle = toaster.show({"text": "a", "type": "info"}, text="b")
    config = renderer.nodes[handle.id].config
    assert config.text == "b"
    assert config.type == "info"


def test_hide_dismisses_and_second_close_is_ignored(toaster, renderer, scheduler) -> None:
    handle = toaster.show()
    scheduler.advance(100)

    handle.hide()
    assert handle.state is ToastState.DISMISSING
    toaster.request_close(handle.id)
    toaster.hide(handle)
    scheduler.advance(400)

    assert renderer.calls_named("detach") == [handle.id]
    assert handle.state is ToastState.REMOVED


def test_hide_before_reveal_cancels_entry(toaster, renderer, scheduler) -> None:
    handle = toaster.show()
    toaster.hide(handle.id)
    scheduler.advance(10)

    assert handle.state is ToastState.DISMISSING
    assert renderer.calls_named("show") == []


def test_hide_after_removal_raises_not_initialized(toaster, scheduler) -> None:
    handle = toaster.show(duration_ms=100)
    scheduler.advance(1000)

    with pytest.raises(NotInitialized):
        handle.hide()
    with pytest.raises(NotInitialized):
        toaster.state_of(99)


def test_hover_pauses_and_leave_resumes_remaining_time(toaster, scheduler) -> None:
    handle = toaster.show(duration_ms=1000)
    scheduler.advance(510)
    toaster.pointer_entered(handle.id)
    assert toaster.remaining_ms(handle) == 500.0

    scheduler.advance(5000)
    assert handle.state is ToastState.VISIBLE

    toaster.pointer_left(handle.id)
    scheduler.advance(499)
    assert handle.state is ToastState.VISIBLE
    scheduler.advance(1)
    assert handle.state is ToastState.DISMISSING


def test_hover_ignored_without_stop_on_focus(toaster, scheduler) -> None:
    handle = toaster.show(duration_ms=1000, stop_on_focus=False)
    scheduler.advance(500)
    toaster.pointer_entered(handle.id)
    scheduler.advance(510)
    assert handle.state is ToastState.DISMISSING


def test_hover_before_reveal_pauses_at_full_duration(toaster, scheduler) -> None:
    handle = toaster.show(duration_ms=1000)
    toaster.pointer_entered(handle.id)
    scheduler.advance(5000)

    assert handle.state is ToastState.VISIBLE
    assert toaster.remaining_ms(handle) == 1000.0


def test_zero_duration_persists_until_closed(toaster, scheduler) -> None:
    handle = toaster.show(duration_ms=0)
    scheduler.advance(60_000)
    toaster.pointer_entered(handle.id)
    toaster.pointer_left(handle.id)
    scheduler.advance(60_000)

    assert handle.state is ToastState.VISIBLE
    toaster.request_close(handle.id)
    assert handle.state is ToastState.DISMISSING


def test_extent_report_triggers_relayout(make_renderer, scheduler, diagnostics, settings) -> None:
    renderer = make_renderer(defer_extent=True)
    toaster = RuntimeToaster(renderer, scheduler=scheduler, diagnostics=diagnostics, settings=settings)
    first = toaster.show()
    second = toaster.show()
    assert toaster.layout()[second.id].edge_px == 30

    toaster.extent_ready(first.id, Extent(width=200.0, height=60.0))

    assert toaster.layout()[second.id].edge_px == 90
    assert renderer.nodes[second.id].offset.edge_px == 90


def test_sink_events_for_inactive_toasts_are_dropped(toaster, renderer, scheduler, caplog) -> None:
    handle = toaster.show(duration_ms=10)
    scheduler.advance(1000)
    calls_before = list(renderer.calls)

    with caplog.at_level(logging.DEBUG, logger="toastkit.runtime.toaster"):
        toaster.extent_ready(handle.id, Extent(width=1.0, height=1.0))
        toaster.request_close(handle.id)
        toaster.pointer_entered(handle.id)
        toaster.pointer_left(handle.id)

    assert renderer.calls == calls_before
    assert "dropping" in caplog.text


def test_callback_runs_once_after_detach(toaster, renderer, scheduler) -> None:
    seen: list[tuple[int, ...]] = []
    handle = toaster.show(duration_ms=100, callback=lambda: seen.append(toaster.active_ids()))

    scheduler.advance(1000)

    assert seen == [()]
    assert renderer.nodes[handle.id].detached


def test_position_left_warns_once_per_toaster(toaster, diagnostics) -> None:
    toaster.show(position_left=True)
    toaster.show(position_left=True)
    assert diagnostics.messages == [POSITION_LEFT_DEPRECATION]


def test_materialize_failure_leaves_no_toast(toaster, renderer) -> None:
    renderer.fail_materialize = True

    with pytest.raises(RenderFailure) as excinfo:
        toaster.show()

    assert excinfo.value.operation == "materialize"
    assert toaster.active_ids() == ()
    assert toaster.hub.snapshot(name="render.failure")


def test_detach_failure_still_evicts_and_relayouts(toaster, renderer, scheduler) -> None:
    done: list[int] = []
    first = toaster.show(duration_ms=100, callback=lambda: done.append(1))
    second = toaster.show(duration_ms=5000)
    renderer.fail_detach = True

    with pytest.raises(RenderFailure):
        scheduler.advance(1000)

    assert first.state is ToastState.REMOVED
    assert done == [1]
    assert toaster.active_ids() == (second.id,)
    assert renderer.nodes[second.id].offset.edge_px == 15


def test_apply_offset_failure_is_tolerated(toaster, renderer, caplog) -> None:
    renderer.fail_apply = True
    with caplog.at_level(logging.WARNING, logger="toastkit.runtime.lifecycle"):
        handle = toaster.show()
    assert handle.state is ToastState.SHOWN
    assert "failed to place" in caplog.text


def test_state_changes_are_published_in_order(renderer, scheduler, diagnostics, settings) -> None:
    bus = RuntimeEventBus()
    events: list[ToastStateChanged] = []
    bus.subscribe(ToastStateChanged, events.append)
    toaster = RuntimeToaster(renderer, scheduler=scheduler, diagnostics=diagnostics, settings=settings, event_bus=bus)

    handle = toaster.show(duration_ms=100)
    scheduler.advance(1000)

    assert [event.target for event in events] == [
        ToastState.SHOWN,
        ToastState.VISIBLE,
        ToastState.DISMISSING,
        ToastState.REMOVED,
    ]
    assert events[2].trigger == "timeout"
    assert events[2].at_ms == 110
    assert all(event.toast_id == handle.id for event in events)


def test_removed_event_sees_toast_already_evicted(toaster, scheduler) -> None:
    snapshots: list[tuple[int, ...]] = []

    def on_change(event: ToastStateChanged) -> None:
        if event.target is ToastState.REMOVED:
            snapshots.append(toaster.active_ids())

    toaster.event_bus.subscribe(ToastStateChanged, on_change)
    toaster.show(duration_ms=100)
    scheduler.advance(1000)

    assert snapshots == [()]


def test_clear_dismisses_every_toast(toaster, scheduler) -> None:
    handles = [toaster.show(duration_ms=0) for _ in range(3)]
    scheduler.advance(10)
    handles[0].hide()

    toaster.clear()
    assert {handle.state for handle in handles} == {ToastState.DISMISSING}

    scheduler.advance(400)
    assert toaster.active_ids() == ()


def test_newest_first_orders_stack(renderer, scheduler, diagnostics) -> None:
    toaster = RuntimeToaster(
        renderer,
        scheduler=scheduler,
        diagnostics=diagnostics,
        settings=ToasterSettings(oldest_first=False),
    )
    first = toaster.show()
    second = toaster.show()

    assert toaster.active_ids() == (second.id, first.id)
    assert toaster.layout()[second.id].edge_px == 15
    assert toaster.layout()[first.id].edge_px == 80


def test_relayout_follows_viewport_width(toaster, renderer) -> None:
    handle = toaster.show(position="left")
    renderer.width = 320.0

    layout = toaster.relayout()

    assert layout[handle.id].centered
    assert renderer.nodes[handle.id].offset.centered


def test_create_toaster_factory_builds_runtime_toaster(renderer, diagnostics) -> None:
    toaster = create_toaster(renderer, scheduler=Scheduler(), diagnostics=diagnostics, settings=ToasterSettings())
    assert isinstance(toaster, RuntimeToaster)
    assert toaster.show().state is ToastState.SHOWN


def test_default_diagnostics_record_warnings_in_hub(renderer) -> None:
    toaster = RuntimeToaster(renderer, scheduler=Scheduler(), settings=ToasterSettings())
    toaster.show(position_left=True)

    events = toaster.hub.snapshot(category="diagnostics")
    assert [event.metadata["message"] for event in events] == [POSITION_LEFT_DEPRECATION]


def test_failing_callback_is_reported_and_clock_keeps_moving(toaster, renderer, scheduler, caplog) -> None:
    def broken() -> None:
        raise ValueError("caller bug")

    first = toaster.show(duration_ms=100, callback=broken)
    second = toaster.show(duration_ms=3000)

    with caplog.at_level(logging.ERROR, logger="toastkit.runtime.lifecycle"):
        scheduler.advance(5000)

    assert scheduler.now_ms == 5000.0
    assert first.state is ToastState.REMOVED
    assert second.state is ToastState.REMOVED
    assert toaster.active_ids() == ()
    assert "caller bug" in caplog.text
    assert [event.toast_id for event in toaster.hub.snapshot(name="callback.failure")] == [first.id]


def test_detach_failure_still_reaches_requested_time(toaster, renderer, scheduler) -> None:
    handle = toaster.show(duration_ms=1000)
    renderer.fail_detach = True

    with pytest.raises(RenderFailure):
        scheduler.advance(3000)

    assert scheduler.now_ms == 3000.0
    assert handle.state is ToastState.REMOVED


def test_viewport_failure_keeps_last_known_width(toaster, renderer, scheduler, caplog) -> None:
    wide = toaster.show(position="left", duration_ms=1000)
    renderer.width = 320.0
    renderer.fail_viewport = True

    with caplog.at_level(logging.WARNING, logger="toastkit.runtime.lifecycle"):
        other = toaster.show(position="left", duration_ms=1000)

    assert other.state is ToastState.SHOWN
    assert not toaster.layout()[other.id].centered
    assert toaster.layout()[other.id].edge_px == 80
    assert "failed to report its width" in caplog.text

    scheduler.advance(2000)

    assert wide.state is ToastState.REMOVED
    assert other.state is ToastState.REMOVED
    assert toaster.active_ids() == ()


def test_viewport_failure_before_any_layout_treats_surface_as_wide(renderer, scheduler, diagnostics, settings) -> None:
    renderer.fail_viewport = True
    toaster = create_toaster(renderer, scheduler=scheduler, diagnostics=diagnostics, settings=settings)

    handle = toaster.show(position="right")

    assert not toaster.layout()[handle.id].centered
    assert renderer.nodes[handle.id].offset.edge_px == 15


def test_failed_show_id_is_not_reported_as_removed(toaster, renderer) -> None:
    renderer.fail_materialize = True
    with pytest.raises(RenderFailure):
        toaster.show()
    renderer.fail_materialize = False
    shown = toaster.show(duration_ms=0)

    with pytest.raises(NotInitialized):
        toaster.state_of(1)
    assert shown.id == 2
    assert toaster.state_of(shown.id) is ToastState.SHOWN
