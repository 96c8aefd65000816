from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from toastkit.api.layout import Extent, OffsetSpec
from toastkit.api.options import EffectiveConfig
from toastkit.api.render import Materialized, ToastSink
from toastkit.runtime.config import ToasterSettings
from toastkit.runtime.scheduler import Scheduler
from toastkit.runtime.toaster import RuntimeToaster


@dataclass(eq=False)
class FakeNode:
    toast_id: int
    config: EffectiveConfig
    sink: ToastSink
    visible: bool = False
    detached: bool = False
    offsets: list[OffsetSpec] = field(default_factory=list)

    @property
    def offset(self) -> OffsetSpec:
        return self.offsets[-1]


class FakeRenderer:
    """Records renderer calls; extents are reported up front unless deferred."""

    def __init__(self, *, width: float = 1024.0, height: float = 50.0, defer_extent: bool = False) -> None:
        self.width = width
        self.height = height
        self.defer_extent = defer_extent
        self.nodes: dict[int, FakeNode] = {}
        self.calls: list[tuple[str, int]] = []
        self.fail_materialize = False
        self.fail_detach = False
        self.fail_apply = False
        self.fail_viewport = False

    def materialize(self, toast_id: int, config: EffectiveConfig, sink: ToastSink) -> Materialized:
        self.calls.append(("materialize", toast_id))
        if self.fail_materialize:
            raise RuntimeError("surface is gone")
        node = FakeNode(toast_id=toast_id, config=config, sink=sink)
        self.nodes[toast_id] = node
        extent = None if self.defer_extent else Extent(width=200.0, height=self.height)
        return Materialized(handle=node, extent=extent)

    def apply_offset(self, handle: object, spec: OffsetSpec) -> None:
        assert isinstance(handle, FakeNode)
        self.calls.append(("apply_offset", handle.toast_id))
        if self.fail_apply:
            raise RuntimeError("cannot move node")
        handle.offsets.append(spec)

    def set_visible(self, handle: object, visible: bool) -> None:
        assert isinstance(handle, FakeNode)
        self.calls.append(("show" if visible else "hide", handle.toast_id))
        handle.visible = visible

    def detach(self, handle: object) -> None:
        assert isinstance(handle, FakeNode)
        self.calls.append(("detach", handle.toast_id))
        if self.fail_detach:
            raise OSError("node already destroyed")
        handle.detached = True

    def viewport_width(self) -> float:
        if self.fail_viewport:
            raise RuntimeError("surface has no geometry")
        return self.width

    def calls_named(self, name: str) -> list[int]:
        return [toast_id for call, toast_id in self.calls if call == name]


class RecordingDiagnostics:
    def __init__(self) -> None:
        self.messages: list[str] = []

    def warn(self, message: str) -> None:
        self.messages.append(message)


@pytest.fixture
def renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture
def diagnostics() -> RecordingDiagnostics:
    return RecordingDiagnostics()


@pytest.fixture
def settings() -> ToasterSettings:
    return ToasterSettings()


@pytest.fixture
def scheduler() -> Scheduler:
    return Scheduler()


@pytest.fixture
def toaster(
    renderer: FakeRenderer,
    scheduler: Scheduler,
    diagnostics: RecordingDiagnostics,
    settings: ToasterSettings,
) -> RuntimeToaster:
    return RuntimeToaster(renderer, scheduler=scheduler, diagnostics=diagnostics, settings=settings)


@pytest.fixture
def make_renderer():
    return FakeRenderer
