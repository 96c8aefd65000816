from __future__ import annotations

from toastkit.api.errors import InvalidConfig, NotInitialized, RenderFailure, ToastError
from toastkit.api.layout import OffsetSpec
from toastkit.api.options import (
    EffectiveConfig,
    Gravity,
    InvokeAction,
    NavigateAction,
    Position,
    resolve_click_action,
)


def _noop() -> None:
    return None


def test_destination_takes_precedence_over_on_click() -> None:
    config = EffectiveConfig(destination="https://example.org", new_window=True, on_click=_noop)
    assert resolve_click_action(config) == NavigateAction(destination="https://example.org", new_window=True)


def test_on_click_used_without_destination() -> None:
    assert resolve_click_action(EffectiveConfig(on_click=_noop)) == InvokeAction(callback=_noop)
    assert resolve_click_action(EffectiveConfig()) is None


def test_effective_config_bucket() -> None:
    config = EffectiveConfig(gravity=Gravity.BOTTOM, position=Position.LEFT)
    assert config.bucket == (Gravity.BOTTOM, Position.LEFT)


def test_offset_spec_edge_accessors() -> None:
    spec = OffsetSpec(gravity=Gravity.BOTTOM, edge_px=80.0, position=Position.LEFT, inset_px=15.0)
    assert spec.bottom == 80.0 and spec.top is None
    assert spec.left == 15.0 and spec.right is None
    assert not spec.centered
    assert spec.transform() == "translate(0px, 0px)"


def test_error_taxonomy() -> None:
    assert issubclass(InvalidConfig, ToastError) and issubclass(InvalidConfig, ValueError)
    missing = NotInitialized(4)
    assert isinstance(missing, LookupError)
    assert missing.toast_id == 4
    assert str(missing) == "toast 4 is not active"
    failure = RenderFailure(5, "detach")
    assert isinstance(failure, RuntimeError)
    assert str(failure) == "renderer failed to detach toast 5"
