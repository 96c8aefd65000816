"""JSON codec helpers for log and diagnostics export paths."""

from __future__ import annotations

from typing import Any

import orjson


def _default(value: object) -> object:
    # Enums, callbacks and opaque render handles end up in log extras.
    return str(value)


def dumps_bytes(payload: Any, *, pretty: bool = False, sort_keys: bool = False) -> bytes:
    """Serialize payload to UTF-8 JSON bytes."""
    options = 0
    if pretty:
        options |= orjson.OPT_INDENT_2
    if sort_keys:
        options |= orjson.OPT_SORT_KEYS
    return orjson.dumps(payload, default=_default, option=options)


def dumps_text(payload: Any, *, pretty: bool = False, sort_keys: bool = False) -> str:
    return dumps_bytes(payload, pretty=pretty, sort_keys=sort_keys).decode("utf-8")


def dumps_lines(payloads: list[dict[str, Any]]) -> bytes:
    """Serialize payloads as newline-delimited JSON."""
    return b"".join(orjson.dumps(item, default=_default, option=orjson.OPT_APPEND_NEWLINE) for item in payloads)


__all__ = ["dumps_bytes", "dumps_lines", "dumps_text"]
