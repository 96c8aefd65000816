"""Structured diagnostics event schema."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


@dataclass(frozen=True, slots=True)
class DiagnosticEvent:
    """Single structured diagnostics event.

    ``at_ms`` is the scheduler clock at emission, not wall time.
    """

    ts_utc: str
    at_ms: float
    category: str
    name: str
    level: str = "info"
    toast_id: int | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "ts": self.ts_utc,
            "at_ms": self.at_ms,
            "category": self.category,
            "name": self.name,
            "level": self.level,
            "toast_id": self.toast_id,
            "metadata": dict(self.metadata),
        }


def utc_now_iso() -> str:
    """Return an RFC3339-like UTC timestamp with milliseconds."""
    now = datetime.now(tz=UTC)
    return now.isoformat(timespec="milliseconds")
