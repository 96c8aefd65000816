"""Default diagnostics port backed by logging and the diagnostics hub."""

from __future__ import annotations

import logging
from collections.abc import Callable

from toastkit.diagnostics.hub import DiagnosticHub

_LOG = logging.getLogger(__name__)


class HubDiagnostics:
    """Logs warnings and records them as ``diagnostics.warning`` events."""

    def __init__(self, hub: DiagnosticHub, *, clock: Callable[[], float] | None = None) -> None:
        self._hub = hub
        self._clock = clock or (lambda: 0.0)

    @property
    def hub(self) -> DiagnosticHub:
        return self._hub

    def warn(self, message: str) -> None:
        _LOG.warning(message)
        self._hub.emit_fast(
            category="diagnostics",
            name="diagnostics.warning",
            at_ms=self._clock(),
            level="warning",
            metadata={"message": message},
        )
