"""Public diagnostics port for non-fatal conditions."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class DiagnosticsPort(Protocol):
    """One-way channel for warnings such as deprecated option usage."""

    def warn(self, message: str) -> None:
        """Report a non-fatal condition."""


def create_diagnostics(*, capacity: int = 1000) -> DiagnosticsPort:
    """Create default hub-backed diagnostics implementation."""
    from toastkit.diagnostics.hub import DiagnosticHub
    from toastkit.runtime.diagnostics import HubDiagnostics

    return HubDiagnostics(DiagnosticHub(capacity=capacity))
