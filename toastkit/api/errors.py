"""Public toast error taxonomy."""

from __future__ import annotations


class ToastError(Exception):
    """Base class for all toastkit errors."""


class InvalidConfig(ToastError, ValueError):
    """Raised when toast options are malformed; the toast is never created."""


class NotInitialized(ToastError, LookupError):
    """Raised when a lifecycle operation targets an unknown or disposed toast."""

    def __init__(self, toast_id: int) -> None:
        super().__init__(f"toast {toast_id} is not active")
        self.toast_id = toast_id


class RenderFailure(ToastError, RuntimeError):
    """Raised when the renderer cannot materialize or detach a toast node."""

    def __init__(self, toast_id: int, operation: str) -> None:
        super().__init__(f"renderer failed to {operation} toast {toast_id}")
        self.toast_id = toast_id
        self.operation = operation
