"""Structured diagnostics for the toast engine."""

from toastkit.diagnostics.event import DiagnosticEvent, utc_now_iso
from toastkit.diagnostics.hub import DiagnosticHub
from toastkit.diagnostics.json_codec import dumps_bytes, dumps_text
from toastkit.diagnostics.ring_buffer import RingBuffer

__all__ = [
    "DiagnosticEvent",
    "DiagnosticHub",
    "RingBuffer",
    "dumps_bytes",
    "dumps_text",
    "utc_now_iso",
]
