"""Shared runtime exception policy helpers."""

from __future__ import annotations

import logging
from typing import TypeAlias

# Renderer faults that a relayout tolerates instead of aborting the pass.
RecoverableRenderErrors: TypeAlias = tuple[type[BaseException], ...]
RECOVERABLE_RENDER_ERRORS: RecoverableRenderErrors = (
    RuntimeError,
    OSError,
    ValueError,
    TypeError,
    AttributeError,
)


def log_recoverable(
    logger: logging.Logger,
    message: str,
    *,
    level: int = logging.WARNING,
) -> None:
    """Log a tolerated exception together with its traceback."""
    logger.log(level, message, exc_info=True)
