"""Centralised logging helpers for reckon."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

_LOGGER_CACHE: Dict[str, logging.Logger] = {}

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str = "reckon") -> logging.Logger:
    """Return a cached :class:`logging.Logger` instance."""

    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = logging.getLogger(name)
    return _LOGGER_CACHE[name]


def configure_logging(verbose: bool = False, *, stream: Optional[Any] = None) -> None:
    """Attach a stream handler to the ``reckon`` logger.

    Library code never calls this; front ends such as the CLI do.
    """

    root = get_logger("reckon")
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    for handler in list(root.handlers):
        if getattr(handler, "_reckon_handler", False):
            root.removeHandler(handler)
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    handler._reckon_handler = True  # type: ignore[attr-defined]
    root.addHandler(handler)


def log_evaluation_failure(
    *,
    text: str,
    error: Exception,
    logger: Optional[logging.Logger] = None,
    extras: Optional[Dict[str, Any]] = None,
) -> None:
    """Emit a structured debug entry for an expression that failed to evaluate."""

    payload: Dict[str, Any] = {
        "input": text,
        "error": type(error).__name__,
        "code": getattr(error, "code", None) or "unknown",
    }
    column = getattr(error, "column", None)
    if column is not None:
        payload["column"] = column
    if extras:
        payload.update(extras)
    target_logger = logger or get_logger("reckon.interpreter")
    target_logger.debug(
        "Expression evaluation failed: %s",
        error,
        extra={"reckon_event": "evaluation_failed", "reckon_data": payload},
    )
