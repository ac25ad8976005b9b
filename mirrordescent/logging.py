"""Logging utilities for mirrordescent.

Every module of the package obtains its logger through :func:`get_logger`, so
that a single call to :func:`set_log_level` or :func:`configure_logging` is
enough to surface the per-iteration trace of a run.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

_DEFAULT_LEVEL = logging.WARNING
_DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

_loggers: dict[str, logging.Logger] = {}


def _coerce_level(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return level


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get or create a logger for the given module name.

    Names outside the package are placed under ``mirrordescent.``, so
    ``get_logger("my_minimiser")`` gives ``mirrordescent.my_minimiser``; the
    package's own ``__name__`` values are used as they are. Each logger is
    created once and writes to stderr without propagating to the root logger.

    Args:
        name: Logger name (typically ``__name__``). If None, returns the
            package logger.

    Returns:
        Configured logger instance.

    Example:
        >>> from mirrordescent.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.debug("advancing iterate")
    """
    if name is None:
        name = "mirrordescent"

    if name == "mirrordescent" or name.startswith("mirrordescent."):
        logger_name = name
    else:
        logger_name = f"mirrordescent.{name}"

    if logger_name in _loggers:
        return _loggers[logger_name]

    logger = logging.getLogger(logger_name)

    if not logger.handlers:
        logger.setLevel(_DEFAULT_LEVEL)
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(_DEFAULT_LEVEL)
        handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False

    _loggers[logger_name] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Set the logging level for all mirrordescent loggers.

    Args:
        level: Logging level (``logging.DEBUG``, ``logging.INFO``, ...) or its
            name (``"DEBUG"``, ``"INFO"``, ...).
    """
    level = _coerce_level(level)

    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)

    global _DEFAULT_LEVEL
    _DEFAULT_LEVEL = level


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[object] = None,
) -> None:
    """Configure logging for mirrordescent.

    Replaces the handlers of every logger created so far. At ``DEBUG`` the
    iteration logger emits one ``k=... c=... x=...`` line per transition, and
    the registry logger reports minimiser registrations at ``INFO``.

    Args:
        level: Logging level (default: WARNING).
        format_string: Custom format string. If None, uses the default
            ``[LEVEL] name: message`` layout.
        stream: Output stream (default: sys.stderr).

    Example:
        >>> import logging
        >>> from mirrordescent.logging import configure_logging
        >>> configure_logging(level=logging.DEBUG)
    """
    level = _coerce_level(level)

    if stream is None:
        stream = sys.stderr

    formatter = logging.Formatter(format_string or _DEFAULT_FORMAT)

    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        handler = logging.StreamHandler(stream)
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    global _DEFAULT_LEVEL
    _DEFAULT_LEVEL = level


__all__ = ["get_logger", "set_log_level", "configure_logging"]
