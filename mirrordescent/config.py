"""Debug-mode switch for mirrordescent.

When debug mode is on, :func:`mirrordescent.iteration.advance` verifies each
transition it makes: the certificate and subgradient it combined must be
closed under the algebra operations, and the new certificate must equal
``lambda_k - c(k) * u_k`` at a set of sample points. Violations raise
:class:`~mirrordescent.errors.ConfigurationError` at the offending ``k``.
The flag starts from the ``MIRRORDESCENT_DEBUG`` environment variable.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator

_DEBUG_ENV_VAR = "MIRRORDESCENT_DEBUG"
_debug_enabled: bool = os.getenv(_DEBUG_ENV_VAR, "0").lower() in (
    "1",
    "true",
    "yes",
    "on",
)


def is_debug_enabled() -> bool:
    """
    Return whether debug mode is currently enabled.

    In debug mode every transition of a :class:`MirrorDescentIteration`
    re-checks the certificate recurrence and the linearity of the algebra
    values it produced. Debug mode can be toggled via
    :func:`set_debug_enabled` or the ``MIRRORDESCENT_DEBUG`` environment
    variable.
    """
    return _debug_enabled


def set_debug_enabled(enabled: bool) -> None:
    """Turn transition checking on or off for every subsequent ``advance``."""
    global _debug_enabled
    _debug_enabled = bool(enabled)


@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """
    Temporarily switch transition checking, restoring the previous setting.

    Example
    -------
    >>> with debug_context(True):
    ...     states = take(iteration, 10)
    """
    global _debug_enabled
    prev = _debug_enabled
    _debug_enabled = bool(enabled)
    try:
        yield
    finally:
        _debug_enabled = prev


__all__ = ["is_debug_enabled", "set_debug_enabled", "debug_context"]
