"""Exception types raised by the mirror descent engine."""

from __future__ import annotations

from typing import Any, Optional


class MirrorDescentError(Exception):
    """Base class for all errors raised by mirrordescent."""


class ConfigurationError(MirrorDescentError, ValueError):
    """Invalid setup: mismatched algebras, duplicate registrations, bad step sizes."""


class SolverError(MirrorDescentError, RuntimeError):
    """No minimiser is available for a subproblem, or it produced no point."""


class DomainError(MirrorDescentError, ValueError):
    """A user-supplied oracle is undefined at an input required by the iteration.

    Attributes:
        k: Iteration index at which the failure happened.
        x: Iterate at which the failure happened, or None when no iterate is
            involved (the step-size check made at construction).
    """

    def __init__(self, message: str, k: Optional[int] = None, x: Any = None) -> None:
        self.k = k
        self.x = x
        details = []
        if k is not None:
            details.append(f"k={k}")
        if x is not None:
            details.append(f"x={x!r}")
        if details:
            message = f"{message} ({', '.join(details)})"
        super().__init__(message)


__all__ = [
    "MirrorDescentError",
    "ConfigurationError",
    "SolverError",
    "DomainError",
]
