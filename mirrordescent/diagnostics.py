"""Runtime checks of the algebraic assumptions made by the engine."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence

import numpy as np

from .errors import ConfigurationError
from .linear import AbstractLinear

if TYPE_CHECKING:
    from .iteration import IterationState

DEFAULT_POINTS: tuple[float, ...] = (-2.0, -0.5, 0.0, 1.0, 3.0)


def _close(a: Any, b: Any, atol: float, rtol: float) -> bool:
    return bool(np.all(np.isclose(a, b, atol=atol, rtol=rtol)))


def assert_linear_closure(
    u: AbstractLinear,
    v: AbstractLinear,
    s: float = 2.0,
    points: Sequence[Any] = DEFAULT_POINTS,
    atol: float = 1e-9,
    rtol: float = 1e-9,
) -> None:
    """
    Assert that ``u`` and ``v`` behave as elements of one vector space.

    Checks that ``u + v``, ``u - v``, ``-u`` and ``s * u`` stay in the algebra
    of ``u`` and evaluate to the matching combination of ``u(x)`` and
    ``v(x)`` at every sample point.

    Parameters
    ----------
    u, v:
        Values of the same concrete algebra.
    s:
        Scalar used for the scaling identity.
    points:
        Sample points of the domain.
    atol, rtol:
        Tolerances for the value comparisons.

    Raises
    ------
    ConfigurationError
        If the values belong to different algebras, an operation leaves the
        algebra, or an identity fails at some point.
    """
    algebra = type(u)
    if type(v) is not algebra:
        raise ConfigurationError(
            f"Values belong to different algebras: {algebra.__qualname__} "
            f"and {type(v).__qualname__}."
        )

    combos = {
        "u + v": (u + v, lambda x: u(x) + v(x)),
        "u - v": (u - v, lambda x: u(x) - v(x)),
        "-u": (-u, lambda x: -u(x)),
        "s * u": (s * u, lambda x: s * u(x)),
    }
    for label, (value, expected) in combos.items():
        if type(value) is not algebra:
            raise ConfigurationError(
                f"{label} left the algebra {algebra.__qualname__}: "
                f"got {type(value).__qualname__}."
            )
        for x in points:
            if not _close(value(x), expected(x), atol, rtol):
                raise ConfigurationError(
                    f"Linearity violated for {label} at x={x!r}: "
                    f"{value(x)!r} != {expected(x)!r}."
                )


def is_linear_closed(
    u: AbstractLinear,
    v: AbstractLinear,
    s: float = 2.0,
    points: Sequence[Any] = DEFAULT_POINTS,
    atol: float = 1e-9,
) -> bool:
    """Boolean variant of :func:`assert_linear_closure`."""
    try:
        assert_linear_closure(u, v, s=s, points=points, atol=atol)
    except ConfigurationError:
        return False
    return True


def certificate_residual(
    prev: "IterationState",
    nxt: "IterationState",
    points: Sequence[Any] = DEFAULT_POINTS,
) -> float:
    """
    Largest deviation of ``nxt.lam`` from ``prev.lam - c(k) * prev.u``.

    The deviation is measured pointwise at ``points`` since abstract linear
    values need not support equality.
    """
    c = prev.params.step(prev.k)
    expected = prev.lam - c * prev.u
    return max(float(np.max(np.abs(nxt.lam(x) - expected(x)))) for x in points)


__all__ = [
    "DEFAULT_POINTS",
    "assert_linear_closure",
    "certificate_residual",
    "is_linear_closed",
]
