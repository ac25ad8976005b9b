"""
Cubic abstract linear functions with a quartic divergence generator.

``L = {x -> a*x**3 + b*x}`` and ``Phi(x) = 3/4 * x**4``. The subproblem
``3/4 y**4 + a y**3 + b y`` is a quartic whose stationary points are the real
roots of ``3y**3 + 3a y**2 + b``; its minimiser is found by comparing the
objective at those points.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from ..convex import AbstractConvex, abstract, declare
from ..errors import SolverError
from ..linear import Cubic
from ..subproblem import Subproblem

REAL_ROOT_TOL = 1e-9


@abstract(Cubic)
def quartic_phi(x: float) -> float:
    return 0.75 * x**4


def phi_subgradient(x: float) -> Cubic:
    """Abstract subgradient of ``quartic_phi`` at ``x``: ``y -> x*y**3``."""
    return Cubic(float(x), 0.0)


def stationary_points(pb: Subproblem) -> np.ndarray:
    """Sorted real stationary points of ``3/4 y**4 + a y**3 + b y``."""
    a, b = pb.lam.a, pb.lam.b
    roots = np.roots([3.0, 3.0 * a, 0.0, b])
    real = roots[np.abs(roots.imag) <= REAL_ROOT_TOL * (1.0 + np.abs(roots.real))]
    return np.sort(real.real)


def minimise_quartic(pb: Subproblem) -> float:
    """
    Global minimiser of the quartic subproblem.

    Ties in objective value are broken towards the smallest point.
    """
    candidates = stationary_points(pb)
    if candidates.size == 0:
        raise SolverError(f"No real stationary point for {pb!r}.")
    return float(min(candidates, key=lambda y: (pb(y), y)))


@dataclass(frozen=True)
class MaxOfCubics:
    """Pointwise maximum of a finite family of :class:`Cubic` functions."""

    pieces: Tuple[Cubic, ...]

    def __post_init__(self) -> None:
        if not self.pieces:
            raise ValueError("MaxOfCubics needs at least one piece.")
        object.__setattr__(self, "pieces", tuple(self.pieces))

    def __call__(self, x: float) -> float:
        return max(p(x) for p in self.pieces)

    def active_piece(self, x: float) -> Cubic:
        """First piece attaining the maximum at ``x``."""
        values = [p(x) for p in self.pieces]
        return self.pieces[int(np.argmax(values))]

    def subgradient(self, x: float) -> Cubic:
        """Abstract subgradient of the maximum: the active piece."""
        return self.active_piece(x)

    def as_convex(self, name: str) -> AbstractConvex:
        """Declare this function as ``Cubic``-convex under ``name``."""
        return declare(Cubic, self, name=name)


__all__ = [
    "MaxOfCubics",
    "REAL_ROOT_TOL",
    "minimise_quartic",
    "phi_subgradient",
    "quartic_phi",
    "stationary_points",
]
