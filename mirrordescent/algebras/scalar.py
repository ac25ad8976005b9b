"""
The classical scalar setting: ``L = {x -> a*x}`` with ``Phi(x) = x**2 / 2``.

With this pair the mirror map is the identity on coefficients, and abstract
mirror descent reduces to the plain subgradient method.
"""

from __future__ import annotations

import numpy as np

from ..convex import abstract
from ..linear import Linear
from ..subproblem import Subproblem


@abstract(Linear)
def quadratic_phi(x: float) -> float:
    return 0.5 * x**2


def minimise_quadratic(pb: Subproblem) -> float:
    """argmin_y y**2/2 + a*y = -a."""
    return -pb.lam.a


@abstract(Linear)
def abs_objective(x: float) -> float:
    return abs(x)


def subgradient_of_abs(x: float) -> Linear:
    """sign(x), with 0 at the kink."""
    return Linear(float(np.sign(x)))


def quadratic_subgradient(x: float) -> Linear:
    """Subgradient of ``quadratic_phi``; a natural starting certificate."""
    return Linear(float(x))


__all__ = [
    "abs_objective",
    "minimise_quadratic",
    "quadratic_phi",
    "quadratic_subgradient",
    "subgradient_of_abs",
]
