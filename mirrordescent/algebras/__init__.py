"""Bundled algebras together with minimisers for their divergence generators."""

from typing import Optional

from ..registry import MinimiserRegistry, default_registry
from . import cubic, scalar
from .cubic import MaxOfCubics, minimise_quartic, phi_subgradient, quartic_phi
from .scalar import (
    abs_objective,
    minimise_quadratic,
    quadratic_phi,
    quadratic_subgradient,
    subgradient_of_abs,
)


def register_builtin_minimisers(registry: Optional[MinimiserRegistry] = None) -> None:
    """Register the minimisers of the bundled divergence generators."""
    if registry is None:
        registry = default_registry()
    for phi, minimiser in (
        (quadratic_phi, minimise_quadratic),
        (quartic_phi, minimise_quartic),
    ):
        if phi not in registry:
            registry.register(phi, minimiser)


register_builtin_minimisers()

__all__ = [
    "cubic",
    "scalar",
    "MaxOfCubics",
    "abs_objective",
    "minimise_quadratic",
    "minimise_quartic",
    "phi_subgradient",
    "quadratic_phi",
    "quadratic_subgradient",
    "quartic_phi",
    "register_builtin_minimisers",
    "subgradient_of_abs",
]
