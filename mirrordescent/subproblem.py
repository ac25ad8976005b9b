"""The mirror subproblem ``min_y Phi(y) + lam(y)``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .convex import AbstractConvex, is_abstract_convex
from .errors import ConfigurationError
from .linear import AbstractLinear
from .registry import Key


@dataclass(frozen=True)
class Subproblem:
    """
    Subproblem solved at each step of the mirror descent method.

    Represents the function ``y -> phi(y) + lam(y)``. The engine always builds
    it with ``lam = -lambda_{k+1}``, so a minimiser solves
    ``min_y phi(y) - lambda_{k+1}(y)``, the mirror map of the next certificate.

    Attributes:
        phi: Handle of the divergence-generating convex function.
        lam: Abstract linear function of the same algebra as ``phi``.
    """

    phi: AbstractConvex
    lam: AbstractLinear

    def __post_init__(self) -> None:
        if not is_abstract_convex(self.phi):
            raise ConfigurationError(
                f"Subproblem requires an AbstractConvex handle, got {self.phi!r}."
            )
        if type(self.lam) is not self.phi.algebra:
            raise ConfigurationError(
                f"Algebra mismatch: {self.phi!r} is convex over "
                f"{self.phi.algebra.__qualname__} but lam is "
                f"{type(self.lam).__qualname__}."
            )

    @property
    def algebra(self) -> type:
        return self.phi.algebra

    @property
    def key(self) -> Key:
        return type(self.phi).key

    def __call__(self, x: Any) -> float:
        return self.phi(x) + self.lam(x)


__all__ = ["Subproblem"]
