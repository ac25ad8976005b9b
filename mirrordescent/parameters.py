"""Fixed parameters of an abstract mirror descent run."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable

import numpy as np

from .convex import AbstractConvex, is_abstract_convex
from .errors import ConfigurationError, DomainError, MirrorDescentError
from .linear import AbstractLinear
from .logging import get_logger

logger = get_logger(__name__)

StepSize = Callable[[int], float]
Subgradient = Callable[[Any], AbstractLinear]
Objective = Callable[[Any], float]


@dataclass(frozen=True)
class MirrorDescentParameters:
    """
    The set of parameters of the mirror descent method, which do not change
    over iterations.

    Attributes:
        phi: Convex function generating the Bregman divergence. Its algebra is
            the algebra of every certificate and subgradient of the run.
        f: Function to minimise. Usually an :class:`AbstractConvex` over the
            same algebra as ``phi``, but any callable is accepted.
        step_size: Schedule mapping the iteration index ``k >= 0`` to a
            strictly positive step size.
        subgradient: Oracle returning an abstract linear subgradient of ``f``
            at a point, as a value of ``phi.algebra``.

    Raises:
        ConfigurationError: If ``phi`` is not a declared convex function, a
            component is not callable, or ``step_size(0)`` is not positive.
        DomainError: If ``step_size(0)`` cannot be evaluated.
    """

    phi: AbstractConvex
    f: Objective
    step_size: StepSize
    subgradient: Subgradient

    def __post_init__(self) -> None:
        if not is_abstract_convex(self.phi):
            raise ConfigurationError(
                f"phi must be a declared AbstractConvex function, got {self.phi!r}."
            )
        for field_name in ("f", "step_size", "subgradient"):
            if not callable(getattr(self, field_name)):
                raise ConfigurationError(f"{field_name} must be callable.")
        if is_abstract_convex(self.f) and self.f.algebra is not self.phi.algebra:
            logger.warning(
                "Objective %r and divergence generator %r use different algebras.",
                self.f,
                self.phi,
            )
        # Surface a broken schedule now rather than at the first transition.
        self.step(0)

    @property
    def algebra(self) -> type:
        return self.phi.algebra

    def step(self, k: int, x: Any = None) -> float:
        """Return the step size ``c(k)`` as a float, validated.

        ``x`` is the iterate the step is taken from; it is only used to
        report where a failing schedule was evaluated.
        """
        if isinstance(k, bool) or not isinstance(k, (int, np.integer)) or k < 0:
            raise DomainError(
                "Step-size index must be a non-negative integer", k=k, x=x
            )
        try:
            c = float(self.step_size(k))
        except MirrorDescentError:
            raise
        except Exception as exc:
            raise DomainError(f"Step-size schedule failed: {exc}", k=k, x=x) from exc
        if not math.isfinite(c):
            raise DomainError(f"Step-size schedule returned {c}", k=k, x=x)
        if c <= 0.0:
            raise ConfigurationError(
                f"Step size must be strictly positive, got c({k}) = {c}."
            )
        return c

    def subgradient_at(self, x: Any, k: int) -> AbstractLinear:
        """Evaluate the subgradient oracle at ``x`` for iteration ``k``."""
        try:
            u = self.subgradient(x)
        except MirrorDescentError:
            raise
        except Exception as exc:
            raise DomainError(f"Subgradient oracle failed: {exc}", k=k, x=x) from exc
        if u is None:
            raise DomainError("Subgradient oracle returned None", k=k, x=x)
        if type(u) is not self.phi.algebra:
            raise ConfigurationError(
                f"Subgradient oracle returned {type(u).__qualname__}, expected "
                f"{self.phi.algebra.__qualname__}."
            )
        return u


__all__ = ["MirrorDescentParameters", "Objective", "StepSize", "Subgradient"]
