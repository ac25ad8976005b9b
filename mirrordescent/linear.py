"""
Abstract linear functions.

Given a family ``L`` of real-valued functions on a domain ``X``, a function is
``L``-convex when it is the pointwise supremum of members of ``L``. The members
of ``L`` are called *abstract linear*. The mirror descent engine never looks
inside them: it only adds, negates and scales them, and evaluates them at a
point. Any type that supports those operations and is closed under them can
serve as ``L``.

Two concrete algebras are bundled:

* :class:`Linear` - ``x -> a*x``, the classical (scalar) setting.
* :class:`Cubic` - ``x -> a*x**3 + b*x``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


class AbstractLinear(ABC):
    """
    Base class for abstract linear functions.

    Subclasses implement addition, left scalar multiplication (``s * u``) and
    evaluation. Negation and subtraction are derived from those and may be
    overridden for speed, but every algebra ends up with a complete negation.
    Operations mixing two different concrete algebras return
    ``NotImplemented``.

    Values are expected to be immutable: operations build new values.
    """

    # Make numpy scalars defer to __rmul__ instead of broadcasting over us.
    __array_ufunc__ = None

    @abstractmethod
    def __add__(self, other: Any) -> "AbstractLinear":
        ...

    @abstractmethod
    def __rmul__(self, scalar: float) -> "AbstractLinear":
        ...

    @abstractmethod
    def __call__(self, x: Any) -> float:
        ...

    def __neg__(self) -> "AbstractLinear":
        return (-1.0) * self

    def __sub__(self, other: Any) -> "AbstractLinear":
        if type(other) is not type(self):
            return NotImplemented
        return self + (-other)


@dataclass(frozen=True)
class Linear(AbstractLinear):
    """The scalar algebra: ``Linear(a)`` is the function ``x -> a*x``."""

    a: float

    def coef(self) -> float:
        return self.a

    def __add__(self, other: Any) -> "Linear":
        if type(other) is not Linear:
            return NotImplemented
        return Linear(self.a + other.a)

    def __sub__(self, other: Any) -> "Linear":
        if type(other) is not Linear:
            return NotImplemented
        return Linear(self.a - other.a)

    def __neg__(self) -> "Linear":
        return Linear(-self.a)

    def __rmul__(self, scalar: float) -> "Linear":
        return Linear(scalar * self.a)

    def __call__(self, x: Any) -> float:
        return self.a * x


@dataclass(frozen=True)
class Cubic(AbstractLinear):
    """``Cubic(a, b)`` is the function ``x -> a*x**3 + b*x``."""

    a: float
    b: float

    def __add__(self, other: Any) -> "Cubic":
        if type(other) is not Cubic:
            return NotImplemented
        return Cubic(self.a + other.a, self.b + other.b)

    def __sub__(self, other: Any) -> "Cubic":
        if type(other) is not Cubic:
            return NotImplemented
        return Cubic(self.a - other.a, self.b - other.b)

    def __neg__(self) -> "Cubic":
        return Cubic(-self.a, -self.b)

    def __rmul__(self, scalar: float) -> "Cubic":
        return Cubic(scalar * self.a, scalar * self.b)

    def __call__(self, x: Any) -> float:
        return self.a * x**3 + self.b * x

    def __str__(self) -> str:
        terms = []
        if self.a != 0:
            terms.append(f"{self.a}x³")
        if self.b != 0:
            terms.append(f"{self.b}x")
        return " + ".join(terms) if terms else "0"


__all__ = ["AbstractLinear", "Linear", "Cubic"]
