"""
The abstract mirror descent recurrence.

Starting from a point ``x_0`` and a certificate ``lambda_0``, each transition
``k -> k+1`` performs::

    pb_{k+1}     = Subproblem(Phi, c(k) * u_k - lambda_k)
    x_{k+1}      = minimise(pb_{k+1})          # argmin Phi - lambda_{k+1}
    lambda_{k+1} = lambda_k - c(k) * u_k
    u_{k+1}      = subgradient(x_{k+1})

States are immutable, so any state can be kept for inspection or used as the
start of a fresh sequence. :class:`MirrorDescentIteration` exposes the
sequence lazily and never ends on its own; stopping is up to the caller
(:func:`take`, :func:`first_index`, :func:`trajectory`).

Example
-------
>>> from mirrordescent import (
...     Linear, MirrorDescentIteration, MirrorDescentParameters, harmonic_step,
...     take,
... )
>>> from mirrordescent.algebras.scalar import (
...     abs_objective, quadratic_phi, subgradient_of_abs,
... )
>>> params = MirrorDescentParameters(
...     quadratic_phi, abs_objective, harmonic_step(), subgradient_of_abs
... )
>>> states = take(MirrorDescentIteration(params, -2.0, Linear(-2.0)), 2)
>>> states[1].x, states[1].lam
(-1.0, Linear(a=-1.0))
"""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import islice
from typing import Any, Callable, Iterable, Iterator, List, Optional

import numpy as np

from .config import is_debug_enabled
from .diagnostics import DEFAULT_POINTS, assert_linear_closure, certificate_residual
from .errors import ConfigurationError
from .linear import AbstractLinear
from .logging import get_logger
from .parameters import MirrorDescentParameters
from .registry import MinimiserRegistry, minimise
from .subproblem import Subproblem

logger = get_logger(__name__)

CERTIFICATE_TOL = 1e-9


@dataclass(frozen=True)
class IterationState:
    """
    One iterate of the abstract mirror descent method.

    Attributes:
        params: Parameters of the run, shared by every state.
        x: Current iterate.
        lam: Current certificate, an abstract subgradient of ``Phi`` at ``x``.
        u: Abstract subgradient of ``f`` at ``x``, computed once per state.
        pb: Subproblem whose solution is ``x``; None for the initial state.
        k: Iteration index.
    """

    params: MirrorDescentParameters = field(repr=False)
    x: Any
    lam: AbstractLinear
    u: AbstractLinear
    pb: Optional[Subproblem] = None
    k: int = 0

    @classmethod
    def initial(
        cls, params: MirrorDescentParameters, x0: Any, lam0: AbstractLinear
    ) -> "IterationState":
        """Build the state for ``k = 0``; ``u_0`` is taken from the oracle."""
        if not isinstance(params, MirrorDescentParameters):
            raise ConfigurationError(
                f"params must be MirrorDescentParameters, got {type(params).__qualname__}."
            )
        if type(lam0) is not params.algebra:
            raise ConfigurationError(
                f"Initial certificate is {type(lam0).__qualname__}, expected "
                f"{params.algebra.__qualname__}."
            )
        u0 = params.subgradient_at(x0, 0)
        return cls(params=params, x=x0, lam=lam0, u=u0, pb=None, k=0)

    def objective(self) -> float:
        """Value of the objective ``f`` at the iterate."""
        return self.params.f(self.x)


def _check_transition(prev: IterationState, nxt: IterationState, c: float) -> None:
    points = (prev.x, nxt.x) + DEFAULT_POINTS
    assert_linear_closure(prev.lam, prev.u, s=c, points=points)
    residual = certificate_residual(prev, nxt, points=points)
    if residual > CERTIFICATE_TOL * (1.0 + abs(c)):
        raise ConfigurationError(
            f"Certificate recurrence violated at k={prev.k}: residual {residual:.3e}."
        )


def advance(
    state: IterationState, registry: Optional[MinimiserRegistry] = None
) -> IterationState:
    """
    Compute the successor of ``state``.

    This is a pure function of the state and its parameters: the argument is
    left untouched and a new state is returned.

    Raises
    ------
    SolverError
        If no minimiser handles the subproblem or it returns no point.
    DomainError
        If the step size or subgradient cannot be evaluated.
    ConfigurationError
        If the step size is not positive, or the oracle returns a value of
        the wrong algebra.
    """
    params = state.params
    c = params.step(state.k, state.x)
    pb = Subproblem(params.phi, c * state.u - state.lam)
    y = minimise(pb, registry)
    lam = state.lam - c * state.u
    u = params.subgradient_at(y, state.k + 1)
    nxt = IterationState(params=params, x=y, lam=lam, u=u, pb=pb, k=state.k + 1)

    logger.debug("k=%d c=%.6g x=%r", nxt.k, c, y)
    if is_debug_enabled():
        _check_transition(state, nxt, c)
    return nxt


class MirrorDescentIteration:
    """
    Lazy, unbounded sequence of :class:`IterationState`.

    Every call to ``iter()`` starts a new, independent cursor at the start
    state (which is yielded first). The sequence has no length.

    Parameters
    ----------
    params:
        Parameters of the run.
    x0:
        Starting point.
    lam0:
        Starting certificate, a value of ``params.phi.algebra``. A natural
        choice is an abstract subgradient of ``Phi`` at ``x0``.
    registry:
        Registry used to find the subproblem minimiser; defaults to the
        registry that is current when each transition runs.
    """

    is_infinite = True

    def __init__(
        self,
        params: MirrorDescentParameters,
        x0: Any,
        lam0: AbstractLinear,
        registry: Optional[MinimiserRegistry] = None,
    ) -> None:
        self._init(IterationState.initial(params, x0, lam0), registry)

    def _init(
        self, start: IterationState, registry: Optional[MinimiserRegistry]
    ) -> None:
        self.start = start
        self.registry = registry

    @classmethod
    def from_state(
        cls, state: IterationState, registry: Optional[MinimiserRegistry] = None
    ) -> "MirrorDescentIteration":
        """Sequence continuing from an already materialised state."""
        obj = cls.__new__(cls)
        obj._init(state, registry)
        return obj

    @property
    def params(self) -> MirrorDescentParameters:
        return self.start.params

    def __iter__(self) -> Iterator[IterationState]:
        state = self.start
        while True:
            yield state
            state = advance(state, self.registry)

    def state_at(self, n: int) -> IterationState:
        """Return the ``n``-th state after the start (``n = 0`` is the start)."""
        if n < 0:
            raise ValueError("n must be non-negative.")
        return next(islice(iter(self), n, None))

    def __repr__(self) -> str:
        return (
            f"MirrorDescentIteration(phi={self.params.phi!r}, "
            f"x0={self.start.x!r}, k0={self.start.k})"
        )


def take(states: Iterable[IterationState], n: int) -> List[IterationState]:
    """Materialise the first ``n`` states."""
    if n < 0:
        raise ValueError("n must be non-negative.")
    return list(islice(states, n))


def first_index(
    states: Iterable[IterationState],
    predicate: Callable[[IterationState], bool],
    limit: int,
) -> Optional[int]:
    """
    Position of the first state satisfying ``predicate``.

    At most ``limit`` states are examined; returns None if none matches.
    """
    if limit < 0:
        raise ValueError("limit must be non-negative.")
    for i, state in enumerate(islice(states, limit)):
        if predicate(state):
            return i
    return None


@dataclass
class Trajectory:
    """
    Finite prefix of a run, with arrays convenient for analysis.

    Attributes:
        states: The materialised states.
        ks: Iteration indices.
        xs: Iterates.
        values: Objective values ``f(x_k)``.
    """

    states: List[IterationState]
    ks: np.ndarray
    xs: np.ndarray
    values: np.ndarray

    def __len__(self) -> int:
        return len(self.states)

    @property
    def last(self) -> IterationState:
        return self.states[-1]


def trajectory(states: Iterable[IterationState], n: int) -> Trajectory:
    """Collect the first ``n`` states of a run into a :class:`Trajectory`."""
    if n < 1:
        raise ValueError("n must be at least 1.")
    collected = take(states, n)
    return Trajectory(
        states=collected,
        ks=np.array([s.k for s in collected], dtype=int),
        xs=np.array([s.x for s in collected], dtype=float),
        values=np.array([s.objective() for s in collected], dtype=float),
    )


__all__ = [
    "CERTIFICATE_TOL",
    "IterationState",
    "MirrorDescentIteration",
    "Trajectory",
    "advance",
    "first_index",
    "take",
    "trajectory",
]
