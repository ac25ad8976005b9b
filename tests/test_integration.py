"""End-to-end runs of the mirror descent engine."""

from __future__ import annotations

from mirrordescent import (
    Cubic,
    Linear,
    MirrorDescentIteration,
    MirrorDescentParameters,
    first_index,
    harmonic_step,
    power_step,
    take,
)
from mirrordescent.algebras.cubic import MaxOfCubics, phi_subgradient, quartic_phi
from mirrordescent.algebras.scalar import abs_objective, quadratic_phi, subgradient_of_abs


def test_scalar_abs_scenario_first_step_and_progress() -> None:
    """|x| from x0 = -2 with Phi = x^2/2 and c(k) = 1/(k+1)."""
    params = MirrorDescentParameters(
        quadratic_phi, abs_objective, harmonic_step(), subgradient_of_abs
    )
    states = take(MirrorDescentIteration(params, -2.0, Linear(-2.0)), 21)

    first = states[1]
    assert first.pb.lam == Linear(1.0)
    assert first.x == -1.0
    assert first.lam == Linear(-1.0)
    assert first.u == Linear(-1.0)
    assert first.k == 1

    assert abs(states[20].x) < abs(states[0].x)


def test_cubic_runs_are_reproducible() -> None:
    """Independent cubic runs give identical trajectories."""
    objective = MaxOfCubics((Cubic(1.0, -12.0), Cubic(-1.0, 6.0)))
    params = MirrorDescentParameters(
        quartic_phi, objective, power_step(1.0, 0.8), objective.subgradient
    )
    run1 = take(MirrorDescentIteration(params, -0.5, phi_subgradient(-0.5)), 50)
    run2 = take(MirrorDescentIteration(params, -0.5, phi_subgradient(-0.5)), 50)
    assert [(s.x, s.lam, s.u, s.k) for s in run1] == [
        (s.x, s.lam, s.u, s.k) for s in run2
    ]


def test_scan_until_objective_threshold() -> None:
    """Callers stop the unbounded sequence with a predicate."""
    params = MirrorDescentParameters(
        quadratic_phi, abs_objective, harmonic_step(), subgradient_of_abs
    )
    iteration = MirrorDescentIteration(params, -2.0, Linear(-2.0))
    k = first_index(iteration, lambda s: s.objective() < 0.2, limit=1000)
    assert k is not None
    assert iteration.state_at(k).objective() < 0.2
