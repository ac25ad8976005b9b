"""Tests for the minimiser dispatch registry."""

from __future__ import annotations

import math

import pytest

from mirrordescent import (
    ConfigurationError,
    Linear,
    MinimiserRegistry,
    SolverError,
    Subproblem,
    declare,
    default_registry,
    minimise,
    register_minimiser,
    registry_scope,
)
from mirrordescent.algebras.scalar import quadratic_phi


def _phi(x):
    return x**2


def test_duplicate_registration_raises() -> None:
    """A second minimiser for the same pair is a configuration error."""
    phi = declare(Linear, _phi, name="dup_phi")
    register_minimiser(phi)(lambda pb: 0.0)
    with pytest.raises(ConfigurationError, match="already registered"):
        register_minimiser(phi)(lambda pb: 1.0)


def test_missing_minimiser_raises_solver_error_naming_pair() -> None:
    """minimise without a registration names the missing pair."""
    phi = declare(Linear, _phi, name="unregistered_phi")
    with pytest.raises(SolverError, match=r"\(Linear, 'unregistered_phi'\)"):
        minimise(Subproblem(phi, Linear(1.0)))


def test_dispatch_uses_name_not_only_algebra() -> None:
    """Two divergences over one algebra get their own minimisers."""
    phi_a = declare(Linear, _phi, name="phi_a")
    phi_b = declare(Linear, lambda x: 2 * x**2, name="phi_b")
    register_minimiser(phi_a)(lambda pb: -pb.lam.a / 2)
    register_minimiser(phi_b)(lambda pb: -pb.lam.a / 4)
    assert minimise(Subproblem(phi_a, Linear(2.0))) == -1.0
    assert minimise(Subproblem(phi_b, Linear(2.0))) == -0.5


def test_minimiser_returning_none_raises() -> None:
    """A minimiser that finds nothing triggers a SolverError."""
    phi = declare(Linear, _phi, name="none_phi")
    register_minimiser(phi)(lambda pb: None)
    with pytest.raises(SolverError, match="no point"):
        minimise(Subproblem(phi, Linear(1.0)))


@pytest.mark.parametrize("value", [math.inf, math.nan, "abc"])
def test_minimiser_returning_invalid_point_raises(value) -> None:
    """Non-finite or non-numeric points are rejected."""
    phi = declare(Linear, _phi, name="invalid_phi")
    register_minimiser(phi)(lambda pb: value)
    with pytest.raises(SolverError):
        minimise(Subproblem(phi, Linear(1.0)))


def test_minimiser_exception_propagates_unchanged() -> None:
    """Errors raised inside a minimiser are not wrapped."""

    class Unbounded(Exception):
        pass

    phi = declare(Linear, _phi, name="raising_phi")

    @register_minimiser(phi)
    def _(pb):
        raise Unbounded("subproblem is unbounded")

    with pytest.raises(Unbounded):
        minimise(Subproblem(phi, Linear(1.0)))


def test_registry_scope_discards_registrations() -> None:
    """Registrations inside a scope vanish afterwards."""
    phi = declare(Linear, _phi, name="scoped_phi")
    outer = default_registry()
    with registry_scope() as inner:
        register_minimiser(phi)(lambda pb: 0.0)
        assert phi in inner
        assert default_registry() is inner
    assert default_registry() is outer
    assert phi not in outer


def test_explicit_registry_is_independent() -> None:
    """An explicit registry does not see the default registrations."""
    fresh = MinimiserRegistry()
    assert len(fresh) == 0
    assert quadratic_phi not in fresh
    with pytest.raises(SolverError):
        minimise(Subproblem(quadratic_phi, Linear(1.0)), registry=fresh)
    fresh.register(quadratic_phi, lambda pb: 42.0)
    assert minimise(Subproblem(quadratic_phi, Linear(1.0)), registry=fresh) == 42.0


def test_register_accepts_explicit_key_and_unregister() -> None:
    """Pairs can be given as tuples; unregister removes them."""
    fresh = MinimiserRegistry()
    fresh.register((Linear, "tuple_phi"), lambda pb: 0.0)
    assert (Linear, "tuple_phi") in fresh
    assert fresh.keys() == [(Linear, "tuple_phi")]
    fresh.unregister((Linear, "tuple_phi"))
    assert (Linear, "tuple_phi") not in fresh
    with pytest.raises(ConfigurationError):
        fresh.unregister((Linear, "tuple_phi"))


def test_register_rejects_non_callable_and_unkeyed_targets() -> None:
    """Registration validates its inputs."""
    fresh = MinimiserRegistry()
    with pytest.raises(ConfigurationError, match="callable"):
        fresh.register(quadratic_phi, 3.0)  # type: ignore[arg-type]
    with pytest.raises(ConfigurationError, match="dispatch key"):
        fresh.register(object(), lambda pb: 0.0)


def test_builtin_minimiser_is_registered_by_default() -> None:
    """The quadratic divergence works out of the box."""
    assert quadratic_phi in default_registry()
    assert minimise(Subproblem(quadratic_phi, Linear(1.0))) == -1.0
