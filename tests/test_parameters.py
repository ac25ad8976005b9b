"""Tests for MirrorDescentParameters validation."""

from __future__ import annotations

import logging
import math

import numpy as np
import pytest

from mirrordescent import (
    ConfigurationError,
    Cubic,
    DomainError,
    Linear,
    MirrorDescentParameters,
    declare,
    harmonic_step,
)
from mirrordescent.algebras.scalar import abs_objective, quadratic_phi, subgradient_of_abs


def _params(step_size=harmonic_step(), subgradient=subgradient_of_abs):
    return MirrorDescentParameters(quadratic_phi, abs_objective, step_size, subgradient)


def test_valid_parameters() -> None:
    """A well-formed bundle exposes its algebra and step sizes."""
    params = _params()
    assert params.algebra is Linear
    assert params.step(0) == 1.0
    assert params.step(3) == 0.25
    assert params.step(np.int64(1)) == 0.5


def test_non_positive_step_size_rejected_at_construction() -> None:
    """c(0) <= 0 is surfaced immediately."""
    with pytest.raises(ConfigurationError, match="strictly positive"):
        _params(step_size=lambda k: 0.0)


def test_non_positive_step_size_rejected_later() -> None:
    """A schedule going non-positive fails at the offending index."""
    params = _params(step_size=lambda k: 1.0 - k)
    with pytest.raises(ConfigurationError, match=r"c\(1\)"):
        params.step(1)


def test_failing_schedule_raises_domain_error() -> None:
    """Exceptions inside the schedule become DomainErrors carrying k."""

    def schedule(k: int) -> float:
        if k == 2:
            raise ZeroDivisionError("boom")
        return 1.0

    params = _params(step_size=schedule)
    with pytest.raises(DomainError, match="k=2") as excinfo:
        params.step(2)
    assert excinfo.value.k == 2
    assert isinstance(excinfo.value.__cause__, ZeroDivisionError)


def test_non_finite_step_size_raises_domain_error() -> None:
    """inf or nan step sizes are rejected."""
    params = _params(step_size=lambda k: 1.0 if k == 0 else math.inf)
    with pytest.raises(DomainError):
        params.step(1)


@pytest.mark.parametrize("k", [-1, 1.5, True])
def test_step_index_must_be_non_negative_integer(k) -> None:
    """Only indices 0, 1, 2, ... are valid."""
    with pytest.raises(DomainError):
        _params().step(k)


def test_subgradient_failure_reports_point_and_index() -> None:
    """Oracle errors carry the iteration index and point."""

    def oracle(x: float) -> Linear:
        if x > 1.0:
            raise ValueError("outside domain")
        return Linear(1.0)

    params = _params(subgradient=oracle)
    with pytest.raises(DomainError) as excinfo:
        params.subgradient_at(2.0, 7)
    assert excinfo.value.k == 7
    assert excinfo.value.x == 2.0
    assert "x=2.0" in str(excinfo.value)


def test_subgradient_returning_none_raises_domain_error() -> None:
    """None is not a subgradient."""
    params = _params(subgradient=lambda x: None)
    with pytest.raises(DomainError, match="None"):
        params.subgradient_at(0.0, 0)


def test_subgradient_of_wrong_algebra_raises() -> None:
    """The oracle must return values of phi's algebra."""
    params = _params(subgradient=lambda x: Cubic(1.0, 0.0))
    with pytest.raises(ConfigurationError, match="expected Linear"):
        params.subgradient_at(0.0, 0)


def test_subgradient_of_algebra_subclass_raises() -> None:
    """A subclass of phi's algebra is a different algebra."""

    class ShiftedLinear(Linear):
        pass

    params = _params(subgradient=lambda x: ShiftedLinear(1.0))
    with pytest.raises(ConfigurationError, match="expected Linear"):
        params.subgradient_at(0.0, 0)


def test_step_size_failure_reports_iterate() -> None:
    """The iterate passed to step is attached to the error."""
    params = _params(step_size=lambda k: 1.0 if k == 0 else math.nan)
    with pytest.raises(DomainError) as excinfo:
        params.step(3, -0.5)
    assert excinfo.value.k == 3
    assert excinfo.value.x == -0.5
    assert "x=-0.5" in str(excinfo.value)


def test_phi_must_be_declared() -> None:
    """phi must be an AbstractConvex handle."""
    with pytest.raises(ConfigurationError, match="phi"):
        MirrorDescentParameters(abs, abs_objective, harmonic_step(), subgradient_of_abs)


def test_components_must_be_callable() -> None:
    """f, step_size and subgradient must all be callable."""
    with pytest.raises(ConfigurationError, match="step_size"):
        MirrorDescentParameters(quadratic_phi, abs_objective, 0.1, subgradient_of_abs)


def test_mismatched_objective_algebra_logs_warning(caplog) -> None:
    """f over another algebra is allowed but reported."""
    f = declare(Cubic, abs, name="cubic_abs")
    logger = logging.getLogger("mirrordescent.parameters")
    logger.propagate = True
    try:
        with caplog.at_level(logging.WARNING, logger=logger.name):
            MirrorDescentParameters(quadratic_phi, f, harmonic_step(), subgradient_of_abs)
    finally:
        logger.propagate = False
    assert "different algebras" in caplog.text
