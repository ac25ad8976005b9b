"""Pytest configuration and shared fixtures for mirrordescent tests.

This module provides:
- A deterministic numpy RNG fixture
- An isolated minimiser registry for every test
- Scalar-algebra parameters reused across the iteration tests
"""

import os
from typing import Iterator

import numpy as np
import pytest

from mirrordescent import (
    Linear,
    MinimiserRegistry,
    MirrorDescentParameters,
    harmonic_step,
    registry_scope,
    set_debug_enabled,
    is_debug_enabled,
)
from mirrordescent.algebras.scalar import abs_objective, quadratic_phi, subgradient_of_abs


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture(scope="function", autouse=True)
def registry() -> Iterator[MinimiserRegistry]:
    """Give every test a private copy of the default registry.

    Declarations and minimisers registered by a test are discarded afterwards,
    while the bundled minimisers stay available.
    """
    with registry_scope() as scoped:
        yield scoped


@pytest.fixture(scope="function", autouse=True)
def restore_debug_mode() -> Iterator[None]:
    """Restore the global debug flag after each test."""
    original = is_debug_enabled()
    try:
        yield
    finally:
        set_debug_enabled(original)


@pytest.fixture
def abs_params() -> MirrorDescentParameters:
    """|x| minimised with Phi(x) = x^2/2 and c(k) = 1/(k+1)."""
    return MirrorDescentParameters(
        quadratic_phi, abs_objective, harmonic_step(), subgradient_of_abs
    )


@pytest.fixture
def lam0() -> Linear:
    return Linear(-2.0)
