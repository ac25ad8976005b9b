"""mirrordescent - abstract mirror descent over user-defined linear algebras."""

__version__ = "0.1.0"

from . import algebras
from .config import debug_context, is_debug_enabled, set_debug_enabled
from .convex import AbstractConvex, abstract, declare, is_abstract_convex
from .diagnostics import assert_linear_closure, certificate_residual, is_linear_closed
from .errors import ConfigurationError, DomainError, MirrorDescentError, SolverError
from .iteration import (
    IterationState,
    MirrorDescentIteration,
    Trajectory,
    advance,
    first_index,
    take,
    trajectory,
)
from .linear import AbstractLinear, Cubic, Linear
from .logging import configure_logging, get_logger, set_log_level
from .parameters import MirrorDescentParameters
from .registry import (
    MinimiserRegistry,
    default_registry,
    minimise,
    register_minimiser,
    registry_scope,
)
from .schedules import constant_step, harmonic_step, power_step, sample_schedule
from .subproblem import Subproblem

__all__ = [
    # Version
    "__version__",
    # Algebras
    "AbstractLinear",
    "Linear",
    "Cubic",
    "algebras",
    # Convex functions and dispatch
    "AbstractConvex",
    "declare",
    "abstract",
    "is_abstract_convex",
    "MinimiserRegistry",
    "default_registry",
    "register_minimiser",
    "registry_scope",
    "minimise",
    "Subproblem",
    # Iteration
    "MirrorDescentParameters",
    "IterationState",
    "MirrorDescentIteration",
    "Trajectory",
    "advance",
    "take",
    "first_index",
    "trajectory",
    # Step sizes
    "constant_step",
    "harmonic_step",
    "power_step",
    "sample_schedule",
    # Diagnostics
    "assert_linear_closure",
    "is_linear_closed",
    "certificate_residual",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
    # Errors
    "MirrorDescentError",
    "ConfigurationError",
    "SolverError",
    "DomainError",
    # Logging
    "get_logger",
    "set_log_level",
    "configure_logging",
]
