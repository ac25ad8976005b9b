"""
Dispatch registry for subproblem minimisers.

The mirror step ``argmin_y Phi(y) - lambda(y)`` has no generic solution: its
closed form depends on the algebra ``L`` and on the divergence generator
``Phi``. The engine therefore looks up a user-supplied minimiser keyed by the
pair ``(algebra type, function name)`` carried by the handle class of ``Phi``
(see :mod:`mirrordescent.convex`).

Exactly one minimiser may be registered per pair; registering a second one is
a :class:`~mirrordescent.errors.ConfigurationError`. Declarations of convex
functions are recorded in the same registry so that a name cannot silently be
rebound to a different definition.

Example
-------
>>> from mirrordescent import Linear, abstract, register_minimiser
>>> @abstract(Linear)
... def phi(x):
...     return 0.5 * x**2
>>> @register_minimiser(phi)
... def _(pb):
...     return -pb.lam.a
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterator, Optional, Tuple

import numpy as np

from .errors import ConfigurationError, SolverError
from .logging import get_logger

if TYPE_CHECKING:
    from .subproblem import Subproblem

logger = get_logger(__name__)

Key = Tuple[type, str]
Minimiser = Callable[["Subproblem"], Any]


def format_key(key: Key) -> str:
    """Human-readable rendering of an ``(algebra, name)`` pair."""
    algebra, name = key
    algebra_name = getattr(algebra, "__qualname__", repr(algebra))
    return f"({algebra_name}, {name!r})"


def key_of(target: Any) -> Key:
    """
    Return the dispatch key of ``target``.

    ``target`` may be a convex function handle, its class, or an explicit
    ``(algebra, name)`` tuple.
    """
    if isinstance(target, tuple) and len(target) == 2:
        return target
    key = getattr(target, "key", None)
    if key is None:
        raise ConfigurationError(
            f"Cannot derive an (algebra, name) dispatch key from {target!r}."
        )
    return key


class MinimiserRegistry:
    """Mapping from ``(algebra, name)`` pairs to declarations and minimisers."""

    def __init__(self) -> None:
        self._minimisers: Dict[Key, Minimiser] = {}
        self._declarations: Dict[Key, Callable[[Any], float]] = {}

    # Declarations -------------------------------------------------------

    def declare(self, key: Key, definition: Callable[[Any], float]) -> None:
        """Record that ``key`` names ``definition``.

        Redeclaring a pair with the same or an equal callable is a no-op;
        binding it to a different callable raises :class:`ConfigurationError`.
        """
        existing = self._declarations.get(key)
        if (
            existing is not None
            and existing is not definition
            and existing != definition
        ):
            raise ConfigurationError(
                f"Convex function {format_key(key)} is already declared with a "
                f"different definition ({existing!r})."
            )
        self._declarations[key] = definition

    def definition(self, key: Key) -> Optional[Callable[[Any], float]]:
        return self._declarations.get(key)

    # Minimisers ---------------------------------------------------------

    def register(self, target: Any, minimiser: Minimiser) -> Minimiser:
        """Register ``minimiser`` for the pair identified by ``target``."""
        key = key_of(target)
        if not callable(minimiser):
            raise ConfigurationError(
                f"Minimiser for {format_key(key)} must be callable, got {minimiser!r}."
            )
        if key in self._minimisers:
            raise ConfigurationError(
                f"A minimiser is already registered for {format_key(key)}."
            )
        self._minimisers[key] = minimiser
        logger.info("Registered minimiser %r for %s", minimiser, format_key(key))
        return minimiser

    def unregister(self, target: Any) -> Minimiser:
        key = key_of(target)
        try:
            minimiser = self._minimisers.pop(key)
        except KeyError:
            raise ConfigurationError(
                f"No minimiser is registered for {format_key(key)}."
            ) from None
        logger.info("Unregistered minimiser for %s", format_key(key))
        return minimiser

    def lookup(self, target: Any) -> Minimiser:
        """Return the minimiser for ``target`` or raise :class:`SolverError`."""
        key = key_of(target)
        try:
            return self._minimisers[key]
        except KeyError:
            raise SolverError(
                f"No minimiser registered for {format_key(key)}; register one "
                "with register_minimiser()."
            ) from None

    def __contains__(self, target: Any) -> bool:
        return key_of(target) in self._minimisers

    def __len__(self) -> int:
        return len(self._minimisers)

    def keys(self) -> list[Key]:
        return list(self._minimisers)

    def copy(self) -> "MinimiserRegistry":
        clone = MinimiserRegistry()
        clone._minimisers = dict(self._minimisers)
        clone._declarations = dict(self._declarations)
        return clone

    def __repr__(self) -> str:
        pairs = ", ".join(format_key(k) for k in self._minimisers)
        return f"MinimiserRegistry([{pairs}])"


_current = MinimiserRegistry()


def default_registry() -> MinimiserRegistry:
    """Return the registry used when no explicit registry is passed."""
    return _current


@contextmanager
def registry_scope(
    registry: Optional[MinimiserRegistry] = None,
) -> Iterator[MinimiserRegistry]:
    """
    Temporarily install a registry as the default one.

    Without an argument a copy of the current default registry is installed,
    so registrations made inside the block are discarded on exit.
    """
    global _current
    prev = _current
    _current = registry if registry is not None else prev.copy()
    try:
        yield _current
    finally:
        _current = prev


def register_minimiser(
    target: Any, registry: Optional[MinimiserRegistry] = None
) -> Callable[[Minimiser], Minimiser]:
    """Decorator registering a minimiser for the convex function ``target``."""

    def decorator(minimiser: Minimiser) -> Minimiser:
        (registry if registry is not None else default_registry()).register(
            target, minimiser
        )
        return minimiser

    return decorator


def minimise(pb: "Subproblem", registry: Optional[MinimiserRegistry] = None) -> Any:
    """
    Solve ``pb`` with the minimiser registered for its ``(algebra, name)`` pair.

    Exceptions raised by the minimiser itself propagate unchanged.

    Raises
    ------
    SolverError
        If no minimiser is registered for the pair, or if the minimiser
        returns None or a non-finite point.
    """
    if registry is None:
        registry = default_registry()
    key = key_of(type(pb.phi))
    minimiser = registry.lookup(key)
    y = minimiser(pb)
    if y is None:
        raise SolverError(
            f"Minimiser for {format_key(key)} returned no point for {pb!r}."
        )
    try:
        finite = bool(np.all(np.isfinite(np.asarray(y, dtype=float))))
    except (TypeError, ValueError):
        raise SolverError(
            f"Minimiser for {format_key(key)} returned a non-numeric point {y!r}."
        ) from None
    if not finite:
        raise SolverError(
            f"Minimiser for {format_key(key)} returned a non-finite point {y!r}."
        )
    return y


__all__ = [
    "Key",
    "Minimiser",
    "MinimiserRegistry",
    "default_registry",
    "format_key",
    "key_of",
    "minimise",
    "register_minimiser",
    "registry_scope",
]
