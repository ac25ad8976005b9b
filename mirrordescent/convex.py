"""
Abstract convex function handles.

A handle pairs a plain callable with the algebra ``L`` it is convex over and a
stable name. The *class* of the handle encodes the pair ``(L, name)``: every
pair gets its own subclass of :class:`AbstractConvex`, created once and
cached. That class is the dispatch key used to find the minimiser of the
mirror subproblem (see :mod:`mirrordescent.registry`), so two convex functions
over the same algebra but with different names never share a minimiser.

Example
-------
>>> from mirrordescent import Linear, abstract
>>> @abstract(Linear)
... def f(x):
...     return 3.5 * x
>>> f(2.0)
7.0
>>> type(f).key == (Linear, "f")
True
"""

from __future__ import annotations

from typing import Any, Callable, ClassVar, Dict, Optional

from .errors import ConfigurationError
from .linear import AbstractLinear
from .registry import Key, MinimiserRegistry, default_registry

Definition = Callable[[Any], float]


class AbstractConvex:
    """
    An ``L``-convex function, identified by ``(algebra, name)``.

    Do not instantiate this class directly: use :func:`declare` or the
    :func:`abstract` decorator, which return an instance of the specialised
    subclass for the pair.
    """

    algebra: ClassVar[Optional[type]] = None
    name: ClassVar[Optional[str]] = None
    key: ClassVar[Optional[Key]] = None

    _specialisations: ClassVar[Dict[Key, type]] = {}

    __slots__ = ("_definition",)

    def __init__(self, definition: Definition) -> None:
        if type(self).key is None:
            raise ConfigurationError(
                "AbstractConvex must be specialised to an (algebra, name) pair; "
                "use declare() or @abstract(...)."
            )
        self._definition = definition

    @classmethod
    def specialise(cls, algebra: type, name: str) -> type:
        """Return the unique handle class for ``(algebra, name)``."""
        key = (algebra, name)
        handle_cls = AbstractConvex._specialisations.get(key)
        if handle_cls is None:
            handle_cls = type(
                f"AbstractConvex[{algebra.__qualname__}, {name}]",
                (AbstractConvex,),
                {
                    "algebra": algebra,
                    "name": name,
                    "key": key,
                    "__slots__": (),
                    "__module__": __name__,
                },
            )
            AbstractConvex._specialisations[key] = handle_cls
        return handle_cls

    @property
    def definition(self) -> Definition:
        return self._definition

    def __call__(self, x: Any) -> float:
        return self._definition(x)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AbstractConvex):
            return NotImplemented
        return type(self) is type(other) and self._definition is other._definition

    def __hash__(self) -> int:
        return hash((type(self), id(self._definition)))

    def __repr__(self) -> str:
        algebra = self.algebra.__qualname__ if self.algebra is not None else "?"
        return f"AbstractConvex{{{algebra}}}({self.name!r})"


def is_abstract_convex(obj: Any) -> bool:
    """True if ``obj`` is a handle specialised to an ``(algebra, name)`` pair."""
    return isinstance(obj, AbstractConvex) and type(obj).key is not None


def declare(
    algebra: type,
    definition: Definition,
    name: Optional[str] = None,
    registry: Optional[MinimiserRegistry] = None,
) -> AbstractConvex:
    """
    Declare ``definition`` as an ``algebra``-convex function.

    Parameters
    ----------
    algebra:
        Subclass of :class:`~mirrordescent.linear.AbstractLinear`.
    definition:
        Callable of one argument returning a real number.
    name:
        Identity of the function. Defaults to ``definition.__name__``; must be
        given explicitly for lambdas.
    registry:
        Registry recording the declaration. Defaults to the current default
        registry.

    Raises
    ------
    ConfigurationError
        If ``algebra`` is not an abstract linear type, ``definition`` is not
        callable, no usable name is available, or the pair is already
        declared with a different definition.
    """
    if not (isinstance(algebra, type) and issubclass(algebra, AbstractLinear)):
        raise ConfigurationError(
            f"algebra must be a subclass of AbstractLinear, got {algebra!r}."
        )
    if not callable(definition):
        raise ConfigurationError(f"definition must be callable, got {definition!r}.")
    if name is None:
        name = getattr(definition, "__name__", None)
        if name is None or name == "<lambda>":
            raise ConfigurationError(
                "A name is required when declaring an anonymous function."
            )
    if registry is None:
        registry = default_registry()

    handle_cls = AbstractConvex.specialise(algebra, name)
    registry.declare(handle_cls.key, definition)
    return handle_cls(definition)


def abstract(
    algebra: type,
    name: Optional[str] = None,
    registry: Optional[MinimiserRegistry] = None,
) -> Callable[[Definition], AbstractConvex]:
    """Decorator form of :func:`declare`."""

    def decorator(definition: Definition) -> AbstractConvex:
        return declare(algebra, definition, name=name, registry=registry)

    return decorator


__all__ = [
    "AbstractConvex",
    "Definition",
    "abstract",
    "declare",
    "is_abstract_convex",
]
