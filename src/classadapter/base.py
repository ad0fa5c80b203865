"""Base class for every adapter.

An adapter achieves by composition what cannot be achieved by
inheritance: it holds a wrapped object and passes method calls through to
it, under the same or a different name. ``Adapter`` itself forwards
nothing. It only owns the wrapped object and gives a guaranteed way of
getting back to it. Forwarding is added by generated subclasses (see
``classadapter.builder``) or by hand-written ones.
"""

import functools
from collections.abc import Callable, Iterable
from typing import Any

from classadapter import inspection
from classadapter.exceptions import MisuseError
from classadapter.logger import get_logger

logger = get_logger(__name__)

# Name of the wrapped object's release operation, invoked on teardown.
TEARDOWN_METHOD = "close"


class instance_only:
    """Method descriptor that refuses to be called through the class.

    Accessing the method on an instance binds it as usual. Accessing it on
    the class yields a callable that raises ``MisuseError`` whatever the
    arguments.
    """

    def __init__(self, func: Callable[..., Any]) -> None:
        self.func = func
        functools.update_wrapper(self, func)  # type: ignore[arg-type]

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, obj: Any, objtype: type | None = None) -> Callable[..., Any]:
        if obj is None:
            owner = objtype.__qualname__ if objtype is not None else "?"
            name = getattr(self, "name", self.func.__name__)

            def misuse(*args: Any, **kwargs: Any) -> Any:
                raise MisuseError(f"{owner}.{name} called as a static method")

            return misuse
        return self.func.__get__(obj, objtype)


class Adapter:
    """Holds one wrapped object and exposes it to subclasses.

    Attributes:
        _wrapped: The wrapped object. Read it through ``wrapped_object()``.
    """

    def __init__(self, wrapped: Any) -> None:
        """Wrap an object.

        Args:
            wrapped: The object to hold.

        Raises:
            TypeError: If ``wrapped`` is not an object instance.
        """
        if not inspection.is_object(wrapped):
            raise TypeError(
                f"{type(self).__qualname__} can only wrap an object instance, "
                f"got {type(wrapped).__name__}"
            )
        self._wrapped = wrapped

    @classmethod
    def new(cls, candidate: Any = None) -> "Adapter | None":
        """Create an adapter holding ``candidate``.

        Unlike calling the class, this never raises for a bad candidate,
        so callers can test the result and branch.

        Args:
            candidate: The object to wrap.

        Returns:
            A new adapter, or None if ``candidate`` is not an object instance.
        """
        if not inspection.is_object(candidate):
            logger.debug(
                "Construction miss: class=%s, candidate_type=%s",
                cls.__qualname__,
                type(candidate).__name__,
            )
            return None
        return cls(candidate)

    @instance_only
    def wrapped_object(self) -> Any:
        """Return the wrapped object."""
        return self._wrapped

    def isa(self, classinfo: type | tuple[type, ...]) -> bool:
        """Report whether this adapter is an instance of ``classinfo``."""
        return inspection.isa(self, classinfo)

    def can(self, name: str) -> Any:
        """Return the callable this adapter exposes as ``name``, or None."""
        return inspection.can(self, name)

    def __repr__(self) -> str:
        return f"<{type(self).__qualname__} wrapping {vars(self).get('_wrapped')!r}>"


def adapter_bases(*bases: type) -> tuple[type, ...]:
    """Compute the bases a generated adapter class declares.

    ``Adapter`` is prepended unless one of ``bases`` already derives from it.

    Args:
        *bases: Declared parent classes, in order.

    Returns:
        Tuple of bases for the class statement.
    """
    if any(issubclass(base, Adapter) for base in bases):
        return tuple(bases)
    return (Adapter, *bases)


def derived_metaclass(bases: Iterable[type]) -> type:
    """Return the most derived metaclass among ``bases``.

    Args:
        bases: Parent classes of the class about to be created.

    Returns:
        The metaclass a subclass of all of ``bases`` must use.

    Raises:
        TypeError: If two bases have unrelated metaclasses.
    """
    winner: type = type
    for base in bases:
        candidate = type(base)
        if issubclass(winner, candidate):
            continue
        if issubclass(candidate, winner):
            winner = candidate
            continue
        raise TypeError(
            f"metaclass conflict: {winner.__qualname__} and {candidate.__qualname__}"
        )
    return winner
