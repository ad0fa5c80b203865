"""Compose adapter classes from closures instead of source text.

``DispatchComposer`` reads the same ``AdapterConfig`` as
``SourceRenderer`` and produces a class with the same behavior: an
explicit name-to-closure table for declared methods, plus a fallback
closure when autoload is enabled.
"""

from collections.abc import Callable
from typing import Any

from classadapter import inspection
from classadapter.base import TEARDOWN_METHOD, adapter_bases, derived_metaclass
from classadapter.config.adapter import AdapterConfig
from classadapter.exceptions import InstallError, MissingMethodError
from classadapter.logger import get_logger

logger = get_logger(__name__)


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


def _forwarder(owner: str, name: str, target: str) -> Callable[..., Any]:
    def forward(self: Any, /, *args: Any, **kwargs: Any) -> Any:
        return getattr(self.wrapped_object(), target)(*args, **kwargs)

    forward.__name__ = name
    forward.__qualname__ = f"{owner}.{name}"
    return forward


def _delegating_new(
    delegate: Callable[..., Any], created: list[type]
) -> classmethod:  # type: ignore[type-arg]
    def new(cls: type, *args: Any, **kwargs: Any) -> Any:
        wrapped = delegate(*args, **kwargs)
        if not inspection.is_object(wrapped):
            return None
        return super(created[0], cls).new(wrapped)  # type: ignore[misc]

    return classmethod(new)


def _wrapped_class(self: Any) -> type:
    return self.wrapped_object().__class__


def _forwarded_isa(self: Any, classinfo: type | tuple[type, ...]) -> bool:
    return inspection.isa(self.wrapped_object(), classinfo)


def _forwarded_can(self: Any, name: str) -> Any:
    return inspection.can(self.wrapped_object(), name)


def _class_level_lookup(cls: type, name: str) -> Any:
    if _is_dunder(name):
        raise AttributeError(name)
    raise MissingMethodError(name, f"{cls.__module__}.{cls.__qualname__}")


def _autoload(self: Any, name: str) -> Any:
    if name == "_wrapped" or _is_dunder(name):
        raise AttributeError(name)
    return getattr(self.wrapped_object(), name)


def _teardown(self: Any) -> None:
    wrapped = vars(self).get("_wrapped")
    teardown = getattr(wrapped, TEARDOWN_METHOD, None)
    if wrapped is not None and callable(teardown):
        teardown()


class DispatchComposer:
    """Builds adapter classes directly with ``type()``."""

    def compose(self, config: AdapterConfig) -> type:
        """Create the adapter class described by ``config``.

        Args:
            config: Validated adapter configuration.

        Returns:
            The composed adapter class (not registered).

        Raises:
            InstallError: If a class reference cannot be resolved or the
                class cannot be created.
        """
        try:
            declared = [inspection.resolve_ref(ref) for ref in config.declared_bases]
            delegate = (
                inspection.resolve_ref(config.constructor_delegate)
                if config.constructor_delegate is not None
                else None
            )
        except (ImportError, AttributeError) as exc:
            logger.error(
                "Class reference resolution failed: target=%s, reason=%s",
                config.target,
                exc,
            )
            raise InstallError(
                "Cannot resolve class reference", target=config.target, cause=exc
            ) from exc

        created: list[type] = []
        namespace: dict[str, Any] = {
            "__module__": config.module_name,
            "__qualname__": config.class_name,
            "__doc__": f"Adapter composed for {config.target}.",
        }
        if delegate is not None:
            namespace["new"] = _delegating_new(delegate, created)
        for name, target in config.method_map.items():
            namespace[name] = _forwarder(config.class_name, name, target)
        if config.identity_forwarding:
            namespace["__class__"] = property(_wrapped_class)
            namespace["isa"] = _forwarded_isa
            namespace["can"] = _forwarded_can
        if config.autoload:
            namespace["__getattr__"] = _autoload
            namespace["__del__"] = _teardown

        try:
            bases = adapter_bases(*declared)
            metaclass = derived_metaclass(bases)
            if config.autoload:
                metaclass = type(
                    f"_{config.class_name}Meta",
                    (metaclass,),
                    {"__getattr__": _class_level_lookup},
                )
            composed = metaclass(config.class_name, bases, namespace)
        except Exception as exc:
            logger.error(
                "Class composition failed: target=%s, reason=%s", config.target, exc
            )
            logger.debug("Composition error details: %s", exc, exc_info=True)
            raise InstallError(
                "Error while composing adapter class", target=config.target, cause=exc
            ) from exc

        created.append(composed)
        logger.debug(
            "Class composed: target=%s, methods=%d", config.target, len(config.method_map)
        )
        return composed
