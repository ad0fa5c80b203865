"""Build adapter classes from declarative directives.

The most common way to define an adapter is ``build_adapter``::

    from classadapter import build_adapter

    LegacyCart = build_adapter(
        __name__ + ".LegacyCart",
        ISA="shop.api:Cart",
        METHODS=["total", "add"],
        remove="delete_item",
    )

Recognized directive keys:

- ``NEW``: class or factory called by ``LegacyCart.new(...)`` to create the
  wrapped object, so adapters can be created in one step.
- ``ISA``: a base class or a list of them. The value ``"_OBJECT_"`` makes
  the adapter report the wrapped object's identity to ``isinstance``,
  ``isa`` and ``can``.
- ``AUTOLOAD``: when true, every method not declared explicitly is
  forwarded to the wrapped object.
- ``METHODS``: names forwarded as is.

Any other key declares one renamed forward: ``remove="delete_item"`` makes
``adapter.remove(x)`` call ``adapter.wrapped_object().delete_item(x)``.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from classadapter import inspection
from classadapter.builder.dispatch import DispatchComposer
from classadapter.builder.registry import AdapterRegistry
from classadapter.builder.source import SourceRenderer
from classadapter.builder.templates import RENDERED_MARKER
from classadapter.config.adapter import OBJECT_SENTINEL, AdapterConfig
from classadapter.exceptions import ConfigError, InstallError, RenderError
from classadapter.logger import get_logger

logger = get_logger(__name__)

DIRECTIVE_NEW = "NEW"
DIRECTIVE_ISA = "ISA"
DIRECTIVE_AUTOLOAD = "AUTOLOAD"
DIRECTIVE_METHODS = "METHODS"

INSPECTION_MODULE = "classadapter.inspection"
EXCEPTIONS_MODULE = "classadapter.exceptions"


def _reason(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    return "; ".join(str(error["msg"]) for error in errors)


class AdapterBuilder:
    """Accumulates directives for one adapter class and installs it.

    Setters never raise on malformed input. They record the problem and
    return False, and ``render()`` reports every recorded problem at once.

    Attributes:
        config: The adapter configuration being populated.
    """

    def __init__(self, target: str) -> None:
        """Start a builder for one target class.

        Args:
            target: Dotted (or ``::``-separated) path of the class to build.

        Raises:
            ConfigError: If the target is not a valid class path.
        """
        try:
            self.config = AdapterConfig(target=target)
        except ValidationError as exc:
            raise ConfigError(
                f"Invalid adapter target: {_reason(exc)}", target=str(target), cause=exc
            ) from exc
        self._problems: list[str] = []
        self._renderer = SourceRenderer()
        self._composer = DispatchComposer()

    @property
    def problems(self) -> list[str]:
        """Problems recorded by the setters so far."""
        return list(self._problems)

    def _reject(self, setter: str, reason: str) -> bool:
        problem = f"{setter}: {reason}"
        logger.error(
            "Directive rejected: target=%s, problem=%s", self.config.target, problem
        )
        self._problems.append(problem)
        return False

    def _assign(self, setter: str, field: str, value: Any) -> bool:
        try:
            setattr(self.config, field, value)
        except ValidationError as exc:
            return self._reject(setter, _reason(exc))
        return True

    def _require(self, module: str) -> None:
        self.config.required_modules = self.config.required_modules | {module}

    def set_new(self, delegate: Any) -> bool:
        """Set the class or factory that produces the wrapped object.

        Args:
            delegate: Class reference, or a module-level class or function.

        Returns:
            True if the delegate was accepted.
        """
        try:
            ref = inspection.class_ref(delegate)
        except ValueError as exc:
            return self._reject("NEW", str(exc))
        if not self._assign("NEW", "constructor_delegate", ref):
            return False
        self._require(INSPECTION_MODULE)
        return True

    def set_isa(self, bases: Any, *more: Any) -> bool:
        """Replace the declared base classes.

        Args:
            bases: One base, a list of bases, or the ``_OBJECT_`` sentinel.
            *more: Further bases.

        Returns:
            True if every base was accepted.
        """
        values = list(bases) if isinstance(bases, (list, tuple)) else [bases]
        values.extend(more)

        refs: list[str] = []
        for value in values:
            if value == OBJECT_SENTINEL:
                refs.append(OBJECT_SENTINEL)
                continue
            try:
                refs.append(inspection.class_ref(value))
            except ValueError as exc:
                return self._reject("ISA", str(exc))

        if not self._assign("ISA", "base_classes", refs):
            return False
        if self.config.identity_forwarding:
            self._require(INSPECTION_MODULE)
        return True

    def set_autoload(self, flag: bool = True) -> bool:
        """Enable or disable forwarding of undeclared methods.

        Returns:
            True once the flag is stored.
        """
        enabled = bool(flag)
        self.config.autoload = enabled
        if enabled:
            self._require(EXCEPTIONS_MODULE)
        return True

    def set_methods(self, names: str | Iterable[str]) -> bool:
        """Forward each name to the same-named method of the wrapped object.

        Returns:
            True if every name was accepted.
        """
        if isinstance(names, str):
            names = [names]
        elif not isinstance(names, Iterable):
            return self._reject(
                "METHODS", f"expected a method name or a list of names, got {names!r}"
            )
        accepted = True
        for name in names:
            accepted = self.set_method(name) and accepted
        return accepted

    def set_method(self, *names: str) -> bool:
        """Declare one forwarding method.

        ``set_method("foo")`` forwards ``foo`` to ``foo``;
        ``set_method("foo", "bar")`` forwards ``foo`` to ``bar``.

        Returns:
            True if the declaration was accepted.
        """
        if len(names) == 1:
            generated = target = names[0]
        elif len(names) == 2:
            generated, target = names
        else:
            return self._reject(
                "set_method", f"expected 1 or 2 method names, got {len(names)}"
            )
        invalid = [name for name in names if not isinstance(name, str)]
        if invalid:
            return self._reject("set_method", f"method names must be strings, got {invalid[0]!r}")
        return self._assign(
            "set_method", "method_map", {**self.config.method_map, generated: target}
        )

    def set_method_map(self, mapping: Mapping[str, str]) -> bool:
        """Replace every explicit forwarding declaration at once.

        Returns:
            True if the mapping was accepted.
        """
        if not isinstance(mapping, Mapping):
            return self._reject("set_method_map", f"expected a mapping, got {mapping!r}")
        return self._assign("set_method_map", "method_map", dict(mapping))

    def apply(self, key: str, value: Any) -> bool:
        """Interpret one directive.

        Args:
            key: ``NEW``, ``ISA``, ``AUTOLOAD``, ``METHODS``, or a method name.
            value: The directive value. For a method name, the target method
                name, or None to forward the name to itself.

        Returns:
            True if the directive was accepted.
        """
        if key == DIRECTIVE_NEW:
            return self.set_new(value)
        if key == DIRECTIVE_ISA:
            return self.set_isa(value)
        if key == DIRECTIVE_AUTOLOAD:
            return self.set_autoload(bool(value))
        if key == DIRECTIVE_METHODS:
            return self.set_methods(value)
        if value is None:
            return self.set_method(key)
        return self.set_method(key, value)

    def apply_all(
        self, directives: Mapping[str, Any] | Iterable[tuple[str, Any]]
    ) -> bool:
        """Apply directives in order.

        Args:
            directives: A mapping (taken in insertion order) or key/value pairs.

        Returns:
            True if every directive was accepted.
        """
        pairs = directives.items() if isinstance(directives, Mapping) else directives
        accepted = True
        for pair in pairs:
            try:
                key, value = pair
            except (TypeError, ValueError):
                accepted = self._reject("directive", f"not a key/value pair: {pair!r}")
                continue
            accepted = self.apply(key, value) and accepted
        return accepted

    def _check(self) -> None:
        if self._problems:
            raise RenderError(
                "Failed to generate adapter class: " + "; ".join(self._problems),
                target=self.config.target,
                problems=self._problems,
            )

    def render(self) -> str:
        """Render the adapter class as Python source text.

        Returns:
            Complete source text of a module defining the class.

        Raises:
            RenderError: If any setter received malformed input.
        """
        self._check()
        return self._renderer.render(self.config)

    def install(self, source: str, *, replace: bool = False) -> type:
        """Evaluate rendered source and register the class it defines.

        Args:
            source: Text produced by ``render()``.
            replace: Redefine the target if it is already installed.

        Returns:
            The installed adapter class.

        Raises:
            InstallError: If the text is empty, fails to evaluate, or does
                not define the target class.
            DuplicateAdapterError: If the target is installed and replace
                is False.
        """
        target = self.config.target
        if not source or not source.strip():
            logger.error("Empty adapter source: target=%s", target)
            raise InstallError("Cannot install empty adapter source", target=target)

        namespace: dict[str, Any] = {"__name__": self.config.module_name}
        try:
            code = compile(source, f"<adapter {target}>", "exec")
            exec(code, namespace)
        except Exception as exc:
            logger.error("Adapter evaluation failed: target=%s, reason=%s", target, exc)
            logger.debug("Evaluation error details: %s", exc, exc_info=True)
            raise InstallError(
                "Error while initialising adapter class", target=target, cause=exc
            ) from exc

        adapter_class = namespace.get(self.config.class_name)
        if namespace.get(RENDERED_MARKER) != target or not isinstance(adapter_class, type):
            logger.error("Adapter source incomplete: target=%s", target)
            raise InstallError(
                "Adapter source did not define the target class", target=target
            )

        AdapterRegistry.register(adapter_class, target, replace=replace)
        logger.info(
            "Adapter installed: target=%s, methods=%d, autoload=%s",
            target,
            len(self.config.method_map),
            self.config.autoload,
        )
        return adapter_class

    def build(self, *, replace: bool = False) -> type:
        """Render the class and install it.

        Raises:
            RenderError: If any setter received malformed input.
            InstallError: If the rendered source fails to evaluate.
        """
        return self.install(self.render(), replace=replace)

    def compose(self, *, replace: bool = False) -> type:
        """Build the class from closures instead of source text, and register it.

        Raises:
            RenderError: If any setter received malformed input.
            InstallError: If a reference cannot be resolved or the class
                cannot be created.
        """
        self._check()
        adapter_class = self._composer.compose(self.config)
        AdapterRegistry.register(adapter_class, self.config.target, replace=replace)
        logger.info("Adapter composed: target=%s", self.config.target)
        return adapter_class


def build_adapter(
    target: str,
    *directives: tuple[str, Any],
    replace: bool = False,
    **options: Any,
) -> type:
    """Define an adapter class from directives and install it.

    Args:
        target: Dotted (or ``::``-separated) path of the class to build.
        *directives: Key/value pairs, applied first and in order.
        replace: Redefine the target if it is already installed.
        **options: Further directives, applied in order after the pairs.

    Returns:
        The installed adapter class.

    Raises:
        ConfigError: If the target is invalid, a directive is malformed, or
            the class fails to install.
    """
    builder = AdapterBuilder(target)
    builder.apply_all(directives)
    builder.apply_all(options)
    return builder.build(replace=replace)
