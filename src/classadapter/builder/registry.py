"""Central registry of installed adapter classes."""

import sys

from classadapter.exceptions import ConfigError, DuplicateAdapterError
from classadapter.logger import get_logger

logger = get_logger(__name__)


class AdapterRegistry:
    """Process-wide registry of installed adapter classes, keyed by target.

    Installing a class also publishes it as an attribute of its module when
    that module is already imported, so ``build_adapter(__name__ + ".Foo",
    ...)`` defines ``Foo`` in the calling module.
    """

    _adapters: dict[str, type] = {}

    @classmethod
    def register(cls, adapter_class: type, target: str, *, replace: bool = False) -> type:
        """Register an installed adapter class.

        Args:
            adapter_class: The class to register.
            target: Normalized dotted target path.
            replace: Redefine an existing target instead of failing.

        Returns:
            The registered class.

        Raises:
            DuplicateAdapterError: If the target exists and replace is False.
        """
        if target in cls._adapters:
            if not replace:
                logger.error("Adapter already installed: target=%s", target)
                raise DuplicateAdapterError(
                    "Adapter class is already installed; pass replace=True "
                    "to redefine it",
                    target=target,
                )
            logger.warning(
                "Redefining adapter: target=%s, old_class=%s",
                target,
                cls._adapters[target].__qualname__,
            )
            cls._unpublish(target)

        cls._adapters[target] = adapter_class
        cls._publish(target, adapter_class)
        logger.debug("Adapter registered: target=%s", target)
        return adapter_class

    @classmethod
    def get(cls, target: str) -> type:
        """Get an installed adapter class by target path.

        Raises:
            ConfigError: If no adapter is installed under that target.
        """
        try:
            return cls._adapters[target]
        except KeyError:
            available = ", ".join(sorted(cls._adapters)) or "none"
            logger.error("Adapter not found: target=%s, available=%s", target, available)
            raise ConfigError(
                f"Unknown adapter. Available: {available}", target=target
            ) from None

    @classmethod
    def is_registered(cls, target: str) -> bool:
        return target in cls._adapters

    @classmethod
    def unregister(cls, target: str) -> type:
        """Remove an adapter and return its class.

        Raises:
            ConfigError: If no adapter is installed under that target.
        """
        adapter_class = cls.get(target)
        cls._unpublish(target)
        del cls._adapters[target]
        logger.debug("Adapter unregistered: target=%s", target)
        return adapter_class

    @classmethod
    def get_registered(cls) -> list[str]:
        """List all installed targets, sorted."""
        return sorted(cls._adapters)

    @classmethod
    def clear(cls) -> None:
        """Forget every installed adapter.

        Warning: Only use in tests.
        """
        for target in list(cls._adapters):
            cls._unpublish(target)
        cls._adapters.clear()
        logger.debug("AdapterRegistry cleared")

    @staticmethod
    def _split(target: str) -> tuple[str, str]:
        module_name, _, class_name = target.rpartition(".")
        return module_name, class_name

    @classmethod
    def _publish(cls, target: str, adapter_class: type) -> None:
        module_name, class_name = cls._split(target)
        module = sys.modules.get(module_name) if module_name else None
        if module is not None:
            setattr(module, class_name, adapter_class)
            logger.debug("Adapter published: module=%s, name=%s", module_name, class_name)

    @classmethod
    def _unpublish(cls, target: str) -> None:
        module_name, class_name = cls._split(target)
        module = sys.modules.get(module_name) if module_name else None
        installed = cls._adapters.get(target)
        if module is None or installed is None:
            return
        if getattr(module, class_name, None) is installed:
            delattr(module, class_name)
