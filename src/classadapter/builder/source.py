"""Render an ``AdapterConfig`` as Python source text."""

from classadapter.base import TEARDOWN_METHOD
from classadapter.builder.templates import (
    AUTOLOAD_TEMPLATE,
    CLASS_TEMPLATE,
    CONSTRUCTOR_TEMPLATE,
    FOOTER_TEMPLATE,
    FORWARD_TEMPLATE,
    HEADER_TEMPLATE,
    IDENTITY_TEMPLATE,
    IMPORTS_TEMPLATE,
    METACLASS_TEMPLATE,
    RENDERED_MARKER,
)
from classadapter.config.adapter import AdapterConfig
from classadapter.inspection import split_ref
from classadapter.logger import get_logger

logger = get_logger(__name__)

DELEGATE_ALIAS = "_Delegate"


def _reference(alias: str, ref: str) -> tuple[tuple[str, str, str], str]:
    """Build the import triple and the expression for one class reference.

    Nested classes are imported through their outermost name and reached
    by attribute access.
    """
    module, qualname = split_ref(ref)
    head, _, rest = qualname.partition(".")
    expression = f"{alias}.{rest}" if rest else alias
    return (alias, module, head), expression


class SourceRenderer:
    """Turns an adapter configuration into a complete module of source text.

    The text defines one class and ends with a completion marker that the
    installer checks after evaluation.
    """

    def render(self, config: AdapterConfig) -> str:
        """Render the configuration.

        Args:
            config: Validated adapter configuration.

        Returns:
            Source text of a module defining the adapter class.

        Raises:
            RenderError: If a template fails to render.
        """
        references: list[tuple[str, str, str]] = []
        bases: list[str] = []
        for index, ref in enumerate(config.declared_bases):
            triple, expression = _reference(f"_Base{index}", ref)
            references.append(triple)
            bases.append(expression)

        delegate = None
        if config.constructor_delegate is not None:
            triple, delegate = _reference(DELEGATE_ALIAS, config.constructor_delegate)
            references.append(triple)

        parts = [HEADER_TEMPLATE.render(target=config.target)]
        parts.append(
            IMPORTS_TEMPLATE.render(
                modules=config.imported_modules(),
                references=references,
                bases=bases,
            )
        )

        meta_name = None
        if config.autoload:
            meta_name = f"_{config.class_name}Meta"
            parts.append(METACLASS_TEMPLATE.render(meta_name=meta_name))

        parts.append(
            CLASS_TEMPLATE.render(
                class_name=config.class_name,
                meta_name=meta_name,
                target=config.target,
                module_name=config.module_name,
            )
        )

        if delegate is not None:
            parts.append(
                CONSTRUCTOR_TEMPLATE.render(
                    delegate=delegate, class_name=config.class_name
                )
            )

        for name in sorted(config.method_map):
            parts.append(FORWARD_TEMPLATE.render(name=name, target=config.method_map[name]))

        if config.identity_forwarding:
            parts.append(IDENTITY_TEMPLATE.render())

        if config.autoload:
            parts.append(AUTOLOAD_TEMPLATE.render(teardown=TEARDOWN_METHOD))

        parts.append(FOOTER_TEMPLATE.render(marker=RENDERED_MARKER, target=config.target))

        source = "\n".join(parts)
        logger.debug(
            "Source rendered: target=%s, methods=%d, autoload=%s, length=%d",
            config.target,
            len(config.method_map),
            config.autoload,
            len(source),
        )
        return source
