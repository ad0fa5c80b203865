"""Source templating for generated adapter classes, using Jinja2.

Each template renders one fragment of the generated module. The source
renderer joins the fragments in order.
"""

from typing import Any

from jinja2 import Template

from classadapter.exceptions import ConfigError, RenderError
from classadapter.logger import get_logger

logger = get_logger(__name__)


class SourceTemplate:
    """Jinja2-based source fragment with variable validation.

    Attributes:
        input_variables: List of required variable names.
    """

    def __init__(self, template: str, input_variables: list[str]):
        """Initialize the source template.

        Args:
            template: Jinja2 template string with {{ variable }} placeholders.
            input_variables: List of required variable names.

        Raises:
            ConfigError: If template syntax is invalid.
        """
        try:
            self._jinja_template = Template(
                template,
                trim_blocks=True,
                lstrip_blocks=True,
                keep_trailing_newline=True,
            )
        except Exception as e:
            logger.error("Invalid template syntax")
            logger.debug("Template error details: %s", e, exc_info=True)
            raise ConfigError(f"Invalid template syntax: {e}") from e

        self.input_variables = input_variables

    def render(self, **kwargs: Any) -> str:
        """Render the fragment with provided variables.

        Args:
            **kwargs: Template variables as keyword arguments.

        Returns:
            Rendered source fragment.

        Raises:
            RenderError: If required variables are missing or rendering fails.
        """
        missing = set(self.input_variables) - set(kwargs.keys())
        if missing:
            logger.error("Missing template variables: %s", missing)
            raise RenderError(f"Missing required template variables: {missing}")

        try:
            return self._jinja_template.render(**kwargs)
        except Exception as e:
            logger.error("Template rendering failed")
            logger.debug("Rendering error details: %s", e, exc_info=True)
            raise RenderError(f"Template rendering failed: {e}", cause=e) from e


RENDERED_MARKER = "__adapter_rendered__"

HEADER_TEMPLATE = SourceTemplate(
    template="""# Generated by classadapter.builder
# Adapter class: {{ target }}
""",
    input_variables=["target"],
)

IMPORTS_TEMPLATE = SourceTemplate(
    template="""{% for module in modules %}
import {{ module }}
{% endfor %}
import classadapter.base
{% for alias, module, name in references %}
from {{ module }} import {{ name }} as {{ alias }}
{% endfor %}

_adapter_bases = classadapter.base.adapter_bases({{ bases | join(", ") }})
""",
    input_variables=["modules", "references", "bases"],
)

METACLASS_TEMPLATE = SourceTemplate(
    template="""
class {{ meta_name }}(classadapter.base.derived_metaclass(_adapter_bases)):
    def __getattr__(cls, name):
        if name.startswith("__") and name.endswith("__"):
            raise AttributeError(name)
        raise classadapter.exceptions.MissingMethodError(
            name, f"{cls.__module__}.{cls.__qualname__}"
        )
""",
    input_variables=["meta_name"],
)

CLASS_TEMPLATE = SourceTemplate(
    template="""
class {{ class_name }}(*_adapter_bases{% if meta_name %}, metaclass={{ meta_name }}{% endif %}):
    \"\"\"Adapter generated for {{ target }}.\"\"\"

    __module__ = "{{ module_name }}"
    __qualname__ = "{{ class_name }}"
""",
    input_variables=["class_name", "meta_name", "target", "module_name"],
)

CONSTRUCTOR_TEMPLATE = SourceTemplate(
    template="""    @classmethod
    def new(cls, *args, **kwargs):
        wrapped = {{ delegate }}(*args, **kwargs)
        if not classadapter.inspection.is_object(wrapped):
            return None
        return super({{ class_name }}, cls).new(wrapped)
""",
    input_variables=["delegate", "class_name"],
)

FORWARD_TEMPLATE = SourceTemplate(
    template="""    def {{ name }}(self, /, *args, **kwargs):
        return self.wrapped_object().{{ target }}(*args, **kwargs)
""",
    input_variables=["name", "target"],
)

IDENTITY_TEMPLATE = SourceTemplate(
    template="""    @property
    def __class__(self):
        return self.wrapped_object().__class__

    def isa(self, classinfo):
        return classadapter.inspection.isa(self.wrapped_object(), classinfo)

    def can(self, name):
        return classadapter.inspection.can(self.wrapped_object(), name)
""",
    input_variables=[],
)

AUTOLOAD_TEMPLATE = SourceTemplate(
    template="""    def __getattr__(self, name):
        if name == "_wrapped" or (name.startswith("__") and name.endswith("__")):
            raise AttributeError(name)
        return getattr(self.wrapped_object(), name)

    def __del__(self):
        wrapped = vars(self).get("_wrapped")
        teardown = getattr(wrapped, "{{ teardown }}", None)
        if wrapped is not None and callable(teardown):
            teardown()
""",
    input_variables=["teardown"],
)

FOOTER_TEMPLATE = SourceTemplate(
    template="""
{{ marker }} = "{{ target }}"
""",
    input_variables=["marker", "target"],
)
