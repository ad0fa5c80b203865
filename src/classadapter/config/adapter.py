"""Working state of an adapter definition.

``AdapterConfig`` is the single source of truth shared by the source
renderer and the dispatch composer. It is populated by
``AdapterBuilder`` setters, rendered once, then discarded.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from classadapter import inspection

# Base-class sentinel: the adapter reports the wrapped object's identity.
OBJECT_SENTINEL = "_OBJECT_"

ADAPTER_BASE_REF = "classadapter.base:Adapter"

# Modules the generated text can always rely on without importing them.
IMPLICIT_MODULES = frozenset({"classadapter.base", "classadapter.builder"})

# Adapter members a forwarding method must not replace.
RESERVED_METHOD_NAMES = frozenset({"new", "wrapped_object", "_wrapped"})


def is_reserved_method(name: str) -> bool:
    """Check whether a generated method name would shadow the adapter contract."""
    return name in RESERVED_METHOD_NAMES or (name.startswith("__") and name.endswith("__"))


def normalize_target(target: str) -> str:
    """Normalize a target class path, accepting Perl-style ``::``.

    Raises:
        ValueError: If any segment is not a valid identifier.
    """
    normalized = target.strip().replace("::", ".")
    parts = normalized.split(".")
    if not all(part.isidentifier() for part in parts):
        raise ValueError(f"Invalid adapter class path: {target!r}")
    if not inspection.is_identifier(parts[-1]):
        raise ValueError(f"Invalid adapter class name: {parts[-1]!r}")
    return normalized


class AdapterConfig(BaseModel):
    """Description of the adapter class to generate.

    Attributes:
        target: Dotted path of the generated class. Cannot be reassigned.
        base_classes: Ordered class references the class declares.
        constructor_delegate: Class or factory producing the wrapped object.
        method_map: Generated method name to wrapped-object method name.
        autoload: Forward every unknown method to the wrapped object.
        required_modules: Modules the generated source imports.
    """

    model_config = ConfigDict(strict=True, extra="forbid", validate_assignment=True)

    target: str = Field(
        ...,
        frozen=True,
        description="Dotted path of the generated class",
    )
    base_classes: list[str] = Field(
        default_factory=lambda: [ADAPTER_BASE_REF],
        description="Class references in 'module:qualname' form, or the _OBJECT_ sentinel",
    )
    constructor_delegate: str | None = Field(
        default=None,
        description="Class reference called to produce the wrapped object",
    )
    method_map: dict[str, str] = Field(
        default_factory=dict,
        description="Generated method name to wrapped-object method name",
    )
    autoload: bool = Field(
        default=False,
        description="Forward unmapped method calls to the wrapped object",
    )
    required_modules: set[str] = Field(
        default_factory=set,
        description="Modules imported by the generated source",
    )

    @field_validator("target")
    @classmethod
    def target_is_class_path(cls, v: str) -> str:
        """Validate and normalize the target class path."""
        return normalize_target(v)

    @field_validator("base_classes")
    @classmethod
    def base_classes_are_references(cls, v: list[str]) -> list[str]:
        """Normalize base references and drop duplicates, keeping order.

        Raises:
            ValueError: If the list is empty, holds an invalid reference, or
                mixes the _OBJECT_ sentinel with real base classes.
        """
        if not v:
            raise ValueError("at least one base class is required")
        normalized: list[str] = []
        for ref in v:
            ref = ref if ref == OBJECT_SENTINEL else inspection.class_ref(ref)
            if ref not in normalized:
                normalized.append(ref)
        if OBJECT_SENTINEL in normalized and len(normalized) > 1:
            raise ValueError(f"{OBJECT_SENTINEL} must be the only base class entry")
        return normalized

    @field_validator("constructor_delegate")
    @classmethod
    def delegate_is_reference(cls, v: str | None) -> str | None:
        """Normalize the constructor delegate reference."""
        return None if v is None else inspection.class_ref(v)

    @field_validator("method_map")
    @classmethod
    def method_names_are_identifiers(cls, v: dict[str, str]) -> dict[str, str]:
        """Validate that every generated and target name is an identifier.

        Raises:
            ValueError: If a name cannot be used as a method name, or the
                generated name would replace a member of the adapter itself.
        """
        for generated, target in v.items():
            if not inspection.is_identifier(generated):
                raise ValueError(f"invalid method name: {generated!r}")
            if is_reserved_method(generated):
                raise ValueError(f"reserved adapter method name: {generated!r}")
            if not inspection.is_identifier(target):
                raise ValueError(f"invalid target method name: {target!r}")
        return v

    @property
    def class_name(self) -> str:
        """Name of the generated class, without its module path."""
        return self.target.rpartition(".")[2]

    @property
    def module_name(self) -> str:
        """Module path the generated class reports as ``__module__``."""
        return self.target.rpartition(".")[0] or "classadapter.generated"

    @property
    def identity_forwarding(self) -> bool:
        """Whether the adapter reports the wrapped object's identity."""
        return self.base_classes == [OBJECT_SENTINEL]

    @property
    def declared_bases(self) -> list[str]:
        """Base references that must be imported by the generated class."""
        return [
            ref
            for ref in self.base_classes
            if ref not in (OBJECT_SENTINEL, ADAPTER_BASE_REF)
        ]

    def imported_modules(self) -> list[str]:
        """Required modules to import, sorted, without the implicit ones."""
        return sorted(self.required_modules - IMPLICIT_MODULES)
