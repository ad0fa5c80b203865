"""Runtime type checks and class references.

Generated adapter source imports this module for two things: deciding
whether a value is a real object instance, and answering ``isa``/``can``
capability queries.
"""

import builtins
import importlib
import keyword
import types
from typing import Any

# Values of these exact types are data, not objects an adapter can wrap.
UNBLESSED_TYPES: frozenset[type] = frozenset(
    {
        type(None),
        bool,
        int,
        float,
        complex,
        str,
        bytes,
        bytearray,
        list,
        tuple,
        dict,
        set,
        frozenset,
        types.ModuleType,
        types.FunctionType,
        types.BuiltinFunctionType,
        types.MethodType,
    }
)


def is_object(candidate: Any) -> bool:
    """Check whether a value is a legitimate object instance.

    Classes, modules, functions and values of primitive builtin types are
    rejected. User subclasses of builtin types count as objects.

    Args:
        candidate: Value to test.

    Returns:
        True if the value can be wrapped by an adapter.
    """
    if isinstance(candidate, type):
        return False
    return type(candidate) not in UNBLESSED_TYPES


def isa(obj: Any, classinfo: type | tuple[type, ...]) -> bool:
    """Type-membership query, the ``isinstance`` of an adapter."""
    return isinstance(obj, classinfo)


def can(obj: Any, name: str) -> Any:
    """Capability query: the callable ``obj`` exposes as ``name``, or None."""
    member = getattr(obj, name, None)
    return member if callable(member) else None


def is_identifier(name: Any) -> bool:
    """Check that a value can be used as a Python attribute name."""
    return isinstance(name, str) and name.isidentifier() and not keyword.iskeyword(name)


def class_ref(value: Any) -> str:
    """Normalize a class or factory reference to ``"module:qualname"``.

    Accepted forms:
        - a class or function object defined at module level,
        - ``"module:qualname"``,
        - a dotted path ``"pkg.mod.Name"``,
        - a Perl-style path ``"Pkg::Mod::Name"``,
        - a bare builtin name such as ``"object"``.

    Args:
        value: Reference to normalize.

    Returns:
        Reference in ``"module:qualname"`` form.

    Raises:
        ValueError: If the reference is malformed or not importable by name.
    """
    if isinstance(value, str):
        ref = value.strip().replace("::", ".")
        if ":" in ref:
            module, _, qualname = ref.partition(":")
        elif "." in ref:
            module, _, qualname = ref.rpartition(".")
        else:
            module, qualname = "builtins", ref
    elif callable(value) and hasattr(value, "__qualname__"):
        module = getattr(value, "__module__", None) or ""
        qualname = value.__qualname__
    else:
        raise ValueError(f"Not a class reference: {value!r}")

    if "<locals>" in qualname:
        raise ValueError(
            f"Class reference {module}:{qualname} is defined inside a function "
            f"and cannot be imported by name"
        )
    if not module or not all(part.isidentifier() for part in module.split(".")):
        raise ValueError(f"Invalid module in class reference: {value!r}")
    if not qualname or not all(is_identifier(part) for part in qualname.split(".")):
        raise ValueError(f"Invalid name in class reference: {value!r}")

    return f"{module}:{qualname}"


def split_ref(ref: str) -> tuple[str, str]:
    """Split a normalized reference into its module and qualname."""
    module, _, qualname = ref.partition(":")
    return module, qualname


def resolve_ref(ref: str) -> Any:
    """Import the object a normalized reference points at.

    Args:
        ref: Reference in ``"module:qualname"`` form.

    Returns:
        The referenced class or callable.

    Raises:
        ImportError: If the module cannot be imported.
        AttributeError: If the module has no such attribute.
    """
    module_name, qualname = split_ref(ref)
    target: Any = (
        builtins if module_name == "builtins" else importlib.import_module(module_name)
    )
    for part in qualname.split("."):
        target = getattr(target, part)
    return target
