"""classadapter - generate Adapter classes from declarative directives.

An adapter holds a wrapped object and forwards method calls to it, under
the same or different names. This package provides the ``Adapter`` base
class and a builder that renders adapter classes from directives and
installs them at load time.
"""

__version__ = "0.1.0"

from classadapter.base import Adapter
from classadapter.builder import AdapterBuilder, AdapterRegistry, build_adapter
from classadapter.config import OBJECT_SENTINEL, AdapterConfig, AdapterManifest
from classadapter.exceptions import (
    ClassAdapterError,
    ConfigError,
    DuplicateAdapterError,
    InstallError,
    MisuseError,
    MissingMethodError,
    RenderError,
)

__all__ = [
    "__version__",
    "Adapter",
    "AdapterBuilder",
    "AdapterConfig",
    "AdapterManifest",
    "AdapterRegistry",
    "OBJECT_SENTINEL",
    "build_adapter",
    "ClassAdapterError",
    "ConfigError",
    "RenderError",
    "InstallError",
    "DuplicateAdapterError",
    "MisuseError",
    "MissingMethodError",
]
