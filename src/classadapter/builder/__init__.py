"""Adapter class generation.

Provides the builder that turns directives into adapter classes, the two
renderers it can use, and the registry of installed classes.
"""

from classadapter.builder.core import AdapterBuilder, build_adapter
from classadapter.builder.dispatch import DispatchComposer
from classadapter.builder.registry import AdapterRegistry
from classadapter.builder.source import SourceRenderer

__all__ = [
    "AdapterBuilder",
    "AdapterRegistry",
    "DispatchComposer",
    "SourceRenderer",
    "build_adapter",
]
