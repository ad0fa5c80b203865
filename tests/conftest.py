"""Pytest configuration and standardized factories for classadapter."""

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from wrapped_samples import Calculator, Resource

from classadapter.builder.core import AdapterBuilder
from classadapter.builder.registry import AdapterRegistry


@pytest.fixture(autouse=True)
def reset_adapter_registry() -> Iterator[None]:
    """Forget every adapter installed by a test."""
    yield
    AdapterRegistry.clear()


@pytest.fixture
def builder_factory() -> Callable[..., AdapterBuilder]:
    """Factory to create AdapterBuilder instances for a throwaway target.

    Returns:
        A callable that creates builders.
    """

    def _make_builder(target: str = "adapters_under_test.Widget") -> AdapterBuilder:
        return AdapterBuilder(target)

    return _make_builder


@pytest.fixture
def calculator() -> Calculator:
    """Fixture providing a wrapped Calculator with a known offset."""
    return Calculator(offset=10)


@pytest.fixture
def resource() -> Resource:
    """Fixture providing a wrapped Resource with a teardown operation."""
    return Resource("fixture")


@pytest.fixture
def sample_manifest_yaml() -> str:
    """Provides a sample adapter manifest as a string."""
    return """
adapters:
  My::Clear:
    ISA: _OBJECT_
    AUTOLOAD: true
  shop.CalcFacade:
    NEW: wrapped_samples:Calculator
    METHODS: [add]
    double: scale
"""


@pytest.fixture
def manifest_file(tmp_path: Path, sample_manifest_yaml: str) -> Path:
    """Writes the sample manifest to a temporary file."""
    path = tmp_path / "adapters.yaml"
    path.write_text(sample_manifest_yaml, encoding="utf-8")
    return path
