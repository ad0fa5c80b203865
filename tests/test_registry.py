"""Unit tests for AdapterRegistry behaviors."""

import sys
import types

import pytest

from classadapter.base import Adapter
from classadapter.builder.registry import AdapterRegistry
from classadapter.exceptions import ConfigError, DuplicateAdapterError


class FirstAdapter(Adapter):
    """Hand-written adapter registered under a test target."""


class SecondAdapter(Adapter):
    """Replacement for FirstAdapter."""


@pytest.fixture
def published_module(monkeypatch: pytest.MonkeyPatch) -> types.ModuleType:
    """An importable module adapters can be published into."""
    module = types.ModuleType("adapters_registry")
    monkeypatch.setitem(sys.modules, "adapters_registry", module)
    return module


@pytest.mark.unit
def test_register_and_get_should_return_class() -> None:
    """Validates register and get round-trip the class.

    Given:
        An adapter class registered under a target.
    When:
        Getting it by that target.
    Then:
        The same class is returned and the target is listed.
    """
    AdapterRegistry.register(FirstAdapter, "adapters_registry.First")

    assert AdapterRegistry.get("adapters_registry.First") is FirstAdapter
    assert AdapterRegistry.is_registered("adapters_registry.First")
    assert AdapterRegistry.get_registered() == ["adapters_registry.First"]


@pytest.mark.unit
def test_get_unknown_target_should_list_available() -> None:
    AdapterRegistry.register(FirstAdapter, "adapters_registry.First")

    with pytest.raises(ConfigError, match="Available: adapters_registry.First") as exc_info:
        AdapterRegistry.get("adapters_registry.Missing")

    assert exc_info.value.target == "adapters_registry.Missing"


@pytest.mark.unit
def test_get_on_empty_registry_should_report_none() -> None:
    with pytest.raises(ConfigError, match="Available: none"):
        AdapterRegistry.get("adapters_registry.Missing")


@pytest.mark.unit
def test_duplicate_register_should_raise_without_replace() -> None:
    AdapterRegistry.register(FirstAdapter, "adapters_registry.First")

    with pytest.raises(DuplicateAdapterError, match="replace=True"):
        AdapterRegistry.register(SecondAdapter, "adapters_registry.First")

    assert AdapterRegistry.get("adapters_registry.First") is FirstAdapter


@pytest.mark.unit
def test_replace_should_redefine_and_republish(published_module: types.ModuleType) -> None:
    """Redefining a target swaps both the registry entry and the module attribute.

    Given:
        FirstAdapter installed and published into its module.
    When:
        SecondAdapter is registered under the same target with replace=True.
    Then:
        The registry and the module both expose SecondAdapter.
    """
    AdapterRegistry.register(FirstAdapter, "adapters_registry.Thing")
    assert published_module.Thing is FirstAdapter

    AdapterRegistry.register(SecondAdapter, "adapters_registry.Thing", replace=True)

    assert AdapterRegistry.get("adapters_registry.Thing") is SecondAdapter
    assert published_module.Thing is SecondAdapter


@pytest.mark.unit
def test_register_should_skip_unimported_modules() -> None:
    AdapterRegistry.register(FirstAdapter, "adapters_not_imported.First")

    assert "adapters_not_imported" not in sys.modules
    assert AdapterRegistry.get("adapters_not_imported.First") is FirstAdapter


@pytest.mark.unit
def test_unregister_should_remove_entry_and_module_attribute(
    published_module: types.ModuleType,
) -> None:
    AdapterRegistry.register(FirstAdapter, "adapters_registry.First")

    removed = AdapterRegistry.unregister("adapters_registry.First")

    assert removed is FirstAdapter
    assert not AdapterRegistry.is_registered("adapters_registry.First")
    assert not hasattr(published_module, "First")


@pytest.mark.unit
def test_unregister_should_keep_foreign_module_attribute(
    published_module: types.ModuleType,
) -> None:
    """A module attribute rebound by user code is left alone."""
    AdapterRegistry.register(FirstAdapter, "adapters_registry.First")
    published_module.First = SecondAdapter  # type: ignore[attr-defined]

    AdapterRegistry.unregister("adapters_registry.First")

    assert published_module.First is SecondAdapter


@pytest.mark.unit
def test_unregister_unknown_target_should_raise() -> None:
    with pytest.raises(ConfigError):
        AdapterRegistry.unregister("adapters_registry.Missing")


@pytest.mark.unit
def test_clear_should_forget_everything(published_module: types.ModuleType) -> None:
    AdapterRegistry.register(FirstAdapter, "adapters_registry.First")
    AdapterRegistry.register(SecondAdapter, "adapters_registry.Second")

    AdapterRegistry.clear()

    assert AdapterRegistry.get_registered() == []
    assert not hasattr(published_module, "First")
    assert not hasattr(published_module, "Second")
