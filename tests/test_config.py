"""Unit tests for AdapterConfig validation and defaults."""

import pytest
from pydantic import ValidationError
from wrapped_samples import Shape

from classadapter.config.adapter import (
    ADAPTER_BASE_REF,
    OBJECT_SENTINEL,
    AdapterConfig,
    normalize_target,
)


@pytest.mark.unit
class TestAdapterConfigDefaults:
    """Tests for a freshly created configuration."""

    def test_init_should_set_correct_defaults(self) -> None:
        """
        Scenario: Creating a config with only a target.
        Action: Instantiate AdapterConfig.
        Then: The base is the Adapter class and every option is off or empty.
        """
        config = AdapterConfig(target="My.Clear")

        assert config.target == "My.Clear"
        assert config.base_classes == [ADAPTER_BASE_REF]
        assert config.constructor_delegate is None
        assert config.method_map == {}
        assert config.autoload is False
        assert config.required_modules == set()

    def test_init_should_normalize_perl_style_target(self) -> None:
        config = AdapterConfig(target="My::Clear")

        assert config.target == "My.Clear"
        assert config.class_name == "Clear"
        assert config.module_name == "My"

    def test_bare_target_should_use_generated_module(self) -> None:
        config = AdapterConfig(target="Clear")

        assert config.class_name == "Clear"
        assert config.module_name == "classadapter.generated"

    def test_init_should_raise_validation_error_when_extra_fields_present(self) -> None:
        with pytest.raises(ValueError, match="Extra inputs are not permitted"):
            AdapterConfig(target="My.Clear", unknown="x")  # type: ignore[call-arg]


@pytest.mark.unit
class TestAdapterConfigValidation:
    """Tests for field validators and invariants."""

    @pytest.mark.parametrize("target", ["", "My..Clear", "my.class", "1st.Clear", "My:Clear"])
    def test_invalid_targets_should_be_rejected(self, target: str) -> None:
        with pytest.raises(ValidationError):
            AdapterConfig(target=target)

    def test_target_should_be_immutable(self) -> None:
        """
        Scenario: Reassigning the target after creation.
        Action: Assign a new value to config.target.
        Then: Validation fails because the field is frozen.
        """
        config = AdapterConfig(target="My.Clear")

        with pytest.raises(ValidationError, match="frozen"):
            config.target = "My.Other"  # type: ignore[misc]

    def test_base_classes_should_be_normalized_and_deduplicated(self) -> None:
        config = AdapterConfig(
            target="My.Clear",
            base_classes=[
                "wrapped_samples.Shape",
                "wrapped_samples:Shape",
                "wrapped_samples::Shape",
            ],
        )

        assert config.base_classes == ["wrapped_samples:Shape"]
        assert config.declared_bases == ["wrapped_samples:Shape"]

    def test_base_classes_should_not_be_empty(self) -> None:
        with pytest.raises(ValidationError, match="at least one base class"):
            AdapterConfig(target="My.Clear", base_classes=[])

    def test_sentinel_alone_should_enable_identity_forwarding(self) -> None:
        config = AdapterConfig(target="My.Clear", base_classes=[OBJECT_SENTINEL])

        assert config.identity_forwarding is True
        assert config.declared_bases == []

    def test_sentinel_mixed_with_bases_should_be_rejected(self) -> None:
        """
        Scenario: Declaring the sentinel alongside a real base.
        Action: Create a config with both.
        Then: Validation fails naming the sentinel.
        """
        with pytest.raises(ValidationError, match="_OBJECT_ must be the only"):
            AdapterConfig(
                target="My.Clear",
                base_classes=[OBJECT_SENTINEL, "wrapped_samples:Shape"],
            )

    def test_sentinel_check_should_run_on_assignment(self) -> None:
        config = AdapterConfig(target="My.Clear", base_classes=[OBJECT_SENTINEL])

        with pytest.raises(ValidationError):
            config.base_classes = [OBJECT_SENTINEL, f"{Shape.__module__}:Shape"]

    @pytest.mark.parametrize(
        "method_map",
        [{"1foo": "bar"}, {"foo": "bar-baz"}, {"class": "bar"}, {"foo": "import"}],
    )
    def test_method_names_should_be_identifiers(self, method_map: dict[str, str]) -> None:
        with pytest.raises(ValidationError):
            AdapterConfig(target="My.Clear", method_map=method_map)

    @pytest.mark.parametrize(
        "generated", ["new", "wrapped_object", "_wrapped", "__init__", "__getattr__"]
    )
    def test_generated_names_should_not_shadow_adapter_members(self, generated: str) -> None:
        """
        Scenario: A forward named after the adapter's own construction or accessor members.
        Action: Create a config mapping that name.
        Then: Validation fails naming the reserved method.
        """
        with pytest.raises(ValidationError, match="reserved adapter method name"):
            AdapterConfig(target="My.Clear", method_map={generated: "add"})

    def test_reserved_words_may_still_be_forward_targets(self) -> None:
        config = AdapterConfig(target="My.Clear", method_map={"unwrap": "wrapped_object"})

        assert config.method_map == {"unwrap": "wrapped_object"}

    def test_delegate_should_be_normalized(self) -> None:
        config = AdapterConfig(
            target="My.Clear", constructor_delegate="wrapped_samples.Calculator"
        )

        assert config.constructor_delegate == "wrapped_samples:Calculator"

    def test_imported_modules_should_be_sorted_without_implicit_ones(self) -> None:
        config = AdapterConfig(
            target="My.Clear",
            required_modules={
                "classadapter.inspection",
                "classadapter.base",
                "classadapter.builder",
                "classadapter.exceptions",
            },
        )

        assert config.imported_modules() == [
            "classadapter.exceptions",
            "classadapter.inspection",
        ]


@pytest.mark.unit
class TestNormalizeTarget:
    """Tests for the target normalization helper."""

    def test_should_strip_and_convert_separators(self) -> None:
        assert normalize_target("  Pkg::Sub::Name ") == "Pkg.Sub.Name"

    def test_should_reject_keyword_class_name(self) -> None:
        with pytest.raises(ValueError, match="Invalid adapter class name"):
            normalize_target("pkg.None")
