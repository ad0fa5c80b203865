"""Unit tests for the YAML adapter manifest."""

from pathlib import Path

import pytest
from wrapped_samples import Calculator, Resource

from classadapter.builder.registry import AdapterRegistry
from classadapter.config.manifest import AdapterManifest
from classadapter.exceptions import ConfigError, DuplicateAdapterError, RenderError


@pytest.mark.unit
class TestManifestLoading:
    """Tests for AdapterManifest.from_yaml."""

    def test_from_yaml_should_keep_file_order(self, manifest_file: Path) -> None:
        manifest = AdapterManifest.from_yaml(manifest_file)

        assert list(manifest.adapters) == ["My::Clear", "shop.CalcFacade"]
        assert manifest.adapters["shop.CalcFacade"]["METHODS"] == ["add"]

    def test_from_yaml_should_raise_when_file_missing(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Adapter manifest not found"):
            AdapterManifest.from_yaml(tmp_path / "missing.yaml")

    def test_from_yaml_should_raise_on_invalid_syntax(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.yaml"
        path.write_text("adapters: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="Invalid YAML syntax"):
            AdapterManifest.from_yaml(path)

    def test_from_yaml_should_accept_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        assert AdapterManifest.from_yaml(path).adapters == {}

    @pytest.mark.parametrize(
        "content",
        [
            "adapters:\n  not a path:\n    AUTOLOAD: true\n",
            "adapters:\n  My::Clear: [add]\n",
            "profiles: {}\n",
        ],
    )
    def test_from_yaml_should_reject_invalid_structure(
        self, tmp_path: Path, content: str
    ) -> None:
        """
        Scenario: A manifest with a bad target, non-mapping directives or unknown keys.
        Action: Load it.
        Then: ConfigError chains the validation failure.
        """
        path = tmp_path / "invalid.yaml"
        path.write_text(content, encoding="utf-8")

        with pytest.raises(ConfigError, match="Manifest validation failed") as exc_info:
            AdapterManifest.from_yaml(path)

        assert exc_info.value.cause is not None


@pytest.mark.integration
class TestManifestBuild:
    """Tests for building every adapter of a manifest."""

    def test_builders_should_apply_directives(self, manifest_file: Path) -> None:
        builders = list(AdapterManifest.from_yaml(manifest_file).builders())

        assert [builder.config.target for builder in builders] == [
            "My.Clear",
            "shop.CalcFacade",
        ]
        assert builders[0].config.identity_forwarding
        assert builders[0].config.autoload
        assert builders[1].config.method_map == {"add": "add", "double": "scale"}

    def test_build_all_should_install_every_adapter(
        self, manifest_file: Path, resource: Resource
    ) -> None:
        installed = AdapterManifest.from_yaml(manifest_file).build_all()

        assert sorted(installed) == ["My.Clear", "shop.CalcFacade"]
        assert AdapterRegistry.get_registered() == ["My.Clear", "shop.CalcFacade"]

        facade = installed["shop.CalcFacade"].new(1)
        assert isinstance(facade.wrapped_object(), Calculator)
        assert facade.add(2, 2) == 5
        assert facade.double(6) == 12

        clear = installed["My.Clear"].new(resource)
        assert isinstance(clear, Resource)
        assert clear.read() == "data from fixture"

    def test_build_all_twice_should_require_replace(self, manifest_file: Path) -> None:
        manifest = AdapterManifest.from_yaml(manifest_file)
        manifest.build_all()

        with pytest.raises(DuplicateAdapterError):
            manifest.build_all()

        assert len(manifest.build_all(replace=True)) == 2

    def test_build_all_should_report_malformed_directives(self, tmp_path: Path) -> None:
        path = tmp_path / "bad_directive.yaml"
        path.write_text(
            "adapters:\n  shop.Bad:\n    METHODS: ['not-a-name']\n", encoding="utf-8"
        )

        with pytest.raises(RenderError, match="invalid method name") as exc_info:
            AdapterManifest.from_yaml(path).build_all()

        assert exc_info.value.target == "shop.Bad"
