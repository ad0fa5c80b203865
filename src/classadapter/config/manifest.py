"""YAML manifest listing adapter classes and their directives.

Example::

    adapters:
      My::Clear:
        ISA: _OBJECT_
        AUTOLOAD: true
      shop.LegacyCart:
        NEW: legacy.cart:Cart
        METHODS: [total, add]
        remove: delete_item
"""

from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from classadapter.config.adapter import normalize_target
from classadapter.exceptions import ConfigError
from classadapter.logger import get_logger

if TYPE_CHECKING:
    from classadapter.builder.core import AdapterBuilder

logger = get_logger(__name__)


class AdapterManifest(BaseModel):
    """A set of adapter definitions loaded from a file.

    Attributes:
        adapters: Target class path to its directives, in file order.
    """

    model_config = ConfigDict(strict=True, extra="forbid")

    adapters: dict[str, dict[str, Any]] = Field(
        default_factory=dict,
        description="Target class path to directive mapping",
    )

    @field_validator("adapters")
    @classmethod
    def targets_are_class_paths(
        cls, v: dict[str, dict[str, Any]]
    ) -> dict[str, dict[str, Any]]:
        """Validate every target class path.

        Raises:
            ValueError: If a target is not a valid class path.
        """
        for target in v:
            normalize_target(target)
        return v

    @classmethod
    def from_yaml(cls, path: Path) -> "AdapterManifest":
        """Load a manifest from a YAML file.

        Args:
            path: Path to the YAML manifest.

        Returns:
            Validated AdapterManifest instance.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigError: If YAML is invalid or validation fails.
        """
        if not path.exists():
            raise FileNotFoundError(f"Adapter manifest not found: {path}")

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax: {e}") from e

        if data is None:
            data = {}

        try:
            manifest = cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Manifest validation failed: {e}", cause=e) from e

        logger.info(
            "Manifest loaded: path=%s, adapters=%d", path, len(manifest.adapters)
        )
        return manifest

    def builders(self) -> Iterator["AdapterBuilder"]:
        """Yield a configured builder per adapter, in file order."""
        from classadapter.builder.core import AdapterBuilder

        for target, directives in self.adapters.items():
            builder = AdapterBuilder(target)
            builder.apply_all(directives)
            yield builder

    def build_all(self, *, replace: bool = False) -> dict[str, type]:
        """Render and install every adapter in the manifest.

        Args:
            replace: Redefine targets that are already installed.

        Returns:
            Installed classes keyed by normalized target path.

        Raises:
            ConfigError: If any adapter fails to render or install.
        """
        installed: dict[str, type] = {}
        for builder in self.builders():
            installed[builder.config.target] = builder.build(replace=replace)
        return installed
