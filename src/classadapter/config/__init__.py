"""Adapter configuration models."""

from classadapter.config.adapter import (
    ADAPTER_BASE_REF,
    OBJECT_SENTINEL,
    AdapterConfig,
    normalize_target,
)
from classadapter.config.manifest import AdapterManifest

__all__ = [
    "ADAPTER_BASE_REF",
    "OBJECT_SENTINEL",
    "AdapterConfig",
    "AdapterManifest",
    "normalize_target",
]
