"""Data models for the manifest reader."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class ProjectManifest:
    """Read-once snapshot of the fields of package.json this tool uses."""

    name: str = "unknown"
    version: str = "0.0.0"
    dependencies: tuple[str, ...] = ()
    dev_dependencies: tuple[str, ...] = ()
    scripts: tuple[str, ...] = ()
    engines: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    protected_packages: frozenset[str] = frozenset()

    @property
    def has_engines(self) -> bool:
        return bool(self.engines)
