"""Data models for the usage scanner."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class UsageReport:
    """Classified usage-analysis findings for one project.

    ``dependencies``/``dev_dependencies`` hold only packages that are safe to
    remove. Packages vetoed by the protection policy are listed under the
    ``protected_*`` fields and are never offered for removal.
    """

    dependencies: list[str] = field(default_factory=list)
    dev_dependencies: list[str] = field(default_factory=list)
    missing: dict[str, list[str]] = field(default_factory=dict)
    using: dict[str, list[str]] = field(default_factory=dict)
    protected_dependencies: list[str] = field(default_factory=list)
    protected_dev_dependencies: list[str] = field(default_factory=list)
    possibly_dynamic: list[str] = field(default_factory=list)

    @property
    def all_unused(self) -> list[str]:
        return [*self.dependencies, *self.dev_dependencies]

    @property
    def total(self) -> int:
        return len(self.dependencies) + len(self.dev_dependencies)

    @property
    def protected_unused(self) -> list[str]:
        return [*self.protected_dependencies, *self.protected_dev_dependencies]
