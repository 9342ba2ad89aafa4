"""JSON report schema for ``summary --json``.

Field names are serialized in camelCase (``devDependencies``,
``lockFileExists``) to match npm's own vocabulary.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _Schema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProjectOverview(_Schema):
    name: str
    version: str
    total_deps: int
    total_dev_deps: int
    total_scripts: int
    has_engines: bool


class UnusedSection(_Schema):
    dependencies: list[str]
    dev_dependencies: list[str]
    total: int
    protected: list[str] = []
    possibly_dynamic: list[str] = []
    using: dict[str, list[str]] = {}


class MissingSection(_Schema):
    packages: list[str]
    total: int
    details: dict[str, list[str]] = {}


class OutdatedItem(_Schema):
    current: str | None
    wanted: str | None
    latest: str | None
    location: str | None = None
    dependent: str | None = None
    type: str | None = None


class OutdatedSection(_Schema):
    packages: list[str]
    total: int
    details: dict[str, OutdatedItem]


class VulnerabilitySection(_Schema):
    total: int
    counts: dict[str, int]
    metadata: dict[str, Any]
    details: dict[str, dict[str, Any]]


class DuplicateItem(_Schema):
    name: str
    versions: list[str]
    count: int


class DuplicateSection(_Schema):
    packages: list[DuplicateItem]
    total: int
    total_packages: int
    lock_file_exists: bool


class HealthSection(_Schema):
    score: int
    issues: list[str]
    suggestions: list[str]


class ProjectStats(_Schema):
    """Aggregated dependency report for one project."""

    project: ProjectOverview
    unused: UnusedSection
    missing: MissingSection
    outdated: OutdatedSection
    vulnerabilities: VulnerabilitySection
    duplicates: DuplicateSection
    health: HealthSection

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)
