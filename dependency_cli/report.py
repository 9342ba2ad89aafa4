"""Project analysis: run every read-side check and aggregate the results."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path

import structlog

from dependency_cli.core.config import Settings
from dependency_cli.core.process import CommandRunner, run_command
from dependency_cli.engines.duplicates import LOCKFILE_NAME, DuplicateReport, find_duplicates
from dependency_cli.engines.health import HealthScore, IssueCounts, calculate_health_score
from dependency_cli.engines.manifest import ProjectManifest, load_manifest
from dependency_cli.engines.registry_query import (
    OutdatedEntry,
    VulnerabilityReport,
    query_outdated,
    query_vulnerabilities,
)
from dependency_cli.engines.usage_scanner import ProtectedPackageSet, UsageReport, scan_usage
from dependency_cli.schemas import (
    DuplicateItem,
    DuplicateSection,
    HealthSection,
    MissingSection,
    OutdatedItem,
    OutdatedSection,
    ProjectOverview,
    ProjectStats,
    UnusedSection,
    VulnerabilitySection,
)

log = structlog.get_logger("dependency_cli.report")


@dataclass
class ProjectAnalysis:
    """Snapshot of every check for one invocation."""

    manifest: ProjectManifest
    protected: ProtectedPackageSet
    usage: UsageReport
    outdated: dict[str, OutdatedEntry]
    vulnerabilities: VulnerabilityReport
    duplicates: DuplicateReport

    def issue_counts(self) -> IssueCounts:
        return IssueCounts(
            unused=self.usage.total,
            outdated=len(self.outdated),
            vulnerabilities=self.vulnerabilities.total,
            duplicates=self.duplicates.total,
            missing=len(self.usage.missing),
        )

    def health(self) -> HealthScore:
        return calculate_health_score(self.issue_counts())

    def to_stats(self) -> ProjectStats:
        m, usage, health = self.manifest, self.usage, self.health()
        return ProjectStats(
            project=ProjectOverview(
                name=m.name,
                version=m.version,
                total_deps=len(m.dependencies),
                total_dev_deps=len(m.dev_dependencies),
                total_scripts=len(m.scripts),
                has_engines=m.has_engines,
            ),
            unused=UnusedSection(
                dependencies=usage.dependencies,
                dev_dependencies=usage.dev_dependencies,
                total=usage.total,
                protected=usage.protected_unused,
                possibly_dynamic=usage.possibly_dynamic,
                using=usage.using,
            ),
            missing=MissingSection(
                packages=list(usage.missing),
                total=len(usage.missing),
                details=usage.missing,
            ),
            outdated=OutdatedSection(
                packages=list(self.outdated),
                total=len(self.outdated),
                details={
                    name: OutdatedItem(
                        current=e.current,
                        wanted=e.wanted,
                        latest=e.latest,
                        location=e.location,
                        dependent=e.dependent,
                        type=e.type,
                    )
                    for name, e in self.outdated.items()
                },
            ),
            vulnerabilities=VulnerabilitySection(
                total=self.vulnerabilities.total,
                counts=self.vulnerabilities.counts,
                metadata=self.vulnerabilities.metadata,
                details=self.vulnerabilities.vulnerabilities,
            ),
            duplicates=DuplicateSection(
                packages=[
                    DuplicateItem(name=d.name, versions=d.versions, count=d.count)
                    for d in self.duplicates.duplicates
                ],
                total=self.duplicates.total,
                total_packages=self.duplicates.total_packages,
                lock_file_exists=self.duplicates.lock_file_exists,
            ),
            health=HealthSection(
                score=health.score,
                issues=health.issues,
                suggestions=health.suggestions,
            ),
        )


async def analyze_project(
    project_root: Path,
    settings: Settings,
    runner: CommandRunner = run_command,
) -> ProjectAnalysis:
    """Load the manifest, then run the four independent checks concurrently.

    Manifest, usage-scan and lockfile-parse failures propagate; outdated and
    audit failures have already degraded to empty results.
    """
    manifest = load_manifest(project_root)
    protected = ProtectedPackageSet.build(manifest.protected_packages)

    usage, outdated, vulnerabilities, duplicates = await asyncio.gather(
        scan_usage(project_root, protected, settings=settings, runner=runner),
        query_outdated(project_root, settings=settings, runner=runner),
        query_vulnerabilities(project_root, settings=settings, runner=runner),
        asyncio.to_thread(find_duplicates, project_root / LOCKFILE_NAME),
    )
    log.debug("report.analyzed", project=manifest.name)
    return ProjectAnalysis(
        manifest=manifest,
        protected=protected,
        usage=usage,
        outdated=outdated,
        vulnerabilities=vulnerabilities,
        duplicates=duplicates,
    )
