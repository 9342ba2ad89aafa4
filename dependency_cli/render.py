"""Human-readable terminal output."""

from __future__ import annotations

import click

from dependency_cli.engines.fixer import FixResult
from dependency_cli.engines.health import HealthScore
from dependency_cli.engines.manifest import TOOL_CONFIG_KEY
from dependency_cli.engines.usage_scanner import UsageReport
from dependency_cli.report import ProjectAnalysis

_BAND_COLORS = {"good": "green", "caution": "yellow", "poor": "red"}

_OUTDATED_PREVIEW = 5
_DUPLICATE_PREVIEW = 3


def _ok(msg: str) -> None:
    click.secho(f"  [+] {msg}", fg="green")


def _bad(msg: str) -> None:
    click.secho(f"  [!] {msg}", fg="red")


def _detail(msg: str) -> None:
    click.secho(f"    {msg}", fg="bright_black")


def _heading(msg: str) -> None:
    click.secho(f"\n{msg}", bold=True)


def dynamic_advisory(usage: UsageReport) -> None:
    if not usage.possibly_dynamic:
        return
    click.secho(
        "Note: the following dependencies might be used dynamically or in config files:",
        fg="yellow",
    )
    for name in usage.possibly_dynamic:
        _detail(f"- {name}")
    click.secho(
        f'Consider adding them to "{TOOL_CONFIG_KEY}.protectedPackages" in package.json '
        "to prevent removal.",
        fg="cyan",
    )


def summary(analysis: ProjectAnalysis, health: HealthScore) -> None:
    m = analysis.manifest
    click.secho("Comprehensive Dependency Analysis", fg="cyan", bold=True)

    _heading("Project Overview:")
    click.echo(f"  Name: {click.style(m.name, fg='cyan')} v{m.version}")
    click.echo(
        f"  Dependencies: {click.style(str(len(m.dependencies)), fg='yellow')} production + "
        f"{click.style(str(len(m.dev_dependencies)), fg='yellow')} development"
    )
    click.echo(f"  Scripts: {click.style(str(len(m.scripts)), fg='yellow')} npm scripts")
    engines = (
        click.style("specified", fg="green") if m.has_engines
        else click.style("not specified", fg="bright_black")
    )
    click.echo(f"  Node engines: {engines}")

    usage = analysis.usage
    _heading("Unused Dependencies:")
    if usage.total == 0:
        _ok("All dependencies are being used")
    else:
        _bad(f"{usage.total} unused packages found")
        if usage.dependencies:
            _detail(f"Production: {', '.join(usage.dependencies)}")
        if usage.dev_dependencies:
            _detail(f"Development: {', '.join(usage.dev_dependencies)}")
    if usage.protected_unused:
        _detail(f"Protected (kept): {', '.join(usage.protected_unused)}")

    _heading("Missing Dependencies:")
    if not usage.missing:
        _ok("All required dependencies are installed")
    else:
        _bad(f"{len(usage.missing)} missing dependencies")
        _detail(f"Packages: {', '.join(usage.missing)}")

    outdated = analysis.outdated
    _heading("Outdated Dependencies:")
    if not outdated:
        _ok("All packages are up to date")
    else:
        _bad(f"{len(outdated)} outdated packages")
        for entry in list(outdated.values())[:_OUTDATED_PREVIEW]:
            _detail(f"{entry.name}: {entry.current} -> {entry.latest}")
        if len(outdated) > _OUTDATED_PREVIEW:
            _detail(f"... and {len(outdated) - _OUTDATED_PREVIEW} more")

    vulns = analysis.vulnerabilities
    _heading("Security Vulnerabilities:")
    if vulns.total == 0:
        _ok("No known security vulnerabilities")
    else:
        _bad(f"{vulns.total} vulnerabilities found")
        for severity, color in (
            ("critical", "red"), ("high", "red"), ("moderate", "yellow"), ("low", "bright_black"),
        ):
            if vulns.counts.get(severity):
                click.secho(f"    {severity.capitalize()}: {vulns.counts[severity]}", fg=color)

    dups = analysis.duplicates
    _heading("Package Duplicates:")
    if not dups.lock_file_exists:
        _detail("No package-lock.json found")
    elif dups.total == 0:
        _ok("No duplicate package versions")
    else:
        _bad(f"{dups.total} packages with multiple versions")
        _detail(f"Total packages in lock file: {dups.total_packages}")
        for entry in dups.duplicates[:_DUPLICATE_PREVIEW]:
            _detail(f"{entry.name}: {', '.join(entry.versions)}")
        if dups.total > _DUPLICATE_PREVIEW:
            _detail(f"... and {dups.total - _DUPLICATE_PREVIEW} more")

    if health.suggestions:
        _heading("Quick Fix Suggestions:")
        for suggestion in health.suggestions:
            click.echo(f"  - {suggestion}")
        click.secho(
            '\nRun "dependency-cli fix --all" to fix all issues automatically!', fg="cyan"
        )


def score(health: HealthScore) -> None:
    click.secho(f"Health Score: {health.score}/100", fg=_BAND_COLORS[health.band], bold=True)
    if health.issues:
        click.secho("\nIssues:", fg="cyan")
        for issue in health.issues:
            click.echo(f"  - {issue}")
    if health.suggestions:
        click.secho("\nRecommendations:", fg="cyan")
        for suggestion in health.suggestions:
            click.echo(f"  - {suggestion}")


def fix_results(results: list[FixResult]) -> None:
    click.secho("\nFix Results:", fg="cyan")
    for r in results:
        if r.success:
            _ok(f"{r.category}: Completed successfully")
            if r.removed:
                _detail(f"Removed: {', '.join(r.removed)}")
            elif r.category == "unused":
                _detail("No safe-to-remove unused dependencies found")
            if r.kept_protected:
                _detail(
                    f"{len(r.kept_protected)} protected packages detected as unused but kept: "
                    f"{', '.join(r.kept_protected)}"
                )
        else:
            _bad(f"{r.category}: {r.error}")
