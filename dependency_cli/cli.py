"""CLI entry point: dependency-cli.

Subcommands:
    dependency-cli summary [--json]       # Full dependency report
    dependency-cli fix --all --yes        # Remediate issues via npm
    dependency-cli unused                 # Count removable unused packages
    dependency-cli outdated               # Pass through to `npm outdated`
    dependency-cli score                  # Health score with issues
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path

import click

from dependency_cli import __version__, render
from dependency_cli.core.config import Settings, load_settings
from dependency_cli.core.logging import setup_logging
from dependency_cli.core.process import CommandRunner, run_command
from dependency_cli.engines.fixer import FixOrchestrator, FixSelection
from dependency_cli.engines.manifest import load_manifest
from dependency_cli.engines.usage_scanner import ProtectedPackageSet, scan_usage
from dependency_cli.exceptions import DependencyCliError
from dependency_cli.report import analyze_project

_FIX_FLAGS_HELP = """\
  --unused           Remove unused dependencies (with safety checks)
  --outdated         Update outdated dependencies
  --vulnerabilities  Fix security vulnerabilities
  --duplicates       Deduplicate packages
  --all              Fix everything
  --force            Override safety checks (currently only warns)"""


@dataclass
class AppContext:
    root: Path
    settings: Settings
    runner: CommandRunner


class DependencyCliGroup(click.Group):
    """Group that exits with status 1 on unknown commands and tool errors."""

    def resolve_command(self, ctx: click.Context, args: list[str]):
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as exc:
            click.secho(f"Unknown command. Use --help for available commands. ({exc.message})",
                        fg="red", err=True)
            ctx.exit(1)

    def invoke(self, ctx: click.Context):
        try:
            return super().invoke(ctx)
        except DependencyCliError as exc:
            click.secho(f"Error: {exc}", fg="red", err=True)
            ctx.exit(1)


@click.group(cls=DependencyCliGroup, invoke_without_command=True)
@click.version_option(__version__, prog_name="dependency-cli")
@click.option(
    "--cwd",
    "project_dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
    help="Project directory containing package.json",
)
@click.option("--timeout", type=float, default=None, help="Timeout for external commands (seconds)")
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
@click.pass_context
def main(ctx: click.Context, project_dir: Path, timeout: float | None, verbose: bool) -> None:
    """Advanced dependency management and optimization tool."""
    try:
        settings = load_settings().with_overrides(timeout=timeout)
    except ValueError as exc:
        raise click.ClickException(f"Invalid configuration: {exc}") from exc
    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        fmt=settings.log_format,
    )
    ctx.obj = AppContext(root=project_dir.resolve(), settings=settings, runner=run_command)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@main.command("summary")
@click.option("--json", "as_json", is_flag=True, help="Output results in JSON format")
@click.pass_obj
def summary(app: AppContext, as_json: bool) -> None:
    """Comprehensive project dependency analysis."""
    analysis = asyncio.run(analyze_project(app.root, app.settings, app.runner))
    if as_json:
        click.echo(analysis.to_stats().to_json())
        return
    render.dynamic_advisory(analysis.usage)
    render.summary(analysis, analysis.health())


@main.command("fix")
@click.option("--unused", is_flag=True, help="Remove unused dependencies")
@click.option("--outdated", is_flag=True, help="Update outdated dependencies")
@click.option("--vulnerabilities", is_flag=True, help="Fix security vulnerabilities")
@click.option("--duplicates", is_flag=True, help="Deduplicate packages")
@click.option("--all", "fix_all", is_flag=True, help="Fix all issues")
@click.option("--force", is_flag=True, help="Override safety checks (currently only warns)")
@click.option("-y", "--yes", is_flag=True, help="Skip confirmation prompts")
@click.pass_obj
def fix(
    app: AppContext,
    unused: bool,
    outdated: bool,
    vulnerabilities: bool,
    duplicates: bool,
    fix_all: bool,
    force: bool,
    yes: bool,
) -> None:
    """Automatically fix dependency issues."""
    selection = FixSelection(
        unused=unused,
        outdated=outdated,
        vulnerabilities=vulnerabilities,
        duplicates=duplicates,
        all=fix_all,
        force=force,
    )
    if selection.is_empty:
        click.secho("Please specify what to fix:", fg="yellow")
        click.echo(_FIX_FLAGS_HELP)
        return

    if force:
        click.secho("WARNING: --force was given. Protected packages are still never removed;", fg="red")
        click.secho("the flag only shows this warning. Make sure you have a backup.", fg="red")

    if not yes:
        click.secho("This will modify your package.json and node_modules.", fg="yellow")
        click.secho("Confirmation required - add --yes flag to proceed.", fg="red")
        return

    manifest = load_manifest(app.root)
    protected = ProtectedPackageSet.build(manifest.protected_packages)
    orchestrator = FixOrchestrator(app.root, protected, app.settings, app.runner)
    orchestrator.on_start = lambda category: click.secho(f"Fixing {category}...", fg="yellow")

    click.secho("Starting dependency fixes...\n", fg="cyan")
    results = asyncio.run(orchestrator.apply(selection))
    render.fix_results(results)
    click.secho("\nFixes completed!", fg="cyan")
    click.secho('Run "dependency-cli summary" to see updated status.', fg="bright_black")


@main.command("unused")
@click.pass_obj
def unused(app: AppContext) -> None:
    """Check for unused dependencies."""
    click.secho("Checking unused dependencies...", fg="yellow")
    manifest = load_manifest(app.root)
    protected = ProtectedPackageSet.build(manifest.protected_packages)
    usage = asyncio.run(
        scan_usage(app.root, protected, settings=app.settings, runner=app.runner)
    )
    render.dynamic_advisory(usage)
    if usage.total == 0:
        click.secho("No unused dependencies found.", fg="green")
    else:
        click.secho(f"Found {usage.total} unused dependencies", fg="red")
        click.secho('Run "dependency-cli fix --unused --yes" to remove them.', fg="cyan")


@main.command("outdated")
@click.pass_obj
def outdated(app: AppContext) -> None:
    """Check for outdated dependencies (runs `npm outdated`)."""
    click.secho("Checking outdated dependencies...", fg="yellow")
    result = asyncio.run(
        app.runner(
            [app.settings.npm, "outdated"],
            cwd=app.root,
            timeout=app.settings.timeout,
            capture=False,
        )
    )
    if not result.ok:
        click.secho('Run "dependency-cli fix --outdated --yes" to update them.', fg="cyan")


@main.command("score")
@click.pass_obj
def score(app: AppContext) -> None:
    """Calculate dependency health score."""
    click.secho("Calculating health score...\n", fg="yellow")
    analysis = asyncio.run(analyze_project(app.root, app.settings, app.runner))
    render.dynamic_advisory(analysis.usage)
    render.score(analysis.health())


if __name__ == "__main__":
    main()
