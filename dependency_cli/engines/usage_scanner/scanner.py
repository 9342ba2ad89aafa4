"""Usage scanner adapter: depcheck invocation and result classification."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import structlog

from dependency_cli.core.config import Settings
from dependency_cli.core.process import CommandRunner, run_command
from dependency_cli.engines.manifest.reader import TOOL_CONFIG_KEY
from dependency_cli.engines.usage_scanner.models import UsageReport
from dependency_cli.engines.usage_scanner.protection import (
    ProtectedPackageSet,
    is_vetoed,
    looks_dynamic,
)
from dependency_cli.engines.usage_scanner.specials import vite_config_usage
from dependency_cli.exceptions import CommandError, UsageScanError

log = structlog.get_logger("dependency_cli.usage_scanner")

IGNORE_PATTERNS = [
    "dist", "build", "coverage", "node_modules", ".next", ".nuxt", "public", "static",
]
IGNORE_MATCHES = ["@types/*", "eslint-*", "prettier", "jest", "babel-*"]
SPECIALS = ["eslint", "jest", "prettier", "babel", "webpack"]


def build_depcheck_command(project_root: Path, settings: Settings) -> list[str]:
    return [
        *settings.depcheck,
        str(project_root),
        "--json",
        f"--ignore-patterns={','.join(IGNORE_PATTERNS)}",
        f"--ignores={','.join(IGNORE_MATCHES)}",
        f"--specials={','.join(SPECIALS)}",
    ]


def _str_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, str)]


def _file_map(value: Any) -> dict[str, list[str]]:
    if not isinstance(value, dict):
        return {}
    return {str(k): _str_list(v) for k, v in value.items()}


def classify(
    raw: dict[str, Any],
    protected: ProtectedPackageSet,
    extra_used: set[str] | frozenset[str] = frozenset(),
) -> UsageReport:
    """Split depcheck's raw output into removable and protected lists.

    *extra_used* are packages found by the local special detectors; they are
    treated as used even though depcheck reported them unused.
    """
    unused_prod = [d for d in _str_list(raw.get("dependencies")) if d not in extra_used]
    unused_dev = [d for d in _str_list(raw.get("devDependencies")) if d not in extra_used]

    report = UsageReport(
        dependencies=[d for d in unused_prod if not is_vetoed(d, protected)],
        dev_dependencies=[d for d in unused_dev if not is_vetoed(d, protected)],
        missing=_file_map(raw.get("missing")),
        using=_file_map(raw.get("using")),
        protected_dependencies=[d for d in unused_prod if d in protected],
        protected_dev_dependencies=[d for d in unused_dev if d in protected],
    )
    report.possibly_dynamic = [d for d in report.all_unused if looks_dynamic(d)]
    return report


async def scan_usage(
    project_root: Path,
    protected: ProtectedPackageSet,
    *,
    settings: Settings,
    runner: CommandRunner = run_command,
) -> UsageReport:
    """Run depcheck over *project_root* and classify the findings.

    depcheck exits non-zero whenever it finds anything, so its stdout is
    parsed regardless of the exit status. Raises ``UsageScanError`` if the
    analyzer cannot run or prints no usable JSON.
    """
    args = build_depcheck_command(project_root, settings)
    try:
        result = await runner(args, cwd=project_root, timeout=settings.timeout)
    except CommandError as exc:
        raise UsageScanError(f"Error checking unused dependencies: {exc}") from exc

    try:
        raw = result.json()
    except ValueError as exc:
        detail = result.stderr.strip() or str(exc)
        raise UsageScanError(
            f"Error checking unused dependencies: depcheck exited {result.exit_code}: {detail}"
        ) from exc
    if not isinstance(raw, dict):
        raise UsageScanError("Error checking unused dependencies: unexpected depcheck output")

    report = classify(raw, protected, vite_config_usage(project_root))

    if report.possibly_dynamic:
        log.info(
            "usage_scanner.possibly_dynamic",
            packages=report.possibly_dynamic,
            hint=f'add them to "{TOOL_CONFIG_KEY}.protectedPackages" in package.json '
            "to prevent removal",
        )
    log.info(
        "usage_scanner.done",
        unused=report.total,
        protected_unused=len(report.protected_unused),
        missing=len(report.missing),
    )
    return report
