"""Outdated and audit queries.

Both npm commands exit non-zero when they have something to report, while
still printing valid JSON. Decision table:

    command               exit 0   exit != 0 + JSON   no / bad output, spawn failure, timeout
    npm outdated --json   parse    parse              {} (logged)
    npm audit --json      parse    parse              empty report (logged)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import structlog

from dependency_cli.core.config import Settings
from dependency_cli.core.process import CommandResult, CommandRunner, run_command
from dependency_cli.engines.registry_query.models import (
    SEVERITIES,
    OutdatedEntry,
    VulnerabilityReport,
)
from dependency_cli.exceptions import CommandError, RegistryQueryError

log = structlog.get_logger("dependency_cli.registry_query")

# The tool's own pinned rendering dependency is never reported as outdated.
SELF_EXCLUDED = frozenset({"chalk"})


def _decode(result: CommandResult) -> dict[str, Any]:
    try:
        data = result.json()
    except ValueError as exc:
        raise RegistryQueryError(
            f"{' '.join(result.args)} (exit {result.exit_code}) produced no JSON: {exc}"
        ) from exc
    if not isinstance(data, dict):
        raise RegistryQueryError(f"{' '.join(result.args)} returned {type(data).__name__}, not an object")
    return data


def _opt_str(value: Any) -> str | None:
    return None if value is None else str(value)


def parse_outdated(result: CommandResult) -> dict[str, OutdatedEntry]:
    """Parse ``npm outdated --json`` output; raises ``RegistryQueryError``."""
    data = _decode(result)
    entries: dict[str, OutdatedEntry] = {}
    for name, info in data.items():
        # A package outdated at several locations is reported as a list of rows.
        if isinstance(info, list):
            info = next((row for row in info if isinstance(row, dict)), None)
        if name in SELF_EXCLUDED or not isinstance(info, dict):
            continue
        entries[name] = OutdatedEntry(
            name=name,
            current=_opt_str(info.get("current")),
            wanted=_opt_str(info.get("wanted")),
            latest=_opt_str(info.get("latest")),
            location=_opt_str(info.get("location")),
            dependent=_opt_str(info.get("dependent")),
            type=_opt_str(info.get("type")),
        )
    return entries


def parse_audit(result: CommandResult) -> VulnerabilityReport:
    """Parse ``npm audit --json`` output; raises ``RegistryQueryError``."""
    data = _decode(result)
    vulns = data.get("vulnerabilities")
    if not isinstance(vulns, dict):
        vulns = {}
    metadata = data.get("metadata")
    if not isinstance(metadata, dict):
        metadata = {}

    counts = dict.fromkeys(SEVERITIES, 0)
    meta_counts = metadata.get("vulnerabilities")
    if isinstance(meta_counts, dict):
        for severity in SEVERITIES:
            value = meta_counts.get(severity)
            if isinstance(value, int):
                counts[severity] = value
    else:
        for info in vulns.values():
            severity = info.get("severity") if isinstance(info, dict) else None
            if severity in counts:
                counts[severity] += 1

    return VulnerabilityReport(
        vulnerabilities={str(k): v if isinstance(v, dict) else {} for k, v in vulns.items()},
        metadata=metadata,
        counts=counts,
    )


async def query_outdated(
    project_root: Path,
    *,
    settings: Settings,
    runner: CommandRunner = run_command,
) -> dict[str, OutdatedEntry]:
    """Return outdated packages, or ``{}`` if npm gives nothing usable."""
    try:
        result = await runner(
            [settings.npm, "outdated", "--json"], cwd=project_root, timeout=settings.timeout
        )
        entries = parse_outdated(result)
    except (CommandError, RegistryQueryError) as exc:
        log.warning("registry_query.outdated_failed", error=str(exc))
        return {}
    log.info("registry_query.outdated", count=len(entries))
    return entries


async def query_vulnerabilities(
    project_root: Path,
    *,
    settings: Settings,
    runner: CommandRunner = run_command,
) -> VulnerabilityReport:
    """Return the audit report, or an empty one if npm gives nothing usable."""
    try:
        result = await runner(
            [settings.npm, "audit", "--json"], cwd=project_root, timeout=settings.timeout
        )
        report = parse_audit(result)
    except (CommandError, RegistryQueryError) as exc:
        log.warning("registry_query.audit_failed", error=str(exc))
        return VulnerabilityReport()
    log.info("registry_query.audit", total=report.total, **report.counts)
    return report
