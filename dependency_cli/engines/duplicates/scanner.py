"""Duplicate scan over package-lock.json."""

from __future__ import annotations

import json
from pathlib import Path

import structlog

from dependency_cli.engines.duplicates.lockfile import LockTree, open_lock_tree
from dependency_cli.engines.duplicates.models import DuplicateEntry, DuplicateReport
from dependency_cli.exceptions import LockfileParseError

log = structlog.get_logger("dependency_cli.duplicates")

LOCKFILE_NAME = "package-lock.json"


def collect_duplicates(tree: LockTree) -> DuplicateReport:
    """Walk *tree* and report names that resolve to more than one version."""
    versions: dict[str, dict[str, None]] = {}
    total = 0
    for name, version in tree.iter_nodes():
        total += 1
        versions.setdefault(name, {}).setdefault(version, None)

    duplicates = [
        DuplicateEntry(name=name, versions=list(seen))
        for name, seen in versions.items()
        if len(seen) > 1
    ]
    return DuplicateReport(duplicates=duplicates, total_packages=total, lock_file_exists=True)


def find_duplicates(lockfile_path: Path) -> DuplicateReport:
    """Scan *lockfile_path* for duplicated packages.

    A missing lockfile is not an error: the report comes back with
    ``lock_file_exists=False``. Raises ``LockfileParseError`` if the file
    exists but is not a JSON object.
    """
    if not lockfile_path.is_file():
        log.info("duplicates.no_lockfile", path=str(lockfile_path))
        return DuplicateReport(lock_file_exists=False)

    try:
        data = json.loads(lockfile_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise LockfileParseError(f"Failed to parse {lockfile_path.name}: {exc}") from exc
    if not isinstance(data, dict):
        raise LockfileParseError(f"Failed to parse {lockfile_path.name}: top level must be a JSON object")

    report = collect_duplicates(open_lock_tree(data))
    log.info(
        "duplicates.done",
        duplicates=report.total,
        total_packages=report.total_packages,
    )
    return report
