"""Lockfile duplicate scanner: package names resolved to several versions."""

from dependency_cli.engines.duplicates.lockfile import (
    FlatPackagesTree,
    LockTree,
    NestedDependenciesTree,
    open_lock_tree,
)
from dependency_cli.engines.duplicates.models import DuplicateEntry, DuplicateReport
from dependency_cli.engines.duplicates.scanner import LOCKFILE_NAME, collect_duplicates, find_duplicates

__all__ = [
    "DuplicateEntry",
    "DuplicateReport",
    "FlatPackagesTree",
    "LOCKFILE_NAME",
    "LockTree",
    "NestedDependenciesTree",
    "collect_duplicates",
    "find_duplicates",
    "open_lock_tree",
]
