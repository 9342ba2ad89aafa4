"""Usage scanner: run depcheck and classify unused/protected/missing packages."""

from dependency_cli.engines.usage_scanner.models import UsageReport
from dependency_cli.engines.usage_scanner.protection import (
    BUILTIN_PROTECTED,
    ProtectedPackageSet,
    is_vetoed,
    looks_dynamic,
)
from dependency_cli.engines.usage_scanner.scanner import build_depcheck_command, scan_usage

__all__ = [
    "BUILTIN_PROTECTED",
    "ProtectedPackageSet",
    "UsageReport",
    "build_depcheck_command",
    "is_vetoed",
    "looks_dynamic",
    "scan_usage",
]
