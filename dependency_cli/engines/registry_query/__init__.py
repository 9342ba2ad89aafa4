"""Registry query adapter: npm outdated / npm audit reports."""

from dependency_cli.engines.registry_query.models import OutdatedEntry, VulnerabilityReport
from dependency_cli.engines.registry_query.queries import (
    SELF_EXCLUDED,
    parse_audit,
    parse_outdated,
    query_outdated,
    query_vulnerabilities,
)

__all__ = [
    "OutdatedEntry",
    "SELF_EXCLUDED",
    "VulnerabilityReport",
    "parse_audit",
    "parse_outdated",
    "query_outdated",
    "query_vulnerabilities",
]
