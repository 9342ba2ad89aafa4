"""Fix orchestrator: run package-manager remediation per issue category."""

from dependency_cli.engines.fixer.models import FIX_CATEGORIES, FixResult, FixSelection
from dependency_cli.engines.fixer.orchestrator import FixOrchestrator, batched

__all__ = ["FIX_CATEGORIES", "FixOrchestrator", "FixResult", "FixSelection", "batched"]
