"""Data models for registry queries."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

SEVERITIES = ("critical", "high", "moderate", "low", "info")


@dataclass
class OutdatedEntry:
    """One row of ``npm outdated --json``."""

    name: str
    current: str | None
    wanted: str | None
    latest: str | None
    location: str | None = None
    dependent: str | None = None
    type: str | None = None  # "dependencies" | "devDependencies"


@dataclass
class VulnerabilityReport:
    """Advisories from ``npm audit --json``, keyed by package name."""

    vulnerabilities: dict[str, dict[str, Any]] = field(default_factory=dict)
    metadata: dict[str, Any] = field(default_factory=dict)
    counts: dict[str, int] = field(default_factory=lambda: dict.fromkeys(SEVERITIES, 0))

    @property
    def total(self) -> int:
        return len(self.vulnerabilities)
