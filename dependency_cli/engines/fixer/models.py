"""Data models for the fix orchestrator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

FixCategory = Literal["unused", "outdated", "vulnerabilities", "duplicates"]

FIX_CATEGORIES: tuple[FixCategory, ...] = ("unused", "outdated", "vulnerabilities", "duplicates")


@dataclass(frozen=True)
class FixSelection:
    """Which categories to fix.

    ``force`` is accepted for compatibility and only triggers warnings:
    protected packages are never removed.
    """

    unused: bool = False
    outdated: bool = False
    vulnerabilities: bool = False
    duplicates: bool = False
    all: bool = False
    force: bool = False

    @property
    def categories(self) -> list[FixCategory]:
        return [c for c in FIX_CATEGORIES if self.all or getattr(self, c)]

    @property
    def is_empty(self) -> bool:
        return not self.categories


@dataclass
class FixResult:
    category: FixCategory
    success: bool
    error: str | None = None
    removed: list[str] = field(default_factory=list)  # unused only
    kept_protected: list[str] = field(default_factory=list)  # unused only
