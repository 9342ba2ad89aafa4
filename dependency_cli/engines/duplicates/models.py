"""Data models for the duplicate scanner."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class DuplicateEntry:
    """A package name resolved to more than one distinct version."""

    name: str
    versions: list[str]  # distinct, in first-seen order

    @property
    def count(self) -> int:
        return len(self.versions)


@dataclass
class DuplicateReport:
    duplicates: list[DuplicateEntry] = field(default_factory=list)
    total_packages: int = 0  # every (name, version) node visited
    lock_file_exists: bool = True

    @property
    def total(self) -> int:
        return len(self.duplicates)
