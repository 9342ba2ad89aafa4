"""Health score calculation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

ScoreBand = Literal["good", "caution", "poor"]

MAX_SCORE = 100
GOOD_THRESHOLD = 85
CAUTION_THRESHOLD = 70


@dataclass
class IssueCounts:
    unused: int = 0  # production + development
    outdated: int = 0
    vulnerabilities: int = 0
    duplicates: int = 0
    missing: int = 0


@dataclass(frozen=True)
class PenaltyRule:
    category: str  # attribute name on IssueCounts
    weight: int
    cap: int
    issue: str  # formatted with the item count
    suggestion: str

    def penalty(self, count: int) -> int:
        return min(self.cap, count * self.weight)


# Order is the order issues and suggestions are reported in.
PENALTY_RULES: tuple[PenaltyRule, ...] = (
    PenaltyRule(
        "unused", 3, 30,
        "{} unused dependencies",
        'Run "dependency-cli fix --unused" to remove unused packages',
    ),
    PenaltyRule(
        "outdated", 2, 25,
        "{} outdated dependencies",
        'Run "dependency-cli fix --outdated" to update packages',
    ),
    PenaltyRule(
        "vulnerabilities", 5, 35,
        "{} security vulnerabilities",
        'Run "dependency-cli fix --vulnerabilities" to fix security issues',
    ),
    PenaltyRule(
        "duplicates", 2, 15,
        "{} duplicate packages",
        'Run "dependency-cli fix --duplicates" to dedupe packages',
    ),
    PenaltyRule(
        "missing", 4, 20,
        "{} missing dependencies",
        "Install missing dependencies manually",
    ),
)


@dataclass
class HealthScore:
    score: int
    issues: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)

    @property
    def band(self) -> ScoreBand:
        return score_band(self.score)


def calculate_health_score(counts: IssueCounts) -> HealthScore:
    """Start at 100 and subtract each category's capped penalty.

    The caps add up to more than 100, so the result saturates at 0.
    """
    score = MAX_SCORE
    issues: list[str] = []
    suggestions: list[str] = []
    for rule in PENALTY_RULES:
        count = getattr(counts, rule.category)
        if count <= 0:
            continue
        score -= rule.penalty(count)
        issues.append(rule.issue.format(count))
        suggestions.append(rule.suggestion)
    return HealthScore(score=max(0, round(score)), issues=issues, suggestions=suggestions)


def score_band(score: int) -> ScoreBand:
    if score >= GOOD_THRESHOLD:
        return "good"
    if score >= CAUTION_THRESHOLD:
        return "caution"
    return "poor"
