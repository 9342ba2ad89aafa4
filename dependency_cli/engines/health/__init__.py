"""Health score engine: weighted, capped penalties into a 0-100 score."""

from dependency_cli.engines.health.score import (
    PENALTY_RULES,
    HealthScore,
    IssueCounts,
    PenaltyRule,
    calculate_health_score,
    score_band,
)

__all__ = [
    "PENALTY_RULES",
    "HealthScore",
    "IssueCounts",
    "PenaltyRule",
    "calculate_health_score",
    "score_band",
]
