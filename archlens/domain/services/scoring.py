"""Scoring policy - weights, thresholds and rounding.

Pure functions shared by the validator and the heatmap. Rounding is half-up
(2.5 -> 3) so that scores match what dashboards computed historically.
"""

import math

from archlens.domain.entities.report import CategoryScores, RiskLevel, SummaryBadge

CATEGORY_WEIGHTS: dict[str, float] = {
    "security": 0.35,
    "structure": 0.25,
    "consistency": 0.20,
    "completeness": 0.20,
}

# Evaluated top-down, first match wins
BADGE_THRESHOLDS: list[tuple[int, SummaryBadge]] = [
    (90, SummaryBadge.ELITE_ARCH),
    (80, SummaryBadge.HIGH_INTEGRITY),
    (70, SummaryBadge.STABLE_BUILD),
    (50, SummaryBadge.DEBT_WARNING),
]

# Strictly-greater-than thresholds
RISK_LEVEL_THRESHOLDS: list[tuple[int, RiskLevel]] = [
    (70, RiskLevel.CRITICAL),
    (45, RiskLevel.HIGH),
    (20, RiskLevel.MEDIUM),
]


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves go up."""
    return int(math.floor(value + 0.5))


def clamp(value: float, low: int = 0, high: int = 100) -> float:
    return max(low, min(high, value))


def final_score(categories: CategoryScores) -> int:
    """Weighted sum of the category scores, rounded and clamped to [0, 100]."""
    weighted = sum(getattr(categories, name) * weight for name, weight in CATEGORY_WEIGHTS.items())
    return int(clamp(round_half_up(weighted)))


def summary_badge(score: int) -> SummaryBadge:
    for threshold, badge in BADGE_THRESHOLDS:
        if score >= threshold:
            return badge
    return SummaryBadge.CRITICAL_FAILURE


def risk_level(risk_score: float) -> RiskLevel:
    for threshold, level in RISK_LEVEL_THRESHOLDS:
        if risk_score > threshold:
            return level
    return RiskLevel.LOW
