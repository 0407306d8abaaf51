"""Tests for scoring policy (weights, badges, risk levels)."""

import pytest

from archlens.domain.entities import CategoryScores, RiskLevel, SummaryBadge
from archlens.domain.services.scoring import final_score, risk_level, round_half_up, summary_badge


class TestRoundHalfUp:
    """round_half_up: halves go up, unlike Python's banker's rounding."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(12.5, 13), (0.5, 1), (2.4999, 2), (33.333, 33), (66.667, 67), (0, 0)],
    )
    def test_rounding(self, value, expected):
        assert round_half_up(value) == expected


class TestFinalScore:
    """final_score: weighted category sum."""

    def test_perfect_categories(self):
        assert final_score(CategoryScores()) == 100

    def test_security_penalty(self):
        # 40*0.35 + 100*0.25 + 100*0.20 + 100*0.20 = 79
        assert final_score(CategoryScores(security=40)) == 79

    def test_all_zero(self):
        cats = CategoryScores(consistency=0, completeness=0, security=0, structure=0)
        assert final_score(cats) == 0

    def test_weights_sum_to_one_hundred(self):
        cats = CategoryScores(consistency=50, completeness=50, security=50, structure=50)
        assert final_score(cats) == 50


class TestSummaryBadge:
    """summary_badge: thresholds evaluated top-down."""

    @pytest.mark.parametrize(
        ("score", "badge"),
        [
            (100, SummaryBadge.ELITE_ARCH),
            (90, SummaryBadge.ELITE_ARCH),
            (89, SummaryBadge.HIGH_INTEGRITY),
            (80, SummaryBadge.HIGH_INTEGRITY),
            (79, SummaryBadge.STABLE_BUILD),
            (70, SummaryBadge.STABLE_BUILD),
            (69, SummaryBadge.DEBT_WARNING),
            (50, SummaryBadge.DEBT_WARNING),
            (49, SummaryBadge.CRITICAL_FAILURE),
            (0, SummaryBadge.CRITICAL_FAILURE),
        ],
    )
    def test_boundaries(self, score, badge):
        assert summary_badge(score) is badge


class TestRiskLevel:
    """risk_level: strictly-greater thresholds."""

    @pytest.mark.parametrize(
        ("score", "level"),
        [
            (71, RiskLevel.CRITICAL),
            (70, RiskLevel.HIGH),
            (46, RiskLevel.HIGH),
            (45, RiskLevel.MEDIUM),
            (21, RiskLevel.MEDIUM),
            (20, RiskLevel.LOW),
            (0, RiskLevel.LOW),
        ],
    )
    def test_thresholds(self, score, level):
        assert risk_level(score) is level
