"""Validation & Scoring Engine module."""

from archlens.infrastructure.validation.risk import (
    build_heatmap,
    bucket_of,
    collect_buckets,
    compute_risk_metrics,
)
from archlens.infrastructure.validation.rules import INFO_CHECKS, RULES, ScoringRule
from archlens.infrastructure.validation.validator import Validator, coerce_snapshot

__all__ = [
    "Validator",
    "coerce_snapshot",
    "ScoringRule",
    "RULES",
    "INFO_CHECKS",
    "build_heatmap",
    "bucket_of",
    "collect_buckets",
    "compute_risk_metrics",
]
