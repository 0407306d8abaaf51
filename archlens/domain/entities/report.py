"""Validation and drift report entities."""

from enum import Enum

from pydantic import Field

from archlens.domain.entities.base import Entity


class Severity(str, Enum):
    """Issue severity."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class IssueCategory(str, Enum):
    """Scoring category an issue belongs to."""

    CONSISTENCY = "consistency"
    COMPLETENESS = "completeness"
    SECURITY = "security"
    STRUCTURE = "structure"


class RiskLevel(str, Enum):
    """Heatmap bucket risk level."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class CheckStatus(str, Enum):
    """Outcome of a checklist line."""

    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"


class SummaryBadge(str, Enum):
    """Coarse health badge derived from the final score."""

    ELITE_ARCH = "ELITE_ARCH"
    HIGH_INTEGRITY = "HIGH_INTEGRITY"
    STABLE_BUILD = "STABLE_BUILD"
    DEBT_WARNING = "DEBT_WARNING"
    CRITICAL_FAILURE = "CRITICAL_FAILURE"


class ValidationIssue(Entity):
    """One triggered scoring rule."""

    id: str
    severity: Severity
    category: IssueCategory
    message: str
    suggestion: str | None = None
    auto_fixable: bool = False


class ValidationCheck(Entity):
    """Checklist line shown next to the issues; never affects the score."""

    label: str
    status: CheckStatus
    message: str


class CategoryScores(Entity):
    """Per-category scores, each in [0, 100]."""

    consistency: int = 100
    completeness: int = 100
    security: int = 100
    structure: int = 100


class HeatmapNode(Entity):
    """Risk of one top-level directory bucket."""

    path: str
    risk_score: int
    risk_level: RiskLevel
    file_count: int


class RiskMetrics(Entity):
    """Graph-level aggregates over the dependency edges."""

    fan_in_max: int = 0
    fan_out_max: int = 0
    coupling_index: float = 0.0
    isolation_score: float = 100.0
    has_circular_deps: bool = False
    hotspot_paths: list[str] = []


class ValidationReport(Entity):
    """Health report computed from one snapshot."""

    score: int
    categories: CategoryScores = CategoryScores()
    issues: list[ValidationIssue] = []
    checks: list[ValidationCheck] = []
    heatmap: list[HeatmapNode] = []
    recommendations: list[str] = []
    risk_metrics: RiskMetrics = RiskMetrics()
    summary_badge: SummaryBadge = SummaryBadge.CRITICAL_FAILURE
    updated_at: int = 0


class DriftReport(Entity):
    """Delta between a current snapshot and its baseline."""

    previous_score: int = 0
    current_score: int = 0
    delta: int = 0
    added_files: int = 0
    removed_files: int = 0
    new_dependencies: int = 0
    regressions: list[str] = Field(default_factory=list)
    improvements: list[str] = Field(default_factory=list)
    timestamp: int = 0
