"""Domain entities: repository snapshot and its reports."""

from archlens.domain.entities.report import (
    CategoryScores,
    CheckStatus,
    DriftReport,
    HeatmapNode,
    IssueCategory,
    RiskLevel,
    RiskMetrics,
    Severity,
    SummaryBadge,
    ValidationCheck,
    ValidationIssue,
    ValidationReport,
)
from archlens.domain.entities.repository import (
    DependencyEdge,
    EdgeKind,
    EntryType,
    FileEntry,
    LanguageDetection,
    Philosophy,
    RawFile,
    RepositoryMetadata,
    RoadmapItem,
    SymbolCounts,
)

__all__ = [
    "CategoryScores",
    "CheckStatus",
    "DependencyEdge",
    "DriftReport",
    "EdgeKind",
    "EntryType",
    "FileEntry",
    "HeatmapNode",
    "IssueCategory",
    "LanguageDetection",
    "Philosophy",
    "RawFile",
    "RepositoryMetadata",
    "RiskLevel",
    "RiskMetrics",
    "RoadmapItem",
    "Severity",
    "SummaryBadge",
    "SymbolCounts",
    "ValidationCheck",
    "ValidationIssue",
    "ValidationReport",
]
