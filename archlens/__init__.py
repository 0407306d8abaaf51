"""ArchLens - repository structural-intelligence engine.

    snapshot = analyze("my-repo", files)
    report = validate(snapshot)
    snapshot = with_validation(snapshot, report)
    drift = compute_drift(snapshot, previous_snapshot)
"""

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from archlens.application.analysis import AnalysisUseCase, with_documentation, with_validation
from archlens.domain.entities import (
    DependencyEdge,
    DriftReport,
    RawFile,
    RepositoryMetadata,
    ValidationReport,
)
from archlens.domain.ports.config import AnalysisConfig, AppConfig

__version__ = "0.1.0"

_default = AnalysisUseCase()


def analyze(
    name: str,
    files: Iterable[RawFile | Mapping[str, Any]],
    config: AnalysisConfig | Mapping[str, Any] | None = None,
) -> RepositoryMetadata:
    """Analyze a manifest into a snapshot."""
    return _default.analyze(name, files, config)


def validate(metadata: RepositoryMetadata | Mapping[str, Any]) -> ValidationReport:
    """Score a snapshot."""
    return _default.validate(metadata)


def compute_drift(current: RepositoryMetadata, baseline: RepositoryMetadata | None) -> DriftReport | None:
    """Drift of current against baseline, None without a baseline."""
    return _default.compute_drift(current, baseline)


def render_dependency_graph(edges: Sequence[DependencyEdge], limit: int | None = None) -> str:
    """Mermaid graph of the first dependency edges."""
    return _default.render_dependency_graph(edges, limit)


__all__ = [
    "AnalysisConfig",
    "AnalysisUseCase",
    "AppConfig",
    "analyze",
    "compute_drift",
    "render_dependency_graph",
    "validate",
    "with_documentation",
    "with_validation",
]
