"""Analysis use case - the three operations exposed to the orchestrator.

analyze -> validate -> (optionally) compute_drift. Every step returns a new
value; snapshots are never modified in place, so persistence and versioning
stay with the caller.
"""

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

import structlog

from archlens.domain.entities import (
    DependencyEdge,
    DriftReport,
    RawFile,
    RepositoryMetadata,
    ValidationReport,
)
from archlens.domain.ports.config import AnalysisConfig, AppConfig
from archlens.infrastructure.analyzer import StructuralAnalyzer, render_mermaid
from archlens.infrastructure.drift import DriftEngine
from archlens.infrastructure.validation import Validator
from archlens.shared.clock import Clock

log = structlog.get_logger()


def with_validation(metadata: RepositoryMetadata, report: ValidationReport) -> RepositoryMetadata:
    """New snapshot with the report attached."""
    return metadata.model_copy(update={"validation": report})


def with_documentation(metadata: RepositoryMetadata, documentation: Mapping[str, str]) -> RepositoryMetadata:
    """New snapshot with generated artifacts merged over the existing ones."""
    merged = {**metadata.documentation, **{str(k): str(v) for k, v in documentation.items()}}
    return metadata.model_copy(update={"documentation": merged})


class AnalysisUseCase:
    """Wires analyzer, validator and drift engine from one AppConfig."""

    def __init__(self, config: AppConfig | None = None, clock: Clock | None = None) -> None:
        self._config = config or AppConfig()
        self._analyzer = StructuralAnalyzer(limits=self._config.limits, clock=clock)
        self._validator = Validator(config=self._config.validation, clock=clock)
        self._drift = DriftEngine(clock=clock)

    @property
    def config(self) -> AppConfig:
        return self._config

    def analyze(
        self,
        name: str,
        files: Iterable[RawFile | Mapping[str, Any]],
        config: AnalysisConfig | Mapping[str, Any] | None = None,
    ) -> RepositoryMetadata:
        """Analyze a manifest. Without per-call config the AppConfig defaults apply."""
        return self._analyzer.analyze(name, files, config if config is not None else self._config.analysis)

    def validate(self, metadata: RepositoryMetadata | Mapping[str, Any]) -> ValidationReport:
        return self._validator.validate(metadata)

    def analyze_and_validate(
        self,
        name: str,
        files: Iterable[RawFile | Mapping[str, Any]],
        config: AnalysisConfig | Mapping[str, Any] | None = None,
    ) -> RepositoryMetadata:
        """Analyze, score and return the snapshot with its report attached."""
        snapshot = self.analyze(name, files, config)
        return with_validation(snapshot, self.validate(snapshot))

    def compute_drift(
        self,
        current: RepositoryMetadata,
        baseline: RepositoryMetadata | None,
    ) -> DriftReport | None:
        """Drift against baseline; None when there is no baseline to compare to."""
        if baseline is None:
            log.debug("drift_skipped", repository=current.name, reason="no_baseline")
            return None
        return self._drift.compare(current, baseline)

    def render_dependency_graph(self, edges: Sequence[DependencyEdge], limit: int | None = None) -> str:
        """Mermaid definition of the first edges (limits.max_graph_edges by default)."""
        return render_mermaid(edges, self._config.limits.max_graph_edges if limit is None else limit)
