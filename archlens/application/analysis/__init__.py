"""Analysis application layer - orchestrator-facing operations."""

from archlens.application.analysis.use_case import (
    AnalysisUseCase,
    with_documentation,
    with_validation,
)

__all__ = ["AnalysisUseCase", "with_documentation", "with_validation"]
