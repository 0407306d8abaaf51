"""Structural Analyzer module."""

from archlens.infrastructure.analyzer.dependency_graph import (
    PathIndex,
    find_cycles,
    render_mermaid,
    resolve_go_import,
    resolve_python_module,
    resolve_relative_specifier,
)
from archlens.infrastructure.analyzer.languages import detect_extension, detect_language
from archlens.infrastructure.analyzer.strategies import LanguageStrategy, strategy_for
from archlens.infrastructure.analyzer.structural_analyzer import StructuralAnalyzer
from archlens.infrastructure.analyzer.workspace import WorkspaceInfo, detect_workspaces

__all__ = [
    "StructuralAnalyzer",
    "LanguageStrategy",
    "strategy_for",
    "PathIndex",
    "find_cycles",
    "render_mermaid",
    "resolve_go_import",
    "resolve_python_module",
    "resolve_relative_specifier",
    "detect_extension",
    "detect_language",
    "WorkspaceInfo",
    "detect_workspaces",
]
