"""Structural Analyzer - turns a raw file manifest into a repository snapshot.

Classifies every file by language, counts symbols, extracts intra-repository
dependency edges, aggregates the language distribution and detects monorepos.

Everything works on the in-memory manifest: no filesystem or network access,
no state kept between calls. Per-file extraction may run on a thread pool,
results are always collected in manifest order.
"""

from collections.abc import Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any

import structlog
from pydantic import ValidationError

from archlens.domain.entities import (
    DependencyEdge,
    FileEntry,
    LanguageDetection,
    RawFile,
    RepositoryMetadata,
    SymbolCounts,
)
from archlens.domain.ports.config import AnalysisConfig, LimitsConfig
from archlens.domain.services.scoring import round_half_up
from archlens.infrastructure.analyzer.classification import (
    build_roadmap,
    classify_project,
    derive_philosophy,
)
from archlens.infrastructure.analyzer.dependency_graph import PathIndex, cap_edges
from archlens.infrastructure.analyzer.languages import basename, detect_extension, detect_language
from archlens.infrastructure.analyzer.strategies import strategy_for
from archlens.infrastructure.analyzer.workspace import (
    PACKAGE_MANIFEST,
    WorkspaceLinker,
    detect_workspaces,
)
from archlens.shared.clock import Clock, now_ms

log = structlog.get_logger()

UNKNOWN_LANGUAGE = "Unknown"

# Minimum number of files with content before the thread pool is used
PARALLEL_THRESHOLD = 64


@dataclass
class _FileScan:
    """Result of scanning one manifest record."""

    entry: FileEntry
    edges: list[DependencyEdge] = field(default_factory=list)


def coerce_files(files: Iterable[RawFile | Mapping[str, Any]]) -> list[RawFile]:
    """Accept RawFile instances or plain mappings; unusable records are skipped."""
    records: list[RawFile] = []
    for position, item in enumerate(files):
        if isinstance(item, RawFile):
            records.append(item)
            continue
        try:
            records.append(RawFile.model_validate(item))
        except ValidationError as e:
            log.warning("manifest_record_invalid", position=position, errors=e.error_count())
    return records


def coerce_config(config: AnalysisConfig | Mapping[str, Any] | None) -> AnalysisConfig:
    if config is None:
        return AnalysisConfig()
    if isinstance(config, AnalysisConfig):
        return config
    try:
        return AnalysisConfig.model_validate(config)
    except ValidationError as e:
        log.warning("analysis_config_invalid", errors=e.error_count())
        return AnalysisConfig()


def is_excluded(path: str, patterns: list[str]) -> bool:
    lowered = path.lower()
    return any(p in lowered for p in patterns)


class StructuralAnalyzer:
    """Builds RepositoryMetadata snapshots from raw manifests.

    Instances hold only configuration, so one analyzer can serve concurrent
    calls for independent repositories.
    """

    def __init__(self, limits: LimitsConfig | None = None, clock: Clock | None = None):
        """Create an analyzer.

        Args:
            limits: Edge cap and worker count. Defaults to LimitsConfig().
            clock: Source of analyzedAt (epoch ms). Defaults to wall clock.
        """
        self.limits = limits or LimitsConfig()
        self._clock = clock or now_ms

    def analyze(
        self,
        name: str,
        files: Iterable[RawFile | Mapping[str, Any]],
        config: AnalysisConfig | Mapping[str, Any] | None = None,
    ) -> RepositoryMetadata:
        """Analyze one manifest.

        Args:
            name: Repository name.
            files: Manifest records (full relative path, size, optional content).
            config: Per-call options; unknown keys are ignored.

        Returns:
            Snapshot with validation unset and analyzedAt stamped.
        """
        raw = coerce_files(files)
        options = coerce_config(config)
        patterns = [p.lower() for p in options.exclude_patterns if p]
        kept = [f for f in raw if not is_excluded(f.name, patterns)]

        log.info("analysis_started", repository=name, files=len(raw), excluded=len(raw) - len(kept))

        # Monorepo detection runs on the unfiltered manifest
        workspace = detect_workspaces(raw)
        linker = WorkspaceLinker(kept) if workspace.is_monorepo else None
        index = PathIndex(f.name for f in kept)

        scans = self._scan_all(kept, index, linker)

        structure = [s.entry for s in scans]
        edges: list[DependencyEdge] = [e for s in scans for e in s.edges]
        if len(edges) > self.limits.max_dependency_edges:
            log.info(
                "dependency_edges_truncated",
                repository=name,
                discovered=len(edges),
                kept=self.limits.max_dependency_edges,
            )
        edges = cap_edges(edges, self.limits.max_dependency_edges)

        languages = self._language_distribution(structure)
        paths = [f.name for f in kept]

        snapshot = RepositoryMetadata(
            name=name,
            total_files=len(structure),
            total_size=sum(e.size for e in structure),
            total_symbols=sum(e.symbols.total for e in structure),
            primary_language=languages[0].language if languages else UNKNOWN_LANGUAGE,
            languages=languages,
            structure=structure,
            dependencies=edges,
            is_monorepo=workspace.is_monorepo,
            workspaces=workspace.workspaces,
            project_type=classify_project(paths, options),
            philosophy=derive_philosophy(kept, options),
            roadmap=build_roadmap(options),
            analyzed_at=self._clock(),
        )
        log.info(
            "analysis_completed",
            repository=name,
            files=snapshot.total_files,
            edges=len(edges),
            primary_language=snapshot.primary_language,
            monorepo=snapshot.is_monorepo,
        )
        return snapshot

    def _scan_all(
        self,
        files: list[RawFile],
        index: PathIndex,
        linker: WorkspaceLinker | None,
    ) -> list[_FileScan]:
        with_content = sum(1 for f in files if f.content is not None)
        if self.limits.max_workers <= 1 or with_content < PARALLEL_THRESHOLD:
            return [self._scan_file(f, index, linker) for f in files]

        # Executor.map yields in submission order, so manifest order is preserved
        with ThreadPoolExecutor(max_workers=self.limits.max_workers) as executor:
            return list(executor.map(lambda f: self._scan_file(f, index, linker), files))

    def _scan_file(self, raw: RawFile, index: PathIndex, linker: WorkspaceLinker | None) -> _FileScan:
        extension = detect_extension(raw.name)
        language = detect_language(extension)
        symbols = SymbolCounts()
        edges: list[DependencyEdge] = []

        if raw.content is not None:
            strategy = strategy_for(language)
            try:
                symbols = strategy.count_symbols(raw.content)
                edges = strategy.extract_dependencies(raw.name, raw.content, index)
            except Exception as e:
                # One bad file must not abort the whole manifest
                log.warning("file_scan_failed", path=raw.name, language=language, error=str(e))
                symbols, edges = SymbolCounts(), []

        if linker is not None and basename(raw.name) == PACKAGE_MANIFEST:
            edges = edges + linker.edges_for(raw.name)

        entry = FileEntry(
            path=raw.name,
            name=basename(raw.name),
            size=raw.size,
            entry_type=raw.entry_type,
            extension=extension,
            language=language,
            symbols=symbols,
        )
        return _FileScan(entry=entry, edges=edges)

    @staticmethod
    def _language_distribution(structure: list[FileEntry]) -> list[LanguageDetection]:
        counts: dict[str, int] = {}
        for entry in structure:
            counts[entry.language] = counts.get(entry.language, 0) + 1

        total = max(1, len(structure))
        detections = [
            LanguageDetection(
                language=language,
                file_count=count,
                percentage=round_half_up(count / total * 100),
            )
            for language, count in counts.items()
        ]
        # sorted() is stable: ties keep first-appearance order
        return sorted(detections, key=lambda d: d.file_count, reverse=True)
