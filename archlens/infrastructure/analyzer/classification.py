"""Shallow project classification, philosophy and roadmap for narrative generation."""

from collections.abc import Sequence

from archlens.domain.entities import Philosophy, RawFile, RoadmapItem
from archlens.domain.ports.config import AnalysisConfig
from archlens.infrastructure.analyzer.languages import basename

AUTO = "auto"
DEFAULT_PROJECT_TYPE = "general"
DEFAULT_PHILOSOPHY = "Architecture inferred from repository structure."
DEFAULT_ROADMAP = [RoadmapItem(milestone="Current architecture baseline", phase="current")]

# (marker file name, domain tag); checked in order
PROJECT_MARKERS: list[tuple[str, str]] = [
    ("package.json", "web"),
    ("setup.py", "python"),
    ("requirements.txt", "python"),
    ("pyproject.toml", "python"),
    ("go.mod", "go"),
    ("Cargo.toml", "rust"),
]


def classify_project(paths: Sequence[str], config: AnalysisConfig) -> str:
    """Explicit project type, else custom vocabulary, else built-in markers."""
    if config.project_type and config.project_type != AUTO:
        return config.project_type

    lowered = [p.lower() for p in paths]
    for pattern, domain in config.custom_vocabulary.items():
        needle = pattern.lower()
        if needle and any(needle in p for p in lowered):
            return domain

    names = {basename(p) for p in paths}
    for marker, domain in PROJECT_MARKERS:
        if marker in names:
            return domain
    return DEFAULT_PROJECT_TYPE


def _is_root_readme(path: str) -> bool:
    return "/" not in path and path.lower() == "readme.md"


def derive_philosophy(files: Sequence[RawFile], config: AnalysisConfig) -> Philosophy:
    if config.custom_philosophy:
        return Philosophy(statement=config.custom_philosophy, source="custom")

    readme = next((f for f in files if _is_root_readme(f.name)), None)
    if readme is not None and readme.content:
        for line in readme.content.splitlines():
            statement = line.strip().lstrip("#").strip()
            if statement:
                return Philosophy(statement=statement, source="readme")

    return Philosophy(statement=DEFAULT_PHILOSOPHY, source="default")


def build_roadmap(config: AnalysisConfig) -> list[RoadmapItem]:
    if config.target_roadmap:
        return [RoadmapItem(milestone=m, phase="planned") for m in config.target_roadmap]
    return list(DEFAULT_ROADMAP)
