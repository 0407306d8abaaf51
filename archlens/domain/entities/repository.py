"""Repository snapshot entities.

Immutable pydantic models describing one analysed repository: manifest records
coming in, classified files, dependency edges, language distribution and the
snapshot that carries all of them. Field names are snake_case in Python and
camelCase on the wire; both spellings are accepted on input.
"""

import math
from enum import Enum
from typing import Any

from pydantic import AliasChoices, Field, field_validator, model_validator

from archlens.domain.entities.base import Entity
from archlens.domain.entities.report import ValidationReport


class EntryType(str, Enum):
    """Kind of manifest entry."""

    FILE = "file"
    DIRECTORY = "directory"


class EdgeKind(str, Enum):
    """How a dependency edge was discovered."""

    IMPORT = "import"
    REQUIRE = "require"
    STATIC = "static"
    WORKSPACE = "workspace"


class RawFile(Entity):
    """One manifest record as handed over by the ingestion layer."""

    # Full relative path; "path" is accepted as a synonym on input
    name: str = Field(validation_alias=AliasChoices("name", "path"))
    size: int = 0
    entry_type: EntryType = Field(default=EntryType.FILE, alias="type")
    content: str | None = None

    @field_validator("size", mode="before")
    @classmethod
    def _size_or_zero(cls, value: Any) -> int:
        """Numeric sizes are truncated to int; anything unusable counts as 0."""
        if isinstance(value, bool):
            return 0
        if isinstance(value, (int, float)):
            return int(value) if math.isfinite(value) else 0
        if isinstance(value, str):
            try:
                return int(float(value))
            except (ValueError, OverflowError):
                return 0
        return 0

    @field_validator("content", mode="before")
    @classmethod
    def _content_as_text(cls, value: Any) -> str | None:
        """Bytes are decoded leniently; other non-text payloads are dropped."""
        if isinstance(value, (bytes, bytearray)):
            return bytes(value).decode("utf-8", errors="replace")
        return value if isinstance(value, str) else None

    @field_validator("entry_type", mode="before")
    @classmethod
    def _unknown_type_is_file(cls, value: Any) -> Any:
        return EntryType.DIRECTORY if value == "directory" else EntryType.FILE


class SymbolCounts(Entity):
    """Heuristic symbol counts for one file."""

    classes: int = 0
    functions: int = 0
    exports: int = 0

    @property
    def total(self) -> int:
        return self.classes + self.functions + self.exports


class FileEntry(Entity):
    """A classified file of the snapshot. Path is unique within a snapshot."""

    path: str
    name: str
    size: int = 0
    entry_type: EntryType = Field(default=EntryType.FILE, alias="type")
    extension: str = "unknown"
    language: str = "Other"
    symbols: SymbolCounts = SymbolCounts()

    @model_validator(mode="before")
    @classmethod
    def _name_defaults_to_basename(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("name") and isinstance(data.get("path"), str):
            return {**data, "name": data["path"].rsplit("/", 1)[-1]}
        return data


class LanguageDetection(Entity):
    """Share of one language in the snapshot."""

    language: str
    file_count: int
    percentage: int


class DependencyEdge(Entity):
    """Directed intra-repository dependency between two manifest paths."""

    source: str
    target: str
    kind: EdgeKind = Field(default=EdgeKind.IMPORT, alias="type")

    @property
    def key(self) -> str:
        return f"{self.source}->{self.target}"


class Philosophy(Entity):
    """Short statement of the project's intent, used for narrative generation."""

    statement: str = ""
    source: str = "default"  # readme | custom | default


class RoadmapItem(Entity):
    """One roadmap milestone carried on the snapshot."""

    milestone: str
    phase: str = "current"


class RepositoryMetadata(Entity):
    """A fully computed snapshot of one repository at one point in time."""

    name: str
    total_files: int = 0
    total_size: int = 0
    total_symbols: int = 0
    primary_language: str = "Unknown"
    languages: list[LanguageDetection] = []
    structure: list[FileEntry] = []
    dependencies: list[DependencyEdge] = []
    is_monorepo: bool = False
    workspaces: list[str] = []
    project_type: str = "general"
    philosophy: Philosophy = Philosophy()
    roadmap: list[RoadmapItem] = []
    documentation: dict[str, str] = {}
    validation: ValidationReport | None = None
    analyzed_at: int = 0

    @property
    def score(self) -> int:
        """Health score of the attached report, 0 when not validated yet."""
        return self.validation.score if self.validation is not None else 0

    def comparable(self) -> dict[str, Any]:
        """Serialised snapshot without wall-clock fields."""
        exclude: dict[str, Any] = {"analyzed_at": True}
        if self.validation is not None:
            exclude["validation"] = {"updated_at": True}
        return self.model_dump(mode="json", by_alias=True, exclude=exclude)
