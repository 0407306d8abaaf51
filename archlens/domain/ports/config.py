"""Config Port - configuration models for analysis runs and the engine itself."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class AnalysisConfig(BaseModel):
    """Per-call analyzer options. Unknown keys are ignored, not rejected."""

    # Case-insensitive substrings; any match anywhere in a path drops the file.
    exclude_patterns: list[str] = []
    project_type: str = "auto"  # "auto" | domain tag
    # Path substring -> domain tag. Checked in insertion order, wins over built-in markers.
    custom_vocabulary: dict[str, str] = {}
    custom_philosophy: str | None = None
    target_roadmap: list[str] | None = None

    model_config = ConfigDict(extra="ignore", alias_generator=to_camel, populate_by_name=True)

    @field_validator("target_roadmap", mode="before")
    @classmethod
    def _roadmap_entries_as_text(cls, value: Any) -> Any:
        """Accept plain strings or {milestone|title|label: ...} objects."""
        if not isinstance(value, list):
            return value
        items: list[str] = []
        for entry in value:
            if isinstance(entry, dict):
                text = entry.get("milestone") or entry.get("title") or entry.get("label")
                if text:
                    items.append(str(text))
            elif entry:
                items.append(str(entry))
        return items


class LimitsConfig(BaseModel):
    """Resource guards. Not algorithmic requirements, just cost control."""

    max_dependency_edges: int = Field(1000, ge=0)
    max_graph_edges: int = Field(60, ge=0)  # Mermaid rendering only
    max_workers: int = Field(4, ge=1)  # 1 = no thread pool


class ValidationConfig(BaseModel):
    """Validator behaviour switches."""

    # "heuristic": couplingIndex > 30 counts as cyclic (historical scoring).
    # "graph": depth-first cycle search over the edges; changes scoring outcomes.
    cycle_detection: Literal["heuristic", "graph"] = "heuristic"


class AppConfig(BaseModel):
    """Full engine configuration."""

    analysis: AnalysisConfig = AnalysisConfig()
    limits: LimitsConfig = LimitsConfig()
    validation: ValidationConfig = ValidationConfig()
    log_level: str = "INFO"
    # Log file: path relative to cwd or absolute. Empty = only stdout. Rotation when file exceeds max_mb.
    log_file: str = ""
    log_rotation_max_mb: int = 5
    log_rotation_backups: int = 3

