"""Validation & Scoring Engine.

Consumes a snapshot and produces a ValidationReport: category scores, issues,
checklist, risk metrics, directory heatmap and summary badge. The report is a
deterministic function of the snapshot apart from updatedAt.
"""

from collections.abc import Mapping
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from archlens.domain.entities import (
    CategoryScores,
    CheckStatus,
    DependencyEdge,
    FileEntry,
    LanguageDetection,
    RepositoryMetadata,
    Severity,
    ValidationCheck,
    ValidationIssue,
    ValidationReport,
)
from archlens.domain.ports.config import ValidationConfig
from archlens.domain.services.scoring import clamp, final_score, summary_badge
from archlens.infrastructure.validation.risk import build_heatmap, collect_buckets, compute_risk_metrics
from archlens.infrastructure.validation.rules import INFO_CHECKS, RULES
from archlens.shared.clock import Clock, now_ms

log = structlog.get_logger()

_LIST_FIELDS: dict[str, type[BaseModel]] = {
    "structure": FileEntry,
    "dependencies": DependencyEdge,
    "languages": LanguageDetection,
}


class SnapshotShape(BaseModel):
    """Minimal fields the validator relies on."""

    name: str
    total_files: int
    structure: list[Any]
    dependencies: list[Any]
    primary_language: str

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


def _parse_items(raw: Any, model: type[BaseModel]) -> list[Any]:
    """Parse list items one by one, dropping the ones that do not fit."""
    if not isinstance(raw, list):
        return []
    items = []
    for item in raw:
        try:
            items.append(item if isinstance(item, model) else model.model_validate(item))
        except ValidationError:
            continue
    return items


def coerce_snapshot(raw: RepositoryMetadata | Mapping[str, Any] | Any) -> RepositoryMetadata:
    """Best-effort snapshot from whatever the orchestrator handed over.

    Shape mismatches are logged as warnings; scoring then proceeds against
    the fields that could be read.
    """
    if isinstance(raw, RepositoryMetadata):
        return raw
    if not isinstance(raw, Mapping):
        log.warning("snapshot_schema_mismatch", reason="not a mapping", received=type(raw).__name__)
        return RepositoryMetadata(name="unknown")

    try:
        SnapshotShape.model_validate(raw)
    except ValidationError as e:
        log.warning(
            "snapshot_schema_mismatch",
            fields=sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]}),
        )

    try:
        return RepositoryMetadata.model_validate(raw)
    except ValidationError:
        pass

    cleaned: dict[str, Any] = {k: v for k, v in raw.items() if k != "validation"}
    for key, model in _LIST_FIELDS.items():
        for spelling in (key, to_camel(key)):
            if spelling in cleaned:
                cleaned[spelling] = _parse_items(cleaned[spelling], model)
    cleaned.setdefault("name", "unknown")

    # Drop offending top-level keys until the rest validates
    for _ in range(len(cleaned) + 1):
        try:
            return RepositoryMetadata.model_validate(cleaned)
        except ValidationError as e:
            bad = {err["loc"][0] for err in e.errors() if err["loc"]}
            if not bad:
                break
            for key in bad:
                cleaned.pop(key, None)
            cleaned.setdefault("name", "unknown")
    return RepositoryMetadata(name=str(raw.get("name") or "unknown"))


class Validator:
    """Scores snapshots. Holds configuration only; safe to share."""

    def __init__(self, config: ValidationConfig | None = None, clock: Clock | None = None):
        self.config = config or ValidationConfig()
        self._clock = clock or now_ms

    def validate(
        self,
        metadata: RepositoryMetadata | Mapping[str, Any],
        overrides: Mapping[str, int] | None = None,
    ) -> ValidationReport:
        """Score one snapshot.

        Args:
            metadata: Snapshot, or its serialised form.
            overrides: Starting values for categories (e.g. an externally
                computed completeness score). Penalties apply on top.

        Returns:
            ValidationReport; the snapshot itself is left untouched.
        """
        snapshot = coerce_snapshot(metadata)

        buckets = collect_buckets(snapshot.structure, snapshot.dependencies)
        risk = compute_risk_metrics(snapshot.dependencies, buckets, self.config.cycle_detection)

        scores = CategoryScores().model_dump()
        for category, value in (overrides or {}).items():
            if category in scores:
                scores[category] = int(clamp(int(value)))

        issues: list[ValidationIssue] = []
        checks: list[ValidationCheck] = []
        for rule in RULES:
            message = rule.evaluate(snapshot, risk)
            if message is None:
                checks.append(ValidationCheck(label=rule.label, status=CheckStatus.PASS, message="No findings"))
                continue
            category = rule.category.value
            scores[category] = max(0, scores[category] - rule.penalty)
            issues.append(rule.issue(message))
            checks.append(ValidationCheck(label=rule.label, status=CheckStatus.FAIL, message=message))

        checks.extend(check(snapshot) for check in INFO_CHECKS)

        # Stable: critical first, everything else keeps rule order
        issues.sort(key=lambda i: 0 if i.severity == Severity.CRITICAL else 1)

        categories = CategoryScores(**scores)
        score = final_score(categories)
        report = ValidationReport(
            score=score,
            categories=categories,
            issues=issues,
            checks=checks,
            heatmap=build_heatmap(buckets),
            recommendations=[i.suggestion or "" for i in issues],
            risk_metrics=risk,
            summary_badge=summary_badge(score),
            updated_at=self._clock(),
        )
        log.info(
            "validation_completed",
            repository=snapshot.name,
            score=score,
            badge=report.summary_badge.value,
            issues=len(issues),
        )
        return report
