"""Drift Engine - compares a snapshot against its baseline."""

import structlog

from archlens.domain.entities import DriftReport, RepositoryMetadata
from archlens.shared.clock import Clock, now_ms

log = structlog.get_logger()

# File-count growth beyond this is reported as unmodularized expansion
GROWTH_LIMIT = 50

NEW_CYCLES_MESSAGE = "New architectural dependency cycles introduced."
GROWTH_MESSAGE = "Significant expansion of code surface without modularization."


def _has_cycles(snapshot: RepositoryMetadata) -> bool:
    return snapshot.validation is not None and snapshot.validation.risk_metrics.has_circular_deps


class DriftEngine:
    """Rule-based narrative over the difference of two snapshots."""

    def __init__(self, clock: Clock | None = None):
        self._clock = clock or now_ms

    def compare(self, current: RepositoryMetadata, baseline: RepositoryMetadata) -> DriftReport:
        """Compute drift of current relative to baseline.

        Scores come from the attached validation reports; a snapshot that was
        never validated counts as 0.
        """
        previous_score = baseline.score
        current_score = current.score
        delta = current_score - previous_score

        current_files = {f.path for f in current.structure}
        baseline_files = {f.path for f in baseline.structure}
        current_deps = {d.key for d in current.dependencies}
        baseline_deps = {d.key for d in baseline.dependencies}

        regressions: list[str] = []
        improvements: list[str] = []
        if delta < 0:
            regressions.append(f"Overall health decreased by {abs(delta):.1f}%")
        elif delta > 0:
            improvements.append(f"Overall health increased by {delta:.1f}%")
        if _has_cycles(current) and not _has_cycles(baseline):
            regressions.append(NEW_CYCLES_MESSAGE)
        if current.total_files > baseline.total_files + GROWTH_LIMIT:
            regressions.append(GROWTH_MESSAGE)

        report = DriftReport(
            previous_score=previous_score,
            current_score=current_score,
            delta=delta,
            added_files=len(current_files - baseline_files),
            removed_files=len(baseline_files - current_files),
            new_dependencies=len(current_deps - baseline_deps),
            regressions=regressions,
            improvements=improvements,
            timestamp=self._clock(),
        )
        log.info(
            "drift_computed",
            repository=current.name,
            delta=delta,
            regressions=len(regressions),
            improvements=len(improvements),
        )
        return report
