"""Risk metrics and directory heatmap.

Files are bucketed by their top-level path segment ("src/api/x.ts" -> "src");
files at the repository root share the "root" bucket.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from archlens.domain.entities import DependencyEdge, FileEntry, HeatmapNode, RiskMetrics
from archlens.domain.services.scoring import round_half_up, risk_level
from archlens.infrastructure.analyzer.dependency_graph import find_cycles

ROOT_BUCKET = "root"
HOTSPOT_COUPLING_THRESHOLD = 5
CIRCULAR_COUPLING_THRESHOLD = 30
MAX_RISK_SCORE = 100


@dataclass
class BucketStats:
    """Aggregates for one top-level directory."""

    file_count: int = 0
    max_depth: int = 0
    coupling_sum: int = 0  # edges whose target lives in this bucket

    @property
    def risk_score(self) -> int:
        raw = (self.file_count / 10) * 20 + self.max_depth * 5 + self.coupling_sum * 2
        return min(MAX_RISK_SCORE, round_half_up(raw))


def bucket_of(path: str) -> str:
    if "/" not in path:
        return ROOT_BUCKET
    return path.split("/", 1)[0]


def collect_buckets(structure: Sequence[FileEntry], edges: Sequence[DependencyEdge]) -> dict[str, BucketStats]:
    """Bucket stats in first-seen order."""
    buckets: dict[str, BucketStats] = {}
    for entry in structure:
        stats = buckets.setdefault(bucket_of(entry.path), BucketStats())
        stats.file_count += 1
        stats.max_depth = max(stats.max_depth, len(entry.path.split("/")))

    for edge in edges:
        stats = buckets.get(bucket_of(edge.target))
        if stats is not None:
            stats.coupling_sum += 1
    return buckets


def build_heatmap(buckets: dict[str, BucketStats]) -> list[HeatmapNode]:
    """One node per bucket, riskiest first; ties keep first-seen order."""
    nodes = [
        HeatmapNode(
            path=path,
            risk_score=stats.risk_score,
            risk_level=risk_level(stats.risk_score),
            file_count=stats.file_count,
        )
        for path, stats in buckets.items()
    ]
    return sorted(nodes, key=lambda n: n.risk_score, reverse=True)


def fan_maps(edges: Sequence[DependencyEdge]) -> tuple[dict[str, int], dict[str, int]]:
    """(fan-in per target, fan-out per source)."""
    fan_in: dict[str, int] = {}
    fan_out: dict[str, int] = {}
    for edge in edges:
        fan_out[edge.source] = fan_out.get(edge.source, 0) + 1
        fan_in[edge.target] = fan_in.get(edge.target, 0) + 1
    return fan_in, fan_out


def compute_risk_metrics(
    edges: Sequence[DependencyEdge],
    buckets: dict[str, BucketStats],
    cycle_detection: str = "heuristic",
) -> RiskMetrics:
    """Graph-level aggregates.

    hasCircularDeps is a coupling proxy (couplingIndex > 30) unless
    cycle_detection is "graph", which runs a real depth-first cycle search.
    """
    fan_in, fan_out = fan_maps(edges)
    fan_in_max = max(fan_in.values(), default=0)
    fan_out_max = max(fan_out.values(), default=0)
    coupling_index = (fan_in_max + fan_out_max) / 2

    if cycle_detection == "graph":
        has_cycles = bool(find_cycles(edges))
    else:
        has_cycles = coupling_index > CIRCULAR_COUPLING_THRESHOLD

    return RiskMetrics(
        fan_in_max=fan_in_max,
        fan_out_max=fan_out_max,
        coupling_index=coupling_index,
        isolation_score=max(0.0, 100 - coupling_index * 5),
        has_circular_deps=has_cycles,
        hotspot_paths=[
            path for path, stats in buckets.items() if stats.coupling_sum > HOTSPOT_COUPLING_THRESHOLD
        ],
    )
