"""Tests for AnalysisUseCase and the package-level entry points."""

import archlens
from archlens.application.analysis import AnalysisUseCase, with_documentation, with_validation
from archlens.domain.entities import SummaryBadge
from archlens.domain.ports.config import AnalysisConfig, AppConfig, LimitsConfig


def _clock():
    return 7


class TestAnalysisUseCase:
    """Analyze -> validate -> drift with explicit value passing."""

    def test_analyze_and_validate(self, clean_manifest):
        use_case = AnalysisUseCase(clock=_clock)
        snapshot = use_case.analyze_and_validate("orders", clean_manifest)
        assert snapshot.validation is not None
        assert snapshot.score == 100
        assert snapshot.validation.summary_badge is SummaryBadge.ELITE_ARCH
        assert snapshot.analyzed_at == 7

    def test_default_exclusions_from_config(self):
        """Without per-call options the configured exclusions apply."""
        config = AppConfig(analysis=AnalysisConfig(exclude_patterns=["vendor/"]))
        snapshot = AnalysisUseCase(config=config).analyze("r", [{"name": "vendor/x.go"}, {"name": "main.go"}])
        assert snapshot.total_files == 1

    def test_per_call_options_win(self):
        config = AppConfig(analysis=AnalysisConfig(exclude_patterns=["vendor/"]))
        snapshot = AnalysisUseCase(config=config).analyze("r", [{"name": "vendor/x.go"}], {"excludePatterns": []})
        assert snapshot.total_files == 1

    def test_documentation_feeds_validation(self, clean_manifest):
        """A summary that ignores the stack costs consistency points."""
        use_case = AnalysisUseCase(clock=_clock)
        snapshot = with_documentation(use_case.analyze("orders", clean_manifest), {"summary": "A Rust CLI."})
        report = use_case.validate(snapshot)
        assert report.categories.consistency == 70
        assert snapshot.validation is None

    def test_with_documentation_merges(self, clean_manifest):
        snapshot = AnalysisUseCase().analyze("orders", clean_manifest)
        first = with_documentation(snapshot, {"summary": "x", "overview": "y"})
        second = with_documentation(first, {"summary": "z"})
        assert second.documentation == {"summary": "z", "overview": "y"}
        assert first.documentation["summary"] == "x"

    def test_drift_between_runs(self, clean_manifest):
        use_case = AnalysisUseCase(clock=_clock)
        baseline = use_case.analyze_and_validate("orders", clean_manifest)
        current = use_case.analyze_and_validate("orders", clean_manifest + [{"name": "config/.env"}])
        drift = use_case.compute_drift(current, baseline)
        assert drift.delta == -21
        assert drift.added_files == 1
        assert drift.regressions == ["Overall health decreased by 21.0%"]

    def test_drift_without_baseline(self, clean_manifest):
        use_case = AnalysisUseCase()
        assert use_case.compute_drift(use_case.analyze("orders", clean_manifest), None) is None

    def test_render_dependency_graph_limit(self):
        config = AppConfig(limits=LimitsConfig(max_graph_edges=1))
        use_case = AnalysisUseCase(config=config)
        snapshot = use_case.analyze(
            "r",
            [
                {"name": "a.ts", "content": "import './b'\nimport './c'"},
                {"name": "b.ts"},
                {"name": "c.ts"},
            ],
        )
        lines = use_case.render_dependency_graph(snapshot.dependencies).splitlines()
        assert lines[0] == "graph LR"
        assert len(lines) == 3
        assert lines[-1] == "    %% 1 more edges not shown"


class TestPackageFacade:
    """Module-level functions."""

    def test_round_trip(self, clean_manifest):
        snapshot = archlens.analyze("orders", clean_manifest)
        report = archlens.validate(snapshot)
        validated = with_validation(snapshot, report)
        assert validated.score == report.score
        assert archlens.compute_drift(validated, None) is None
        assert archlens.render_dependency_graph(snapshot.dependencies).startswith("graph LR")
