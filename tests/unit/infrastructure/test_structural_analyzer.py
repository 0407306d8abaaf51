"""Tests for StructuralAnalyzer."""

import json

import pytest

from archlens.domain.entities import EdgeKind, RawFile
from archlens.domain.ports.config import AnalysisConfig, LimitsConfig
from archlens.infrastructure.analyzer import StructuralAnalyzer
from archlens.infrastructure.analyzer.structural_analyzer import PARALLEL_THRESHOLD, coerce_files, is_excluded


class TestEndToEnd:
    """Minimal TypeScript manifest from the ingestion layer."""

    def test_single_import(self, analyzer, validator):
        """index.ts importing ./util yields one edge and coupling 1."""
        files = [
            {"path": "src/index.ts", "content": "import x from './util'"},
            {"path": "src/util.ts", "content": ""},
        ]
        snapshot = analyzer.analyze("demo", files)

        assert [e.model_dump(by_alias=True, mode="json") for e in snapshot.dependencies] == [
            {"source": "src/index.ts", "target": "src/util.ts", "type": "import"}
        ]
        assert snapshot.primary_language == "TypeScript"

        risk = validator.validate(snapshot).risk_metrics
        assert risk.fan_in_max == 1
        assert risk.fan_out_max == 1
        assert risk.coupling_index == 1

    def test_analyzed_at_from_clock(self):
        analyzer = StructuralAnalyzer(clock=lambda: 42)
        assert analyzer.analyze("demo", []).analyzed_at == 42


class TestExclusion:
    """Excluded paths vanish from every aggregate."""

    def test_totals_after_exclusion(self, analyzer):
        files = [
            {"name": "src/a.ts", "size": 10, "content": "import './b'"},
            {"name": "src/b.ts", "size": 20},
            {"name": "node_modules/lib/index.js", "size": 1000},
            {"name": "DIST/bundle.js", "size": 500},
        ]
        snapshot = analyzer.analyze("r", files, {"excludePatterns": ["node_modules/", "dist/"]})
        assert snapshot.total_files == 2
        assert snapshot.total_size == 30
        assert [f.path for f in snapshot.structure] == ["src/a.ts", "src/b.ts"]

    def test_excluded_targets_do_not_resolve(self, analyzer):
        files = [
            {"name": "src/a.ts", "content": "import './gen/b'"},
            {"name": "src/gen/b.ts"},
        ]
        snapshot = analyzer.analyze("r", files, AnalysisConfig(exclude_patterns=["GEN/"]))
        assert snapshot.dependencies == []

    @pytest.mark.parametrize(
        ("path", "expected"),
        [("a/Node_Modules/x.js", True), ("src/app.ts", False), ("build/out.ts", True)],
    )
    def test_is_excluded(self, path, expected):
        assert is_excluded(path, ["node_modules", "build/"]) is expected


class TestLanguages:
    """Language distribution."""

    def test_percentages_and_order(self, analyzer):
        """Sorted by count, ties keep first appearance, half-up percentages."""
        files = [{"name": n} for n in ["a.md", "b.ts", "c.ts", "d.py", "e.ts", "f.py", "g.md", "h.py"]]
        snapshot = analyzer.analyze("r", files)
        assert [(d.language, d.file_count, d.percentage) for d in snapshot.languages] == [
            ("TypeScript", 3, 38),
            ("Python", 3, 38),
            ("Markdown", 2, 25),
        ]
        assert snapshot.primary_language == "TypeScript"

    def test_empty_manifest(self, analyzer):
        snapshot = analyzer.analyze("empty", [])
        assert snapshot.total_files == 0
        assert snapshot.languages == []
        assert snapshot.primary_language == "Unknown"

    def test_symbols_total(self, analyzer):
        files = [{"name": "a.py", "content": "class A:\n    def f(self):\n        pass\n"}]
        snapshot = analyzer.analyze("r", files)
        assert snapshot.structure[0].symbols.classes == 1
        assert snapshot.structure[0].symbols.functions == 1
        assert snapshot.total_symbols == 3  # class, method, exported class


class TestDependencies:
    """Edge extraction and capping."""

    def test_idempotent(self, analyzer):
        files = [
            {"name": "src/a.ts", "content": "import { b } from './b'\nconst c = require('./c')"},
            {"name": "src/b.ts", "content": "import './c'"},
            {"name": "src/c.js"},
        ]
        first = analyzer.analyze("r", files)
        second = analyzer.analyze("r", files)
        assert first.comparable() == second.comparable()
        assert [(e.source, e.target, e.kind) for e in first.dependencies] == [
            ("src/a.ts", "src/b.ts", EdgeKind.IMPORT),
            ("src/a.ts", "src/c.js", EdgeKind.REQUIRE),
            ("src/b.ts", "src/c.js", EdgeKind.IMPORT),
        ]

    def test_duplicate_edges_kept(self, analyzer):
        files = [{"name": "a.ts", "content": "import './b'\nimport './b'"}, {"name": "b.ts"}]
        assert len(analyzer.analyze("r", files).dependencies) == 2

    def test_edge_cap(self):
        """Only the first max_dependency_edges edges survive, in scan order."""
        lines = "\n".join(f"import './m{i}'" for i in range(1200))
        files = [{"name": "hub.ts", "content": lines}] + [{"name": f"m{i}.ts"} for i in range(1200)]
        snapshot = StructuralAnalyzer(limits=LimitsConfig(max_workers=1)).analyze("r", files)
        assert len(snapshot.dependencies) == 1000
        assert snapshot.dependencies[0].target == "m0.ts"
        assert snapshot.dependencies[-1].target == "m999.ts"

    def test_parallel_matches_sequential(self):
        """Thread pool output keeps manifest order."""
        files = []
        for i in range(PARALLEL_THRESHOLD + 10):
            files.append({"name": f"pkg/m{i}.py", "content": f"from pkg import m{i + 1}\nimport pkg.m{i + 1}\n"})
        sequential = StructuralAnalyzer(limits=LimitsConfig(max_workers=1), clock=lambda: 0).analyze("r", files)
        parallel = StructuralAnalyzer(limits=LimitsConfig(max_workers=4), clock=lambda: 0).analyze("r", files)
        assert parallel.model_dump() == sequential.model_dump()


class TestMonorepo:
    """Workspace detection inside analyze()."""

    def test_workspaces(self, analyzer):
        files = [
            {"name": "package.json", "content": json.dumps({"workspaces": ["packages/*"]})},
            {"name": "packages/app/package.json", "content": json.dumps({"name": "app", "dependencies": {"lib": "1"}})},
            {"name": "packages/lib/package.json", "content": json.dumps({"name": "lib"})},
        ]
        snapshot = analyzer.analyze("mono", files)
        assert snapshot.is_monorepo is True
        assert snapshot.workspaces == ["packages/*"]
        assert [(e.source, e.target, e.kind) for e in snapshot.dependencies] == [
            ("packages/app/package.json", "packages/lib/package.json", EdgeKind.WORKSPACE)
        ]

    def test_detection_uses_unfiltered_manifest(self, analyzer):
        """An excluded root package.json still decides monorepo status."""
        files = [{"name": "package.json", "content": json.dumps({"workspaces": ["apps/*"]})}, {"name": "a.ts"}]
        snapshot = analyzer.analyze("mono", files, {"excludePatterns": ["package.json"]})
        assert snapshot.is_monorepo is True
        assert snapshot.total_files == 1

    def test_malformed_package_json(self, analyzer):
        files = [{"name": "package.json", "content": "{ broken"}, {"name": "index.js"}]
        snapshot = analyzer.analyze("r", files)
        assert snapshot.is_monorepo is False
        assert snapshot.total_files == 2


class TestNarrativeFields:
    """Classification, philosophy and roadmap carried on the snapshot."""

    def test_defaults(self, analyzer, clean_manifest):
        snapshot = analyzer.analyze("orders", clean_manifest)
        assert snapshot.project_type == "web"
        assert snapshot.philosophy.statement == "Orders service"
        assert snapshot.roadmap[0].phase == "current"

    def test_unknown_config_keys_ignored(self, analyzer, clean_manifest):
        snapshot = analyzer.analyze("orders", clean_manifest, {"projectType": "api", "colour": "blue"})
        assert snapshot.project_type == "api"


class TestCoerceFiles:
    """Manifest record coercion."""

    def test_malformed_content_and_size_kept(self, analyzer):
        """Bad bytes or a fractional size still count the file."""
        files = [
            {"name": "a.ts", "size": 3, "content": b"\xff\xfe"},
            {"name": "b.ts", "size": 2},
            {"name": "c.ts", "size": 3.5},
        ]
        snapshot = analyzer.analyze("r", files)
        assert snapshot.total_files == 3
        assert snapshot.total_size == 8
        assert [f.path for f in snapshot.structure] == ["a.ts", "b.ts", "c.ts"]
        assert snapshot.languages[0].file_count == 3

    def test_invalid_records_skipped(self):
        records = coerce_files([{"name": "a.ts"}, {"size": 3}, RawFile(name="b.ts")])
        assert [r.name for r in records] == ["a.ts", "b.ts"]
