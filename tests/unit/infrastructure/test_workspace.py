"""Tests for monorepo detection and workspace linking."""

import json

from archlens.domain.entities import EdgeKind, RawFile
from archlens.infrastructure.analyzer.workspace import WorkspaceLinker, detect_workspaces


def _pkg(path: str, data) -> RawFile:
    content = data if isinstance(data, str) else json.dumps(data)
    return RawFile(name=path, size=len(content), content=content)


class TestDetectWorkspaces:
    """detect_workspaces: root package.json decides."""

    def test_no_manifest(self):
        info = detect_workspaces([RawFile(name="main.go")])
        assert info.is_monorepo is False
        assert info.workspaces == []

    def test_list_form(self):
        files = [
            _pkg("packages/a/package.json", {"name": "a"}),
            _pkg("package.json", {"workspaces": ["packages/*"]}),
        ]
        info = detect_workspaces(files)
        assert info.is_monorepo is True
        assert info.workspaces == ["packages/*"]
        assert info.root_manifest == "package.json"

    def test_object_form(self):
        info = detect_workspaces([_pkg("package.json", {"workspaces": {"packages": ["apps/*", "libs/*"]}})])
        assert info.is_monorepo is True
        assert info.workspaces == ["apps/*", "libs/*"]

    def test_object_form_without_packages(self):
        """Declared but empty: still a monorepo, with no workspaces."""
        info = detect_workspaces([_pkg("package.json", {"workspaces": {"nohoist": ["**"]}})])
        assert info.is_monorepo is True
        assert info.workspaces == []

    def test_no_workspaces_field(self):
        assert detect_workspaces([_pkg("package.json", {"name": "app"})]).is_monorepo is False

    def test_malformed_json(self):
        """Broken package.json is not fatal."""
        info = detect_workspaces([_pkg("package.json", "{ not json")])
        assert info.is_monorepo is False

    def test_shortest_path_is_root(self):
        """Nested manifests do not decide."""
        files = [
            _pkg("tools/package.json", {"workspaces": ["x/*"]}),
            _pkg("package.json", {"name": "root"}),
        ]
        assert detect_workspaces(files).is_monorepo is False


class TestWorkspaceLinker:
    """WorkspaceLinker: package.json -> package.json edges by name."""

    def test_links_local_packages(self):
        files = [
            _pkg("package.json", {"workspaces": ["packages/*"]}),
            _pkg("packages/ui/package.json", {"name": "@acme/ui", "dependencies": {"@acme/core": "*", "react": "^18"}}),
            _pkg("packages/core/package.json", {"name": "@acme/core"}),
        ]
        edges = WorkspaceLinker(files).edges_for("packages/ui/package.json")
        assert len(edges) == 1
        assert edges[0].source == "packages/ui/package.json"
        assert edges[0].target == "packages/core/package.json"
        assert edges[0].kind is EdgeKind.WORKSPACE

    def test_dev_dependencies_count(self):
        files = [
            _pkg("a/package.json", {"name": "a", "devDependencies": {"b": "*"}}),
            _pkg("b/package.json", {"name": "b"}),
        ]
        assert [e.target for e in WorkspaceLinker(files).edges_for("a/package.json")] == ["b/package.json"]

    def test_unknown_path(self):
        assert WorkspaceLinker([]).edges_for("package.json") == []
