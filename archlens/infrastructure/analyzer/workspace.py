"""Monorepo detection from package.json workspace declarations."""

import json
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import structlog

from archlens.domain.entities import DependencyEdge, EdgeKind, RawFile
from archlens.infrastructure.analyzer.languages import basename

log = structlog.get_logger()

PACKAGE_MANIFEST = "package.json"
_DEPENDENCY_SECTIONS = ("dependencies", "devDependencies", "peerDependencies", "optionalDependencies")


@dataclass
class WorkspaceInfo:
    """Outcome of monorepo detection."""

    is_monorepo: bool = False
    workspaces: list[str] = field(default_factory=list)
    root_manifest: str | None = None


def _is_package_manifest(path: str) -> bool:
    return path.endswith(PACKAGE_MANIFEST)


def _parse_manifest(path: str, content: str | None) -> dict[str, Any] | None:
    """Parse package.json content; malformed JSON is logged and yields None."""
    if not content:
        return None
    try:
        data = json.loads(content)
    except (json.JSONDecodeError, ValueError) as e:
        log.warning("workspace_config_invalid", path=path, error=str(e))
        return None
    if not isinstance(data, dict):
        log.warning("workspace_config_invalid", path=path, error="top-level value is not an object")
        return None
    return data


def _workspace_globs(raw: Any) -> list[str] | None:
    """Accept both `["packages/*"]` and `{"packages": ["packages/*"]}`."""
    if isinstance(raw, list):
        return [str(w) for w in raw]
    if isinstance(raw, dict):
        packages = raw.get("packages")
        if isinstance(packages, list):
            return [str(w) for w in packages]
        return []
    return None


def detect_workspaces(files: Sequence[RawFile]) -> WorkspaceInfo:
    """Detect a monorepo from the shortest-path package.json of the manifest.

    Runs on the unfiltered manifest. Parse failures leave the default (not a
    monorepo).
    """
    manifests = [f for f in files if _is_package_manifest(f.name)]
    if not manifests:
        return WorkspaceInfo()

    # min() keeps the first of equally short paths
    root = min(manifests, key=lambda f: len(f.name))
    data = _parse_manifest(root.name, root.content)
    if data is None or "workspaces" not in data:
        return WorkspaceInfo(root_manifest=root.name)

    globs = _workspace_globs(data["workspaces"])
    if globs is None:
        log.warning("workspace_config_invalid", path=root.name, error="unsupported workspaces value")
        return WorkspaceInfo(root_manifest=root.name)

    log.debug("monorepo_detected", root=root.name, workspaces=globs)
    return WorkspaceInfo(is_monorepo=True, workspaces=globs, root_manifest=root.name)


class WorkspaceLinker:
    """Links workspace packages that depend on each other by package name."""

    def __init__(self, files: Sequence[RawFile]):
        self._by_name: dict[str, str] = {}
        self._dependencies: dict[str, list[str]] = {}
        for f in files:
            if basename(f.name) != PACKAGE_MANIFEST:
                continue
            data = _parse_manifest(f.name, f.content)
            if data is None:
                continue
            name = data.get("name")
            if isinstance(name, str) and name and name not in self._by_name:
                self._by_name[name] = f.name
            deps: list[str] = []
            for section in _DEPENDENCY_SECTIONS:
                value = data.get(section)
                if isinstance(value, dict):
                    deps.extend(str(k) for k in value)
            self._dependencies[f.name] = deps

    def edges_for(self, path: str) -> list[DependencyEdge]:
        """Edges from one package.json to sibling workspace package.json files."""
        edges: list[DependencyEdge] = []
        for dep in self._dependencies.get(path, []):
            target = self._by_name.get(dep)
            if target is not None and target != path:
                edges.append(DependencyEdge(source=path, target=target, kind=EdgeKind.WORKSPACE))
        return edges
