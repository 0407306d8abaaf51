"""Dependency graph helpers: import path resolution, cycles, edge cap, Mermaid.

Resolution works purely on manifest paths ("src/api/routes.ts"), never on the
filesystem: the manifest is the whole world, and anything that does not
resolve to one of its paths is external and dropped.
"""

from collections.abc import Iterable, Iterator, Sequence

from archlens.domain.entities import DependencyEdge

# Lookup order for relative TS/JS specifiers; first hit wins.
TS_RESOLUTION_SUFFIXES = ("", ".ts", ".tsx", ".js", ".jsx", "/index.ts", "/index.js")
PY_RESOLUTION_SUFFIXES = (".py", "/__init__.py")


class PathIndex:
    """Manifest paths that can be dependency targets, in manifest order."""

    def __init__(self, paths: Iterable[str]):
        self._ordered = list(dict.fromkeys(paths))
        self._members = set(self._ordered)

    def __contains__(self, path: object) -> bool:
        return path in self._members

    def __len__(self) -> int:
        return len(self._ordered)

    def lookup(self, base: str, suffixes: Sequence[str]) -> str | None:
        """Return the first base+suffix that is a manifest path."""
        for suffix in suffixes:
            candidate = f"{base}{suffix}"
            if candidate in self._members:
                return candidate
        return None

    def first_containing(self, needle: str, exclude: str | None = None) -> str | None:
        """First manifest path (other than exclude) containing needle."""
        for path in self._ordered:
            if path != exclude and needle in path:
                return path
        return None


def _directory_segments(path: str) -> list[str]:
    segments = [s for s in path.split("/") if s]
    return segments[:-1]


def _apply_segments(directory: list[str], specifier_parts: Iterable[str]) -> list[str]:
    resolved = list(directory)
    for part in specifier_parts:
        if part in ("", "."):
            continue
        if part == "..":
            if resolved:
                resolved.pop()
            continue
        resolved.append(part)
    return resolved


def resolve_relative_specifier(source: str, specifier: str, index: PathIndex) -> str | None:
    """Resolve a TS/JS relative specifier ("./util", "../d") to a manifest path.

    Bare module names ("react", "@scope/pkg") are external and return None.
    """
    if not specifier.startswith("."):
        return None
    segments = _apply_segments(_directory_segments(source), specifier.split("/"))
    if not segments:
        return None
    return index.lookup("/".join(segments), TS_RESOLUTION_SUFFIXES)


def resolve_python_module(
    source: str,
    module: str,
    index: PathIndex,
    imported: str | None = None,
) -> str | None:
    """Resolve a Python module name relative to the importing file.

    Leading dots climb directories (one dot = the file's own package). Absolute
    names are tried next to the importing file first, then from the repository
    root. For bare-dot modules ("from . import b") `imported` is the first
    imported name, tried as a submodule before the package's __init__.py.
    """
    stripped = module.lstrip(".")
    level = len(module) - len(stripped)
    directory = _directory_segments(source)
    if level > 1:
        directory = directory[: max(0, len(directory) - (level - 1))]

    parts = [p for p in stripped.split(".") if p]
    if not parts:
        if not level:
            return None
        resolved = None
        if imported:
            resolved = index.lookup("/".join(directory + [imported]), PY_RESOLUTION_SUFFIXES)
        if resolved is None and directory:
            resolved = index.lookup("/".join(directory), ("/__init__.py",))
        return None if resolved == source else resolved

    local = "/".join(directory + parts)
    resolved = index.lookup(local, PY_RESOLUTION_SUFFIXES)
    if resolved is None and level == 0 and directory:
        resolved = index.lookup("/".join(parts), PY_RESOLUTION_SUFFIXES)
    if resolved == source:
        return None
    return resolved


def resolve_go_import(source: str, import_path: str, index: PathIndex) -> str | None:
    """Resolve a Go import path by substring match against manifest paths.

    Paths without a dot ("fmt", "net/http") are the standard library.
    """
    if "." not in import_path:
        return None
    return index.first_containing(import_path, exclude=source)


def cap_edges(edges: Sequence[DependencyEdge], limit: int) -> list[DependencyEdge]:
    """Keep the first `limit` edges in discovery order."""
    return list(edges[:limit])


def build_adjacency(edges: Iterable[DependencyEdge]) -> dict[str, list[str]]:
    """source -> unique targets, in first-seen order."""
    adj: dict[str, list[str]] = {}
    for e in edges:
        targets = adj.setdefault(e.source, [])
        if e.target not in targets:
            targets.append(e.target)
    return adj


def find_cycles(edges: Iterable[DependencyEdge]) -> list[list[str]]:
    """Cycles found by a depth-first walk; each cycle is closed (first == last).

    Iterative so that long import chains cannot hit the recursion limit.
    """
    adj = build_adjacency(edges)
    cycles: list[list[str]] = []
    visited: set[str] = set()

    for start in adj:
        if start in visited:
            continue
        path: list[str] = [start]
        on_path: dict[str, int] = {start: 0}
        stack: list[Iterator[str]] = [iter(adj.get(start, []))]
        visited.add(start)

        while stack:
            neighbor = next(stack[-1], None)
            if neighbor is None:
                stack.pop()
                node = path.pop()
                del on_path[node]
                continue
            if neighbor in on_path:
                cycles.append(path[on_path[neighbor]:] + [neighbor])
            elif neighbor not in visited:
                visited.add(neighbor)
                on_path[neighbor] = len(path)
                path.append(neighbor)
                stack.append(iter(adj.get(neighbor, [])))

    return cycles


def _mermaid_id(path: str, ids: dict[str, str]) -> str:
    if path not in ids:
        ids[path] = f"n{len(ids)}"
    return ids[path]


def render_mermaid(edges: Sequence[DependencyEdge], limit: int) -> str:
    """Render the first `limit` edges as a Mermaid `graph LR` definition."""
    lines = ["graph LR"]
    ids: dict[str, str] = {}
    for e in edges[:limit]:
        src = _mermaid_id(e.source, ids)
        dst = _mermaid_id(e.target, ids)
        lines.append(f'    {src}["{e.source}"] -->|{e.kind.value}| {dst}["{e.target}"]')
    if len(edges) > limit:
        lines.append(f"    %% {len(edges) - limit} more edges not shown")
    return "\n".join(lines)
