"""Per-language symbol and dependency heuristics.

Each language family is a strategy holding pre-compiled patterns. Languages
without a strategy fall back to the no-op base class, so adding a family is a
matter of registering one more subclass.
"""

import re

from archlens.domain.entities import DependencyEdge, EdgeKind, SymbolCounts
from archlens.infrastructure.analyzer.dependency_graph import (
    PathIndex,
    resolve_go_import,
    resolve_python_module,
    resolve_relative_specifier,
)


def _compile(patterns: list[str], flags: int = re.MULTILINE) -> list[re.Pattern[str]]:
    return [re.compile(p, flags) for p in patterns]


def _count(patterns: list[re.Pattern[str]], content: str) -> int:
    return sum(len(p.findall(content)) for p in patterns)


class LanguageStrategy:
    """No-op strategy: zero symbols, no edges."""

    languages: tuple[str, ...] = ()

    def count_symbols(self, content: str) -> SymbolCounts:
        return SymbolCounts()

    def extract_dependencies(self, path: str, content: str, index: PathIndex) -> list[DependencyEdge]:
        return []


class PatternStrategy(LanguageStrategy):
    """Counts symbols with three fixed pattern sets."""

    CLASS_PATTERNS: list[re.Pattern[str]] = []
    FUNCTION_PATTERNS: list[re.Pattern[str]] = []
    EXPORT_PATTERNS: list[re.Pattern[str]] = []

    def count_symbols(self, content: str) -> SymbolCounts:
        return SymbolCounts(
            classes=_count(self.CLASS_PATTERNS, content),
            functions=_count(self.FUNCTION_PATTERNS, content),
            exports=_count(self.EXPORT_PATTERNS, content),
        )


class ScriptStrategy(PatternStrategy):
    """TypeScript / JavaScript."""

    languages = ("TypeScript", "JavaScript")

    CLASS_PATTERNS = _compile([
        r"\bclass\s+[A-Za-z_$][\w$]*",
        r"\binterface\s+[A-Za-z_$][\w$]*",
    ])
    FUNCTION_PATTERNS = _compile([
        r"\bfunction\b\s*\*?\s*[A-Za-z_$][\w$]*\s*\(",
        r"\b(?:const|let|var)\s+[A-Za-z_$][\w$]*\s*=\s*(?:async\s+)?(?:\([^()]*\)|[A-Za-z_$][\w$]*)\s*=>",
    ])
    EXPORT_PATTERNS = _compile([
        r"^\s*export\b",
        r"\bmodule\.exports\b",
    ])

    # import x from './a'; import { a, b } from "./a"; import type { T } from './t'; import './side'
    _IMPORT_RE = re.compile(r"""\bimport\s+(?:[\w$*{},\s]+?\s+from\s+)?['"]([^'"\n]+)['"]""")
    _REQUIRE_RE = re.compile(r"""\brequire\s*\(\s*['"]([^'"\n]+)['"]\s*\)""")

    def extract_dependencies(self, path: str, content: str, index: PathIndex) -> list[DependencyEdge]:
        edges: list[DependencyEdge] = []
        for pattern, kind in ((self._IMPORT_RE, EdgeKind.IMPORT), (self._REQUIRE_RE, EdgeKind.REQUIRE)):
            for m in pattern.finditer(content):
                target = resolve_relative_specifier(path, m.group(1), index)
                if target is not None:
                    edges.append(DependencyEdge(source=path, target=target, kind=kind))
        return edges


class PythonStrategy(PatternStrategy):
    """Python."""

    languages = ("Python",)

    CLASS_PATTERNS = _compile([r"^[ \t]*class\s+\w+"])
    FUNCTION_PATTERNS = _compile([r"^[ \t]*(?:async\s+)?def\s+\w+"])
    # Module-level public names
    EXPORT_PATTERNS = _compile([r"^(?:async\s+)?def\s+[A-Za-z]\w*", r"^class\s+[A-Za-z]\w*"])

    # from X import [(]N ... | import X[, Y]  (first module token and first imported name only)
    _IMPORT_RE = re.compile(
        r"^[ \t]*(?:from\s+([\w.]+)\s+import\b\s*\(?\s*(\w+)?|import\s+([\w.]+))", re.MULTILINE
    )

    def extract_dependencies(self, path: str, content: str, index: PathIndex) -> list[DependencyEdge]:
        edges: list[DependencyEdge] = []
        for m in self._IMPORT_RE.finditer(content):
            module = m.group(1) or m.group(3)
            target = resolve_python_module(path, module, index, imported=m.group(2))
            if target is not None:
                edges.append(DependencyEdge(source=path, target=target, kind=EdgeKind.IMPORT))
        return edges


class GoStrategy(PatternStrategy):
    """Go."""

    languages = ("Go",)

    CLASS_PATTERNS = _compile([r"^[ \t]*type\s+\w+\s+(?:struct|interface)\b"])
    FUNCTION_PATTERNS = _compile([r"^[ \t]*func\b"])
    EXPORT_PATTERNS = _compile([
        r"^[ \t]*func\s+(?:\([^)]*\)\s*)?[A-Z]\w*",
        r"^[ \t]*type\s+[A-Z]\w*",
    ])

    # import ( ... ) | import [alias] "x"
    _IMPORT_RE = re.compile(r'^[ \t]*import\s*(?:\(([^)]*)\)|(?:[\w.]+\s+)?"([^"\n]+)")', re.MULTILINE)
    _QUOTED_RE = re.compile(r'"([^"\n]+)"')

    def extract_dependencies(self, path: str, content: str, index: PathIndex) -> list[DependencyEdge]:
        edges: list[DependencyEdge] = []
        for m in self._IMPORT_RE.finditer(content):
            if m.group(1) is not None:
                specs = [q.group(1) for line in m.group(1).splitlines() if (q := self._QUOTED_RE.search(line))]
            else:
                specs = [m.group(2)]
            for spec in specs:
                target = resolve_go_import(path, spec, index)
                if target is not None:
                    edges.append(DependencyEdge(source=path, target=target, kind=EdgeKind.STATIC))
        return edges


class RustStrategy(PatternStrategy):
    """Rust. Symbols only; `use`/`mod` are not resolved."""

    languages = ("Rust",)

    CLASS_PATTERNS = _compile([r"\b(?:struct|enum|trait)\s+[A-Za-z_]\w*"])
    FUNCTION_PATTERNS = _compile([r"\bfn\s+[A-Za-z_]\w*"])
    EXPORT_PATTERNS = _compile([
        r"\bpub(?:\([^)]*\))?\s+(?:fn|struct|enum|trait|mod|const|static|type|use)\b",
    ])


_DEFAULT = LanguageStrategy()

STRATEGIES: dict[str, LanguageStrategy] = {
    language: strategy
    for strategy in (ScriptStrategy(), PythonStrategy(), GoStrategy(), RustStrategy())
    for language in strategy.languages
}


def strategy_for(language: str) -> LanguageStrategy:
    """Strategy for a detected language; the no-op one when unsupported."""
    return STRATEGIES.get(language, _DEFAULT)
