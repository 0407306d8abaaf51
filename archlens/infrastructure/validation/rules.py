"""Scoring rules and informational checks.

Every rule has a fixed penalty against one category and fires at most once per
validation. Informational checks only add checklist lines; they never move a score.
"""

from collections.abc import Callable
from dataclasses import dataclass

from archlens.domain.entities import (
    CheckStatus,
    IssueCategory,
    RepositoryMetadata,
    RiskMetrics,
    Severity,
    ValidationCheck,
    ValidationIssue,
)

OTHER_LANGUAGE = "Other"
COUPLING_LIMIT = 15
SENSITIVE_PATH_MARKERS = (".env", ".pem", ".key", "id_rsa")
ENTRY_FILE_NAMES = {"index.ts", "main.ts", "app.ts", "index.js", "main.py", "main.go", "main.rs", "package.json"}
LARGE_PROJECT_FILES = 200
MIN_DOCUMENTATION_ARTIFACTS = 2

# Returns the issue message when the rule fires, None otherwise
Evaluator = Callable[[RepositoryMetadata, RiskMetrics], str | None]


@dataclass(frozen=True)
class ScoringRule:
    """One penalty rule."""

    id: str
    label: str
    category: IssueCategory
    penalty: int
    severity: Severity
    suggestion: str
    auto_fixable: bool
    evaluate: Evaluator

    def issue(self, message: str) -> ValidationIssue:
        return ValidationIssue(
            id=self.id,
            severity=self.severity,
            category=self.category,
            message=message,
            suggestion=self.suggestion,
            auto_fixable=self.auto_fixable,
        )


def _documentation_language_mismatch(snapshot: RepositoryMetadata, _: RiskMetrics) -> str | None:
    summary = (snapshot.documentation.get("summary") or "").strip()
    languages = [d.language for d in snapshot.languages if d.language != OTHER_LANGUAGE]
    if not summary or not languages:
        return None
    lowered = summary.lower()
    if any(language.lower() in lowered for language in languages):
        return None
    return f"Documentation summary does not mention any detected language ({', '.join(languages)})."


def _high_coupling(_: RepositoryMetadata, risk: RiskMetrics) -> str | None:
    if risk.coupling_index <= COUPLING_LIMIT:
        return None
    return f"Coupling index {risk.coupling_index:.1f} exceeds {COUPLING_LIMIT}."


def _monorepo_without_workspaces(snapshot: RepositoryMetadata, _: RiskMetrics) -> str | None:
    if snapshot.is_monorepo and not snapshot.workspaces:
        return "Monorepo declared but no workspace packages are listed."
    return None


def sensitive_paths(snapshot: RepositoryMetadata) -> list[str]:
    return [
        entry.path
        for entry in snapshot.structure
        if any(marker in entry.path.lower() for marker in SENSITIVE_PATH_MARKERS)
    ]


def _sensitive_files(snapshot: RepositoryMetadata, _: RiskMetrics) -> str | None:
    found = sensitive_paths(snapshot)
    if not found:
        return None
    return f"{len(found)} sensitive file(s) committed to the repository: {', '.join(found[:5])}"


RULES: list[ScoringRule] = [
    ScoringRule(
        id="DOC_LANGUAGE_MISMATCH",
        label="Documentation Consistency",
        category=IssueCategory.CONSISTENCY,
        penalty=30,
        severity=Severity.MEDIUM,
        suggestion="Regenerate the summary so it reflects the detected technology stack.",
        auto_fixable=True,
        evaluate=_documentation_language_mismatch,
    ),
    ScoringRule(
        id="HIGH_COUPLING",
        label="Module Coupling",
        category=IssueCategory.STRUCTURE,
        penalty=20,
        severity=Severity.HIGH,
        suggestion="Split highly connected modules and introduce interfaces between layers.",
        auto_fixable=False,
        evaluate=_high_coupling,
    ),
    ScoringRule(
        id="MONOREPO_WORKSPACES_MISSING",
        label="Workspace Declaration",
        category=IssueCategory.STRUCTURE,
        penalty=15,
        severity=Severity.MEDIUM,
        suggestion="List workspace packages in the root package.json `workspaces` field.",
        auto_fixable=True,
        evaluate=_monorepo_without_workspaces,
    ),
    ScoringRule(
        id="SENSITIVE_FILES_DETECTED",
        label="Secret Hygiene",
        category=IssueCategory.SECURITY,
        penalty=60,
        severity=Severity.CRITICAL,
        suggestion="Remove secrets from version control, rotate them and add the files to .gitignore.",
        auto_fixable=False,
        evaluate=_sensitive_files,
    ),
]


def _readme_check(snapshot: RepositoryMetadata) -> ValidationCheck:
    if any("readme.md" in entry.name.lower() for entry in snapshot.structure):
        return ValidationCheck(label="Documentation Presence", status=CheckStatus.PASS, message="README.md detected")
    return ValidationCheck(label="Documentation Presence", status=CheckStatus.FAIL, message="Missing README.md file")


def _entry_check(snapshot: RepositoryMetadata) -> ValidationCheck:
    if any(entry.name.lower() in ENTRY_FILE_NAMES for entry in snapshot.structure):
        return ValidationCheck(label="Project Entry", status=CheckStatus.PASS, message="Standard entry point detected")
    return ValidationCheck(label="Project Entry", status=CheckStatus.WARN, message="Ambiguous entry point")


def _scale_check(snapshot: RepositoryMetadata) -> ValidationCheck:
    if snapshot.total_files > LARGE_PROJECT_FILES:
        return ValidationCheck(label="Scale Complexity", status=CheckStatus.WARN, message="Large file count detected")
    return ValidationCheck(label="Scale Complexity", status=CheckStatus.PASS, message="Manageable project size")


def _artifact_check(snapshot: RepositoryMetadata) -> ValidationCheck:
    if len(snapshot.documentation) < MIN_DOCUMENTATION_ARTIFACTS:
        return ValidationCheck(label="Artifact Coverage", status=CheckStatus.WARN, message="Limited documentation artifacts")
    return ValidationCheck(label="Artifact Coverage", status=CheckStatus.PASS, message="Good documentation coverage")


INFO_CHECKS: list[Callable[[RepositoryMetadata], ValidationCheck]] = [
    _readme_check,
    _entry_check,
    _scale_check,
    _artifact_check,
]
