"""Pytest configuration and shared fixtures."""

import pytest

from archlens.domain.ports.config import LimitsConfig
from archlens.infrastructure.analyzer import StructuralAnalyzer
from archlens.infrastructure.drift import DriftEngine
from archlens.infrastructure.validation import Validator

FIXED_MS = 1_700_000_000_000


def fixed_clock() -> int:
    return FIXED_MS


@pytest.fixture
def analyzer():
    """Sequential analyzer with a pinned clock."""
    return StructuralAnalyzer(limits=LimitsConfig(max_workers=1), clock=fixed_clock)


@pytest.fixture
def validator():
    """Validator with heuristic cycle detection and a pinned clock."""
    return Validator(clock=fixed_clock)


@pytest.fixture
def drift_engine():
    return DriftEngine(clock=fixed_clock)


@pytest.fixture
def clean_manifest():
    """Small TypeScript project without sensitive files or coupling problems."""
    return [
        {"name": "README.md", "size": 120, "content": "# Orders service\nHandles orders."},
        {"name": "package.json", "size": 300, "content": '{"name": "orders"}'},
        {"name": "src/index.ts", "size": 200, "content": "import { route } from './routes'\n"},
        {"name": "src/routes.ts", "size": 150, "content": "export function route() {}\n"},
        {"name": "src/util.ts", "size": 80, "content": ""},
    ]
