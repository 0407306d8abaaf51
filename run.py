#!/usr/bin/env python3
"""Analyze a manifest file and print the validated snapshot.

Usage:
  python3 run.py <name> <manifest.json> [baseline.json]

manifest.json is a JSON list of {name|path, size, content?} records.
baseline.json is a snapshot previously printed by this script; when given,
the drift report is printed after the snapshot.
"""

import json
import sys
from pathlib import Path

from archlens.application.analysis import AnalysisUseCase
from archlens.domain.entities import RepositoryMetadata
from archlens.infrastructure.config import load_config
from archlens.shared.logging import setup_logging_from_config


def main(argv: list[str]) -> int:
    if len(argv) not in (2, 3):
        print(__doc__.strip(), file=sys.stderr)
        return 2

    config = load_config()
    setup_logging_from_config(config)
    use_case = AnalysisUseCase(config=config)

    name, manifest_path = argv[0], Path(argv[1])
    files = json.loads(manifest_path.read_text(encoding="utf-8"))
    snapshot = use_case.analyze_and_validate(name, files)
    print(snapshot.model_dump_json(by_alias=True, indent=2))

    if len(argv) == 3:
        baseline = RepositoryMetadata.model_validate_json(Path(argv[2]).read_text(encoding="utf-8"))
        drift = use_case.compute_drift(snapshot, baseline)
        print(drift.model_dump_json(by_alias=True, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
