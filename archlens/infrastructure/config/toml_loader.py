"""TOML configuration loader with env overrides."""

import logging
import os
import tomllib
from pathlib import Path

from pydantic import ValidationError

from archlens.domain.ports.config import AnalysisConfig, AppConfig, LimitsConfig, ValidationConfig

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Configuration file is unreadable, malformed or holds invalid values."""


def _load_toml(path: Path) -> dict:
    """Load TOML file."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Cannot load config file {path}: {e}") from e


def _merge(base: dict, override: dict) -> dict:
    """Merge override into base one level deep (tables merge, scalars replace)."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = {**merged[key], **value}
        else:
            merged[key] = value
    return merged


def _env_int(config: dict, section: str, key: str, env_name: str) -> None:
    if raw := os.getenv(env_name):
        try:
            config.setdefault(section, {})[key] = int(raw)
        except ValueError:
            logger.warning("Invalid %s env value: %r, ignoring", env_name, raw)


def _apply_env_overrides(config: dict) -> dict:
    """Apply environment variable overrides."""
    if level := os.getenv("ARCHLENS_LOG_LEVEL") or os.getenv("LOG_LEVEL"):
        config.setdefault("logging", {})["level"] = level.upper()
    if path := os.getenv("LOG_FILE"):
        config.setdefault("logging", {})["file"] = path.strip()
    _env_int(config, "limits", "max_dependency_edges", "ARCHLENS_MAX_EDGES")
    _env_int(config, "limits", "max_workers", "ARCHLENS_MAX_WORKERS")
    if mode := os.getenv("ARCHLENS_CYCLE_DETECTION"):
        config.setdefault("validation", {})["cycle_detection"] = mode.strip().lower()
    if patterns := os.getenv("ARCHLENS_EXCLUDE"):
        config.setdefault("analysis", {})["exclude_patterns"] = [
            p.strip() for p in patterns.split(",") if p.strip()
        ]
    return config


def load_config(config_dir: Path | None = None) -> AppConfig:
    """Load configuration from TOML files with env overrides.

    Loads default.toml, then development.toml if exists. Missing files are fine:
    every field has a default.

    Raises:
        ConfigError: If a file cannot be parsed or holds invalid values.
    """
    if config_dir is None:
        config_dir = Path(__file__).resolve().parent.parent.parent.parent / "config"

    config: dict = {}

    default_path = config_dir / "default.toml"
    if default_path.exists():
        config = _load_toml(default_path)

    dev_path = config_dir / "development.toml"
    if dev_path.exists():
        config = _merge(config, _load_toml(dev_path))

    config = _apply_env_overrides(config)

    logging_raw = config.get("logging") or {}
    try:
        return AppConfig(
            analysis=AnalysisConfig(**(config.get("analysis") or {})),
            limits=LimitsConfig(**(config.get("limits") or {})),
            validation=ValidationConfig(**(config.get("validation") or {})),
            log_level=logging_raw.get("level", "INFO"),
            log_file=(logging_raw.get("file") or "").strip(),
            log_rotation_max_mb=int(logging_raw.get("log_rotation_max_mb", 5)),
            log_rotation_backups=int(logging_raw.get("log_rotation_backups", 3)),
        )
    except (ValidationError, ValueError) as e:
        raise ConfigError(f"Invalid configuration in {config_dir}: {e}") from e
