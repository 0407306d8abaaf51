"""Configuration loading."""

from archlens.infrastructure.config.toml_loader import ConfigError, load_config

__all__ = ["ConfigError", "load_config"]
