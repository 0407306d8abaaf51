"""Structured logging for the engine.

structlog events and plain stdlib records share one ProcessorFormatter, so a
batch run produces a single uniform stream (JSON lines unless DEBUG).
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

import structlog
from structlog.typing import Processor

from archlens.domain.ports.config import AppConfig

_PRE_CHAIN: list[Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
]


def _formatter(json_output: bool) -> structlog.stdlib.ProcessorFormatter:
    renderer: Processor = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_PRE_CHAIN,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
    )


def _rotating_file_handler(file_path: str, max_mb: int, backups: int) -> logging.Handler | None:
    """File handler with rotation, or None when the file cannot be opened."""
    path = Path(file_path).resolve()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        return RotatingFileHandler(path, maxBytes=max_mb * 1024 * 1024, backupCount=backups, encoding="utf-8")
    except OSError as e:
        sys.stderr.write(f"Log file disabled: could not open {path}: {e}\n")
        return None


def setup_logging(
    level: str = "INFO",
    file_path: str = "",
    rotation_max_mb: int = 5,
    rotation_backups: int = 3,
    json_output: bool | None = None,
) -> None:
    """Configure structlog on top of the standard library root logger.

    Output goes to stdout and, when file_path is set, to a rotating file.
    json_output defaults to True for every level except DEBUG.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    if json_output is None:
        json_output = level.upper() != "DEBUG"

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_PRE_CHAIN,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if file_path and file_path.strip():
        file_handler = _rotating_file_handler(file_path.strip(), rotation_max_mb, rotation_backups)
        if file_handler is not None:
            handlers.append(file_handler)

    formatter = _formatter(json_output)
    root = logging.getLogger()
    root.setLevel(log_level)
    root.handlers.clear()
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(log_level)
        root.addHandler(handler)


def setup_logging_from_config(config: AppConfig) -> None:
    """Apply the logging fields of an AppConfig."""
    setup_logging(
        level=config.log_level,
        file_path=config.log_file,
        rotation_max_mb=config.log_rotation_max_mb,
        rotation_backups=config.log_rotation_backups,
    )


__all__ = ["setup_logging", "setup_logging_from_config"]
