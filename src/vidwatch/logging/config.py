"""Logging configuration for vidwatch.

Provides configure_logging() to set up the log sink based on LoggingConfig.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from vidwatch.logging.context import WorkerContextFilter
from vidwatch.logging.handlers import JSONFormatter

if TYPE_CHECKING:
    from vidwatch.config.models import LoggingConfig

_LEVEL_MAP: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

TEXT_FORMAT = "%(asctime)s - %(worker_tag)s%(name)s - %(levelname)s - %(message)s"


def configure_logging(config: LoggingConfig) -> logging.Handler:
    """Configure the root logger based on LoggingConfig.

    Installs exactly one handler: a rotating file handler when a log file
    is configured, otherwise a stream handler on stdout.

    Args:
        config: Logging configuration.

    Returns:
        The installed handler.

    Raises:
        OSError: If the log file cannot be opened. The log destination is
            required at startup, so there is no fallback.
    """
    level = _LEVEL_MAP.get(config.level.casefold(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if config.format.casefold() == "json":
        formatter: logging.Formatter = JSONFormatter()
    else:
        # worker_tag is "[W01:F001] " inside a worker, empty string otherwise
        formatter = logging.Formatter(TEXT_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z")

    handler: logging.Handler
    if config.file:
        file_path = Path(config.file).expanduser()
        file_path.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            file_path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
    else:
        handler = logging.StreamHandler(sys.stdout)

    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(WorkerContextFilter())
    root_logger.addHandler(handler)
    return handler
