"""Logging module for vidwatch.

Provides configurable logging with text or JSON lines, file rotation,
and worker context tagging for the worker pool.
"""

from vidwatch.logging.config import configure_logging
from vidwatch.logging.context import (
    WorkerContextFilter,
    get_worker_context,
    worker_context,
)
from vidwatch.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "WorkerContextFilter",
    "configure_logging",
    "get_worker_context",
    "worker_context",
]
