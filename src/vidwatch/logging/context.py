"""Worker context for structured logging.

Provides context propagation for worker threads using contextvars,
enabling automatic injection of worker_id and file_id into log records.
Each worker thread has its own context, so records emitted from probe,
transcode and cleanup code are tagged with the worker that ran them.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

_worker_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "worker_id", default=None
)
_file_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "file_id", default=None
)
_file_path: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "file_path", default=None
)


@contextmanager
def worker_context(
    worker_id: str,
    file_id: str | None = None,
    file_path: Path | str | None = None,
) -> Generator[None, None, None]:
    """Context manager for worker processing context.

    Sets worker context on entry and restores the previous one on exit.

    Args:
        worker_id: Worker identifier (e.g., "01").
        file_id: File identifier (e.g., "F001").
        file_path: Full path to file being processed.

    Example:
        with worker_context("01", "F001", "/watch/movie.mkv"):
            logger.info("Probing")  # Tagged [W01:F001]
    """
    tokens = (
        _worker_id.set(worker_id),
        _file_id.set(file_id),
        _file_path.set(str(file_path) if file_path is not None else None),
    )
    try:
        yield
    finally:
        _worker_id.reset(tokens[0])
        _file_id.reset(tokens[1])
        _file_path.reset(tokens[2])


def get_worker_context() -> tuple[str | None, str | None, str | None]:
    """Get current worker context.

    Returns:
        Tuple of (worker_id, file_id, file_path), any may be None.
    """
    return _worker_id.get(), _file_id.get(), _file_path.get()


class WorkerContextFilter(logging.Filter):
    """Logging filter that injects worker context into log records.

    Adds worker_id, file_id, and file_path attributes to LogRecord from
    contextvars, plus a worker_tag for compact text display like [W01:F001].
    """

    def filter(self, record: logging.LogRecord) -> bool:
        worker_id, file_id, file_path = get_worker_context()

        record.worker_id = worker_id
        record.file_id = file_id
        record.file_path = file_path

        if worker_id:
            if file_id:
                record.worker_tag = f"[W{worker_id}:{file_id}] "
            else:
                record.worker_tag = f"[W{worker_id}] "
        else:
            record.worker_tag = ""

        return True
