"""Initial scan of the watched directory.

Files already sitting in the watched directory at startup never produce a
close-write event, so they are found by listing the directory once.
"""

from __future__ import annotations

import logging
from collections.abc import Collection
from pathlib import Path

from vidwatch.exceptions import ScanError
from vidwatch.jobs.queue import JobQueue

logger = logging.getLogger(__name__)


def is_allowed(path: Path, extensions: Collection[str]) -> bool:
    """Check a path's suffix against the extension allow-list.

    Args:
        path: Candidate file.
        extensions: Normalized extensions (lowercase, leading dot).

    Returns:
        True if the suffix (case-insensitive) is in the allow-list.
    """
    return path.suffix.lower() in extensions


def find_initial_files(watch_dir: Path, extensions: Collection[str]) -> list[Path]:
    """List regular files in ``watch_dir`` (not recursive) that match the allow-list.

    Args:
        watch_dir: Directory to scan.
        extensions: Normalized extensions.

    Returns:
        Matching files, sorted by name.

    Raises:
        ScanError: If the directory cannot be listed.
    """
    try:
        entries = sorted(watch_dir.iterdir())
    except OSError as e:
        raise ScanError(f"Could not scan {watch_dir}: {e}") from e

    return [p for p in entries if is_allowed(p, extensions) and p.is_file()]


def enqueue_initial_files(
    watch_dir: Path, extensions: Collection[str], job_queue: JobQueue
) -> int:
    """Queue every pre-existing matching file.

    A scan failure is logged and the scan is skipped; the watcher keeps
    running.

    Args:
        watch_dir: Directory to scan.
        extensions: Normalized extensions.
        job_queue: Queue to feed (blocks while full).

    Returns:
        Number of files queued.
    """
    logger.info(
        "Checking %s for initial files with extensions %s",
        watch_dir,
        ", ".join(sorted(extensions)),
    )
    try:
        files = find_initial_files(watch_dir, extensions)
    except ScanError as e:
        logger.error("%s; skipping initial scan", e)
        return 0

    queued = 0
    for path in files:
        if not job_queue.put(path):
            break
        queued += 1

    logger.info("Initial scan queued %d file(s)", queued)
    return queued
