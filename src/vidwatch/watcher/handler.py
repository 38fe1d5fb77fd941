"""watchdog event handler feeding the job queue.

Only two events mean "a complete file is now in the directory": the file
was closed after being opened for writing, or it was moved in. Create,
open and modify events fire while a file is still being written and are
ignored.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Collection
from pathlib import Path

from watchdog.events import (
    FileClosedEvent,
    FileMovedEvent,
    FileSystemEvent,
    FileSystemEventHandler,
)

from vidwatch.jobs.queue import JobQueue
from vidwatch.watcher.scanner import is_allowed

logger = logging.getLogger(__name__)


class TranscodeEventHandler(FileSystemEventHandler):
    """Queues allow-listed files that were closed after writing or moved in.

    Runs on the watchdog observer thread. A full queue blocks that thread,
    which in turn delays delivery of further events.
    """

    def __init__(
        self, watch_dir: Path, extensions: Collection[str], job_queue: JobQueue
    ) -> None:
        super().__init__()
        self._watch_dir = Path(os.path.abspath(watch_dir))
        self._extensions = extensions
        self._queue = job_queue

    def dispatch(self, event: FileSystemEvent) -> None:
        # An error for one event must not kill the observer thread
        try:
            super().dispatch(event)
        except Exception:
            logger.exception("Error handling filesystem event %r", event)

    def on_closed(self, event: FileClosedEvent) -> None:
        if event.is_directory:
            return
        self._submit(event.src_path)

    def on_moved(self, event: FileMovedEvent) -> None:
        # Moved out of the directory: no destination
        if event.is_directory or not event.dest_path:
            return
        self._submit(event.dest_path)

    def _submit(self, raw_path: str | bytes) -> None:
        path = Path(os.fsdecode(raw_path))

        if Path(os.path.abspath(path)).parent != self._watch_dir:
            logger.debug("Ignoring event outside watched directory: %s", path)
            return
        if not is_allowed(path, self._extensions):
            return

        self._queue.put(path)
