"""Directory watcher: the filesystem notification subscription."""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Collection
from pathlib import Path

from watchdog.events import FileClosedEvent, FileMovedEvent
from watchdog.observers import Observer
from watchdog.observers.api import BaseObserver

from vidwatch.exceptions import SubscriptionError
from vidwatch.jobs.queue import JobQueue
from vidwatch.watcher.handler import TranscodeEventHandler

logger = logging.getLogger(__name__)


def create_observer() -> BaseObserver:
    """Create the platform observer.

    On Linux the inotify observer runs with full events, so a file moved in
    from an unwatched directory is reported as a move (with an empty source)
    instead of a creation.
    """
    if sys.platform.startswith("linux"):
        from watchdog.observers.inotify import InotifyObserver

        return InotifyObserver(generate_full_events=True)
    return Observer()


class DirectoryWatcher:
    """Subscribes to close-write and moved-in events on one directory.

    The subscription is not recursive. Events are delivered on the watchdog
    observer thread and pushed into the job queue from there.
    """

    STOP_TIMEOUT: float = 5.0

    def __init__(
        self,
        watch_dir: Path,
        extensions: Collection[str],
        job_queue: JobQueue,
        observer_factory: Callable[[], BaseObserver] = create_observer,
    ) -> None:
        """Initialize the watcher.

        Args:
            watch_dir: Directory to watch.
            extensions: Normalized extension allow-list.
            job_queue: Queue to feed.
            observer_factory: Creates the watchdog observer (injectable
                for tests).
        """
        self._watch_dir = watch_dir
        self._extensions = extensions
        self._queue = job_queue
        self._observer_factory = observer_factory
        self._observer: BaseObserver | None = None

    def start(self) -> None:
        """Establish the subscription.

        Raises:
            SubscriptionError: If the directory cannot be watched.
        """
        if self._observer is not None:
            raise RuntimeError("Directory watcher already started")

        handler = TranscodeEventHandler(self._watch_dir, self._extensions, self._queue)
        observer = self._observer_factory()
        try:
            observer.schedule(
                handler,
                str(self._watch_dir),
                recursive=False,
                event_filter=[FileClosedEvent, FileMovedEvent],
            )
            observer.start()
        except OSError as e:
            raise SubscriptionError(
                f"Could not watch {self._watch_dir}: {e}"
            ) from e

        self._observer = observer
        logger.info(
            "Started watching for %s files in %s",
            ", ".join(sorted(self._extensions)),
            self._watch_dir,
        )

    def is_alive(self) -> bool:
        """True while the observer thread is delivering events."""
        return self._observer is not None and self._observer.is_alive()

    def stop(self) -> None:
        """End the subscription and wait for the observer thread."""
        if self._observer is None:
            return
        self._observer.stop()
        self._observer.join(timeout=self.STOP_TIMEOUT)
        if self._observer.is_alive():
            logger.warning(
                "Watcher thread did not stop within %.0fs", self.STOP_TIMEOUT
            )
        self._observer = None
        logger.info("Stopped watching %s", self._watch_dir)
