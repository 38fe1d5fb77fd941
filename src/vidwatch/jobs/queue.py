"""Bounded job queue shared by the watcher and the worker pool.

The queue holds discovered file paths. It is bounded: when it is full,
producers block until a worker frees a slot. This keeps memory flat under a
burst of new files at the cost of stalling the event loop that feeds it.
"""

from __future__ import annotations

import logging
import queue
import threading
from pathlib import Path
from typing import cast

logger = logging.getLogger(__name__)

# End-of-stream marker handed to each consumer on close()
_END = object()


class JobQueue:
    """Bounded multi-producer, multi-consumer queue of paths."""

    PUT_POLL_INTERVAL: float = 0.5

    def __init__(self, capacity: int) -> None:
        """Initialize the queue.

        Args:
            capacity: Maximum number of queued paths (at least 1).

        Raises:
            ValueError: If capacity is less than 1.
        """
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        self._capacity = capacity
        self._queue: queue.Queue[object] = queue.Queue(maxsize=capacity)
        self._closed = threading.Event()

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def qsize(self) -> int:
        """Approximate number of queued items."""
        return self._queue.qsize()

    def put(self, path: Path) -> bool:
        """Enqueue a path, blocking while the queue is full.

        Args:
            path: Path to enqueue.

        Returns:
            True if the path was queued, False if the queue was closed
            before a slot became free.
        """
        while not self._closed.is_set():
            try:
                self._queue.put(path, timeout=self.PUT_POLL_INTERVAL)
            except queue.Full:
                continue
            logger.info("Queuing %s", path)
            return True

        logger.debug("Queue closed, not queuing %s", path)
        return False

    def get(self) -> Path | None:
        """Take the next path, blocking while the queue is empty.

        Paths still queued when the queue is closed are dropped (they remain
        on disk and are found again by the next startup scan).

        Returns:
            The next path, or None at end of stream.
        """
        while True:
            item = self._queue.get()
            if item is _END:
                return None
            if self._closed.is_set():
                logger.info("Dropping queued file on shutdown: %s", item)
                continue
            return cast(Path, item)

    def close(self, consumers: int) -> None:
        """Close the queue and wake ``consumers`` blocked or future get() calls.

        Producers blocked in put() return False. Blocks until every end
        marker has been accepted, which may wait for busy workers to come
        back for their next item.

        Args:
            consumers: Number of consumers that must see end of stream.
        """
        self._closed.set()
        for _ in range(consumers):
            self._queue.put(_END)
