"""Directory watcher: filesystem events and the initial scan, both feeding the queue."""

from vidwatch.watcher.handler import TranscodeEventHandler
from vidwatch.watcher.observer import DirectoryWatcher, create_observer
from vidwatch.watcher.scanner import (
    enqueue_initial_files,
    find_initial_files,
    is_allowed,
)

__all__ = [
    "DirectoryWatcher",
    "TranscodeEventHandler",
    "create_observer",
    "enqueue_initial_files",
    "find_initial_files",
    "is_allowed",
]
