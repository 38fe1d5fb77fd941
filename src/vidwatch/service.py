"""Long-running service wiring the watcher, queue and worker pool together.

Startup order:
1. Worker threads start and block on the empty queue.
2. The filesystem subscription is established (fatal on failure).
3. The initial scan runs on its own thread, so a full queue never stalls
   signal handling on the main thread.

The subscription comes before the scan so a file finished in between is
not missed. A file seen by both is queued twice; the second job fails at
probing because the source is already gone.
"""

from __future__ import annotations

import logging
import os
import signal
import threading
from collections.abc import Callable

from watchdog.observers.api import BaseObserver

from vidwatch.config.models import WatchConfig
from vidwatch.exceptions import SubscriptionError
from vidwatch.executor.interface import TranscodeExecutor, require_tool
from vidwatch.executor.transcode import FFmpegTranscodeExecutor
from vidwatch.introspector.ffprobe import FFprobeIntrospector
from vidwatch.introspector.interface import CodecInspector
from vidwatch.jobs.queue import JobQueue
from vidwatch.jobs.worker import WorkerPool
from vidwatch.watcher.observer import DirectoryWatcher, create_observer
from vidwatch.watcher.scanner import enqueue_initial_files

logger = logging.getLogger(__name__)


class TranscodeService:
    """Watches a directory and transcodes new files until asked to stop."""

    SUPERVISE_INTERVAL: float = 1.0

    def __init__(
        self,
        config: WatchConfig,
        inspector: CodecInspector | None = None,
        executor: TranscodeExecutor | None = None,
        observer_factory: Callable[[], BaseObserver] = create_observer,
    ) -> None:
        """Initialize the service.

        Args:
            config: Resolved configuration.
            inspector: Codec inspector. None builds an FFprobeIntrospector.
            executor: Transcode executor. None builds an
                FFmpegTranscodeExecutor.
            observer_factory: Creates the watchdog observer.

        Raises:
            ToolNotAvailableError: If ffprobe or ffmpeg is needed but missing.
        """
        self.config = config

        if inspector is None:
            inspector = FFprobeIntrospector(
                require_tool("ffprobe", config.tools.ffprobe),
                timeout=config.probe_timeout,
            )
        if executor is None:
            executor = FFmpegTranscodeExecutor(
                require_tool("ffmpeg", config.tools.ffmpeg),
                settings=config.transcode,
                timeout=config.transcode_timeout,
            )

        self.queue = JobQueue(config.effective_queue_size)
        self.pool = WorkerPool(
            config.max_jobs,
            self.queue,
            inspector,
            executor,
            config.out_dir,
            config.transcode,
        )
        self.watcher = DirectoryWatcher(
            config.watch_dir,
            config.extensions,
            self.queue,
            observer_factory=observer_factory,
        )

        self._shutdown_requested = threading.Event()
        self._scan_thread: threading.Thread | None = None

    def start(self) -> None:
        """Start workers, the subscription and the initial scan.

        Raises:
            SubscriptionError: If the directory cannot be watched. Workers
                are stopped before the error propagates.
        """
        logger.info(
            "Starting vidwatch: PID=%d, watch_dir=%s, out_dir=%s, "
            "max_jobs=%d, queue_size=%d",
            os.getpid(),
            self.config.watch_dir,
            self.config.out_dir,
            self.config.max_jobs,
            self.queue.capacity,
        )

        self.pool.start()
        try:
            self.watcher.start()
        except SubscriptionError:
            self.pool.shutdown()
            raise

        self._scan_thread = threading.Thread(
            target=enqueue_initial_files,
            args=(self.config.watch_dir, self.config.extensions, self.queue),
            daemon=True,
            name="initial-scan",
        )
        self._scan_thread.start()

    def request_shutdown(self) -> None:
        """Ask wait() to return. Safe to call from a signal handler."""
        self._shutdown_requested.set()

    def install_signal_handlers(self) -> None:
        """Turn SIGTERM and SIGINT into a graceful shutdown request."""
        signal.signal(signal.SIGTERM, self._signal_handler)
        signal.signal(signal.SIGINT, self._signal_handler)

    def _signal_handler(self, signum: int, frame) -> None:
        sig_name = signal.Signals(signum).name
        logger.info("Received %s, requesting shutdown...", sig_name)
        self.request_shutdown()

    def wait(self) -> bool:
        """Block until shutdown is requested or the subscription dies.

        Returns:
            True on a requested shutdown, False if the watcher thread died.
        """
        while not self._shutdown_requested.wait(self.SUPERVISE_INTERVAL):
            if not self.watcher.is_alive():
                logger.error(
                    "Filesystem watcher for %s stopped unexpectedly",
                    self.config.watch_dir,
                )
                return False
        return True

    def stop(self) -> None:
        """Stop accepting files and let workers finish their current job."""
        logger.info("Shutting down, waiting for running jobs to finish")
        self.pool.shutdown()
        self.watcher.stop()
        if self._scan_thread is not None:
            self._scan_thread.join(timeout=JobQueue.PUT_POLL_INTERVAL * 4)
        logger.info(
            "vidwatch stopped: %d job(s) processed", self.pool.files_processed
        )

    def run(self) -> bool:
        """Start, supervise until shutdown, then stop.

        Returns:
            True on a clean, requested shutdown; False if the subscription
            was lost.

        Raises:
            SubscriptionError: If the subscription cannot be established.
        """
        self.start()
        try:
            clean = self.wait()
        finally:
            self.stop()
        return clean
