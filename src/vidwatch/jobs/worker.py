"""Worker pool draining the job queue.

Each worker thread loops: take one path off the queue, run it through
probe -> decision -> transcode -> cleanup, log the outcome, repeat. Every
per-job error is handled here; nothing propagates to the pool, the queue or
the watcher, so a bad file never stops a worker.
"""

from __future__ import annotations

import logging
import threading
import time
from pathlib import Path

from vidwatch.config.models import TranscodeSettings
from vidwatch.exceptions import CleanupError, JobError, UnsupportedVideoError
from vidwatch.executor.interface import TranscodeExecutor
from vidwatch.executor.transcode import check_video_supported, derive_output_path
from vidwatch.introspector.interface import CodecInspector
from vidwatch.jobs.models import JobState, TranscodeJob
from vidwatch.jobs.queue import JobQueue
from vidwatch.logging.context import worker_context

logger = logging.getLogger(__name__)


class JobWorker:
    """Processes queued paths one at a time."""

    def __init__(
        self,
        worker_id: str,
        job_queue: JobQueue,
        inspector: CodecInspector,
        executor: TranscodeExecutor,
        out_dir: Path,
        settings: TranscodeSettings | None = None,
    ) -> None:
        """Initialize the worker.

        Args:
            worker_id: Identifier used in thread names and log tags ("01").
            job_queue: Queue to drain.
            inspector: Codec inspector (shared, stateless).
            executor: Transcode executor (shared, stateless).
            out_dir: Directory transcoded files are written to.
            settings: Transcode settings. None uses defaults.
        """
        self.worker_id = worker_id
        self._queue = job_queue
        self._inspector = inspector
        self._executor = executor
        self._out_dir = out_dir
        self._settings = settings or TranscodeSettings()
        self._files_processed = 0

    @property
    def files_processed(self) -> int:
        return self._files_processed

    def process(self, path: Path) -> TranscodeJob:
        """Run one path end-to-end.

        Args:
            path: Source file to transcode.

        Returns:
            The finished job, in a terminal state.
        """
        job = TranscodeJob(
            input_path=path,
            output_path=derive_output_path(
                path, self._out_dir, self._settings.container_extension
            ),
        )
        start_time = time.monotonic()

        try:
            self._run(job)
        except UnsupportedVideoError as e:
            job.skip(str(e))
            logger.warning(
                "Skipping %s: %s", path, e, extra=self._outcome(job, start_time)
            )
        except JobError as e:
            state = job.fail(str(e))
            logger.error(
                "Job for %s ended in %s: %s",
                path,
                state.value,
                e,
                extra=self._outcome(job, start_time),
            )
        except Exception as e:
            state = job.fail(str(e))
            logger.exception(
                "Unexpected error processing %s (ended in %s)",
                path,
                state.value,
                extra=self._outcome(job, start_time),
            )
        else:
            outcome = self._outcome(job, start_time)
            logger.info(
                "Finished %s in %.1fs",
                job.output_path,
                outcome["job_seconds"],
                extra=outcome,
            )

        return job

    @staticmethod
    def _outcome(job: TranscodeJob, start_time: float) -> dict[str, object]:
        """Job fields attached to the outcome log record."""
        return {
            "job_state": job.state.value,
            "input_path": str(job.input_path),
            "output_path": str(job.output_path),
            "job_seconds": round(time.monotonic() - start_time, 1),
        }

    def _run(self, job: TranscodeJob) -> None:
        path = job.input_path

        job.advance(JobState.PROBING)
        codecs = self._inspector.get_codecs(path)
        job.codecs = codecs
        check_video_supported(path, codecs, self._settings)

        job.advance(JobState.DECIDED)
        job.advance(JobState.TRANSCODING)
        result = self._executor.transcode(path, codecs, job.output_path)
        job.command = result.command
        job.advance(JobState.TRANSCODED)
        audio = "reencode" if result.audio_reencoded else "copy"
        logger.info(
            "Transcoded %s: %s (video copy, audio %s)",
            path.name,
            codecs,
            audio,
            extra={"audio": audio},
        )

        job.advance(JobState.CLEANUP)
        self._remove_source(path)
        job.advance(JobState.DONE)

    def _remove_source(self, path: Path) -> None:
        try:
            path.unlink()
        except OSError as e:
            raise CleanupError(path, f"Could not remove source {path}: {e}") from e
        logger.debug("Removed source %s", path)

    def run(self) -> int:
        """Drain the queue until end of stream.

        Returns:
            Number of jobs processed.
        """
        with worker_context(self.worker_id):
            logger.info("Worker %s has started", self.worker_id)
            while True:
                path = self._queue.get()
                if path is None:
                    break

                self._files_processed += 1
                file_id = f"F{self._files_processed:03d}"
                with worker_context(self.worker_id, file_id, path):
                    self.process(path)

            logger.info(
                "Worker %s stopped after %d job(s)",
                self.worker_id,
                self._files_processed,
            )
        return self._files_processed


class WorkerPool:
    """Fixed-size set of worker threads sharing one JobQueue."""

    def __init__(
        self,
        size: int,
        job_queue: JobQueue,
        inspector: CodecInspector,
        executor: TranscodeExecutor,
        out_dir: Path,
        settings: TranscodeSettings | None = None,
    ) -> None:
        """Initialize the pool.

        Args:
            size: Number of workers (at least 1).
            job_queue: Queue the workers drain.
            inspector: Codec inspector shared by all workers.
            executor: Transcode executor shared by all workers.
            out_dir: Output directory.
            settings: Transcode settings.

        Raises:
            ValueError: If size is less than 1.
        """
        if size < 1:
            raise ValueError(f"size must be at least 1, got {size}")
        self._queue = job_queue
        self.workers = [
            JobWorker(
                f"{i:02d}", job_queue, inspector, executor, out_dir, settings
            )
            for i in range(1, size + 1)
        ]
        self._threads: list[threading.Thread] = []

    @property
    def size(self) -> int:
        return len(self.workers)

    def start(self) -> None:
        """Start one thread per worker."""
        if self._threads:
            raise RuntimeError("Worker pool already started")
        for worker in self.workers:
            thread = threading.Thread(
                target=worker.run,
                daemon=True,
                name=f"worker-{worker.worker_id}",
            )
            thread.start()
            self._threads.append(thread)

    def alive_count(self) -> int:
        return sum(1 for t in self._threads if t.is_alive())

    def shutdown(self, timeout: float | None = None) -> None:
        """Close the queue and wait for workers to finish their current job.

        Args:
            timeout: Seconds to wait per worker thread. None waits as long
                as the running jobs take (bounded by their deadlines).
        """
        self._queue.close(consumers=len(self._threads))
        for thread in self._threads:
            thread.join(timeout=timeout)
            if thread.is_alive():
                logger.warning(
                    "Worker thread %s did not stop within timeout", thread.name
                )

    @property
    def files_processed(self) -> int:
        return sum(w.files_processed for w in self.workers)
