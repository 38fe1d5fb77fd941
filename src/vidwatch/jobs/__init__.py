"""Job queue, per-job state machine and worker pool."""

from vidwatch.jobs.models import JobState, TranscodeJob
from vidwatch.jobs.queue import JobQueue
from vidwatch.jobs.worker import JobWorker, WorkerPool

__all__ = [
    "JobQueue",
    "JobState",
    "JobWorker",
    "TranscodeJob",
    "WorkerPool",
]
