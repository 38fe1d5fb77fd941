"""Exceptions raised by the ingestion-and-transcode pipeline.

Startup errors (SubscriptionError) are fatal and end the process. ScanError
only skips the initial directory scan. The per-job errors (ProbeError,
UnsupportedVideoError, TranscodeError, CleanupError) are handled at the
worker boundary: the job is abandoned and the worker moves on.
"""

from __future__ import annotations

from pathlib import Path


class VidwatchError(Exception):
    """Base exception for vidwatch errors.

    All pipeline exceptions inherit from this class, allowing callers
    to catch every pipeline error with a single except clause.
    """


class ToolNotAvailableError(VidwatchError):
    """Raised when ffmpeg or ffprobe cannot be found at startup."""


class SubscriptionError(VidwatchError):
    """Raised when the filesystem notification subscription cannot be set up."""


class ScanError(VidwatchError):
    """Raised when the initial scan of the watched directory fails."""


class JobError(VidwatchError):
    """Base class for errors that abandon a single job.

    Attributes:
        path: The source file the job was processing.
    """

    def __init__(self, path: Path | str, message: str) -> None:
        """Initialize the exception.

        Args:
            path: The source file the job was processing.
            message: Description of the failure.
        """
        self.path = Path(path)
        super().__init__(message)


class ProbeError(JobError):
    """Raised when ffprobe fails or its report cannot be parsed."""


class UnsupportedVideoError(JobError):
    """Raised when the strict video policy rejects a file's video codec."""


class TranscodeError(JobError):
    """Raised when the ffmpeg invocation fails, times out or cannot start."""


class CleanupError(JobError):
    """Raised when the source file cannot be removed after a transcode."""
