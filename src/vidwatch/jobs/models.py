"""Per-job state machine.

Each path taken off the queue becomes one TranscodeJob, owned by the worker
processing it:

    DISCOVERED -> PROBING -> {DECIDED, PROBE_FAILED, SKIPPED}
    DECIDED -> TRANSCODING -> {TRANSCODED, TRANSCODE_FAILED}
    TRANSCODED -> CLEANUP -> {DONE, CLEANUP_FAILED}

Failure states are terminal. Nothing is retried or re-queued.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from vidwatch.core.codecs import CodecSet


class JobState(Enum):
    """Lifecycle state of a single transcode job."""

    DISCOVERED = "discovered"
    PROBING = "probing"
    DECIDED = "decided"
    PROBE_FAILED = "probe_failed"
    SKIPPED = "skipped"
    TRANSCODING = "transcoding"
    TRANSCODED = "transcoded"
    TRANSCODE_FAILED = "transcode_failed"
    CLEANUP = "cleanup"
    DONE = "done"
    CLEANUP_FAILED = "cleanup_failed"

    @property
    def is_terminal(self) -> bool:
        return self in _TERMINAL_STATES


_TRANSITIONS: dict[JobState, frozenset[JobState]] = {
    JobState.DISCOVERED: frozenset({JobState.PROBING}),
    JobState.PROBING: frozenset(
        {JobState.DECIDED, JobState.PROBE_FAILED, JobState.SKIPPED}
    ),
    JobState.DECIDED: frozenset({JobState.TRANSCODING}),
    JobState.TRANSCODING: frozenset(
        {JobState.TRANSCODED, JobState.TRANSCODE_FAILED}
    ),
    JobState.TRANSCODED: frozenset({JobState.CLEANUP}),
    JobState.CLEANUP: frozenset({JobState.DONE, JobState.CLEANUP_FAILED}),
}

_TERMINAL_STATES: frozenset[JobState] = frozenset(
    {
        JobState.PROBE_FAILED,
        JobState.SKIPPED,
        JobState.TRANSCODE_FAILED,
        JobState.DONE,
        JobState.CLEANUP_FAILED,
    }
)

# Failure state for an error raised while the job is in a given phase
_FAILURE_FOR_PHASE: dict[JobState, JobState] = {
    JobState.DISCOVERED: JobState.PROBE_FAILED,
    JobState.PROBING: JobState.PROBE_FAILED,
    JobState.DECIDED: JobState.TRANSCODE_FAILED,
    JobState.TRANSCODING: JobState.TRANSCODE_FAILED,
    JobState.TRANSCODED: JobState.CLEANUP_FAILED,
    JobState.CLEANUP: JobState.CLEANUP_FAILED,
}


@dataclass
class TranscodeJob:
    """One file's trip through probe, decision, transcode and cleanup.

    Attributes:
        input_path: Source file.
        output_path: Destination file in the output directory.
        state: Current lifecycle state.
        codecs: Codecs reported by the probe (set once probing succeeds).
        command: ffmpeg argument list that was run (set after transcoding).
        error: Error message for failed or skipped jobs.
    """

    input_path: Path
    output_path: Path
    state: JobState = JobState.DISCOVERED
    codecs: CodecSet | None = None
    command: tuple[str, ...] | None = None
    error: str | None = None

    def advance(self, new_state: JobState) -> None:
        """Move to ``new_state``.

        Raises:
            ValueError: If the transition is not allowed from the current state.
        """
        allowed = _TRANSITIONS.get(self.state, frozenset())
        if new_state not in allowed:
            raise ValueError(
                f"Invalid job transition {self.state.value} -> {new_state.value} "
                f"for {self.input_path}"
            )
        self.state = new_state

    def fail(self, error: str) -> JobState:
        """Record ``error`` and move to the failure state of the current phase.

        Returns:
            The failure state the job ended in.

        Raises:
            ValueError: If the job is already in a terminal state.
        """
        if self.state.is_terminal:
            raise ValueError(
                f"Job for {self.input_path} already finished as {self.state.value}"
            )
        self.error = error
        self.state = _FAILURE_FOR_PHASE[self.state]
        return self.state

    def skip(self, reason: str) -> None:
        """Record ``reason`` and end the job as SKIPPED."""
        self.advance(JobState.SKIPPED)
        self.error = reason

    @property
    def succeeded(self) -> bool:
        return self.state is JobState.DONE
