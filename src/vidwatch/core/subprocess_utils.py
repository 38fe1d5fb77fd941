"""Running ffprobe and ffmpeg.

Both tools are run the same way: output captured as text (undecodable
bytes replaced), an optional deadline, and debug logging tagged with the
tool name so a JSON log can be filtered per tool.
"""

from __future__ import annotations

import logging
import shlex
import subprocess  # nosec B404 - subprocess is required for ffmpeg/ffprobe
import time
from pathlib import Path
from typing import NamedTuple

logger = logging.getLogger(__name__)


class CommandResult(NamedTuple):
    """Captured output of one tool run; unpacks as (stdout, stderr, rc)."""

    stdout: str
    stderr: str
    returncode: int


def tool_name(args: list[str]) -> str:
    """Executable name without its directory ("/usr/bin/ffmpeg" -> "ffmpeg")."""
    return Path(args[0]).name if args else "unknown"


def run_command(
    args: list[str | Path],
    timeout: int | None = 120,
) -> CommandResult:
    """Run a tool to completion and capture its output.

    Args:
        args: Command and arguments. Path objects are converted to strings.
        timeout: Deadline in seconds. None waits indefinitely.

    Returns:
        CommandResult with stdout, stderr and the exit code.

    Raises:
        subprocess.TimeoutExpired: If the deadline passed. The child has
            already been killed.
        OSError: If the tool cannot be started.
    """
    str_args = [str(arg) for arg in args]
    tool = tool_name(str_args)
    logger.debug("Executing: %s", shlex.join(str_args), extra={"command": tool})

    start_time = time.monotonic()
    try:
        completed = subprocess.run(  # nosec B603 - argv built by vidwatch
            str_args,
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        logger.warning(
            "%s timed out after %ds",
            tool,
            timeout,
            extra={
                "command": tool,
                "elapsed_seconds": round(time.monotonic() - start_time, 3),
            },
        )
        raise

    logger.debug(
        "%s exited with %d",
        tool,
        completed.returncode,
        extra={
            "command": tool,
            "elapsed_seconds": round(time.monotonic() - start_time, 3),
        },
    )
    return CommandResult(
        completed.stdout or "", completed.stderr or "", completed.returncode
    )


def summarize_stderr(stderr: str, max_lines: int = 5) -> str:
    """Return the last few non-empty lines of a tool's stderr.

    ffmpeg prints its banner and progress first and the actual error last,
    so the tail is what belongs in a log line.

    Args:
        stderr: Captured standard error.
        max_lines: Maximum number of lines to keep.

    Returns:
        The trailing lines joined with " | ", or "" if there were none.
    """
    lines = [line.strip() for line in stderr.splitlines() if line.strip()]
    return " | ".join(lines[-max_lines:])
