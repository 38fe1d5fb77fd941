"""FFprobe-based implementation of the CodecInspector protocol."""

import subprocess  # nosec B404 - needed for TimeoutExpired
from pathlib import Path

from vidwatch.core.codecs import CodecSet
from vidwatch.core.subprocess_utils import run_command, summarize_stderr
from vidwatch.exceptions import ProbeError
from vidwatch.introspector.parsers import parse_codec_report


class FFprobeIntrospector:
    """ffprobe-based implementation of the CodecInspector protocol.

    Runs ffprobe with per-stream output and parses the codec names from its
    line-oriented report.
    """

    DEFAULT_TIMEOUT: int = 60

    def __init__(self, ffprobe_path: Path, timeout: int | None = None) -> None:
        """Initialize the introspector.

        Args:
            ffprobe_path: Resolved path to the ffprobe executable.
            timeout: Deadline in seconds for one probe. None uses
                DEFAULT_TIMEOUT.
        """
        self._ffprobe_path = ffprobe_path
        self._timeout = timeout if timeout is not None else self.DEFAULT_TIMEOUT

    def build_command(self, path: Path) -> list[str]:
        """Build the ffprobe command for a file."""
        return [
            str(self._ffprobe_path),
            "-v",
            "error",
            "-show_format",
            "-show_streams",
            str(path),
        ]

    def get_codecs(self, path: Path) -> CodecSet:
        """Determine the codecs used by a media file.

        Args:
            path: Path to the media file.

        Returns:
            CodecSet in report order.

        Raises:
            ProbeError: If the file is missing, ffprobe cannot be started,
                exits non-zero, exceeds its deadline, or prints a report
                that cannot be parsed.
        """
        if not path.exists():
            raise ProbeError(path, f"File not found: {path}")

        try:
            stdout, stderr, returncode = run_command(
                self.build_command(path), timeout=self._timeout
            )
        except subprocess.TimeoutExpired as e:
            raise ProbeError(
                path, f"ffprobe timed out for {path} after {e.timeout}s"
            ) from e
        except OSError as e:
            raise ProbeError(path, f"Could not run ffprobe for {path}: {e}") from e

        if returncode != 0:
            raise ProbeError(
                path,
                f"ffprobe failed for {path} (exit {returncode}): "
                f"{summarize_stderr(stderr) or 'no error output'}",
            )

        return parse_codec_report(path, stdout)
