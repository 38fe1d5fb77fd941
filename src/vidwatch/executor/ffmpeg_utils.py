"""FFmpeg executor utilities.

Deadline computation and temp-output handling for ffmpeg runs. ffmpeg
writes to a hidden temp file next to the final output, which is renamed
into place only once the run succeeded.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

PARTIAL_MARKER = ".partial"


def compute_timeout(
    file_size_bytes: int,
    base_timeout: int = 1800,
    seconds_per_gb: int = 300,
) -> int | None:
    """Compute the deadline for one ffmpeg run based on input size.

    Large inputs take longer even when every stream is copied, so the
    deadline grows with file size and never drops below ``base_timeout``.

    Args:
        file_size_bytes: Size of input file in bytes.
        base_timeout: Minimum timeout in seconds. 0 or less means no deadline.
        seconds_per_gb: Seconds allowed per GB of input.

    Returns:
        Timeout in seconds, or None for no deadline.
    """
    if base_timeout <= 0:
        return None

    file_size_gb = file_size_bytes / (1024**3)
    scaled_timeout = int(file_size_gb * seconds_per_gb)
    return max(base_timeout, scaled_timeout)


def partial_output_path(output_path: Path) -> Path:
    """Temp path ffmpeg writes to before the result is moved into place.

    ``/out/movie.mp4`` becomes ``/out/.movie.partial.mp4``. It stays in the
    same directory so the final rename never crosses filesystems.

    Args:
        output_path: Final output path.

    Returns:
        Path for the temporary output file.
    """
    return output_path.with_name(
        f".{output_path.stem}{PARTIAL_MARKER}{output_path.suffix}"
    )


def cleanup_partial_output(path: Path) -> None:
    """Remove a temp output file left by a failed run, logging any errors.

    Args:
        path: Path to the temp file to remove.
    """
    if path.exists():
        try:
            path.unlink()
            logger.debug("Removed partial output: %s", path)
        except OSError as e:
            logger.warning("Could not remove partial output %s: %s", path, e)
