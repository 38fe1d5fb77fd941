"""Configuration data models.

This module defines dataclasses for vidwatch configuration options. A single
WatchConfig is built at startup and handed to the service, which passes the
relevant parts on to the watcher and the worker pool.
"""

from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_EXTENSIONS: frozenset[str] = frozenset({".mkv"})


def normalize_extension(ext: str) -> str:
    """Normalize a file extension to lowercase with a leading dot.

    Args:
        ext: Extension with or without leading dot (e.g. "mkv", ".MKV").

    Returns:
        Normalized extension (e.g. ".mkv").
    """
    ext = ext.strip().lower()
    if not ext.startswith("."):
        ext = f".{ext}"
    return ext


@dataclass
class LoggingConfig:
    """Configuration for the log sink."""

    # Log level: debug, info, warning, error
    level: str = "info"

    # Log file path (None = stdout)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        valid_levels = {"debug", "info", "warning", "error"}
        if self.level.lower() not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}, got {self.level}")
        valid_formats = {"text", "json"}
        if self.format.lower() not in valid_formats:
            raise ValueError(
                f"format must be one of {valid_formats}, got {self.format}"
            )


@dataclass
class ToolPathsConfig:
    """Configuration for external tool paths.

    All paths are optional. If not specified, tools are looked up in PATH.
    """

    ffmpeg: Path | None = None
    ffprobe: Path | None = None


@dataclass(frozen=True)
class TranscodeSettings:
    """Target format and stream decision policy.

    Video is always stream-copied. Audio is copied when the file already
    carries ``audio_codec``, otherwise re-encoded at ``audio_bitrate``.
    """

    container_extension: str = ".mp4"
    audio_codec: str = "aac"
    audio_bitrate: str = "192k"

    # Only consulted when skip_unsupported_video is set
    video_codec: str = "h264"
    skip_unsupported_video: bool = False

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not self.container_extension.startswith("."):
            raise ValueError(
                "container_extension must start with '.', "
                f"got {self.container_extension!r}"
            )
        if not self.audio_codec:
            raise ValueError("audio_codec must not be empty")
        if not self.audio_bitrate:
            raise ValueError("audio_bitrate must not be empty")


@dataclass
class WatchConfig:
    """Top-level configuration for one vidwatch process."""

    watch_dir: Path
    out_dir: Path
    max_jobs: int = 2

    # None = same as max_jobs
    queue_size: int | None = None

    extensions: frozenset[str] = DEFAULT_EXTENSIONS

    # Seconds; ffprobe always runs with a deadline
    probe_timeout: int = 60

    # Base seconds for ffmpeg, scaled up for large inputs (0 = no deadline)
    transcode_timeout: int = 1800

    transcode: TranscodeSettings = field(default_factory=TranscodeSettings)
    tools: ToolPathsConfig = field(default_factory=ToolPathsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def __post_init__(self) -> None:
        """Validate configuration."""
        self.watch_dir = Path(self.watch_dir)
        self.out_dir = Path(self.out_dir)
        self.extensions = frozenset(normalize_extension(e) for e in self.extensions)

        if self.max_jobs < 1:
            raise ValueError(f"max_jobs must be at least 1, got {self.max_jobs}")
        if self.queue_size is not None and self.queue_size < 1:
            raise ValueError(
                f"queue_size must be at least 1, got {self.queue_size}"
            )
        if not self.extensions:
            raise ValueError("at least one input extension is required")
        if self.probe_timeout < 1:
            raise ValueError(
                f"probe_timeout must be at least 1 second, got {self.probe_timeout}"
            )
        if self.transcode_timeout < 0:
            raise ValueError(
                "transcode_timeout must be 0 (no deadline) or positive, "
                f"got {self.transcode_timeout}"
            )

        # Output written back into the watched directory would be picked up
        # again as input.
        same_dir = self.watch_dir.resolve() == self.out_dir.resolve()
        if same_dir and self.transcode.container_extension in self.extensions:
            raise ValueError(
                "out_dir must differ from the watched directory when "
                f"{self.transcode.container_extension} files are watched"
            )

    @property
    def effective_queue_size(self) -> int:
        """Capacity of the job queue."""
        return self.queue_size if self.queue_size is not None else self.max_jobs
