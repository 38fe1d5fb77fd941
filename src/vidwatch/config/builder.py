"""Configuration builder with explicit layering.

This module provides ConfigBuilder for building WatchConfig by composing
configuration sources with explicit precedence handling:

1. CLI options (highest priority)
2. Environment variables (VIDWATCH_*)
3. Default values (lowest priority)

Environment variables:
- VIDWATCH_FFMPEG_PATH: Path to ffmpeg executable
- VIDWATCH_FFPROBE_PATH: Path to ffprobe executable
- VIDWATCH_MAX_JOBS: Worker pool size
- VIDWATCH_PROBE_TIMEOUT: ffprobe deadline in seconds
- VIDWATCH_TRANSCODE_TIMEOUT: Base ffmpeg deadline in seconds (0 = none)
- VIDWATCH_LOG_LEVEL: Log level (debug, info, warning, error)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from vidwatch.config.env import EnvReader
from vidwatch.config.models import (
    DEFAULT_EXTENSIONS,
    LoggingConfig,
    ToolPathsConfig,
    TranscodeSettings,
    WatchConfig,
)


@dataclass
class ConfigSource:
    """Configuration values from a single source.

    None values indicate "not specified in this source" and will not
    override values from lower-precedence sources.
    """

    # Tool paths
    ffmpeg_path: Path | None = None
    ffprobe_path: Path | None = None

    # Pool and queue
    max_jobs: int | None = None
    queue_size: int | None = None

    # Input filter
    extensions: frozenset[str] | None = None

    # Deadlines
    probe_timeout: int | None = None
    transcode_timeout: int | None = None

    # Decision policy
    skip_unsupported_video: bool | None = None

    # Logging config
    logging_level: str | None = None
    logging_file: Path | None = None
    logging_format: str | None = None


class ConfigBuilder:
    """Builds WatchConfig by layering ConfigSources with precedence.

    Later sources override earlier ones (for non-None values).

    Example:
        builder = ConfigBuilder()
        builder.apply(source_from_env(EnvReader()))
        builder.apply(cli_source)
        config = builder.build(watch_dir, out_dir)
    """

    def __init__(self) -> None:
        """Initialize the builder with no values set."""
        self._values: dict[str, Any] = {}

    def apply(self, source: ConfigSource) -> None:
        """Apply configuration source, overriding existing values.

        Args:
            source: Configuration source to apply.
        """
        for field_obj in fields(source):
            value = getattr(source, field_obj.name)
            if value is not None:
                self._values[field_obj.name] = value

    def _get(self, key: str, default: Any) -> Any:
        return self._values.get(key, default)

    def build(self, watch_dir: Path, out_dir: Path) -> WatchConfig:
        """Build the final WatchConfig with defaults for unset values.

        Args:
            watch_dir: Directory to watch for new files.
            out_dir: Directory to write transcoded files to.

        Returns:
            Complete WatchConfig with all values resolved.

        Raises:
            ValueError: If any resolved value fails validation.
        """
        tools = ToolPathsConfig(
            ffmpeg=self._get("ffmpeg_path", None),
            ffprobe=self._get("ffprobe_path", None),
        )

        logging_config = LoggingConfig(
            level=self._get("logging_level", "info"),
            file=self._get("logging_file", None),
            format=self._get("logging_format", "text"),
        )

        transcode = TranscodeSettings(
            skip_unsupported_video=self._get("skip_unsupported_video", False),
        )

        return WatchConfig(
            watch_dir=watch_dir,
            out_dir=out_dir,
            max_jobs=self._get("max_jobs", 2),
            queue_size=self._get("queue_size", None),
            extensions=self._get("extensions", DEFAULT_EXTENSIONS),
            probe_timeout=self._get("probe_timeout", 60),
            transcode_timeout=self._get("transcode_timeout", 1800),
            transcode=transcode,
            tools=tools,
            logging=logging_config,
        )


def source_from_env(reader: EnvReader) -> ConfigSource:
    """Create ConfigSource from environment variables.

    Args:
        reader: EnvReader instance for reading environment variables.

    Returns:
        ConfigSource with values from environment variables.
    """
    return ConfigSource(
        ffmpeg_path=reader.get_path("VIDWATCH_FFMPEG_PATH"),
        ffprobe_path=reader.get_path("VIDWATCH_FFPROBE_PATH"),
        max_jobs=reader.get_int("VIDWATCH_MAX_JOBS"),
        probe_timeout=reader.get_int("VIDWATCH_PROBE_TIMEOUT"),
        transcode_timeout=reader.get_int("VIDWATCH_TRANSCODE_TIMEOUT"),
        logging_level=reader.get_str("VIDWATCH_LOG_LEVEL"),
    )


def build_config(
    watch_dir: Path,
    out_dir: Path,
    *,
    max_jobs: int | None = None,
    queue_size: int | None = None,
    extensions: Iterable[str] | None = None,
    probe_timeout: int | None = None,
    transcode_timeout: int | None = None,
    skip_unsupported_video: bool | None = None,
    log_level: str | None = None,
    log_file: Path | None = None,
    log_format: str | None = None,
    reader: EnvReader | None = None,
) -> WatchConfig:
    """Build WatchConfig from CLI values layered over the environment.

    Args:
        watch_dir: Directory to watch.
        out_dir: Output directory.
        max_jobs: Worker pool size override.
        queue_size: Job queue capacity override.
        extensions: Input extensions override (empty/None keeps default).
        probe_timeout: ffprobe deadline override.
        transcode_timeout: ffmpeg base deadline override.
        skip_unsupported_video: Enable the strict video policy.
        log_level: Log level override.
        log_file: Log file override.
        log_format: Log format override ("text" or "json").
        reader: EnvReader to use (defaults to os.environ).

    Returns:
        Validated WatchConfig.

    Raises:
        ValueError: If any resolved value fails validation.
    """
    builder = ConfigBuilder()
    builder.apply(source_from_env(reader or EnvReader()))
    builder.apply(
        ConfigSource(
            max_jobs=max_jobs,
            queue_size=queue_size,
            extensions=frozenset(extensions) if extensions else None,
            probe_timeout=probe_timeout,
            transcode_timeout=transcode_timeout,
            skip_unsupported_video=skip_unsupported_video,
            logging_level=log_level,
            logging_file=log_file,
            logging_format=log_format,
        )
    )
    return builder.build(watch_dir, out_dir)
