"""CLI module for vidwatch."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import NoReturn

import click

from vidwatch import __version__
from vidwatch.cli.exit_codes import ExitCode
from vidwatch.config import build_config
from vidwatch.exceptions import SubscriptionError, ToolNotAvailableError
from vidwatch.logging import configure_logging
from vidwatch.service import TranscodeService

logger = logging.getLogger(__name__)


def _fail(message: str, code: ExitCode) -> NoReturn:
    click.echo(f"Error: {message}", err=True)
    sys.exit(code)


@click.command("vidwatch")
@click.argument(
    "watch_dir",
    type=click.Path(path_type=Path),
)
@click.option(
    "--out-dir",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    required=True,
    help="Directory for transcoded files (created if missing).",
)
@click.option(
    "--max-jobs",
    "-j",
    type=int,
    default=None,
    help="Maximum number of concurrent transcode jobs (default: 2).",
)
@click.option(
    "--queue-size",
    type=int,
    default=None,
    help="Capacity of the pending job queue (default: same as --max-jobs).",
)
@click.option(
    "--extension",
    "-e",
    "extensions",
    multiple=True,
    help="Input file extension to process; repeatable (default: mkv).",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write logs to this file instead of standard output.",
)
@click.option(
    "--probe-timeout",
    type=int,
    default=None,
    help="Seconds allowed for each ffprobe run (default: 60).",
)
@click.option(
    "--transcode-timeout",
    type=int,
    default=None,
    help="Base seconds allowed for each ffmpeg run, scaled up for large "
    "files; 0 disables the deadline (default: 1800).",
)
@click.option(
    "--skip-unsupported-video",
    is_flag=True,
    default=False,
    help="Skip files whose video stream is not h264 instead of copying it.",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Log level (default: info).",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Emit one JSON object per log line.",
)
@click.version_option(version=__version__, prog_name="vidwatch")
def main(
    watch_dir: Path,
    out_dir: Path,
    max_jobs: int | None,
    queue_size: int | None,
    extensions: tuple[str, ...],
    log_file: Path | None,
    probe_timeout: int | None,
    transcode_timeout: int | None,
    skip_unsupported_video: bool,
    log_level: str | None,
    log_json: bool,
) -> None:
    """Watch WATCH_DIR and remux finished video files into MP4.

    Video streams are copied unchanged. Audio is copied when it is already
    AAC and re-encoded to AAC otherwise. The source file is deleted after a
    successful transcode.

    Handles graceful shutdown on SIGTERM or SIGINT (Ctrl+C): running jobs
    finish, queued files are left in place.
    """
    if not watch_dir.is_dir():
        _fail(f"Watch directory not found: {watch_dir}", ExitCode.TARGET_NOT_FOUND)

    try:
        config = build_config(
            watch_dir,
            out_dir,
            max_jobs=max_jobs,
            queue_size=queue_size,
            extensions=extensions,
            probe_timeout=probe_timeout,
            transcode_timeout=transcode_timeout,
            skip_unsupported_video=skip_unsupported_video or None,
            log_level=log_level,
            log_file=log_file,
            log_format="json" if log_json else None,
        )
    except ValueError as e:
        _fail(f"Invalid configuration: {e}", ExitCode.CONFIG_ERROR)

    try:
        config.out_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        _fail(
            f"Could not create output directory {config.out_dir}: {e}",
            ExitCode.CONFIG_ERROR,
        )

    try:
        configure_logging(config.logging)
    except OSError as e:
        _fail(
            f"Could not open log file {config.logging.file}: {e}",
            ExitCode.CONFIG_ERROR,
        )

    try:
        service = TranscodeService(config)
    except ToolNotAvailableError as e:
        logger.error("%s", e)
        _fail(str(e), ExitCode.TOOL_NOT_AVAILABLE)

    service.install_signal_handlers()
    try:
        clean = service.run()
    except SubscriptionError as e:
        logger.error("%s", e)
        _fail(str(e), ExitCode.SUBSCRIPTION_FAILED)
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        sys.exit(ExitCode.INTERRUPTED)

    sys.exit(ExitCode.SUCCESS if clean else ExitCode.GENERAL_ERROR)
