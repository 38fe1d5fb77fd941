"""Transcode decision policy and ffmpeg executor.

Video is never re-encoded: it is always stream-copied into the target
container. Audio is copied when the file already carries the target audio
codec and re-encoded at a fixed bitrate otherwise. Decision functions are
pure so they can be tested without running ffmpeg.
"""

from __future__ import annotations

import logging
import shlex
import subprocess  # nosec B404 - needed for TimeoutExpired
from enum import Enum
from pathlib import Path

from vidwatch.config.models import TranscodeSettings
from vidwatch.core.codecs import CodecSet
from vidwatch.core.subprocess_utils import run_command, summarize_stderr
from vidwatch.exceptions import TranscodeError, UnsupportedVideoError
from vidwatch.executor.ffmpeg_utils import (
    cleanup_partial_output,
    compute_timeout,
    partial_output_path,
)
from vidwatch.executor.interface import TranscodeResult

logger = logging.getLogger(__name__)


class AudioAction(Enum):
    """What to do with the audio stream."""

    COPY = "copy"
    REENCODE = "reencode"


def decide_audio_action(codecs: CodecSet, target_codec: str) -> AudioAction:
    """Decide whether audio can be copied or must be re-encoded.

    Args:
        codecs: Codecs reported for the file.
        target_codec: Audio codec the output must use (e.g. "aac").

    Returns:
        AudioAction.COPY if the file already uses ``target_codec``,
        AudioAction.REENCODE otherwise.
    """
    if codecs.has_codec(target_codec):
        return AudioAction.COPY
    return AudioAction.REENCODE


def check_video_supported(
    path: Path, codecs: CodecSet, settings: TranscodeSettings
) -> None:
    """Apply the strict video policy, if enabled.

    Args:
        path: Source file (for the error).
        codecs: Codecs reported for the file.
        settings: Transcode settings.

    Raises:
        UnsupportedVideoError: If the strict policy is enabled and no video
            stream uses ``settings.video_codec``.
    """
    if not settings.skip_unsupported_video:
        return

    wanted = settings.video_codec.casefold()
    if not any(name.casefold() == wanted for name in codecs.video_codecs):
        found = ", ".join(codecs.video_codecs) or "none"
        raise UnsupportedVideoError(
            path,
            f"Video codec of {path.name} is {found}, "
            f"only {settings.video_codec} is copied",
        )


def derive_output_path(input_path: Path, out_dir: Path, extension: str) -> Path:
    """Derive the output path: same base name, output directory, new extension.

    Args:
        input_path: Source file.
        out_dir: Output directory.
        extension: Target container extension including the dot.

    Returns:
        ``out_dir / (input stem + extension)``.
    """
    return out_dir / f"{input_path.stem}{extension}"


def build_transcode_command(
    ffmpeg_path: Path | str,
    input_path: Path,
    output_path: Path,
    audio_action: AudioAction,
    settings: TranscodeSettings,
) -> list[str]:
    """Build the ffmpeg argument list for one file.

    The command structure is:
        ffmpeg -y -i <input> -c:v copy -c:a copy -f mp4 <output>
        ffmpeg -y -i <input> -c:v copy -c:a aac -b:a 192k -f mp4 <output>

    The muxer is named explicitly because ``output_path`` is usually a temp
    name whose suffix ffmpeg should not have to guess from.

    Args:
        ffmpeg_path: ffmpeg executable.
        input_path: Source file.
        output_path: File ffmpeg writes.
        audio_action: Copy or re-encode the audio.
        settings: Transcode settings (container, target codec and bitrate).

    Returns:
        Full command as a list of strings.
    """
    cmd = [str(ffmpeg_path), "-y", "-i", str(input_path), "-c:v", "copy", "-c:a"]
    if audio_action is AudioAction.COPY:
        cmd.append("copy")
    else:
        cmd.extend([settings.audio_codec, "-b:a", settings.audio_bitrate])
    cmd.extend(["-f", settings.container_extension.lstrip("."), str(output_path)])
    return cmd


class FFmpegTranscodeExecutor:
    """Runs the ffmpeg remux/audio re-encode for one file at a time.

    Instances hold only immutable settings, so one executor can be shared
    by every worker.
    """

    DEFAULT_TIMEOUT: int = 1800  # 30 minutes

    def __init__(
        self,
        ffmpeg_path: Path,
        settings: TranscodeSettings | None = None,
        timeout: int | None = None,
    ) -> None:
        """Initialize the executor.

        Args:
            ffmpeg_path: Resolved path to the ffmpeg executable.
            settings: Target format and policy. None uses defaults.
            timeout: Base deadline in seconds (0 = none). None uses
                DEFAULT_TIMEOUT.
        """
        self._ffmpeg_path = ffmpeg_path
        self._settings = settings or TranscodeSettings()
        self._timeout = timeout if timeout is not None else self.DEFAULT_TIMEOUT

    @property
    def settings(self) -> TranscodeSettings:
        return self._settings

    def _timeout_for(self, input_path: Path) -> int | None:
        try:
            size = input_path.stat().st_size
        except OSError:
            size = 0
        return compute_timeout(size, base_timeout=self._timeout)

    def transcode(
        self, input_path: Path, codecs: CodecSet, output_path: Path
    ) -> TranscodeResult:
        """Transcode one file into the target container.

        ffmpeg writes to a temp file beside ``output_path``; only a
        successful run replaces ``output_path``, so a failure never touches
        an output left by an earlier job.

        Args:
            input_path: Source file.
            codecs: Codecs reported for the source.
            output_path: Destination file (replaced on success).

        Returns:
            TranscodeResult describing what was written.

        Raises:
            TranscodeError: If ffmpeg cannot be started, exceeds its deadline,
                exits non-zero, or its output cannot be moved into place. The
                temp file is removed.
        """
        audio_action = decide_audio_action(codecs, self._settings.audio_codec)
        temp_path = partial_output_path(output_path)
        cmd = build_transcode_command(
            self._ffmpeg_path, input_path, temp_path, audio_action, self._settings
        )
        timeout = self._timeout_for(input_path)

        logger.info("Running ffmpeg: %s", " ".join(shlex.quote(c) for c in cmd))

        try:
            _stdout, stderr, returncode = run_command(cmd, timeout=timeout)
        except subprocess.TimeoutExpired as e:
            cleanup_partial_output(temp_path)
            raise TranscodeError(
                input_path, f"ffmpeg timed out for {input_path} after {e.timeout}s"
            ) from e
        except OSError as e:
            cleanup_partial_output(temp_path)
            raise TranscodeError(
                input_path, f"Could not run ffmpeg for {input_path}: {e}"
            ) from e

        if returncode != 0:
            cleanup_partial_output(temp_path)
            raise TranscodeError(
                input_path,
                f"ffmpeg failed for {input_path} (exit {returncode}): "
                f"{summarize_stderr(stderr) or 'no error output'}",
            )

        try:
            temp_path.replace(output_path)
        except OSError as e:
            cleanup_partial_output(temp_path)
            raise TranscodeError(
                input_path, f"Could not move {temp_path} to {output_path}: {e}"
            ) from e

        return TranscodeResult(
            output_path=output_path,
            command=tuple(cmd),
            audio_reencoded=audio_action is AudioAction.REENCODE,
        )
