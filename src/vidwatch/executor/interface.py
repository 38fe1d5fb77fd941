"""Executor protocol and tool availability utilities.

Tools are resolved once at startup: an explicitly configured path wins,
otherwise the executable is looked up on PATH.
"""

import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from vidwatch.core.codecs import CodecSet
from vidwatch.exceptions import ToolNotAvailableError

_INSTALL_HINT = "Install ffmpeg (which provides ffmpeg and ffprobe) or set {env}."


@dataclass(frozen=True)
class TranscodeResult:
    """Result of a successful transcode.

    Attributes:
        output_path: The file that was written.
        command: The full ffmpeg argument list that produced it.
        audio_reencoded: True if the audio was re-encoded rather than copied.
    """

    output_path: Path
    command: tuple[str, ...]
    audio_reencoded: bool


class TranscodeExecutor(Protocol):
    """Protocol for transcode implementations."""

    def transcode(
        self, input_path: Path, codecs: CodecSet, output_path: Path
    ) -> TranscodeResult:
        """Transcode ``input_path`` into ``output_path``.

        Raises:
            TranscodeError: If the transcode fails.
        """
        ...


def _is_executable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.X_OK)


def get_tool_path(tool_name: str, configured: Path | None = None) -> Path | None:
    """Get path to a tool, or None if not available.

    Args:
        tool_name: Name of the tool (e.g. "ffmpeg").
        configured: Explicitly configured path, if any.

    Returns:
        Path to the tool or None if not available.
    """
    if configured is not None:
        configured = Path(configured).expanduser()
        return configured if _is_executable(configured) else None

    found = shutil.which(tool_name)
    return Path(found) if found else None


def require_tool(tool_name: str, configured: Path | None = None) -> Path:
    """Get path to a required tool, raising an error if not available.

    Args:
        tool_name: Name of the tool to find.
        configured: Explicitly configured path, if any.

    Returns:
        Path to the tool executable.

    Raises:
        ToolNotAvailableError: If the tool is not available.
    """
    path = get_tool_path(tool_name, configured)
    if path is None:
        env_var = f"VIDWATCH_{tool_name.upper()}_PATH"
        where = f" at {configured}" if configured is not None else " in PATH"
        raise ToolNotAvailableError(
            f"Required tool not available{where}: {tool_name}. "
            + _INSTALL_HINT.format(env=env_var)
        )
    return path
