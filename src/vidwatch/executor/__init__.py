"""Execution layer module for vidwatch.

- interface: TranscodeExecutor protocol, TranscodeResult, tool resolution
- transcode: Stream decision policy and the ffmpeg executor
- ffmpeg_utils: Deadline computation and partial-output cleanup
"""

from vidwatch.executor.interface import (
    TranscodeExecutor,
    TranscodeResult,
    get_tool_path,
    require_tool,
)
from vidwatch.executor.transcode import (
    AudioAction,
    FFmpegTranscodeExecutor,
    build_transcode_command,
    check_video_supported,
    decide_audio_action,
    derive_output_path,
)

__all__ = [
    # Interface
    "TranscodeExecutor",
    "TranscodeResult",
    "get_tool_path",
    "require_tool",
    # Transcode
    "AudioAction",
    "FFmpegTranscodeExecutor",
    "build_transcode_command",
    "check_video_supported",
    "decide_audio_action",
    "derive_output_path",
]
