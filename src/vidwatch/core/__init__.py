"""Core utilities shared across vidwatch modules."""

from vidwatch.core.codecs import CodecSet, StreamCodec
from vidwatch.core.subprocess_utils import (
    CommandResult,
    run_command,
    summarize_stderr,
)

__all__ = [
    "CodecSet",
    "CommandResult",
    "StreamCodec",
    "run_command",
    "summarize_stderr",
]
