"""Pure parsing functions for ffprobe's default text report.

``ffprobe -show_streams`` prints one ``[STREAM] ... [/STREAM]`` block per
stream with ``key=value`` lines inside. These functions pull the codec name
(and type) out of each block. All functions are pure (no I/O).
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from vidwatch.core.codecs import CodecSet, StreamCodec
from vidwatch.exceptions import ProbeError

logger = logging.getLogger(__name__)

STREAM_START = "[STREAM]"
STREAM_END = "[/STREAM]"

CODEC_NAME_PATTERN = re.compile(r"^codec_name=([A-Za-z0-9_.\-]+)$")


def parse_codec_report(path: Path, report: str) -> CodecSet:
    """Extract the codec names from an ffprobe report.

    Args:
        path: File the report describes (for error messages).
        report: Standard output of ``ffprobe -show_format -show_streams``.

    Returns:
        CodecSet with one entry per stream, in report order.

    Raises:
        ProbeError: If a codec_name line is malformed, a stream block has no
            (or more than one) codec name, blocks are unbalanced, or no
            streams were reported.
    """
    streams: list[StreamCodec] = []
    in_stream = False
    codec_name: str | None = None
    codec_type: str | None = None

    for lineno, raw_line in enumerate(report.splitlines(), start=1):
        line = raw_line.strip()

        if line == STREAM_START:
            if in_stream:
                raise ProbeError(
                    path, f"Unterminated stream block before line {lineno}"
                )
            in_stream = True
            codec_name = None
            codec_type = None
            continue

        if line == STREAM_END:
            if not in_stream:
                raise ProbeError(path, f"Unexpected {STREAM_END} at line {lineno}")
            if codec_name is None:
                raise ProbeError(
                    path, f"Stream {len(streams)} has no codec_name in probe report"
                )
            streams.append(StreamCodec(codec_name, codec_type))
            in_stream = False
            continue

        if line.startswith("codec_name"):
            match = CODEC_NAME_PATTERN.match(line)
            if match is None:
                raise ProbeError(
                    path, f"Malformed codec_name at line {lineno}: {line!r}"
                )
            if not in_stream:
                raise ProbeError(
                    path, f"codec_name outside a stream block at line {lineno}"
                )
            if codec_name is not None:
                raise ProbeError(
                    path, f"Duplicate codec_name in stream {len(streams)}"
                )
            codec_name = match.group(1)
            continue

        if in_stream and line.startswith("codec_type="):
            codec_type = line.partition("=")[2] or None

    if in_stream:
        raise ProbeError(path, "Probe report ends inside a stream block")
    if not streams:
        raise ProbeError(path, "Probe report lists no streams")

    codecs = CodecSet(tuple(streams))
    logger.debug("Parsed %d stream(s) for %s: %s", len(codecs), path, codecs)
    return codecs
