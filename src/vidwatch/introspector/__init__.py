"""Introspector module for vidwatch.

- CodecInspector: Protocol defining the inspection interface
- FFprobeIntrospector: Production implementation using ffprobe
- parse_codec_report: Pure parser for ffprobe's text report
"""

from vidwatch.introspector.ffprobe import FFprobeIntrospector
from vidwatch.introspector.interface import CodecInspector
from vidwatch.introspector.parsers import parse_codec_report

__all__ = [
    "CodecInspector",
    "FFprobeIntrospector",
    "parse_codec_report",
]
