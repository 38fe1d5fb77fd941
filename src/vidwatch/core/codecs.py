"""Codec set model shared by the inspector and the transcode decision.

A CodecSet is the ordered list of codec names from one probe, in the order
ffprobe reported the streams. The transcode decision only asks membership
questions of it ("does this file already use aac").
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class StreamCodec:
    """Codec of one reported stream.

    Attributes:
        name: ffprobe codec_name (e.g. "h264", "aac").
        codec_type: ffprobe codec_type ("video", "audio", ...) or None when
            the report did not include one.
    """

    name: str
    codec_type: str | None = None


@dataclass(frozen=True)
class CodecSet:
    """Immutable, ordered codec names extracted from one probe."""

    streams: tuple[StreamCodec, ...] = ()

    @classmethod
    def from_names(cls, *names: str) -> CodecSet:
        """Build a CodecSet from bare codec names (no stream types)."""
        return cls(tuple(StreamCodec(name) for name in names))

    @property
    def names(self) -> tuple[str, ...]:
        """Codec names in report order."""
        return tuple(stream.name for stream in self.streams)

    @property
    def video_codecs(self) -> tuple[str, ...]:
        """Codec names of streams reported as video."""
        return tuple(s.name for s in self.streams if s.codec_type == "video")

    @property
    def audio_codecs(self) -> tuple[str, ...]:
        """Codec names of streams reported as audio."""
        return tuple(s.name for s in self.streams if s.codec_type == "audio")

    def has_codec(self, codec: str) -> bool:
        """Return True iff some stream uses ``codec`` (case-insensitive)."""
        wanted = codec.casefold()
        return any(name.casefold() == wanted for name in self.names)

    def __contains__(self, codec: object) -> bool:
        return isinstance(codec, str) and self.has_codec(codec)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names)

    def __len__(self) -> int:
        return len(self.streams)

    def __str__(self) -> str:
        return ",".join(self.names) or "<none>"
