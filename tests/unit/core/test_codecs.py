"""Tests for core/codecs.py."""

import pytest

from vidwatch.core.codecs import CodecSet, StreamCodec


@pytest.fixture
def codecs() -> CodecSet:
    return CodecSet(
        (
            StreamCodec("h264", "video"),
            StreamCodec("ac3", "audio"),
            StreamCodec("subrip", "subtitle"),
        )
    )


class TestCodecSet:
    """Tests for CodecSet."""

    def test_names_in_report_order(self, codecs: CodecSet) -> None:
        assert codecs.names == ("h264", "ac3", "subrip")
        assert list(codecs) == ["h264", "ac3", "subrip"]

    def test_has_codec_when_present(self, codecs: CodecSet) -> None:
        assert codecs.has_codec("ac3") is True

    def test_has_codec_when_absent(self, codecs: CodecSet) -> None:
        assert codecs.has_codec("aac") is False

    def test_has_codec_is_case_insensitive(self, codecs: CodecSet) -> None:
        assert codecs.has_codec("H264") is True

    def test_contains(self, codecs: CodecSet) -> None:
        assert "h264" in codecs
        assert "aac" not in codecs
        assert 264 not in codecs

    def test_type_views(self, codecs: CodecSet) -> None:
        assert codecs.video_codecs == ("h264",)
        assert codecs.audio_codecs == ("ac3",)

    def test_from_names_has_no_types(self) -> None:
        codecs = CodecSet.from_names("hevc", "aac")

        assert codecs.names == ("hevc", "aac")
        assert codecs.video_codecs == ()
        assert len(codecs) == 2

    def test_str(self, codecs: CodecSet) -> None:
        assert str(codecs) == "h264,ac3,subrip"
        assert str(CodecSet()) == "<none>"

    def test_is_immutable(self, codecs: CodecSet) -> None:
        with pytest.raises(AttributeError):
            codecs.streams = ()  # type: ignore[misc]
