"""Shared test fixtures for vidwatch."""

import logging
import shutil
import tempfile
from pathlib import Path

import pytest

from vidwatch.core.codecs import CodecSet
from vidwatch.executor.interface import TranscodeResult
from vidwatch.logging.context import WorkerContextFilter

# Trimmed `ffprobe -v error -show_format -show_streams` output for an
# h264 + ac3 Matroska file.
FFPROBE_H264_AC3 = """\
[STREAM]
index=0
codec_name=h264
codec_long_name=H.264 / AVC / MPEG-4 AVC / MPEG-4 part 10
profile=High
codec_type=video
width=1920
height=1080
[/STREAM]
[STREAM]
index=1
codec_name=ac3
codec_long_name=ATSC A/52A (AC-3)
codec_type=audio
sample_rate=48000
channels=6
[/STREAM]
[FORMAT]
filename=/watch/movie.mkv
nb_streams=2
format_name=matroska,webm
duration=5400.000000
[/FORMAT]
"""


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test isolation."""
    dir_path = tempfile.mkdtemp()
    yield Path(dir_path)
    shutil.rmtree(dir_path, ignore_errors=True)


@pytest.fixture
def watch_dir(temp_dir: Path) -> Path:
    """Watched directory inside the temp dir."""
    path = temp_dir / "watch"
    path.mkdir()
    return path


@pytest.fixture
def out_dir(temp_dir: Path) -> Path:
    """Output directory inside the temp dir."""
    path = temp_dir / "out"
    path.mkdir()
    return path


@pytest.fixture
def ffprobe_report() -> str:
    """Sample ffprobe report with h264 video and ac3 audio."""
    return FFPROBE_H264_AC3


@pytest.fixture(autouse=True)
def reset_root_logger():
    """Remove handlers installed by configure_logging and restore the level."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if any(isinstance(f, WorkerContextFilter) for f in handler.filters):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


class FakeInspector:
    """CodecInspector returning canned codec sets (or raising) per file name."""

    def __init__(self, results: dict[str, CodecSet | Exception]) -> None:
        self.results = results
        self.calls: list[Path] = []

    def get_codecs(self, path: Path) -> CodecSet:
        self.calls.append(path)
        result = self.results[path.name]
        if isinstance(result, Exception):
            raise result
        return result


class FakeExecutor:
    """TranscodeExecutor that writes an empty output file (or raises)."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.calls: list[tuple[Path, CodecSet, Path]] = []

    def transcode(
        self, input_path: Path, codecs: CodecSet, output_path: Path
    ) -> TranscodeResult:
        self.calls.append((input_path, codecs, output_path))
        if self.error is not None:
            raise self.error
        output_path.write_bytes(b"")
        audio_reencoded = not codecs.has_codec("aac")
        return TranscodeResult(
            output_path=output_path,
            command=("ffmpeg", "-i", str(input_path), str(output_path)),
            audio_reencoded=audio_reencoded,
        )
