"""Tests for config/env.py."""

from pathlib import Path

import pytest

from vidwatch.config.env import EnvReader


class TestEnvReader:
    """Tests for EnvReader."""

    def test_get_str(self) -> None:
        reader = EnvReader(env={"VIDWATCH_LOG_LEVEL": "debug"})

        assert reader.get_str("VIDWATCH_LOG_LEVEL") == "debug"
        assert reader.get_str("MISSING", "info") == "info"

    def test_get_int(self) -> None:
        reader = EnvReader(env={"VIDWATCH_MAX_JOBS": "4"})

        assert reader.get_int("VIDWATCH_MAX_JOBS", 2) == 4
        assert reader.get_int("MISSING", 2) == 2

    def test_get_int_invalid_logs_warning(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        reader = EnvReader(env={"VIDWATCH_MAX_JOBS": "lots"})

        assert reader.get_int("VIDWATCH_MAX_JOBS", 2) == 2
        assert "Invalid integer value for VIDWATCH_MAX_JOBS" in caplog.text

    def test_get_path_existing(self, temp_dir: Path) -> None:
        reader = EnvReader(env={"VIDWATCH_FFMPEG_PATH": str(temp_dir)})

        assert reader.get_path("VIDWATCH_FFMPEG_PATH") == temp_dir

    def test_get_path_missing_is_ignored(
        self, temp_dir: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        missing = temp_dir / "ffmpeg"
        reader = EnvReader(env={"VIDWATCH_FFMPEG_PATH": str(missing)})

        assert reader.get_path("VIDWATCH_FFMPEG_PATH") is None
        assert "non-existent path" in caplog.text

    def test_get_path_without_existence_check(self, temp_dir: Path) -> None:
        missing = temp_dir / "ffmpeg"
        reader = EnvReader(env={"VIDWATCH_FFMPEG_PATH": str(missing)})

        assert reader.get_path("VIDWATCH_FFMPEG_PATH", must_exist=False) == missing

    def test_defaults_to_os_environ(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VIDWATCH_PROBE_TIMEOUT", "30")

        assert EnvReader().get_int("VIDWATCH_PROBE_TIMEOUT") == 30
