"""Tests for tool resolution in executor/interface.py."""

import os
import re
from pathlib import Path
from unittest.mock import patch

import pytest

from vidwatch.exceptions import ToolNotAvailableError
from vidwatch.executor.interface import get_tool_path, require_tool


@pytest.fixture
def fake_tool(temp_dir: Path) -> Path:
    path = temp_dir / "ffmpeg"
    path.write_text("#!/bin/sh\nexit 0\n")
    os.chmod(path, 0o755)
    return path


class TestGetToolPath:
    """Tests for get_tool_path."""

    def test_configured_executable_wins(self, fake_tool: Path) -> None:
        with patch("vidwatch.executor.interface.shutil.which") as mock_which:
            assert get_tool_path("ffmpeg", fake_tool) == fake_tool
            mock_which.assert_not_called()

    def test_configured_but_not_executable(self, temp_dir: Path) -> None:
        path = temp_dir / "ffmpeg"
        path.write_text("")
        os.chmod(path, 0o644)

        assert get_tool_path("ffmpeg", path) is None

    def test_falls_back_to_path_lookup(self) -> None:
        with patch(
            "vidwatch.executor.interface.shutil.which", return_value="/usr/bin/ffprobe"
        ):
            assert get_tool_path("ffprobe") == Path("/usr/bin/ffprobe")

    def test_not_found(self) -> None:
        with patch("vidwatch.executor.interface.shutil.which", return_value=None):
            assert get_tool_path("ffprobe") is None


class TestRequireTool:
    """Tests for require_tool."""

    def test_returns_path(self, fake_tool: Path) -> None:
        assert require_tool("ffmpeg", fake_tool) == fake_tool

    def test_missing_tool_names_env_var(self) -> None:
        with patch("vidwatch.executor.interface.shutil.which", return_value=None):
            with pytest.raises(ToolNotAvailableError, match="VIDWATCH_FFPROBE_PATH"):
                require_tool("ffprobe")

    def test_missing_configured_path(self, temp_dir: Path) -> None:
        missing = temp_dir / "nope" / "ffmpeg"

        with pytest.raises(ToolNotAvailableError, match=re.escape(str(missing))):
            require_tool("ffmpeg", missing)
