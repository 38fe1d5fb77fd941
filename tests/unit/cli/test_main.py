"""Tests for the vidwatch command."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from vidwatch import __version__
from vidwatch.cli import main
from vidwatch.cli.exit_codes import ExitCode
from vidwatch.exceptions import SubscriptionError, ToolNotAvailableError


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def mock_service():
    with patch("vidwatch.cli.TranscodeService") as service_cls:
        service_cls.return_value.run.return_value = True
        yield service_cls


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in (
        "VIDWATCH_MAX_JOBS",
        "VIDWATCH_PROBE_TIMEOUT",
        "VIDWATCH_TRANSCODE_TIMEOUT",
        "VIDWATCH_LOG_LEVEL",
        "VIDWATCH_FFMPEG_PATH",
        "VIDWATCH_FFPROBE_PATH",
    ):
        monkeypatch.delenv(var, raising=False)


class TestMain:
    """Tests for the main command."""

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_out_dir_required(self, runner: CliRunner, watch_dir: Path) -> None:
        result = runner.invoke(main, [str(watch_dir)])

        assert result.exit_code == 2
        assert "--out-dir" in result.output

    def test_clean_shutdown(
        self,
        runner: CliRunner,
        mock_service: MagicMock,
        watch_dir: Path,
        temp_dir: Path,
    ) -> None:
        out_dir = temp_dir / "new" / "out"

        result = runner.invoke(main, [str(watch_dir), "--out-dir", str(out_dir)])

        assert result.exit_code == ExitCode.SUCCESS
        assert out_dir.is_dir()
        config = mock_service.call_args.args[0]
        assert config.watch_dir == watch_dir
        assert config.out_dir == out_dir
        assert config.max_jobs == 2
        service = mock_service.return_value
        service.install_signal_handlers.assert_called_once()
        service.run.assert_called_once()

    def test_options_reach_config(
        self,
        runner: CliRunner,
        mock_service: MagicMock,
        watch_dir: Path,
        out_dir: Path,
        temp_dir: Path,
    ) -> None:
        log_file = temp_dir / "vidwatch.log"

        result = runner.invoke(
            main,
            [
                str(watch_dir),
                "-o",
                str(out_dir),
                "--max-jobs",
                "4",
                "--queue-size",
                "10",
                "-e",
                "mkv",
                "-e",
                "AVI",
                "--probe-timeout",
                "30",
                "--transcode-timeout",
                "0",
                "--skip-unsupported-video",
                "--log-level",
                "DEBUG",
                "--log-json",
                "--log-file",
                str(log_file),
            ],
        )

        assert result.exit_code == ExitCode.SUCCESS, result.output
        config = mock_service.call_args.args[0]
        assert config.max_jobs == 4
        assert config.effective_queue_size == 10
        assert config.extensions == frozenset({".mkv", ".avi"})
        assert config.probe_timeout == 30
        assert config.transcode_timeout == 0
        assert config.transcode.skip_unsupported_video is True
        assert config.logging.level == "debug"
        assert config.logging.format == "json"
        assert config.logging.file == log_file
        assert log_file.exists()

    def test_env_used_when_option_absent(
        self,
        runner: CliRunner,
        mock_service: MagicMock,
        watch_dir: Path,
        out_dir: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("VIDWATCH_MAX_JOBS", "5")

        result = runner.invoke(main, [str(watch_dir), "-o", str(out_dir)])

        assert result.exit_code == ExitCode.SUCCESS
        assert mock_service.call_args.args[0].max_jobs == 5

    def test_missing_watch_dir(
        self, runner: CliRunner, mock_service: MagicMock, temp_dir: Path
    ) -> None:
        result = runner.invoke(
            main, [str(temp_dir / "missing"), "-o", str(temp_dir / "out")]
        )

        assert result.exit_code == ExitCode.TARGET_NOT_FOUND
        assert "Watch directory not found" in result.output
        mock_service.assert_not_called()

    def test_invalid_max_jobs(
        self,
        runner: CliRunner,
        mock_service: MagicMock,
        watch_dir: Path,
        out_dir: Path,
    ) -> None:
        result = runner.invoke(
            main, [str(watch_dir), "-o", str(out_dir), "--max-jobs", "0"]
        )

        assert result.exit_code == ExitCode.CONFIG_ERROR
        assert "max_jobs" in result.output
        mock_service.assert_not_called()

    def test_out_dir_cannot_be_created(
        self,
        runner: CliRunner,
        mock_service: MagicMock,
        watch_dir: Path,
        temp_dir: Path,
    ) -> None:
        blocker = temp_dir / "file"
        blocker.write_text("")

        result = runner.invoke(main, [str(watch_dir), "-o", str(blocker / "out")])

        assert result.exit_code == ExitCode.CONFIG_ERROR
        assert "Could not create output directory" in result.output

    def test_log_file_cannot_be_opened(
        self,
        runner: CliRunner,
        mock_service: MagicMock,
        watch_dir: Path,
        out_dir: Path,
        temp_dir: Path,
    ) -> None:
        blocker = temp_dir / "file"
        blocker.write_text("")

        result = runner.invoke(
            main,
            [str(watch_dir), "-o", str(out_dir), "--log-file", str(blocker / "x.log")],
        )

        assert result.exit_code == ExitCode.CONFIG_ERROR
        assert "Could not open log file" in result.output
        mock_service.assert_not_called()

    def test_tool_not_available(
        self,
        runner: CliRunner,
        mock_service: MagicMock,
        watch_dir: Path,
        out_dir: Path,
    ) -> None:
        mock_service.side_effect = ToolNotAvailableError("ffprobe not found")

        result = runner.invoke(main, [str(watch_dir), "-o", str(out_dir)])

        assert result.exit_code == ExitCode.TOOL_NOT_AVAILABLE
        assert "ffprobe not found" in result.output

    def test_subscription_failed(
        self,
        runner: CliRunner,
        mock_service: MagicMock,
        watch_dir: Path,
        out_dir: Path,
    ) -> None:
        mock_service.return_value.run.side_effect = SubscriptionError("no inotify")

        result = runner.invoke(main, [str(watch_dir), "-o", str(out_dir)])

        assert result.exit_code == ExitCode.SUBSCRIPTION_FAILED

    def test_lost_subscription(
        self,
        runner: CliRunner,
        mock_service: MagicMock,
        watch_dir: Path,
        out_dir: Path,
    ) -> None:
        mock_service.return_value.run.return_value = False

        result = runner.invoke(main, [str(watch_dir), "-o", str(out_dir)])

        assert result.exit_code == ExitCode.GENERAL_ERROR

    def test_interrupted_during_startup(
        self,
        runner: CliRunner,
        mock_service: MagicMock,
        watch_dir: Path,
        out_dir: Path,
    ) -> None:
        mock_service.return_value.run.side_effect = KeyboardInterrupt

        result = runner.invoke(main, [str(watch_dir), "-o", str(out_dir)])

        assert result.exit_code == ExitCode.INTERRUPTED
