"""Tests for watcher/scanner.py."""

from pathlib import Path
from unittest.mock import patch

import pytest

from vidwatch.exceptions import ScanError
from vidwatch.jobs.queue import JobQueue
from vidwatch.watcher.scanner import (
    enqueue_initial_files,
    find_initial_files,
    is_allowed,
)

MKV = frozenset({".mkv"})


class TestIsAllowed:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("movie.mkv", True),
            ("MOVIE.MKV", True),
            ("movie.mp4", False),
            ("movie.mkv.part", False),
            ("mkv", False),
        ],
    )
    def test_suffix_matching(self, name: str, expected: bool) -> None:
        assert is_allowed(Path(name), MKV) is expected


class TestFindInitialFiles:
    """Tests for find_initial_files."""

    def test_matches_allow_listed_files_sorted(self, watch_dir: Path) -> None:
        for name in ("c.mkv", "a.mkv", "b.MKV", "notes.txt", "d.mp4"):
            (watch_dir / name).write_bytes(b"")

        result = find_initial_files(watch_dir, MKV)

        assert [p.name for p in result] == ["a.mkv", "b.MKV", "c.mkv"]

    def test_not_recursive(self, watch_dir: Path) -> None:
        nested = watch_dir / "season1"
        nested.mkdir()
        (nested / "e01.mkv").write_bytes(b"")

        assert find_initial_files(watch_dir, MKV) == []

    def test_skips_directories_with_matching_suffix(self, watch_dir: Path) -> None:
        (watch_dir / "folder.mkv").mkdir()

        assert find_initial_files(watch_dir, MKV) == []

    def test_multiple_extensions(self, watch_dir: Path) -> None:
        (watch_dir / "a.mkv").write_bytes(b"")
        (watch_dir / "b.avi").write_bytes(b"")

        result = find_initial_files(watch_dir, frozenset({".mkv", ".avi"}))

        assert [p.name for p in result] == ["a.mkv", "b.avi"]

    def test_missing_directory(self, temp_dir: Path) -> None:
        with pytest.raises(ScanError, match="Could not scan"):
            find_initial_files(temp_dir / "missing", MKV)


class TestEnqueueInitialFiles:
    """Tests for enqueue_initial_files."""

    def test_queues_matches(self, watch_dir: Path) -> None:
        (watch_dir / "a.mkv").write_bytes(b"")
        (watch_dir / "b.mkv").write_bytes(b"")
        (watch_dir / "c.mp4").write_bytes(b"")
        job_queue = JobQueue(5)

        assert enqueue_initial_files(watch_dir, MKV, job_queue) == 2
        assert job_queue.get() == watch_dir / "a.mkv"
        assert job_queue.get() == watch_dir / "b.mkv"

    def test_scan_error_is_logged_not_raised(
        self, temp_dir: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        job_queue = JobQueue(1)

        assert enqueue_initial_files(temp_dir / "missing", MKV, job_queue) == 0
        assert "skipping initial scan" in caplog.text

    def test_stops_when_queue_closed(self, watch_dir: Path) -> None:
        (watch_dir / "a.mkv").write_bytes(b"")
        job_queue = JobQueue(1)
        job_queue.close(consumers=0)

        with patch.object(job_queue, "put", wraps=job_queue.put) as mock_put:
            assert enqueue_initial_files(watch_dir, MKV, job_queue) == 0

        mock_put.assert_called_once()
