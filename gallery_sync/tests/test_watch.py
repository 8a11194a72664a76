"""Tests for the polling file watcher."""

import os
from unittest.mock import MagicMock, patch

import pytest

from gallery_sync.config import EXIT_INTERRUPTED
from gallery_sync.errors import SyncError
from gallery_sync.watch import FileWatcher


def _touch(path, offset_ns):
    stat = os.stat(path)
    os.utime(path, ns=(stat.st_atime_ns, stat.st_mtime_ns + offset_ns))


class TestFileWatcher:
    """Tests for FileWatcher.scan_once and run."""

    @pytest.fixture
    def pages(self, tmp_path):
        paths = []
        for name in ("a.html", "b.html"):
            path = tmp_path / name
            path.write_text("<p>x</p>", encoding="utf-8")
            paths.append(str(path))
        return paths

    def test_no_changes(self, pages):
        assert FileWatcher(pages).scan_once() == []

    def test_detects_modified_file(self, pages):
        watcher = FileWatcher(pages)
        _touch(pages[1], 5_000_000_000)

        assert watcher.scan_once() == [pages[1]]
        assert watcher.scan_once() == []

    def test_changes_reported_in_watch_order(self, pages):
        watcher = FileWatcher(pages)
        _touch(pages[1], 1_000_000_000)
        _touch(pages[0], 2_000_000_000)

        assert watcher.scan_once() == pages

    def test_deleted_file_not_reported(self, pages):
        watcher = FileWatcher(pages)
        os.remove(pages[0])

        assert watcher.scan_once() == []

    def test_recreated_file_reported(self, pages):
        watcher = FileWatcher(pages)
        os.remove(pages[0])
        watcher.scan_once()

        with open(pages[0], "w", encoding="utf-8") as f:
            f.write("<p>back</p>")

        assert watcher.scan_once() == [pages[0]]

    def test_run_calls_back_until_stopped(self, pages):
        watcher = FileWatcher(pages, poll_interval=0)
        _touch(pages[0], 3_000_000_000)
        callback = MagicMock()
        stops = iter([False, True])

        watcher.run(callback, should_stop=lambda: next(stops))

        callback.assert_called_once_with(pages[0])

    def test_keyboard_interrupt_ends_watch(self, pages):
        watcher = FileWatcher(pages, poll_interval=0)

        with patch("gallery_sync.watch.time.sleep", side_effect=KeyboardInterrupt):
            with pytest.raises(SyncError) as exc_info:
                watcher.run(MagicMock())

        assert exc_info.value.exit_code == EXIT_INTERRUPTED
