"""Polling file watcher for watch mode."""

import os
import time
from typing import Callable, Dict, Iterable, List, Optional

from gallery_sync.config import EXIT_INTERRUPTED, WATCH_POLL_INTERVAL
from gallery_sync.errors import SyncError
from gallery_sync.logging_config import get_logger

__all__ = ["FileWatcher"]

logger = get_logger("watch")


def _mtime(path: str) -> Optional[int]:
    try:
        return os.stat(path).st_mtime_ns
    except OSError:
        return None


class FileWatcher:
    """Detects modified files by comparing modification times between polls.

    Changed files are reported one at a time, so the callback never runs
    concurrently with itself.
    """

    def __init__(
        self,
        paths: Iterable[str],
        poll_interval: float = WATCH_POLL_INTERVAL,
    ) -> None:
        self.paths: List[str] = [os.path.abspath(p) for p in paths]
        self.poll_interval = float(poll_interval)
        self.baseline: Dict[str, Optional[int]] = {p: _mtime(p) for p in self.paths}

    def scan_once(self) -> List[str]:
        """Return the watched paths whose mtime changed since the last scan."""
        changed: List[str] = []
        for path in self.paths:
            current = _mtime(path)
            if current != self.baseline.get(path):
                self.baseline[path] = current
                if current is None:
                    logger.warning(f"Watched file disappeared: {path}")
                    continue
                changed.append(path)
        return changed

    def run(
        self,
        callback: Callable[[str], None],
        should_stop: Optional[Callable[[], bool]] = None,
    ) -> None:
        """Poll until should_stop() is true or the user interrupts.

        Raises:
            SyncError: With EXIT_INTERRUPTED on Ctrl+C
        """
        logger.info(f"Watching {len(self.paths)} file(s) for changes. Press Ctrl+C to stop.")
        try:
            while not (should_stop and should_stop()):
                for path in self.scan_once():
                    callback(path)
                time.sleep(self.poll_interval)
        except KeyboardInterrupt:
            logger.info("Interrupted by user. Exiting watch mode.")
            raise SyncError("Watch mode interrupted", EXIT_INTERRUPTED)
