"""
File system watcher that re-renders a graph file when it changes.

This module provides:
- Watchdog-based monitoring of a single graph file
- Debouncing of editor save cycles
- Content-hash check so touch-only saves do not re-render
"""

import hashlib
import logging
import time
from pathlib import Path
from typing import Callable

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

logger = logging.getLogger(__name__)


def compute_file_hash(path: Path) -> str | None:
    try:
        return hashlib.sha256(path.read_bytes()).hexdigest()
    except OSError:
        return None


class GraphFileHandler(FileSystemEventHandler):
    """
    Tracks changes to one graph file.

    Events arrive on the observer thread and are only recorded there;
    `flush_pending()` runs the callback on the caller's thread once the file
    has been quiet for DEBOUNCE_SECONDS.
    """

    DEBOUNCE_SECONDS = 0.5

    def __init__(self, path: Path, on_change: Callable[[Path], None]):
        super().__init__()
        self.path = path.resolve()
        self.on_change = on_change
        self.pending_since: float | None = None
        self.last_hash = compute_file_hash(self.path)

    def _is_target(self, event: FileSystemEvent) -> bool:
        if event.is_directory:
            return False
        paths = [event.src_path, getattr(event, "dest_path", "")]
        return any(p and Path(p).resolve() == self.path for p in paths)

    def on_created(self, event: FileSystemEvent) -> None:
        if self._is_target(event):
            self.pending_since = time.time()

    def on_modified(self, event: FileSystemEvent) -> None:
        if self._is_target(event):
            self.pending_since = time.time()

    def on_moved(self, event: FileSystemEvent) -> None:
        # Editors that save via rename-over land here.
        if self._is_target(event):
            self.pending_since = time.time()

    def flush_pending(self, now: float | None = None) -> bool:
        """Run the callback if a change has settled. Returns True if it ran."""
        if self.pending_since is None:
            return False
        now = time.time() if now is None else now
        if now - self.pending_since < self.DEBOUNCE_SECONDS:
            return False

        self.pending_since = None
        new_hash = compute_file_hash(self.path)
        if new_hash is None or new_hash == self.last_hash:
            return False

        self.last_hash = new_hash
        logger.debug(f"{self.path} changed")
        self.on_change(self.path)
        return True


def watch_graph_file(path: Path, on_change: Callable[[Path], None]) -> tuple[Observer, GraphFileHandler]:
    """
    Start watching a graph file.

    Returns:
        Tuple of (observer, handler) - caller should call observer.stop() to stop watching
    """
    handler = GraphFileHandler(path, on_change)
    observer = Observer()
    observer.schedule(handler, str(handler.path.parent), recursive=False)
    observer.start()
    return observer, handler


def run_watch_loop(path: Path, on_change: Callable[[Path], None]) -> None:
    """
    Run the watch loop until interrupted.

    This is a blocking function that flushes pending changes periodically.
    """
    observer, handler = watch_graph_file(path, on_change)

    try:
        while True:
            time.sleep(0.25)
            handler.flush_pending()
    except KeyboardInterrupt:
        pass
    finally:
        observer.stop()
        observer.join()
