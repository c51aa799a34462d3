"""Collect file-system events from watchdog and hand them over in debounced batches."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Callable

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from ...constants import DEBOUNCE_SECONDS, IGNORED_DIRECTORIES, WATCHED_EXTENSIONS

logger = logging.getLogger(__name__)


class ChangeBatcher(FileSystemEventHandler):
    """
    Watchdog handler that gathers changed PHP files into batches.

    Each event restarts the debounce timer; when it fires, the batch is
    passed to `on_change` in first-seen order. Batches never overlap: the
    callback runs under a lock, so a slow phpunit run delays the next batch
    instead of racing it.
    """

    def __init__(
        self,
        on_change: Callable[[list[str]], object],
        debounce: float = DEBOUNCE_SECONDS,
        extensions: frozenset[str] = WATCHED_EXTENSIONS,
    ):
        self.on_change = on_change
        self.debounce = debounce
        self.extensions = extensions

        self._pending: list[str] = []
        self._pending_lock = threading.Lock()
        self._dispatch_lock = threading.Lock()
        self._timer: threading.Timer | None = None

    def on_created(self, event: FileSystemEvent) -> None:
        self._record(event.src_path, event.is_directory)

    def on_modified(self, event: FileSystemEvent) -> None:
        self._record(event.src_path, event.is_directory)

    def on_moved(self, event: FileSystemEvent) -> None:
        self._record(event.dest_path, event.is_directory)

    def _record(self, path, is_directory: bool) -> None:
        if is_directory:
            return
        path = str(path)
        if not self.is_relevant(path):
            return

        with self._pending_lock:
            if path not in self._pending:
                self._pending.append(path)
            if self._timer:
                self._timer.cancel()
            self._timer = threading.Timer(self.debounce, self.flush)
            self._timer.daemon = True
            self._timer.start()

    def is_relevant(self, path: str) -> bool:
        p = Path(path)
        if p.suffix not in self.extensions:
            return False
        return not any(part in IGNORED_DIRECTORIES for part in p.parts)

    def flush(self) -> None:
        """Dispatch the pending batch now."""
        with self._pending_lock:
            batch, self._pending = self._pending, []
            if self._timer:
                self._timer.cancel()
            self._timer = None

        if not batch:
            return

        with self._dispatch_lock:
            logger.info(f"Changed: {', '.join(batch)}")
            self.on_change(batch)

    def cancel(self) -> None:
        with self._pending_lock:
            if self._timer:
                self._timer.cancel()
            self._timer = None
            self._pending = []


def create_observer(handler: ChangeBatcher, *paths: str, recursive: bool = True) -> Observer:
    """Build a watchdog Observer scheduled on every one of `paths` (not started)."""
    observer = Observer()
    for path in paths:
        observer.schedule(handler, path=path, recursive=recursive)
    return observer
