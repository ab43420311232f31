"""
File-change notifications for the repository working tree.

A :class:`FileWatcher` observes the repository root recursively with
:mod:`watchdog` and calls ``on_change(path)`` with the repository-relative
path of every created, modified, deleted or moved file. Paths with a
dot-prefixed segment (``.git/``, ``.env``, editor swap directories) are
ignored. Exceptions raised by ``on_change`` are handed to ``on_error``.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Optional

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


def is_ignored(relative_path: str) -> bool:
    """Return True if any segment of ``relative_path`` starts with a dot."""
    parts = relative_path.replace("\\", "/").split("/")
    return any(part.startswith(".") and part not in (".", "..") for part in parts if part)


class _ChangeHandler(FileSystemEventHandler):
    """Translate watchdog events into ``on_change`` calls."""

    def __init__(
        self,
        root: Path,
        on_change: Callable[[str], None],
        on_error: Callable[[Exception], None],
    ) -> None:
        super().__init__()
        self.root = root
        self.on_change = on_change
        self.on_error = on_error

    def _relative(self, path) -> Optional[str]:
        if isinstance(path, bytes):
            path = os.fsdecode(path)
        try:
            return Path(path).resolve().relative_to(self.root).as_posix()
        except ValueError:
            return None

    def _deliver(self, path) -> None:
        relative = self._relative(path)
        if not relative or is_ignored(relative):
            return
        try:
            self.on_change(relative)
        except Exception as exc:
            self.on_error(exc)

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._deliver(event.src_path)

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._deliver(event.src_path)

    def on_deleted(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._deliver(event.src_path)

    def on_moved(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._deliver(event.dest_path)


class FileWatcher:
    """Recursive watcher over a repository working tree."""

    def __init__(
        self,
        root: Path,
        on_change: Callable[[str], None],
        on_error: Optional[Callable[[Exception], None]] = None,
    ) -> None:
        self.root = Path(root).resolve()
        self.handler = _ChangeHandler(self.root, on_change, on_error or self._log_error)
        self._observer: Optional[Observer] = None

    @staticmethod
    def _log_error(exc: Exception) -> None:
        logger.error("Watcher error: %s", exc)

    @property
    def is_running(self) -> bool:
        return self._observer is not None and self._observer.is_alive()

    def start(self) -> None:
        """Start watching in a background thread."""
        if self._observer is not None:
            return
        observer = Observer()
        observer.schedule(self.handler, str(self.root), recursive=True)
        observer.start()
        self._observer = observer
        logger.info("Watching for changes in %s", self.root)

    def stop(self) -> None:
        """Stop watching and wait for the observer thread to finish."""
        if self._observer is None:
            return
        self._observer.stop()
        self._observer.join()
        self._observer = None
        logger.debug("Stopped watching %s", self.root)
