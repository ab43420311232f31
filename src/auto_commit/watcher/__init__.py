"""
Working tree observation.

See :mod:`auto_commit.watcher.file_watcher`.
"""

from .file_watcher import FileWatcher, is_ignored  # noqa: F401
