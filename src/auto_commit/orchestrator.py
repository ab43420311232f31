"""
Wiring between file-change notifications, snapshots and squashing.

File-change events are turned into snapshot jobs on a single-worker
executor, so only one stage/commit/push sequence touches the Git index
at any time. The squash side formats the user's answers and hands the
message to the :class:`HistoryCollapser`.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import List, Optional

from auto_commit.config.loader import Config
from auto_commit.conventional.taxonomy import format_message
from auto_commit.snapshots.collapser import HistoryCollapser
from auto_commit.snapshots.recorder import SnapshotRecorder
from auto_commit.vcs.git_client import CommitRecord, GitClient
from auto_commit.watcher.file_watcher import FileWatcher


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


class Orchestrator:
    """Drive the snapshot pipeline and the squash flow for one repository."""

    def __init__(
        self,
        config: Config,
        client: Optional[GitClient] = None,
        recorder: Optional[SnapshotRecorder] = None,
        collapser: Optional[HistoryCollapser] = None,
    ) -> None:
        self.config = config
        self.client = client or GitClient(config.repo_root)
        self.recorder = recorder or SnapshotRecorder(self.client, config)
        self.collapser = collapser or HistoryCollapser(self.client, config)
        self._executor: Optional[ThreadPoolExecutor] = None
        self._watcher: Optional[FileWatcher] = None

    # ------------------------------------------------------------------
    # Snapshot side
    # ------------------------------------------------------------------
    def _ensure_executor(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="snapshot")
        return self._executor

    def handle_change(self, path: str) -> "Future[bool]":
        """Queue a snapshot for a changed file."""
        logger.info("File %s has been changed", path)
        return self._ensure_executor().submit(self._run_snapshot)

    def _run_snapshot(self) -> bool:
        try:
            return self.recorder.record_snapshot()
        except Exception:
            logger.exception("Snapshot pipeline failed")
            raise

    def handle_error(self, exc: Exception) -> None:
        logger.error("Watcher error: %s", exc)

    def start(self) -> None:
        """Start watching the repository."""
        if self._watcher is None:
            self._watcher = FileWatcher(self.config.repo_root, self.handle_change, self.handle_error)
        self._watcher.start()

    def stop(self) -> None:
        """Stop watching and wait for queued snapshots to finish."""
        if self._watcher is not None:
            self._watcher.stop()
            self._watcher = None
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    # ------------------------------------------------------------------
    # Squash side
    # ------------------------------------------------------------------
    def pending_auto_commits(self) -> List[CommitRecord]:
        """Return the auto-commits that a squash would collapse."""
        return self.collapser.find_auto_commits()

    def finalize(self, commit_type: str, scope: str, title: str) -> bool:
        """Squash the pending auto-commits under ``type(scope): title``.

        Raises
        ------
        FormatError
            If the parts do not form a valid Conventional Commit message.
        """
        message = format_message(commit_type, scope, title)
        return self.collapser.collapse(message)
