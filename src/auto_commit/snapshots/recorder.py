"""
Automatic work-in-progress snapshots.

The :class:`SnapshotRecorder` stages every pending change, commits it
with a marker-prefixed message and optionally pushes the result. It is
called once per file-change notification by the orchestrator.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from auto_commit.config.loader import Config
from auto_commit.synthesis.change_model import ChangeRecord
from auto_commit.synthesis.message_synthesizer import synthesize
from auto_commit.vcs.git_client import GitClient, GitError


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """Render ``moment`` as an ISO-8601 UTC string safe for commit subjects.

    Colons and dots are replaced by hyphens, e.g. ``2024-05-01T10-20-30-123Z``.
    """
    moment = moment.astimezone(timezone.utc)
    iso = moment.strftime("%Y-%m-%dT%H:%M:%S") + f".{moment.microsecond // 1000:03d}Z"
    return iso.replace(":", "-").replace(".", "-")


class SnapshotRecorder:
    """Create auto-commits for the current working tree."""

    def __init__(
        self,
        client: GitClient,
        config: Config,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.client = client
        self.config = config
        self.clock = clock or _utc_now

    def collect_changes(self, paths: List[str]) -> List[ChangeRecord]:
        """Return one :class:`ChangeRecord` per path.

        Files Git cannot diff yet (untracked files, repositories without a
        first commit) are counted as a one-line addition.
        """
        records = []
        for path in paths:
            try:
                summary = self.client.diff_summary(path)
            except GitError as exc:
                logger.debug("No diff available for %s: %s", path, exc)
                summary = None

            if summary is None or not (summary.binary or summary.insertions or summary.deletions):
                records.append(ChangeRecord(path=path, insertions=1, deletions=0))
            else:
                records.append(
                    ChangeRecord(
                        path=path,
                        insertions=summary.insertions,
                        deletions=summary.deletions,
                        is_binary=summary.binary,
                    )
                )
        return records

    def build_message(self, records: List[ChangeRecord]) -> str:
        """Return the marker-prefixed snapshot message."""
        prefix = self.config.auto_commit_prefix
        if self.config.auto_generate_messages:
            return f"{prefix} {synthesize(records)}"
        timestamp = format_timestamp(self.clock())
        return f"{prefix} {self.config.commit_message} [{timestamp}]"

    def record_snapshot(self, changed_paths: Optional[List[str]] = None) -> bool:
        """Stage and commit the pending changes.

        Parameters
        ----------
        changed_paths : Optional[List[str]]
            Complete list of changed paths. When ``None`` the list is read
            from ``git status``.

        Returns
        -------
        bool
            True if a commit was created, False when there was nothing to
            commit or a Git operation failed.
        """
        try:
            if changed_paths is None:
                changed_paths = self.client.status().changed_paths()
        except GitError as exc:
            logger.error("Failed to get changed files: %s", exc)
            return False

        if not changed_paths:
            logger.info("No changes to commit")
            return False

        records = self.collect_changes(changed_paths)
        message = self.build_message(records)

        try:
            self.client.add(changed_paths)
            self.client.commit(message)
        except GitError as exc:
            logger.error("Failed to commit changes: %s", exc)
            return False
        logger.info("Auto-saved changes with message: %s", message)

        if self.config.push:
            try:
                self.client.push(self.config.remote, self.config.branch)
                logger.info("Pushed changes to %s/%s", self.config.remote, self.config.branch)
            except GitError as exc:
                logger.warning("Failed to push changes: %s", exc)

        return True
