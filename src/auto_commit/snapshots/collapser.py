"""
Squashing of auto-commits.

The :class:`HistoryCollapser` finds the run of marker-prefixed commits at
the tip of the current branch, soft-resets to the parent of the oldest
one and records a single commit with a validated Conventional Commit
message. A failure half-way is reported but not rolled back.
"""

from __future__ import annotations

import itertools
import logging
from typing import List

from auto_commit.config.loader import Config
from auto_commit.conventional.taxonomy import validate
from auto_commit.vcs.git_client import CommitRecord, GitClient, GitError


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


class HistoryCollapser:
    """Rewrite the trailing auto-commits into one commit."""

    def __init__(self, client: GitClient, config: Config) -> None:
        self.client = client
        self.config = config

    def is_auto_commit(self, commit: CommitRecord) -> bool:
        return commit.message.startswith(self.config.auto_commit_prefix)

    def find_auto_commits(self) -> List[CommitRecord]:
        """Return the auto-commits at the tip of history, newest first.

        Only the contiguous run is returned: the first user-authored commit
        ends it.

        Raises
        ------
        GitError
            If the history cannot be read.
        """
        return list(itertools.takewhile(self.is_auto_commit, self.client.log()))

    def collapse(self, final_message: str) -> bool:
        """Squash the trailing auto-commits into a commit with ``final_message``.

        Parameters
        ----------
        final_message : str
            Conventional Commit message of the resulting commit.

        Returns
        -------
        bool
            True on success; False if there was nothing to squash or a Git
            operation failed.

        Raises
        ------
        FormatError
            If ``final_message`` is not a valid Conventional Commit message.
            Nothing is touched in that case.
        """
        validate(final_message)

        try:
            auto_commits = self.find_auto_commits()
        except GitError as exc:
            logger.error("Failed to retrieve git log: %s", exc)
            return False

        if not auto_commits:
            logger.info("No auto-commits found to squash")
            return False

        anchor = auto_commits[-1]
        try:
            if anchor.parents:
                self.client.reset("soft", f"{anchor.hash}^")
            else:
                # The oldest auto-commit is the root commit
                self.client.unset_head()
            self.client.commit(final_message)
        except GitError as exc:
            logger.error("Failed to squash commits: %s", exc)
            return False

        logger.info('Squashed %d auto-commits into: "%s"', len(auto_commits), final_message)
        return True
