"""
Version control system (VCS) integration.

This package contains the Git client used to inspect the working tree,
stage and commit snapshots, read history and rewrite it during a squash.
"""

from .git_client import CommitRecord, DiffSummary, GitClient, GitError, StatusResult  # noqa: F401
