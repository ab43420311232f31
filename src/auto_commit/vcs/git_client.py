"""
Git client implementation for auto_commit.

This module wraps the Git operations needed by the snapshot recorder and
the history collapser. It is intentionally minimal: every primitive
shells out to ``git`` through :meth:`GitClient._run` so that unit tests
can mock a single method.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())

# Field and record separators used with ``git log --format``.
_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"


@dataclass
class DiffSummary:
    """Line statistics for a single file as reported by ``git diff --numstat``."""

    path: str
    insertions: int
    deletions: int
    binary: bool = False


@dataclass
class CommitRecord:
    """An entry of the commit history."""

    hash: str
    message: str
    parents: List[str] = field(default_factory=list)


@dataclass
class StatusResult:
    """Working tree status grouped the way the snapshot recorder consumes it."""

    not_added: List[str] = field(default_factory=list)
    created: List[str] = field(default_factory=list)
    modified: List[str] = field(default_factory=list)
    renamed: List[Tuple[str, str]] = field(default_factory=list)
    deleted: List[str] = field(default_factory=list)

    def changed_paths(self) -> List[str]:
        """Return every changed path once, renames contributing their target."""
        paths = (
            self.not_added
            + self.created
            + self.modified
            + [to for _, to in self.renamed]
            + self.deleted
        )
        seen = set()
        result = []
        for path in paths:
            if path not in seen:
                seen.add(path)
                result.append(path)
        return result


class GitError(Exception):
    """Raised when a Git command fails."""

    pass


class GitClient:
    """Client for interacting with a Git repository."""

    def __init__(self, repo_root: Path) -> None:
        self.repo_root = repo_root

    # ------------------------------------------------------------------
    # Static helpers
    # ------------------------------------------------------------------
    @staticmethod
    def find_repo_root(start: Path) -> Optional[Path]:
        """Find the root of the Git repository starting from ``start``.

        Walk upwards until a ``.git`` entry is found or the filesystem
        root is reached.
        """
        current = start.resolve()
        while True:
            if (current / ".git").exists():
                return current
            if current.parent == current:
                return None
            current = current.parent

    # ------------------------------------------------------------------
    # Command execution
    # ------------------------------------------------------------------
    def _run(self, args: List[str], check: bool = True) -> subprocess.CompletedProcess:
        """Run a Git command in the repository root.

        Raises
        ------
        GitError
            If the command exits with a non-zero status when ``check`` is True,
            or if ``git`` cannot be executed at all.
        """
        full_cmd = ["git"] + args
        logger.debug("Executing Git command: %s", " ".join(full_cmd))
        try:
            result = subprocess.run(
                full_cmd,
                cwd=self.repo_root,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            logger.error("Unable to execute git: %s", e)
            raise GitError(f"Unable to execute git: {e}") from e

        if check and result.returncode != 0:
            logger.error(
                "Git command failed: %s\nSTDOUT: %s\nSTDERR: %s",
                " ".join(full_cmd),
                result.stdout,
                result.stderr,
            )
            raise GitError(result.stderr.strip() or result.stdout.strip())
        return result

    # ------------------------------------------------------------------
    # Status and diffs
    # ------------------------------------------------------------------
    def status(self) -> StatusResult:
        """Return the working tree status.

        Untracked files are listed individually (``-uall``) under
        ``not_added``. Renames keep both the old and new path. Entries are
        read NUL-terminated (``-z``) so paths arrive unquoted, whatever
        characters they contain.
        """
        result = self._run(
            ["-c", "core.quotePath=false", "status", "--porcelain", "-z", "-uall"],
            check=True,
        )
        status = StatusResult()

        entries = result.stdout.split("\0")
        index = 0
        while index < len(entries):
            entry = entries[index]
            index += 1
            # Porcelain format: XY<space>path
            if len(entry) < 4:
                continue
            code = entry[:2]
            path = entry[3:]

            if code == "??":
                status.not_added.append(path)
            elif "R" in code or "C" in code:
                # The source path follows as its own entry
                old = entries[index] if index < len(entries) else ""
                index += 1
                status.renamed.append((old, path))
            elif "D" in code:
                status.deleted.append(path)
            elif code[0] == "A":
                status.created.append(path)
            else:
                status.modified.append(path)
        return status

    def diff(self, path: str) -> str:
        """Return the unified diff of ``path`` against HEAD."""
        result = self._run(["diff", "HEAD", "--", path], check=True)
        return result.stdout

    def diff_summary(self, path: str) -> Optional[DiffSummary]:
        """Return insertion/deletion counts of ``path`` against HEAD.

        Returns ``None`` when Git reports nothing for the path, which is
        the case for untracked files.
        """
        result = self._run(["diff", "HEAD", "--numstat", "-z", "--", path], check=True)
        for entry in result.stdout.split("\0"):
            parts = entry.strip("\n").split("\t", 2)
            if len(parts) != 3:
                continue
            added, removed, name = parts
            if added == "-" and removed == "-":
                return DiffSummary(path=name, insertions=0, deletions=0, binary=True)
            try:
                return DiffSummary(path=name, insertions=int(added), deletions=int(removed))
            except ValueError:
                continue
        return None

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------
    def log(self) -> List[CommitRecord]:
        """Return the history of the current branch, newest first."""
        fmt = _FIELD_SEP.join(["%H", "%P", "%B"]) + _RECORD_SEP
        result = self._run(["log", f"--format={fmt}"], check=True)
        commits = []
        for chunk in result.stdout.split(_RECORD_SEP):
            chunk = chunk.strip("\n")
            if not chunk:
                continue
            parts = chunk.split(_FIELD_SEP, 2)
            if len(parts) != 3:
                continue
            commit_hash, parents, message = parts
            commits.append(
                CommitRecord(
                    hash=commit_hash.strip(),
                    message=message.strip(),
                    parents=parents.split(),
                )
            )
        return commits

    def reset(self, mode: str, target: str) -> None:
        """Move HEAD to ``target`` using ``git reset --<mode>``."""
        self._run(["reset", f"--{mode}", target], check=True)

    def unset_head(self) -> None:
        """Delete the current branch ref, keeping the index and working tree.

        This is the soft reset equivalent for "before the root commit":
        the next commit becomes a new root commit.
        """
        self._run(["update-ref", "-d", "HEAD"], check=True)

    # ------------------------------------------------------------------
    # Staging, committing, pushing
    # ------------------------------------------------------------------
    def add(self, paths: List[str]) -> None:
        """Stage the given paths, including deletions."""
        if not paths:
            return
        self._run(["add", "--all", "--"] + list(paths), check=True)

    def commit(self, message: str) -> None:
        """Create a commit with the given message."""
        self._run(["commit", "-m", message], check=True)

    def push(self, remote: str, branch: str) -> None:
        """Push ``branch`` to ``remote``.

        Raises
        ------
        GitError
            If pushing fails.
        """
        self._run(["push", remote, branch], check=True)
