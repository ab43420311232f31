"""
Data models for commit message synthesis.

A :class:`ChangeRecord` describes one file of a snapshot. The
:class:`ChangeStats` aggregate summarises a whole change set and drives
the choice of commit type and description.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ChangeRecord:
    """A single changed file with its diff statistics.

    Attributes
    ----------
    path : str
        Path relative to the repository root.
    insertions : int
        Number of inserted lines.
    deletions : int
        Number of deleted lines.
    is_binary : bool
        True when Git reports the file as binary.
    """

    path: str
    insertions: int = 0
    deletions: int = 0
    is_binary: bool = False

    def __post_init__(self) -> None:
        if self.insertions < 0 or self.deletions < 0:
            raise ValueError("insertions and deletions must be non-negative")
        if not (self.insertions > 0 or self.deletions > 0 or self.is_binary):
            raise ValueError(f"Change record for '{self.path}' has no measurable delta")


@dataclass
class ChangeStats:
    """Counts of files per change kind and per file category."""

    added: int = 0
    modified: int = 0
    deleted: int = 0
    code: int = 0
    style: int = 0
    test: int = 0
    docs: int = 0
    config: int = 0
    other: int = 0

    @property
    def total(self) -> int:
        return self.added + self.modified + self.deleted
