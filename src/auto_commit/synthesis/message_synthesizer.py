"""
Deterministic Conventional Commit message generation.

:func:`synthesize` turns the change records of a snapshot into a message
of the form ``type(scope): description`` without looking at the diff
contents: the type comes from the file categories, the scope from the
common directory of the changed files and the description from the
added/modified/deleted counts.
"""

from __future__ import annotations

import re
from pathlib import PurePosixPath
from typing import Iterable, List, Mapping, Sequence

from .change_classifier import CATEGORIES, CATEGORY_TABLE, classify_file
from .change_model import ChangeRecord, ChangeStats


FALLBACK_MESSAGE = "chore: update files"
DEFAULT_SCOPE = "general"

_INVALID_SCOPE_CHARS = re.compile(r"[^\w-]+")


def compute_stats(
    records: Iterable[ChangeRecord],
    table: Mapping[str, Sequence[str]] = CATEGORY_TABLE,
) -> ChangeStats:
    """Aggregate change records into a :class:`ChangeStats`.

    Binary files always count as modified. Categories that are not part of
    the standard set are counted as ``other``.
    """
    stats = ChangeStats()
    for record in records:
        category = classify_file(record.path, table)
        if category not in CATEGORIES:
            category = "other"
        setattr(stats, category, getattr(stats, category) + 1)

        if record.is_binary:
            stats.modified += 1
        elif record.insertions > 0 and record.deletions == 0:
            stats.added += 1
        elif record.deletions > 0 and record.insertions == 0:
            stats.deleted += 1
        else:
            stats.modified += 1
    return stats


def determine_commit_type(stats: ChangeStats) -> str:
    """Pick the commit type from the aggregated statistics."""
    if stats.code > 0 and stats.added > stats.modified:
        return "feat"
    if stats.code > 0:
        return "fix"
    if stats.test > 0:
        return "test"
    if stats.style > 0:
        return "style"
    if stats.docs > 0:
        return "docs"
    return "chore"


def _directory_segments(file_path: str) -> List[str]:
    return [part for part in PurePosixPath(file_path.replace("\\", "/")).parent.parts if part not in ("", ".", "/")]


def _clean_scope(segment: str) -> str:
    return _INVALID_SCOPE_CHARS.sub("-", segment).strip("-")


def find_common_scope(paths: Sequence[str]) -> str:
    """Derive a scope from the directories of the changed files.

    A single file yields its parent directory name, or its stem for files
    at the repository root. Several files yield the last directory they
    all share. Anything that cannot produce a usable scope yields
    ``general``.
    """
    if not paths:
        return DEFAULT_SCOPE

    if len(paths) == 1:
        segments = _directory_segments(paths[0])
        candidate = segments[-1] if segments else PurePosixPath(paths[0].replace("\\", "/")).stem
        return _clean_scope(candidate or "") or DEFAULT_SCOPE

    all_segments = [_directory_segments(path) for path in paths]
    common: List[str] = []
    for position in range(min(len(segments) for segments in all_segments)):
        segment = all_segments[0][position]
        if all(segments[position] == segment for segments in all_segments):
            common.append(segment)
        else:
            break

    if not common:
        return DEFAULT_SCOPE
    return _clean_scope(common[-1]) or DEFAULT_SCOPE


def _plural(count: int) -> str:
    return "s" if count > 1 else ""


def describe_changes(stats: ChangeStats, file_count: int) -> str:
    """Summarise the change kinds as a short imperative description."""
    if stats.added > 0 and stats.modified == 0 and stats.deleted == 0:
        return f"add {stats.added} new file{_plural(stats.added)}"
    if stats.modified > 0 and stats.added == 0 and stats.deleted == 0:
        return f"update {stats.modified} file{_plural(stats.modified)}"
    if stats.deleted > 0 and stats.added == 0 and stats.modified == 0:
        return f"remove {stats.deleted} file{_plural(stats.deleted)}"
    return (
        f"modify {file_count} files "
        f"({stats.added} added, {stats.modified} updated, {stats.deleted} deleted)"
    )


def synthesize(
    records: Sequence[ChangeRecord],
    table: Mapping[str, Sequence[str]] = CATEGORY_TABLE,
) -> str:
    """Generate a Conventional Commit message for a set of changed files.

    Parameters
    ----------
    records : Sequence[ChangeRecord]
        One record per changed file.
    table : Mapping[str, Sequence[str]]
        Category table used to classify files by suffix.

    Returns
    -------
    str
        ``type(scope): description``, or :data:`FALLBACK_MESSAGE` when
        there are no records.
    """
    if not records:
        return FALLBACK_MESSAGE

    stats = compute_stats(records, table)
    commit_type = determine_commit_type(stats)
    scope = find_common_scope([record.path for record in records])
    description = describe_changes(stats, len(records))
    return f"{commit_type}({scope}): {description}"
