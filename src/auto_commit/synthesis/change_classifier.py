"""
Heuristics for classifying changed files into categories.

The category of a file is inferred from its name and location only.
Rules are applied in a fixed order and the first match wins; the
extension lookup uses :data:`CATEGORY_TABLE`, a plain ordered mapping
that callers can replace to tune the classification.
"""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Mapping, Sequence


CATEGORIES = ("code", "style", "test", "docs", "config", "other")

CATEGORY_TABLE: Mapping[str, Sequence[str]] = {
    "code": (".js", ".jsx", ".ts", ".tsx"),
    "style": (".css", ".scss", ".less", ".sass"),
    "docs": (".md", ".txt", ".doc", ".docx"),
    "test": (".test.js", ".spec.js", ".test.ts", ".spec.ts"),
    "config": (".json", ".yml", ".yaml", ".config.js", ".env"),
}

_TEST_MARKERS = (".test.", ".spec.")
_DOC_NAMES = ("readme", "documentation")
_TEST_DIRS = {"test", "__tests__"}
_DOC_DIRS = {"docs"}


def _normalise(file_path: str) -> str:
    return file_path.replace("\\", "/").lower()


def classify_file(file_path: str, table: Mapping[str, Sequence[str]] = CATEGORY_TABLE) -> str:
    """Classify a file into one of :data:`CATEGORIES`.

    Parameters
    ----------
    file_path : str
        Path to the changed file relative to the repository root.
    table : Mapping[str, Sequence[str]]
        Ordered mapping of category name to file suffixes.

    Returns
    -------
    str
        ``code``, ``style``, ``test``, ``docs``, ``config`` or ``other``.
    """
    normalised = _normalise(file_path)
    path = PurePosixPath(normalised)
    name = path.name
    directories = set(path.parent.parts)

    if any(marker in name for marker in _TEST_MARKERS):
        return "test"
    if any(doc in name for doc in _DOC_NAMES):
        return "docs"
    if directories & _TEST_DIRS:
        return "test"
    if directories & _DOC_DIRS:
        return "docs"
    for category, suffixes in table.items():
        if any(normalised.endswith(suffix.lower()) for suffix in suffixes):
            return category
    return "other"
