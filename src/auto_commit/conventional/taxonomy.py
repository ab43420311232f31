"""
Conventional Commit types and message grammar.

A well-formed message has the shape ``type(scope): description`` where
``type`` is one of :data:`COMMIT_TYPES` and ``scope`` is made of word
characters and hyphens.
"""

from __future__ import annotations

import re


COMMIT_TYPES = (
    "feat",
    "fix",
    "chore",
    "docs",
    "style",
    "refactor",
    "perf",
    "test",
    "build",
    "ci",
    "revert",
)

_MESSAGE_PATTERN = re.compile(
    r"^(?P<type>" + "|".join(COMMIT_TYPES) + r")\((?P<scope>[\w-]+)\): (?P<description>.+)$"
)


class FormatError(ValueError):
    """Raised when a commit message does not follow the Conventional Commit grammar."""

    pass


def is_valid_type(commit_type: str) -> bool:
    """Return True if ``commit_type`` belongs to the taxonomy."""
    return commit_type in COMMIT_TYPES


def validate(message: str) -> bool:
    """Check ``message`` against the ``type(scope): description`` grammar.

    Returns
    -------
    bool
        Always ``True``; invalid messages raise instead.

    Raises
    ------
    FormatError
        If the message does not match the grammar.
    """
    if not isinstance(message, str) or not _MESSAGE_PATTERN.fullmatch(message):
        raise FormatError(
            "Invalid commit message format. Please use: type(scope): title of changes\n"
            f"Valid types: {', '.join(COMMIT_TYPES)}"
        )
    return True


def format_message(commit_type: str, scope: str, title: str) -> str:
    """Build and validate ``type(scope): title`` from its parts."""
    if not is_valid_type(commit_type):
        raise FormatError(f"Invalid commit type. Valid types: {', '.join(COMMIT_TYPES)}")

    scope = (scope or "").strip()
    title = (title or "").strip()
    if not scope or not title:
        raise FormatError("Scope and title are required")

    message = f"{commit_type}({scope}): {title}"
    validate(message)
    return message
