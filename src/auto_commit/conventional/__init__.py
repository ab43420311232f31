"""
Conventional Commit taxonomy.

See :mod:`auto_commit.conventional.taxonomy` for the list of commit types,
the message validator and the direct formatter.
"""

from .taxonomy import COMMIT_TYPES, FormatError, format_message, is_valid_type, validate  # noqa: F401
