"""
Commit message synthesis.

This package classifies changed files and builds Conventional Commit
messages from their diff statistics. See
:mod:`auto_commit.synthesis.message_synthesizer` for the entry point.
"""

from .change_classifier import CATEGORY_TABLE, classify_file  # noqa: F401
from .change_model import ChangeRecord, ChangeStats  # noqa: F401
from .message_synthesizer import compute_stats, synthesize  # noqa: F401
