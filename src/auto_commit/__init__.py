"""
Top-level package for auto_commit.

The package records work-in-progress snapshots of a Git working tree and
squashes them into a single Conventional Commit. The command line entry
point lives in :mod:`auto_commit.cli`.
"""

import logging

__all__ = ["__version__"]

__version__ = "1.0.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
