#!/usr/bin/env python
"""
Thin wrapper script to invoke the auto_commit CLI.

Running ``python autocommit.py start`` is equivalent to running the
``auto-commit start`` console script installed via ``pyproject.toml``.
"""

from auto_commit.cli import main


if __name__ == "__main__":
    main(prog_name="auto-commit")
