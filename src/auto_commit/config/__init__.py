"""
Configuration loading for auto_commit.

Settings are read from the environment (and a ``.env`` file in the
repository root). See :mod:`auto_commit.config.loader` for details.
"""

from .loader import Config, ConfigError, load_config  # noqa: F401
