"""
Configuration loader for auto_commit.

Settings come from environment variables. A ``.env`` file in the
repository root is loaded first with :mod:`dotenv`, without overriding
variables that are already set. The result is an immutable
:class:`Config` built once at start-up and handed to every component.

Invalid values raise :class:`ConfigError`.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


_TRUE_VALUES = {"true", "1", "yes", "on"}
_FALSE_VALUES = {"false", "0", "no", "off"}


class ConfigError(Exception):
    """Raised when a configuration value is missing or invalid."""

    pass


@dataclass(frozen=True)
class Config:
    """Process-wide settings.

    Attributes
    ----------
    repo_root : Path
        Root directory of the watched Git repository.
    auto_commit_prefix : str
        Marker placed in front of every snapshot message.
    auto_generate_messages : bool
        Generate snapshot messages from the changed files; when False the
        fixed ``commit_message`` template plus a timestamp is used.
    push : bool
        Push after every snapshot.
    remote, branch : str
        Push target.
    commit_message : str
        Template used when message generation is disabled.
    product_name : str
        Default scope offered when squashing.
    squash_on_exit : bool
        Run the squash flow when the watcher stops.
    """

    repo_root: Path
    auto_commit_prefix: str = "WIP:"
    auto_generate_messages: bool = True
    push: bool = False
    remote: str = "origin"
    branch: str = "main"
    commit_message: str = "Auto-saved changes"
    product_name: str = ""
    squash_on_exit: bool = False


def _parse_bool(name: str, value: Optional[str], default: bool) -> bool:
    if value is None or value.strip() == "":
        return default
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(f"'{name}' must be a boolean (true/false), got '{value}'")


def load_config(repo_root: Path, environ: Optional[Mapping[str, str]] = None) -> Config:
    """Build the configuration for ``repo_root``.

    Args:
        repo_root: Root of the Git repository; a ``.env`` file there is
                   loaded into the process environment.
        environ: Mapping to read settings from. Defaults to ``os.environ``
                 (after the ``.env`` file has been loaded). When given, the
                 ``.env`` file is ignored.

    Returns:
        The validated :class:`Config`.

    Raises:
        ConfigError: If a boolean setting cannot be parsed or the
                     auto-commit prefix is empty.
    """
    if environ is None:
        env_file = Path(repo_root) / ".env"
        if env_file.exists():
            load_dotenv(env_file, override=False)
            logger.debug("Loaded environment from: %s", env_file)
        environ = os.environ

    prefix = environ.get("AUTO_COMMIT_PREFIX", "WIP:")
    if not prefix.strip():
        raise ConfigError("'AUTO_COMMIT_PREFIX' must not be empty")

    config = Config(
        repo_root=Path(repo_root),
        auto_commit_prefix=prefix.strip(),
        auto_generate_messages=_parse_bool(
            "AUTO_GENERATE_MESSAGES", environ.get("AUTO_GENERATE_MESSAGES"), True
        ),
        push=_parse_bool("PUSH", environ.get("PUSH"), False),
        remote=environ.get("REMOTE") or "origin",
        branch=environ.get("BRANCH") or "main",
        commit_message=environ.get("COMMIT_MESSAGE") or "Auto-saved changes",
        product_name=environ.get("PRODUCT_NAME", "").strip(),
        squash_on_exit=_parse_bool("SQUASH_ON_EXIT", environ.get("SQUASH_ON_EXIT"), False),
    )
    logger.debug("Configuration: %s", config)
    return config
