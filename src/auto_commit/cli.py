"""
Command line interface for the auto_commit tool.

Two commands are exposed through the ``auto-commit`` console script:

``start``
    Watch the repository and record a work-in-progress snapshot on every
    file change until interrupted.
``squash``
    Ask for a commit type, scope and title and squash the trailing
    auto-commits into one Conventional Commit.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

import click

from auto_commit import __version__
from auto_commit.config.loader import Config, ConfigError, load_config
from auto_commit.conventional.taxonomy import COMMIT_TYPES, FormatError
from auto_commit.orchestrator import Orchestrator
from auto_commit.vcs.git_client import GitClient, GitError


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_SUCCESS = 0
EXIT_NO_REPO = 3
EXIT_NOTHING_TO_SQUASH = 4
EXIT_CONFIG_ERROR = 5
EXIT_VCS_FAILURE = 6
EXIT_FORMAT_ERROR = 7


# ---------------------------------------------------------------------------
# Status display utilities
# ---------------------------------------------------------------------------

def print_info(message: str, indent: int = 0):
    """Print an info message."""
    prefix = "  " * indent
    click.echo(f"{prefix}ℹ {message}")


def print_success(message: str, indent: int = 0):
    """Print a success message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✓ {message}")


def print_error(message: str, indent: int = 0):
    """Print an error message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✗ {message}", err=True)


# ---------------------------------------------------------------------------
# Core functionality
# ---------------------------------------------------------------------------

def detect_repo(start_dir: Path) -> Path:
    """Return the Git repository root containing ``start_dir``.

    Raises
    ------
    click.exceptions.Exit
        With code EXIT_NO_REPO if no repository is found.
    """
    repo_root = GitClient.find_repo_root(start_dir)
    if repo_root is None:
        print_error("No Git repository found in current directory or parent directories.")
        raise click.exceptions.Exit(EXIT_NO_REPO)
    logger.debug("Repository root: %s", repo_root)
    return repo_root


def build_orchestrator() -> Orchestrator:
    """Detect the repository, load its configuration and wire the components."""
    repo_root = detect_repo(Path.cwd())
    try:
        config = load_config(repo_root)
    except ConfigError as exc:
        print_error(f"Configuration error: {exc}")
        raise click.exceptions.Exit(EXIT_CONFIG_ERROR)
    return Orchestrator(config)


def run_squash(orchestrator: Orchestrator) -> int:
    """Run the interactive squash flow and return an exit code."""
    config: Config = orchestrator.config

    try:
        auto_commits = orchestrator.pending_auto_commits()
    except GitError as exc:
        print_error(f"Failed to read git history: {exc}")
        return EXIT_VCS_FAILURE

    if not auto_commits:
        print_info("No auto-commits found to squash.")
        return EXIT_NOTHING_TO_SQUASH

    print_info(f"Found {len(auto_commits)} auto-commit{'s' if len(auto_commits) != 1 else ''} to squash.")
    for commit in auto_commits[:5]:
        print_info(f"{commit.hash[:7]} {commit.message.splitlines()[0]}", indent=1)
    if len(auto_commits) > 5:
        print_info(f"... and {len(auto_commits) - 5} more", indent=1)

    commit_type = click.prompt(
        "Select the type of change",
        type=click.Choice(list(COMMIT_TYPES)),
        show_choices=True,
    )
    scope = click.prompt(
        "Enter the product/scope name",
        default=config.product_name or None,
        type=str,
    )
    title = click.prompt("Enter a descriptive title for your changes", type=str)

    try:
        success = orchestrator.finalize(commit_type, scope, title)
    except FormatError as exc:
        print_error(str(exc))
        return EXIT_FORMAT_ERROR

    if not success:
        print_error("Failed to squash commits.")
        return EXIT_VCS_FAILURE

    print_success("Successfully squashed commits with a conventional commit message.")
    return EXIT_SUCCESS


@click.group()
@click.option("--verbose", is_flag=True, help="Enable verbose (debug) output.")
@click.version_option(version=__version__, prog_name="auto-commit")
def main(verbose: bool) -> None:
    """Auto-commit work in progress and squash it into a conventional commit."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        force=True,
    )


@main.command()
def start() -> None:
    """Start watching files for changes."""
    orchestrator = build_orchestrator()
    config = orchestrator.config

    print_info(f"Watching for changes in {config.repo_root}")
    print_info("Press Ctrl+C to stop.", indent=1)
    orchestrator.start()
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        click.echo("")
    finally:
        orchestrator.stop()
    print_success("Stopped watching.")

    if config.squash_on_exit:
        code = run_squash(orchestrator)
        if code not in (EXIT_SUCCESS, EXIT_NOTHING_TO_SQUASH):
            raise click.exceptions.Exit(code)


@main.command()
def squash() -> None:
    """Squash all auto-commits into a single conventional commit."""
    orchestrator = build_orchestrator()
    code = run_squash(orchestrator)
    if code != EXIT_SUCCESS:
        raise click.exceptions.Exit(code)
