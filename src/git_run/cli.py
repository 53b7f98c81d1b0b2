"""CLI entry point for git-run.

``git-run [OPTIONS] COMMAND...`` runs COMMAND, stages everything it changed
and commits it as ``run: COMMAND...``.

Follows Function Core / Imperative Shell:
- Pure functions: format_validation_error, build_invocation
- Click command: main
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from git_run.errors import GitRunError
from git_run.git import DEFAULT_GIT
from git_run.models import Invocation
from git_run.pipeline import run_and_commit

# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


# ---------------------------------------------------------------------------
# Pure functions
# ---------------------------------------------------------------------------


def format_validation_error(error: ValidationError) -> str:
    """Render a pydantic validation error as a one-line usage message."""
    parts: list[str] = []
    for detail in error.errors():
        cause = detail.get("ctx", {}).get("error")
        parts.append(str(cause) if cause is not None else detail["msg"])
    return "; ".join(parts)


def build_invocation(shell: bool, yes: bool, command: tuple[str, ...]) -> Invocation:
    """Validate CLI arguments into an Invocation.

    Raises:
        click.UsageError: If the arguments are inconsistent.
    """
    try:
        return Invocation(shell=shell, yes=yes, command=list(command))
    except ValidationError as e:
        raise click.UsageError(format_validation_error(e)) from e


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


# ---------------------------------------------------------------------------
# Click command
# ---------------------------------------------------------------------------


@click.command(context_settings={"allow_interspersed_args": False})
@click.version_option(package_name="git-run")
@click.option(
    "-s",
    "--shell",
    is_flag=True,
    help="Run COMMAND in a shell, specified by the SHELL environment variable. "
    "There must be only one argument.",
)
@click.option(
    "-y",
    "--yes",
    "--no-confirm",
    "yes",
    is_flag=True,
    help="Don't prompt for confirmation before committing.",
)
@click.option(
    "-C",
    "--directory",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    envvar="GIT_RUN_DIRECTORY",
    default=None,
    help="Run the command and git in this directory instead of the current one.",
)
@click.option(
    "--git",
    "git_program",
    envvar="GIT_RUN_GIT",
    default=DEFAULT_GIT,
    show_default=True,
    help="Git executable to use.",
)
@click.option("-v", "--verbose", is_flag=True, help="Log every subprocess to stderr.")
@click.argument("command", nargs=-1, required=True, type=click.UNPROCESSED)
def main(
    shell: bool,
    yes: bool,
    directory: Path | None,
    git_program: str,
    verbose: bool,
    command: tuple[str, ...],
) -> None:
    """Run COMMAND, then stage and commit everything it changed.

    The commit message will be `run: COMMAND...`.
    """
    _configure_logging(verbose)
    invocation = build_invocation(shell, yes, command)

    try:
        run_and_commit(invocation, git_program=git_program, cwd=directory)
    except GitRunError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_FAILURE)

    sys.exit(EXIT_SUCCESS)
