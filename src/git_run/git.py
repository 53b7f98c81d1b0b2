"""Git operations used by git-run.

Git is always driven as a subprocess. Only the porcelain status query
captures output; every other operation runs visibly in the user's terminal.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from git_run.errors import DirtyRepositoryError
from git_run.process import Command, run_checked

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_GIT = "git"


def git_command(*args: str, git: str = DEFAULT_GIT, cwd: Path | None = None) -> Command:
    return Command(program=git, args=args, cwd=cwd)


# ---------------------------------------------------------------------------
# Precondition check
# ---------------------------------------------------------------------------


def porcelain_status(*, git: str = DEFAULT_GIT, cwd: Path | None = None) -> bytes:
    """Return the raw output of ``git status --porcelain``."""
    return run_checked(git_command("status", "--porcelain", git=git, cwd=cwd)).stdout


def ensure_clean(*, git: str = DEFAULT_GIT, cwd: Path | None = None) -> None:
    """Require a working tree with no modified or untracked files.

    Raises:
        DirtyRepositoryError: If ``git status --porcelain`` printed anything.
    """
    status = porcelain_status(git=git, cwd=cwd)
    if status:
        logger.debug("Working tree is dirty:\n%s", status.decode(errors="replace"))
        msg = (
            "git-run performs a `git add .`, but there are dirty or untracked files "
            "before running the command."
        )
        raise DirtyRepositoryError(msg)


# ---------------------------------------------------------------------------
# Staging and committing
# ---------------------------------------------------------------------------


def stage_all(*, git: str = DEFAULT_GIT, cwd: Path | None = None) -> None:
    run_checked(git_command("add", ".", git=git, cwd=cwd).visible())


def show_status(*, git: str = DEFAULT_GIT, cwd: Path | None = None) -> None:
    """Print a colorized ``git status`` to the terminal."""
    run_checked(git_command("-c", "color.status=always", "status", git=git, cwd=cwd).visible())


def commit(message: str, *, git: str = DEFAULT_GIT, cwd: Path | None = None) -> None:
    run_checked(git_command("commit", "--message", message, git=git, cwd=cwd).visible())
