"""The git-run sequence: check clean, run, stage, preview, confirm, commit.

Every step gates the next. The first failure aborts the rest; nothing already
done is undone (a cancelled commit leaves the changes staged).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from git_run import confirm, git
from git_run.errors import CommitCancelledError
from git_run.models import commit_message, confirmation_prompt
from git_run.runner import build_user_command, run_user_command

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from pathlib import Path

    from git_run.models import Invocation

    AskFn = Callable[..., bool]

logger = logging.getLogger(__name__)


def run_and_commit(
    invocation: Invocation,
    *,
    ask: AskFn = confirm.ask,
    environ: Mapping[str, str] | Mapping[bytes, bytes] | None = None,
    git_program: str = git.DEFAULT_GIT,
    cwd: Path | None = None,
) -> str:
    """Run the user's command and commit its changes.

    Args:
        invocation: Validated command-line arguments.
        ask: Confirmation capability, called as ``ask(prompt, default=True)``.
            Not called when ``invocation.yes`` is set.
        environ: Environment used to resolve ``SHELL``.
        git_program: Git executable.
        cwd: Directory to run everything in. Defaults to the current one.

    Returns:
        The commit message used.

    Raises:
        MissingEnvironmentError: Shell mode without ``SHELL``; nothing has run.
        DirtyRepositoryError: The tree was dirty; only the status query ran.
        SubprocessLaunchError: A program could not be started.
        SubprocessExitError: A program exited unsuccessfully.
        CommitCancelledError: Confirmation was declined or failed.
    """
    message = commit_message(invocation)
    user_command = build_user_command(invocation, environ, cwd=cwd)

    git.ensure_clean(git=git_program, cwd=cwd)
    run_user_command(user_command)
    git.stage_all(git=git_program, cwd=cwd)
    git.show_status(git=git_program, cwd=cwd)

    permission = invocation.yes or ask(confirmation_prompt(message), default=True)
    if not permission:
        logger.debug("Commit declined; changes stay staged")
        msg = "cancelled"
        raise CommitCancelledError(msg)

    git.commit(message, git=git_program, cwd=cwd)
    logger.debug("Committed with message %r", message)
    return message
