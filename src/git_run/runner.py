"""Runs the user's command with the terminal attached."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from git_run.env import EnvState, lookup_env
from git_run.errors import MissingEnvironmentError
from git_run.process import Command, run_checked

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from git_run.models import Invocation

logger = logging.getLogger(__name__)

SHELL_ENV = "SHELL"


def build_user_command(
    invocation: Invocation,
    environ: Mapping[str, str] | Mapping[bytes, bytes] | None = None,
    cwd: Path | None = None,
) -> Command:
    """Turn *invocation* into a visible ``Command``.

    In shell mode the program is ``$SHELL``, run as ``$SHELL -i -c <command>``.
    Otherwise the first token is the program and the rest are passed through
    as discrete arguments, with no shell interpretation.

    Raises:
        MissingEnvironmentError: If shell mode is requested and ``SHELL`` is unset.
    """
    if invocation.shell:
        lookup = lookup_env(SHELL_ENV, environ)
        if lookup.state == EnvState.ABSENT or lookup.value is None:
            msg = f"--shell was specified, but the environment variable {SHELL_ENV} is not set"
            raise MissingEnvironmentError(msg)
        if lookup.state == EnvState.OPAQUE:
            logger.debug("%s is not valid UTF-8, using it as an opaque path", SHELL_ENV)
        command = Command(program=lookup.value, args=("-i", "-c", invocation.command[0]), cwd=cwd)
    else:
        program, *args = invocation.command
        command = Command(program=program, args=tuple(args), cwd=cwd)
    return command.visible()


def run_user_command(command: Command) -> None:
    run_checked(command)
