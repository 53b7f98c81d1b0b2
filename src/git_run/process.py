"""Subprocess execution with explicit stream dispositions.

A ``Command`` describes one program launch: the program, its arguments and
what each of the three standard streams is connected to. ``run`` launches it
once and blocks until it exits; ``errexit`` turns a non-zero or missing exit
status into an exception.

Design follows Function Core / Imperative Shell:
- Pure functions: describe, Command.visible
- Imperative shell: run, errexit, run_checked
"""

from __future__ import annotations

import dataclasses
import logging
import subprocess
from enum import StrEnum
from typing import TYPE_CHECKING

from git_run.errors import SubprocessExitError, SubprocessLaunchError

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

Program = str | bytes


class StreamMode(StrEnum):
    """Where a child's standard stream is connected."""

    INHERIT = "inherit"
    NULL = "null"
    CAPTURE = "capture"


_SUBPROCESS_STREAMS = {
    StreamMode.INHERIT: None,
    StreamMode.NULL: subprocess.DEVNULL,
    StreamMode.CAPTURE: subprocess.PIPE,
}


# ---------------------------------------------------------------------------
# Data
# ---------------------------------------------------------------------------


@dataclasses.dataclass(frozen=True)
class Command:
    """A program launch, configured before it runs."""

    program: Program
    args: tuple[Program, ...] = ()
    stdin: StreamMode = StreamMode.NULL
    stdout: StreamMode = StreamMode.CAPTURE
    stderr: StreamMode = StreamMode.CAPTURE
    cwd: Path | None = None

    def visible(self) -> Command:
        """Close stdin and hand stdout/stderr to the terminal."""
        return dataclasses.replace(
            self,
            stdin=StreamMode.NULL,
            stdout=StreamMode.INHERIT,
            stderr=StreamMode.INHERIT,
        )


@dataclasses.dataclass(frozen=True)
class SubprocessResult:
    """Result of a subprocess invocation. Internal transport only.

    ``returncode`` is ``None`` when the child was terminated by a signal.
    ``stdout`` and ``stderr`` are empty unless the stream was captured.
    """

    program: Program
    args: tuple[Program, ...]
    returncode: int | None
    stdout: bytes = b""
    stderr: bytes = b""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def describe(program: Program, args: tuple[Program, ...]) -> str:
    """Render a program and its arguments for error messages."""
    return f"{program!r} with arguments {list(args)!r}"


# ---------------------------------------------------------------------------
# Imperative shell
# ---------------------------------------------------------------------------


def run(command: Command) -> SubprocessResult:
    """Launch *command* and wait for it to exit.

    There is no timeout; a hung child blocks the caller.

    Raises:
        SubprocessLaunchError: If the program could not be started.
    """
    logger.debug("Running %s", describe(command.program, command.args))
    try:
        completed = subprocess.run(
            [command.program, *command.args],
            stdin=_SUBPROCESS_STREAMS[command.stdin],
            stdout=_SUBPROCESS_STREAMS[command.stdout],
            stderr=_SUBPROCESS_STREAMS[command.stderr],
            cwd=command.cwd,
            check=False,
        )
    except OSError as e:
        msg = f"couldn't run {describe(command.program, command.args)}: {e}"
        raise SubprocessLaunchError(msg) from e

    # Python reports death by signal N as returncode -N.
    returncode = completed.returncode if completed.returncode >= 0 else None
    logger.debug("%r exited with %s", command.program, completed.returncode)
    return SubprocessResult(
        program=command.program,
        args=command.args,
        returncode=returncode,
        stdout=completed.stdout or b"",
        stderr=completed.stderr or b"",
    )


def errexit(result: SubprocessResult) -> SubprocessResult:
    """Return *result* if it exited with status 0.

    Raises:
        SubprocessExitError: On a non-zero status, or no status at all.
    """
    if result.ok:
        return result

    what = describe(result.program, result.args)
    if result.returncode is None:
        msg = f"program {what} failed with no status"
    else:
        msg = f"program {what} failed with status {result.returncode}"
    if result.stderr:
        logger.debug("stderr of %r: %s", result.program, result.stderr.decode(errors="replace"))
    raise SubprocessExitError(msg)


def run_checked(command: Command) -> SubprocessResult:
    """Run *command* and require a zero exit status."""
    return errexit(run(command))
