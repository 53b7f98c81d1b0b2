"""Exception hierarchy for git-run.

Every error is fatal to the run; the CLI turns them into ``Error: ...`` on
stderr and a non-zero exit code.
"""

from __future__ import annotations


class GitRunError(Exception):
    """Base exception for all git-run failures."""


class DirtyRepositoryError(GitRunError):
    """The working tree had pending changes before the command ran."""


class MissingEnvironmentError(GitRunError):
    """A required environment variable is not set."""


class SubprocessLaunchError(GitRunError):
    """An external program could not be started at all."""


class SubprocessExitError(GitRunError):
    """An external program ran but exited with a non-zero or missing status."""


class CommitCancelledError(GitRunError):
    """The user declined to commit."""
