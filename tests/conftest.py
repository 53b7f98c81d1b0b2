"""Shared test fixtures for git-run."""

from __future__ import annotations

import subprocess
import types
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


def _git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args],
        cwd=repo,
        check=True,
        capture_output=True,
        text=True,
    )
    return result.stdout.strip()


@pytest.fixture
def git() -> Callable[..., str]:
    """Return a helper that runs ``git <args>`` in a repo and returns stdout."""
    return _git


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository with one initial commit.

    The repo has a committed ``README.md`` on the ``main`` branch and a clean
    working tree.

    Returns the path to the repository root.
    """
    subprocess.run(["git", "init", "-b", "main"], cwd=tmp_path, check=True, capture_output=True)
    _git(tmp_path, "config", "user.email", "test@git-run.test")
    _git(tmp_path, "config", "user.name", "git-run Test")
    _git(tmp_path, "config", "commit.gpgsign", "false")

    (tmp_path / "README.md").write_text("# Test repo\n")
    _git(tmp_path, "add", "README.md")
    _git(tmp_path, "commit", "-m", "Initial commit")

    return tmp_path


@pytest.fixture
def recorded_runs(monkeypatch: pytest.MonkeyPatch) -> list[list[str]]:
    """Record the argv of every subprocess launched by ``git_run.process``.

    The subprocesses still run for real.
    """
    calls: list[list[str]] = []

    def recording_run(argv, *args, **kwargs):
        calls.append([a if isinstance(a, str) else a.decode(errors="replace") for a in argv])
        return subprocess.run(argv, *args, **kwargs)

    fake = types.SimpleNamespace(
        run=recording_run,
        DEVNULL=subprocess.DEVNULL,
        PIPE=subprocess.PIPE,
    )
    monkeypatch.setattr("git_run.process.subprocess", fake)
    return calls
