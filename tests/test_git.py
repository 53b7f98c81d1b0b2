"""Tests for git_run.git — precondition check, staging and committing."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from git_run.errors import DirtyRepositoryError, SubprocessExitError, SubprocessLaunchError
from git_run.git import commit, ensure_clean, git_command, porcelain_status, show_status, stage_all
from git_run.process import StreamMode

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


class TestGitCommand:
    def test_builds_captured_command(self, tmp_path: Path) -> None:
        cmd = git_command("status", "--porcelain", cwd=tmp_path)
        assert cmd.program == "git"
        assert cmd.args == ("status", "--porcelain")
        assert cmd.stdout == StreamMode.CAPTURE
        assert cmd.cwd == tmp_path

    def test_custom_git_program(self) -> None:
        assert git_command("status", git="/usr/local/bin/git").program == "/usr/local/bin/git"


# ---------------------------------------------------------------------------
# Precondition check
# ---------------------------------------------------------------------------


class TestPorcelainStatus:
    def test_clean_repo_is_empty(self, git_repo: Path) -> None:
        assert porcelain_status(cwd=git_repo) == b""

    def test_modified_file(self, git_repo: Path) -> None:
        (git_repo / "README.md").write_text("changed\n")
        assert porcelain_status(cwd=git_repo) == b" M README.md\n"


class TestEnsureClean:
    def test_clean_repo_passes(self, git_repo: Path) -> None:
        ensure_clean(cwd=git_repo)

    def test_modified_file_fails(self, git_repo: Path) -> None:
        (git_repo / "README.md").write_text("changed\n")
        with pytest.raises(DirtyRepositoryError, match="git add \\."):
            ensure_clean(cwd=git_repo)

    def test_untracked_file_fails(self, git_repo: Path) -> None:
        (git_repo / "new.txt").write_text("new\n")
        with pytest.raises(DirtyRepositoryError, match="dirty or untracked files"):
            ensure_clean(cwd=git_repo)

    def test_staged_file_fails(self, git_repo: Path, git: Callable[..., str]) -> None:
        (git_repo / "new.txt").write_text("new\n")
        git(git_repo, "add", "new.txt")
        with pytest.raises(DirtyRepositoryError):
            ensure_clean(cwd=git_repo)

    def test_outside_repository(self, tmp_path: Path) -> None:
        outside = tmp_path / "not-a-repo"
        outside.mkdir()
        with pytest.raises(SubprocessExitError, match="'git' with arguments \\['status', '--porcelain'\\]"):
            ensure_clean(cwd=outside)

    def test_missing_git(self, git_repo: Path) -> None:
        with pytest.raises(SubprocessLaunchError, match="git-run-missing-git"):
            ensure_clean(git="git-run-missing-git", cwd=git_repo)


# ---------------------------------------------------------------------------
# Staging and committing
# ---------------------------------------------------------------------------


class TestStageAll:
    def test_stages_new_and_modified_files(self, git_repo: Path) -> None:
        (git_repo / "README.md").write_text("changed\n")
        (git_repo / "new.txt").write_text("new\n")
        stage_all(cwd=git_repo)
        status = porcelain_status(cwd=git_repo).decode()
        assert "M  README.md" in status
        assert "A  new.txt" in status


class TestShowStatus:
    def test_prints_to_terminal(self, git_repo: Path, capfd: pytest.CaptureFixture[str]) -> None:
        (git_repo / "new.txt").write_text("new\n")
        show_status(cwd=git_repo)
        assert "new.txt" in capfd.readouterr().out


class TestCommit:
    def test_commits_with_message(self, git_repo: Path, git: Callable[..., str]) -> None:
        (git_repo / "new.txt").write_text("new\n")
        stage_all(cwd=git_repo)
        commit("run: touch new.txt", cwd=git_repo)
        assert git(git_repo, "log", "-1", "--format=%s") == "run: touch new.txt"
        assert porcelain_status(cwd=git_repo) == b""

    def test_nothing_to_commit_fails(self, git_repo: Path) -> None:
        with pytest.raises(SubprocessExitError, match="failed with status 1"):
            commit("run: true", cwd=git_repo)
