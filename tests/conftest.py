"""Shared fixtures."""

import subprocess
from pathlib import Path
from typing import Callable

import pytest

from gitshim.git import reset_git_cache


def _git(repo: Path, *args: str) -> str:
    """Run a git command in repo for test setup."""
    result = subprocess.run(
        ["git", *args], cwd=repo, check=True, capture_output=True, text=True
    )
    return result.stdout


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Keep user settings and cached executable lookups out of tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("GITSHIM_GIT", raising=False)
    monkeypatch.delenv("GITSHIM_QUIET", raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)
    # Never open an editor for cherry-pick --continue
    monkeypatch.setenv("GIT_EDITOR", "true")
    reset_git_cache()
    yield
    reset_git_cache()


@pytest.fixture
def git() -> Callable[..., str]:
    """Run a git command in a repo and return its stdout."""
    return _git


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository with a commit on main."""
    repo = tmp_path / "repo"
    repo.mkdir()
    _git(repo, "init")
    _git(repo, "config", "user.email", "test@test.com")
    _git(repo, "config", "user.name", "Test User")
    # Disable GPG signing for test commits
    _git(repo, "config", "commit.gpgsign", "false")

    (repo / "README.md").write_text("# Test\n")
    _git(repo, "add", ".")
    _git(repo, "commit", "-m", "Initial commit")

    # Some git versions default to master
    _git(repo, "branch", "-M", "main")
    return repo


@pytest.fixture
def conflicting_commit(git_repo: Path) -> str:
    """Create a commit on a side branch that conflicts with main.

    Returns the oid of the side branch commit; main is checked out.
    """
    _git(git_repo, "checkout", "-b", "side")
    (git_repo / "README.md").write_text("# Side\n")
    _git(git_repo, "commit", "-am", "Side change")
    oid = _git(git_repo, "rev-parse", "HEAD").strip()

    _git(git_repo, "checkout", "main")
    (git_repo / "README.md").write_text("# Main\n")
    _git(git_repo, "commit", "-am", "Main change")
    return oid
