"""Tests for repository state detection from marker files."""

from pathlib import Path

import pytest

from gitshim.repo import Repo
from gitshim.state import STATE_FILES, RepoState


@pytest.fixture
def repo(tmp_path: Path) -> Repo:
    """A repo handle over a bare .git directory; no git invocation needed."""
    (tmp_path / ".git").mkdir()
    return Repo(path=tmp_path)


# Markers that git creates as directories holding the nested markers
DIRECTORY_MARKERS = {"rebase-merge", "rebase-apply"}


def touch_marker(repo: Repo, name: str) -> None:
    path = repo.git_dir / name
    if name in DIRECTORY_MARKERS:
        path.mkdir(parents=True, exist_ok=True)
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("")


class TestStateFiles:
    def test_every_state_but_none_has_a_marker(self) -> None:
        states = [state for _, state in STATE_FILES]
        assert set(states) == set(RepoState) - {RepoState.NONE}
        assert len(states) == len(set(states))

    def test_nested_markers_precede_their_directories(self) -> None:
        names = [name for name, _ in STATE_FILES]
        for name in names:
            if "/" in name:
                parent = name.split("/")[0]
                assert names.index(name) < names.index(parent)


class TestState:
    def test_no_markers(self, repo: Repo) -> None:
        assert repo.state() == RepoState.NONE

    def test_merge_head_only(self, repo: Repo) -> None:
        touch_marker(repo, "MERGE_HEAD")
        assert repo.state() == RepoState.MERGE

    @pytest.mark.parametrize("name,expected", STATE_FILES)
    def test_each_marker(self, repo: Repo, name: str, expected: RepoState) -> None:
        touch_marker(repo, name)
        assert repo.state() == expected

    def test_marker_directory(self, repo: Repo) -> None:
        (repo.git_dir / "rebase-merge").mkdir()
        assert repo.state() == RepoState.REBASE_MERGE

    def test_interactive_inside_rebase_merge(self, repo: Repo) -> None:
        touch_marker(repo, "rebase-merge/interactive")
        assert repo.state() == RepoState.REBASE_INTERACTIVE

    def test_merge_wins_over_cherry_pick(self, repo: Repo) -> None:
        touch_marker(repo, "CHERRY_PICK_HEAD")
        touch_marker(repo, "MERGE_HEAD")
        assert repo.state() == RepoState.MERGE

    def test_rebase_wins_over_bisect(self, repo: Repo) -> None:
        touch_marker(repo, "BISECT_LOG")
        touch_marker(repo, "rebase-apply/rebasing")
        assert repo.state() == RepoState.REBASE

    def test_other_filesystem_errors_propagate(self, repo: Repo) -> None:
        # rebase-merge is a file, so rebase-merge/interactive can't be stat'ed
        (repo.git_dir / "rebase-merge").write_text("")
        with pytest.raises(NotADirectoryError):
            repo.state()


class TestGitFiles:
    def test_has_git_file(self, repo: Repo) -> None:
        assert repo.has_git_file("BISECT_LOG") is False
        touch_marker(repo, "BISECT_LOG")
        assert repo.has_git_file("BISECT_LOG") is True

    def test_remove_git_file(self, repo: Repo) -> None:
        touch_marker(repo, "MERGE_HEAD")
        repo.remove_git_file("MERGE_HEAD")
        assert not (repo.git_dir / "MERGE_HEAD").exists()
        assert repo.state() == RepoState.NONE

    def test_remove_missing_git_file(self, repo: Repo) -> None:
        with pytest.raises(FileNotFoundError):
            repo.remove_git_file("MERGE_HEAD")

    def test_cherry_pick_head_is_stripped(self, repo: Repo) -> None:
        (repo.git_dir / "CHERRY_PICK_HEAD").write_text("abc123\n")
        assert repo.cherry_pick_head() == "abc123"

    def test_cherry_pick_head_missing(self, repo: Repo) -> None:
        with pytest.raises(FileNotFoundError):
            repo.cherry_pick_head()
