"""Repository handle and the git operations run against it."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import NewType

import click

from .git import GitError, run_git
from .state import CHERRY_PICK_HEAD, STATE_FILES, RepoState
from .status import StatusEntry, parse_status

logger = logging.getLogger(__name__)

Oid = NewType("Oid", str)


def parse_parents(output: str) -> list[Oid]:
    """Split a `%P` parent line into object ids."""
    return [Oid(c) for c in output.split()]


@dataclass(frozen=True)
class Repo:
    """A git working tree, identified by its top-level directory."""

    path: Path
    echo_stderr: bool = True

    @classmethod
    def open(cls, path: Path | str = "", *, echo_stderr: bool = True) -> "Repo":
        """Open the repository containing path ("" means the current directory)."""
        result = run_git(
            "rev-parse", "--show-toplevel", cwd=path, echo_stderr=echo_stderr
        )
        return cls(path=Path(result.stdout.removesuffix("\n")), echo_stderr=echo_stderr)

    def _git(self, *args: str, echo_stderr: bool | None = None) -> str:
        if echo_stderr is None:
            echo_stderr = self.echo_stderr
        return run_git(*args, cwd=self.path, echo_stderr=echo_stderr).stdout

    @property
    def git_dir(self) -> Path:
        return self.path / ".git"

    # Queries

    def rev_parse(self, ref: str) -> Oid:
        """Resolve a ref or revision expression to an object id."""
        return Oid(self._git("rev-parse", ref).removesuffix("\n"))

    def rev_parse_abbrev(self, ref: str) -> str:
        """Resolve a ref to its short symbolic name (e.g. the branch for HEAD)."""
        return self._git("rev-parse", "--abbrev-ref", ref).removesuffix("\n")

    def parents(self, commit: Oid | str) -> list[Oid]:
        """Get the parents of a commit, in order. A root commit has none."""
        output = self._git(
            "show", "--raw", "--no-patch", "--format=format:%P", str(commit)
        )
        return parse_parents(output)

    def status(self) -> list[StatusEntry]:
        """Get changed tracked paths (untracked files are excluded)."""
        return parse_status(self._git("status", "--porcelain", "-uno"))

    # Marker files

    def git_file_path(self, name: str) -> Path:
        return self.git_dir / name

    def has_git_file(self, name: str) -> bool:
        """Check for a file under .git. Errors other than "not found" propagate."""
        try:
            os.stat(self.git_file_path(name))
        except FileNotFoundError:
            return False
        return True

    def remove_git_file(self, name: str) -> None:
        self.git_file_path(name).unlink()

    def state(self) -> RepoState:
        """Get the operation in progress, by STATE_FILES precedence."""
        for name, state in STATE_FILES:
            if self.has_git_file(name):
                return state
        return RepoState.NONE

    def cherry_pick_head(self) -> Oid:
        """Get the commit being cherry-picked, read straight from .git."""
        return Oid(self.git_file_path(CHERRY_PICK_HEAD).read_text().strip())

    # Mutating commands

    def add(self, path: str) -> None:
        self._git("add", "--", path)

    def commit_reuse(self, original: Oid | str) -> None:
        """Commit with the message and authorship of another commit."""
        self._git("commit", "-C", str(original), "--no-edit", "--allow-empty")

    def commit_amend(self) -> None:
        self._git("commit", "--amend", "--no-edit", "--allow-empty")

    def reset_hard(self, commit: Oid | str) -> None:
        self._git("reset", "--hard", str(commit))

    def cherry_pick(self, commit: Oid | str) -> bool:
        """Cherry-pick a commit.

        Returns True on success and False when the pick stopped on a conflict,
        leaving the repository in the cherry-pick state. Any other failure
        raises GitError.
        """
        try:
            self._git("cherry-pick", "--allow-empty", str(commit), echo_stderr=False)
        except GitError as e:
            try:
                state = self.state()
            except OSError:
                click.echo(e.stderr, err=True, nl=False)
                raise e from None
            if state == RepoState.CHERRY_PICK:
                logger.info("Cherry-pick of %s stopped on a conflict", commit)
                return False
            raise
        return True

    def cherry_pick_continue(self) -> None:
        self._git("cherry-pick", "--continue")
