"""Git executable lookup and command execution."""

import logging
import shutil
import subprocess
import threading
from dataclasses import dataclass
from pathlib import Path

import click

from .config import load_config

logger = logging.getLogger(__name__)


class GitError(Exception):
    """Error from git command."""

    def __init__(
        self,
        message: str,
        args: tuple[str, ...] = (),
        returncode: int | None = None,
        stdout: str = "",
        stderr: str = "",
    ):
        super().__init__(message)
        self.git_args = args
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


class GitNotFoundError(GitError):
    """No git executable could be found."""

    pass


@dataclass(frozen=True)
class GitResult:
    """Captured output of a successful git invocation."""

    stdout: str
    stderr: str


_git_path: str | None = None
_git_path_lock = threading.Lock()


def find_git() -> str:
    """Return the path to the git executable.

    The lookup runs once per process; later calls return the cached path.
    GITSHIM_GIT or the "git" settings key replace the default "git" name.
    """
    global _git_path
    if _git_path is not None:
        return _git_path

    with _git_path_lock:
        if _git_path is None:
            name = load_config().git or "git"
            path = shutil.which(name)
            if path is None:
                raise GitNotFoundError(f"git executable not found: {name}")
            logger.debug("Using git executable %s", path)
            _git_path = path
    return _git_path


def reset_git_cache() -> None:
    """Forget the cached executable so the next call searches again."""
    global _git_path
    with _git_path_lock:
        _git_path = None


def run_git(
    *args: str, cwd: Path | str | None = None, echo_stderr: bool = True
) -> GitResult:
    """Run a git command and return its captured stdout and stderr.

    Raises GitError on non-zero exit code or when git cannot be started.
    Unless echo_stderr is False, git's stderr is passed through to our own
    stderr before raising. A failure to start git is always echoed.
    """
    git = find_git()
    cwd = cwd or None
    logger.debug("Running git %s in %s", " ".join(args), cwd or ".")

    try:
        result = subprocess.run(
            [git, *args],
            cwd=cwd,
            capture_output=True,
            text=True,
        )
    except OSError as e:
        click.echo(str(e), err=True)
        raise GitError(f"git {' '.join(args)} failed: {e}", args=args) from e

    logger.debug("git %s exited with %d", args[0] if args else "", result.returncode)
    if result.returncode != 0:
        if echo_stderr:
            click.echo(result.stderr, err=True, nl=False)
        raise GitError(
            f"git {' '.join(args)} failed: {result.stderr.strip()}",
            args=args,
            returncode=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
        )

    return GitResult(stdout=result.stdout, stderr=result.stderr)
