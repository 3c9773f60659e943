"""Output styling helpers for consistent CLI display."""

import os

import click

from .state import RepoState
from .status import StatusFlag


def _color_enabled() -> bool:
    """Check if color output is enabled (respects NO_COLOR)."""
    # https://no-color.org/ - disable if NO_COLOR is set (any non-empty value)
    return not bool(os.environ.get("NO_COLOR"))


def _style(text: str, **styles: object) -> str:
    if not _color_enabled():
        return text
    return click.style(text, **styles)


def success(text: str) -> str:
    """Style text as success (green)."""
    return _style(text, fg="green")


def error(text: str) -> str:
    """Style text as error (red)."""
    return _style(text, fg="red")


def warning(text: str) -> str:
    """Style text as warning (yellow)."""
    return _style(text, fg="yellow")


def info(text: str) -> str:
    """Style text as info (cyan)."""
    return _style(text, fg="cyan")


def dim(text: str) -> str:
    """Style text as dimmed."""
    return _style(text, dim=True)


def file_path_style(text: str) -> str:
    """Style a file path."""
    return _style(text, fg="blue", bold=True)


# Index column is green, work tree column red, like `git status -s`
_FLAG_COLORS = {
    StatusFlag.UNMODIFIED: None,
    StatusFlag.UNMERGED: "magenta",
}


def status_code(flag: StatusFlag, char: str, *, index: bool) -> str:
    """Style one porcelain status column character."""
    color = _FLAG_COLORS.get(flag, "green" if index else "red")
    if color is None:
        return char
    return _style(char, fg=color)


def state_style(state: RepoState) -> str:
    """Style a repository state, highlighting in-progress operations."""
    if state == RepoState.NONE:
        return dim(state.value)
    return warning(state.value)
