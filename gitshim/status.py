"""Parsing of `git status --porcelain` output."""

from enum import Enum

from pydantic import BaseModel


class StatusFlag(str, Enum):
    """Status of a path in the index or the work tree."""

    UNMODIFIED = "unmodified"
    MODIFIED = "modified"
    ADDED = "added"
    DELETED = "deleted"
    RENAMED = "renamed"
    COPIED = "copied"
    UNMERGED = "unmerged"


class StatusParseError(ValueError):
    """Malformed porcelain status output."""

    pass


class StatusEntry(BaseModel):
    """One changed path from porcelain status."""

    old_path: str
    new_path: str = ""  # only set for renames and copies
    index_status: StatusFlag
    work_tree_status: StatusFlag


STATUS_FLAGS: dict[str, StatusFlag] = {
    " ": StatusFlag.UNMODIFIED,
    "M": StatusFlag.MODIFIED,
    "A": StatusFlag.ADDED,
    "D": StatusFlag.DELETED,
    "R": StatusFlag.RENAMED,
    "C": StatusFlag.COPIED,
    "U": StatusFlag.UNMERGED,
}

STATUS_CHARS: dict[StatusFlag, str] = {flag: c for c, flag in STATUS_FLAGS.items()}

RENAME_SEPARATOR = " -> "


def status_flag_for_char(c: str) -> StatusFlag:
    """Map a porcelain status column character to a StatusFlag."""
    try:
        return STATUS_FLAGS[c]
    except KeyError:
        raise StatusParseError(f"Unknown status flag `{c}`") from None


def parse_status_line(line: str) -> StatusEntry:
    """Parse a single `XY path` or `XY old -> new` line."""
    if len(line) < 4:
        raise StatusParseError("Status line too short")

    index_status = status_flag_for_char(line[0])
    work_tree_status = status_flag_for_char(line[1])

    paths = line[3:].split(RENAME_SEPARATOR, 1)
    return StatusEntry(
        old_path=paths[0],
        new_path=paths[1] if len(paths) == 2 else "",
        index_status=index_status,
        work_tree_status=work_tree_status,
    )


def parse_status(output: str) -> list[StatusEntry]:
    """Parse porcelain status output, in git's order. Empty lines are skipped."""
    return [parse_status_line(line) for line in output.split("\n") if line]


def format_status_entry(entry: StatusEntry) -> str:
    """Render an entry back to its porcelain form."""
    path = entry.old_path
    if entry.new_path:
        path = f"{path}{RENAME_SEPARATOR}{entry.new_path}"
    index = STATUS_CHARS[entry.index_status]
    work_tree = STATUS_CHARS[entry.work_tree_status]
    return f"{index}{work_tree} {path}"
