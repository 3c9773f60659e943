"""Repository states signalled by marker files in the .git directory."""

from enum import Enum


class RepoState(str, Enum):
    """Operation in progress in a repository."""

    NONE = "none"
    REBASE_INTERACTIVE = "rebase-interactive"
    REBASE_MERGE = "rebase-merge"
    REBASE = "rebase"
    APPLY_MAILBOX = "apply-mailbox"
    APPLY_MAILBOX_OR_REBASE = "apply-mailbox-or-rebase"
    MERGE = "merge"
    REVERT = "revert"
    CHERRY_PICK = "cherry-pick"
    BISECT = "bisect"


# Checked in order; the first marker that exists wins. Nested markers come
# before their directories so the more specific state is reported.
STATE_FILES: list[tuple[str, RepoState]] = [
    ("rebase-merge/interactive", RepoState.REBASE_INTERACTIVE),
    ("rebase-merge", RepoState.REBASE_MERGE),
    ("rebase-apply/rebasing", RepoState.REBASE),
    ("rebase-apply/applying", RepoState.APPLY_MAILBOX),
    ("rebase-apply", RepoState.APPLY_MAILBOX_OR_REBASE),
    ("MERGE_HEAD", RepoState.MERGE),
    ("REVERT_HEAD", RepoState.REVERT),
    ("CHERRY_PICK_HEAD", RepoState.CHERRY_PICK),
    ("BISECT_LOG", RepoState.BISECT),
]

CHERRY_PICK_HEAD = "CHERRY_PICK_HEAD"
