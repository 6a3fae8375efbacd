"""Git helpers for gitbuddy.

- exceptions: GitError, NoStagedChangesError
- runner: _run_git_command, ensure_git_repository
- staged: get_staged_filenames, get_staged_diff, git_commit, git_push
"""

from gitbuddy.git.exceptions import GitError, NoStagedChangesError
from gitbuddy.git.runner import _run_git_command, ensure_git_repository
from gitbuddy.git.staged import (
    get_staged_diff,
    get_staged_filenames,
    git_commit,
    git_push,
)

__all__ = [
    "GitError",
    "NoStagedChangesError",
    "_run_git_command",
    "ensure_git_repository",
    "get_staged_diff",
    "get_staged_filenames",
    "git_commit",
    "git_push",
]
