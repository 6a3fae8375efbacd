"""Staged changes, commit and push.

Contains:
- get_staged_filenames: Names of staged files
- get_staged_diff: Staged diff with ignored paths excluded
- git_commit: Commit staged changes with a message
- git_push: Push HEAD to origin
"""

import logging
from typing import Optional

from gitbuddy.git.exceptions import NoStagedChangesError
from gitbuddy.git.runner import _run_git_command

logger = logging.getLogger(__name__)

DIFF_OPTIONS = ["--cached", "--no-ext-diff", "--diff-algorithm=minimal"]


def get_staged_filenames() -> list[str]:
    """Get the list of staged file paths."""
    output = _run_git_command(["diff", *DIFF_OPTIONS, "--name-only"])
    return [line for line in output.splitlines() if line.strip()]


def get_staged_diff(ignore_patterns: Optional[list[str]] = None, max_chars: int = 50000) -> str:
    """Get the staged diff, excluding ignored paths and truncating if necessary.

    Args:
        ignore_patterns: Pathspec globs excluded via ':(exclude)'.
        max_chars: Maximum characters for the diff output.

    Returns:
        The staged diff string.

    Raises:
        NoStagedChangesError: If nothing is staged.
    """
    if not get_staged_filenames():
        raise NoStagedChangesError(
            "No files added to staging! Did you forget to run `git add`?"
        )

    excludes = [f":(exclude){pattern}" for pattern in (ignore_patterns or [])]
    diff = _run_git_command(["diff", *DIFF_OPTIONS, "--", ".", *excludes])

    if not diff:
        return "(Only ignored files staged - no code changes to describe)"

    if len(diff) > max_chars:
        logger.debug("Truncating diff from %d to %d chars", len(diff), max_chars)
        diff = diff[:max_chars] + "\n...[truncated]\n"

    return diff


def git_commit(message: str, dry_run: bool = False) -> None:
    """Commit staged changes.

    Args:
        message: The commit message.
        dry_run: If True, nothing is executed.

    Raises:
        GitError: If the commit fails.
    """
    if dry_run:
        logger.debug("Dry run, skipping commit")
        return
    _run_git_command(["commit", "-m", message])


def git_push(dry_run: bool = False) -> None:
    """Push HEAD to origin.

    Raises:
        GitError: If the push fails.
    """
    if dry_run:
        logger.debug("Dry run, skipping push")
        return
    _run_git_command(["push", "origin", "HEAD"])
