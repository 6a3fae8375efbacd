"""Git command runner and repository checks."""

import subprocess

from gitbuddy.git.exceptions import GitError


def _run_git_command(args: list[str]) -> str:
    """Run a git command and return its output.

    Args:
        args: List of arguments to pass to git.

    Returns:
        The stdout of the git command, stripped.

    Raises:
        GitError: If the command fails.
    """
    try:
        result = subprocess.run(
            ["git"] + args,
            capture_output=True,
            text=True,
            check=True,
        )
        return result.stdout.strip()
    except subprocess.CalledProcessError as e:
        raise GitError(f"Git command failed: git {' '.join(args)}\n{e.stderr.strip()}")
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH.")


def ensure_git_repository() -> None:
    """Check that git is installed and the working directory is inside a repo.

    Raises:
        GitError: If either check fails.
    """
    _run_git_command(["--version"])
    try:
        _run_git_command(["rev-parse", "--is-inside-work-tree"])
    except GitError:
        raise GitError("Not in a git repository. Please run this command from within a git repo.")
