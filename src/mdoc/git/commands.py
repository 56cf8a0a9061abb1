"""Low-level Git command execution."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from typing import Optional


class GitCommandError(Exception):
    """Raised when a git command fails."""
    pass


class GitNotFoundError(GitCommandError):
    """Raised when the git executable cannot be found."""
    pass


def is_git_available() -> bool:
    """Check whether the git executable is on PATH."""
    return shutil.which('git') is not None


def run_git_command(
    args: list[str],
    cwd: Path,
    timeout: Optional[float] = 30,
) -> str:
    """
    Run a git command and return output.

    Args:
        args: Command arguments, e.g., ['rev-parse', '--show-toplevel']
        cwd: Directory to run command in
        timeout: Maximum seconds to wait

    Returns:
        Command stdout

    Raises:
        GitNotFoundError: If git is not installed
        GitCommandError: If command fails
    """
    try:
        result = subprocess.run(
            ['git'] + args,
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout
        )
    except subprocess.TimeoutExpired:
        raise GitCommandError(f"Git command timed out after {timeout}s")
    except FileNotFoundError:
        # Also raised when cwd itself does not exist
        if not is_git_available():
            raise GitNotFoundError("Git is not installed or not in PATH")
        raise GitCommandError(f"Directory does not exist: {cwd}")
    except NotADirectoryError:
        raise GitCommandError(f"Not a directory: {cwd}")

    if result.returncode != 0:
        raise GitCommandError(f"Git command failed: {result.stderr.strip()}")

    return result.stdout


def locate_repo_root(path: Path | str) -> Optional[Path]:
    """
    Find the top-level directory of the repository containing a path.

    A file path is looked up through its parent directory.

    Args:
        path: File or directory to look up

    Returns:
        Resolved repository top-level, or None if the path is not
        under version control.

    Raises:
        GitNotFoundError: If git is not installed
    """
    resolved = Path(path).resolve()
    directory = resolved if resolved.is_dir() else resolved.parent

    try:
        output = run_git_command(['rev-parse', '--show-toplevel'], directory)
    except GitNotFoundError:
        raise
    except GitCommandError:
        # Not a work tree, or the directory is gone
        return None

    toplevel = output.strip()
    return Path(toplevel).resolve() if toplevel else None
