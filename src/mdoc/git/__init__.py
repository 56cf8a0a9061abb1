"""Git integration for locating repository scope."""

from .commands import (
    GitCommandError,
    GitNotFoundError,
    is_git_available,
    run_git_command,
    locate_repo_root,
)

__all__ = [
    # Exceptions
    'GitCommandError',
    'GitNotFoundError',
    # Functions
    'is_git_available',
    'run_git_command',
    'locate_repo_root',
]
