"""Exception hierarchy for mdoc commands.

Every fatal condition maps to one process exit status. The command
dispatcher catches :class:`MdocError`, reports the message on standard
error and exits with ``exit_status``. Failures inside the include
extractor never reach this hierarchy; they degrade to an empty include
list instead.
"""

from __future__ import annotations

from mdoc.constants import (
    EXIT_FAILURE,
    EXIT_INVALID_ARGUMENT,
    EXIT_NOT_FOUND,
    EXIT_NOT_REGULAR_FILE,
    EXIT_PERMISSION_DENIED,
)

__all__ = [
    "MdocError",
    "UsageError",
    "ConfigError",
    "FileMissingError",
    "FileUnreadableError",
    "NotARegularFileError",
    "MissingDependencyError",
    "NotInRepositoryError",
]


class MdocError(RuntimeError):
    """Base exception for fatal mdoc failures."""

    exit_status = EXIT_FAILURE

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UsageError(MdocError):
    """Raised for invalid options, commands, or argument counts."""

    exit_status = EXIT_INVALID_ARGUMENT


class ConfigError(UsageError):
    """Raised when a setting from the environment cannot be parsed."""


class FileMissingError(MdocError):
    """Raised when the requested file does not exist."""

    exit_status = EXIT_NOT_FOUND


class FileUnreadableError(MdocError):
    """Raised when the requested file cannot be read."""

    exit_status = EXIT_PERMISSION_DENIED


class NotARegularFileError(MdocError):
    """Raised when the requested path is a directory, device, or similar."""

    exit_status = EXIT_NOT_REGULAR_FILE


class MissingDependencyError(MdocError):
    """Raised when a required external tool is not installed."""


class NotInRepositoryError(MdocError):
    """Raised when an operation needs a repository and there is none."""
