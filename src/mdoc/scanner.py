"""
File scanner for locating AsciiDoc documents.

Provides utilities for:
- Recursively scanning directories for files
- Recognizing root documents (master.adoc, assembly_*.adoc)
- Listing every document in a tree
"""
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, Optional

from rich.console import Console
from rich.markup import escape as rich_escape

from mdoc.constants import (
    DEFAULT_IGNORE_DIRS,
    DOC_EXTENSION,
    MASTER_FILENAME,
    ROOT_DOCUMENT_PATTERNS,
)

console = Console(stderr=True, highlight=False, soft_wrap=True)


def should_ignore(path: Path, ignore_dirs: frozenset[str]) -> bool:
    """
    Check if a path should be ignored based on directory names.

    Args:
        path: Path to check
        ignore_dirs: Set of directory names to ignore

    Returns:
        True if any path component is in ignore_dirs
    """
    return any(part in ignore_dirs for part in path.parts)


def get_all_files(
    directory: Path | str,
    ignore_dirs: Optional[frozenset[str]] = None,
) -> Iterator[Path]:
    """
    Get all files recursively from a directory.

    Args:
        directory: Path to directory (string or Path object)
        ignore_dirs: Set of directory names to ignore (default: DEFAULT_IGNORE_DIRS)

    Yields:
        Path objects pointing to files

    Raises:
        FileNotFoundError: If directory doesn't exist
        NotADirectoryError: If path points to a file, not a directory
    """
    if ignore_dirs is None:
        ignore_dirs = DEFAULT_IGNORE_DIRS

    dir_path = Path(directory)

    if not dir_path.exists():
        raise FileNotFoundError(f"Directory does not exist: {dir_path}")

    if not dir_path.is_dir():
        raise NotADirectoryError(f"Path is not a directory: {dir_path}")

    for item in dir_path.rglob('*'):
        try:
            # Only components below the scanned directory count
            if should_ignore(item.relative_to(dir_path), ignore_dirs):
                continue

            if item.is_file():
                yield item
        except PermissionError:
            console.print(f"[yellow]Warning:[/] Permission denied for {rich_escape(str(item))}", style="dim")
            continue


def is_root_document(path: Path | str) -> bool:
    """Check whether a file is an entry point of the include graph."""
    name = Path(path).name
    return any(fnmatchcase(name, pattern) for pattern in ROOT_DOCUMENT_PATTERNS)


def is_document(path: Path | str) -> bool:
    """Check whether a file is an AsciiDoc document."""
    return Path(path).suffix == DOC_EXTENSION


def _sorted_unique(paths: Iterator[Path]) -> list[Path]:
    return sorted({p.resolve() for p in paths})


def find_root_documents(
    directory: Path | str,
    ignore_dirs: Optional[frozenset[str]] = None,
) -> list[Path]:
    """
    Find every root document under a directory.

    Returns:
        Sorted, deduplicated, resolved paths
    """
    return _sorted_unique(
        f for f in get_all_files(directory, ignore_dirs=ignore_dirs)
        if is_root_document(f)
    )


def find_documents(
    directory: Path | str,
    ignore_dirs: Optional[frozenset[str]] = None,
    exclude_master: bool = True,
) -> list[Path]:
    """
    Find every AsciiDoc document under a directory.

    Args:
        directory: Path to directory (string or Path object)
        ignore_dirs: Set of directory names to ignore
        exclude_master: Skip files named exactly master.adoc

    Returns:
        Sorted, deduplicated, resolved paths
    """
    return _sorted_unique(
        f for f in get_all_files(directory, ignore_dirs=ignore_dirs)
        if is_document(f) and not (exclude_master and f.name == MASTER_FILENAME)
    )
