"""
Plain-text rendering of operation results.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Sequence

from mdoc.git import locate_repo_root


def _relative_path(filepath: str | Path, base_dir: Path) -> Path:
    """Get path relative to base_dir, or unchanged if not under base_dir."""
    path = Path(filepath)
    try:
        return path.relative_to(base_dir)
    except ValueError:
        return path


def _printable(path: Path | str) -> str:
    """Path as text; bytes that are not valid UTF-8 show as U+FFFD."""
    return os.fsencode(path).decode("utf-8", errors="replace")


def display_root(base_path: Path | str, cwd: Optional[Path] = None) -> Path:
    """Prefix stripped from result paths: the repository top-level, else cwd."""
    root = locate_repo_root(base_path)
    if root is not None:
        return root
    return (cwd or Path.cwd()).resolve()


def format_results(
    base_path: Path | str,
    results: Sequence[Path],
    header: Optional[str] = None,
    scope: Optional[Path] = None,
    cwd: Optional[Path] = None,
) -> str:
    """
    Render a result listing.

    Args:
        base_path: File or directory the results were computed for
        results: Result paths, in display order
        header: First line (default: "Displaying results for: <base_path>")
        scope: Prefix to strip from each result (default: see display_root)
        cwd: Fallback prefix outside a repository (default: process cwd)

    Returns:
        Header, one indented line per result, and a count footer
    """
    if header is None:
        header = f"Displaying results for: {_printable(base_path)}"

    lines = [header]

    if not results:
        lines.append("No results found.")
    else:
        if scope is None:
            scope = display_root(base_path, cwd)
        for path in results:
            lines.append(f"  {_printable(_relative_path(path, scope))}")

    lines.append(f"Found {len(results)} results.")
    return "\n".join(lines)
