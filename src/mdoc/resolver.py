"""
Resolve AsciiDoc include directives through Asciidoctor.

Parsing AsciiDoc is delegated to the Asciidoctor gem, which runs in a
Ruby child process and reports the include targets it resolved. Any
failure of that process is treated as "no includes found"; callers
never see an exception from here.
"""
from __future__ import annotations

import logging
import shutil
import subprocess
import sys
from pathlib import Path
from typing import Optional, Protocol, runtime_checkable

from mdoc.constants import (
    ASCIIDOCTOR_INCLUDES_SCRIPT,
    ASCIIDOCTOR_LOAD_SCRIPT,
    DEFAULT_RUBY,
    DOC_EXTENSION,
)

logger = logging.getLogger(__name__)

__all__ = [
    "IncludeResolver",
    "AsciidoctorResolver",
    "parse_include_output",
    "extract_includes",
]


@runtime_checkable
class IncludeResolver(Protocol):
    """Anything that can list the documents a file includes."""

    def resolve(self, filepath: Path) -> list[Path]:
        """Return resolved absolute paths of every file `filepath` includes."""
        ...


def parse_include_output(output: str, filepath: Path) -> list[Path]:
    """
    Turn include target names into document paths.

    Each non-empty line is a target name relative to the directory of
    `filepath`, without extension. Duplicates are dropped, first
    occurrence wins.

    Args:
        output: Parser output, one include target per line
        filepath: The document the targets were resolved for

    Returns:
        Resolved paths in the order the parser reported them
    """
    base_dir = Path(filepath).resolve().parent
    seen: set[Path] = set()
    includes = []

    for line in output.splitlines():
        name = line.strip()
        if not name:
            continue
        path = (base_dir / f"{name}{DOC_EXTENSION}").resolve()
        if path not in seen:
            seen.add(path)
            includes.append(path)

    return includes


class AsciidoctorResolver:
    """
    Include resolver backed by the Asciidoctor Ruby gem.

    The document is loaded in document mode with the ``safe`` safe mode,
    so include directives are processed but nothing outside the document
    tree is read.
    """

    def __init__(self, ruby: str = DEFAULT_RUBY, timeout: Optional[float] = None):
        self.ruby = ruby
        self.timeout = timeout

    def __repr__(self) -> str:
        return f"AsciidoctorResolver(ruby={self.ruby!r}, timeout={self.timeout!r})"

    def _run(self, args: list[str], timeout: Optional[float]) -> subprocess.CompletedProcess:
        return subprocess.run(
            [self.ruby] + args,
            capture_output=True,
            # Include targets are file names, which need not be valid UTF-8
            encoding=sys.getfilesystemencoding(),
            errors="surrogateescape",
            timeout=timeout,
        )

    def is_available(self) -> bool:
        """Check that the interpreter exists and can load Asciidoctor."""
        if shutil.which(self.ruby) is None:
            return False
        try:
            result = self._run(['-e', ASCIIDOCTOR_LOAD_SCRIPT], timeout=self.timeout)
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.debug("Asciidoctor availability check failed: %s", e)
            return False
        return result.returncode == 0

    def resolve(self, filepath: Path) -> list[Path]:
        filepath = Path(filepath)
        try:
            result = self._run(
                ['-e', ASCIIDOCTOR_INCLUDES_SCRIPT, str(filepath)],
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            logger.debug("Asciidoctor timed out after %ss on %s", self.timeout, filepath)
            return []
        except OSError as e:
            logger.debug("Cannot run %s: %s", self.ruby, e)
            return []

        if result.returncode != 0:
            logger.debug(
                "Asciidoctor failed on %s (exit %d): %s",
                filepath, result.returncode, result.stderr.strip()
            )
            return []

        return parse_include_output(result.stdout, filepath)


def extract_includes(
    filepath: Path | str,
    resolver: Optional[IncludeResolver] = None,
) -> list[Path]:
    """
    List every file a document includes.

    Args:
        filepath: Path to the document (string or Path object)
        resolver: Include resolver to use (default: AsciidoctorResolver)

    Returns:
        Resolved include paths, possibly empty
    """
    if resolver is None:
        resolver = AsciidoctorResolver()
    return resolver.resolve(Path(filepath))
