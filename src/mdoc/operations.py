"""
Queries over the include graph: children, parents and orphans.

Each operation recomputes everything from the filesystem. Include
extraction for many root documents runs through a bounded thread pool;
every worker owns one parser process, and one failing document never
affects the others.
"""
from __future__ import annotations

import logging
import os
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Optional, Sequence

from mdoc.config import Settings
from mdoc.errors import (
    FileMissingError,
    FileUnreadableError,
    NotARegularFileError,
    NotInRepositoryError,
)
from mdoc.git import locate_repo_root
from mdoc.graph import IncludeGraph
from mdoc.resolver import AsciidoctorResolver, IncludeResolver
from mdoc.scanner import find_documents, find_root_documents

logger = logging.getLogger(__name__)

__all__ = [
    "default_resolver",
    "check_file",
    "build_include_graph",
    "resolve_scope",
    "list_children",
    "list_parents",
    "list_orphans",
]


def default_resolver(settings: Settings) -> AsciidoctorResolver:
    """Asciidoctor resolver configured from settings."""
    return AsciidoctorResolver(ruby=settings.ruby, timeout=settings.timeout)


def check_file(filename: Path | str, settings: Settings) -> Path:
    """
    Validate a user-supplied document path.

    Checks run in order: existence, readability, regular file.

    Returns:
        The resolved path

    Raises:
        FileMissingError: If the file does not exist
        FileUnreadableError: If the file cannot be read
        NotARegularFileError: If the path is not a regular file
    """
    path = Path(filename)
    if not path.is_absolute():
        path = settings.cwd / path

    if not path.exists():
        raise FileMissingError(f"{filename}: No such file or directory")
    if not os.access(path, os.R_OK):
        raise FileUnreadableError(f"{filename}: Permission denied")
    if not path.is_file():
        raise NotARegularFileError(f"{filename}: Not a regular file")

    return path.resolve()


def build_include_graph(
    roots: Sequence[Path],
    resolver: IncludeResolver,
    jobs: int,
) -> IncludeGraph:
    """
    Extract includes for every root document concurrently.

    Args:
        roots: Root documents to extract
        resolver: Include resolver, called once per root
        jobs: Maximum number of concurrent resolver calls

    Returns:
        Graph holding one node per root and its include edges
    """
    graph = IncludeGraph()
    if not roots:
        return graph

    results: dict[Path, list[Path]] = {}
    workers = max(1, min(jobs, len(roots)))

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures: dict[Future[list[Path]], Path] = {
            executor.submit(resolver.resolve, root): root for root in roots
        }
        for future in as_completed(futures):
            root = futures[future]
            try:
                results[root] = future.result()
            except Exception as e:
                logger.debug("Could not extract includes from %s: %s", root, e)
                results[root] = []

    # Insert in root order so the graph does not depend on completion order
    for root in roots:
        graph.add_includes(root, results[root])

    logger.debug(
        "Include graph: %d documents, %d edges from %d roots",
        graph.node_count, graph.edge_count, len(roots)
    )
    return graph


def resolve_scope(settings: Settings) -> tuple[Path, bool]:
    """
    Determine the directory searched by repository-wide operations.

    Returns:
        (scope, in_repository). Falls back to the working directory when
        it is not under version control.
    """
    root = locate_repo_root(settings.cwd)
    if root is None:
        return settings.cwd.resolve(), False
    return root, True


def list_children(
    filename: Path | str,
    settings: Settings,
    resolver: Optional[IncludeResolver] = None,
) -> list[Path]:
    """List the files a document includes, as the extractor reports them."""
    path = check_file(filename, settings)
    if resolver is None:
        resolver = default_resolver(settings)

    graph = build_include_graph([path], resolver, jobs=1)
    return graph.children(path)


def list_parents(
    filename: Path | str,
    settings: Settings,
    resolver: Optional[IncludeResolver] = None,
) -> list[Path]:
    """
    List the root documents that include a file.

    A root is a parent when the file's resolved path is exactly one of
    the root's resolved includes.

    Raises:
        NotInRepositoryError: If the file is not under version control
    """
    path = check_file(filename, settings)
    repo_root = locate_repo_root(path)
    if repo_root is None:
        raise NotInRepositoryError(f"{filename}: Not in a Git repository")

    if resolver is None:
        resolver = default_resolver(settings)

    roots = find_root_documents(repo_root)
    graph = build_include_graph(roots, resolver, settings.jobs)
    return graph.parents(path)


def list_orphans(
    settings: Settings,
    resolver: Optional[IncludeResolver] = None,
    scope: Optional[Path] = None,
) -> list[Path]:
    """
    List documents that no root document includes.

    Args:
        settings: Runtime settings
        resolver: Include resolver (default: AsciidoctorResolver)
        scope: Directory to search (default: see resolve_scope)

    Returns:
        Sorted list of unreachable documents. master.adoc files are never
        reported; unreferenced assembly files are.
    """
    if scope is None:
        scope, _ = resolve_scope(settings)
    if resolver is None:
        resolver = default_resolver(settings)

    roots = find_root_documents(scope)
    graph = build_include_graph(roots, resolver, settings.jobs)

    documents = find_documents(scope, exclude_master=True)
    return graph.orphans(documents)
