"""
mdoc - Display important information about modular documentation files.

Resolves AsciiDoc include directives with Asciidoctor and reports which
files a document includes, which root documents include a file, and
which documents no root document includes.
"""

__version__ = "0.1.0"

# Configuration and errors
from mdoc.config import Settings
from mdoc.errors import (
    MdocError,
    UsageError,
    ConfigError,
    FileMissingError,
    FileUnreadableError,
    NotARegularFileError,
    MissingDependencyError,
    NotInRepositoryError,
)

# Core functionality
from mdoc.git import locate_repo_root
from mdoc.resolver import IncludeResolver, AsciidoctorResolver, extract_includes
from mdoc.scanner import find_documents, find_root_documents, is_root_document
from mdoc.graph import IncludeGraph, sorted_difference
from mdoc.operations import list_children, list_parents, list_orphans
from mdoc.formatter import format_results

__all__ = [
    # Version
    "__version__",
    # Configuration
    "Settings",
    # Errors
    "MdocError",
    "UsageError",
    "ConfigError",
    "FileMissingError",
    "FileUnreadableError",
    "NotARegularFileError",
    "MissingDependencyError",
    "NotInRepositoryError",
    # Repository locator
    "locate_repo_root",
    # Include extractor
    "IncludeResolver",
    "AsciidoctorResolver",
    "extract_includes",
    # Scanner
    "find_documents",
    "find_root_documents",
    "is_root_document",
    # Graph
    "IncludeGraph",
    "sorted_difference",
    # Operations
    "list_children",
    "list_parents",
    "list_orphans",
    # Formatter
    "format_results",
]
