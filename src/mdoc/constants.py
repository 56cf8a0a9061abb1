"""
Centralized constants for the mdoc package.

This module contains:
- Document naming rules for root documents
- Directory ignore patterns for scanning
- Process exit statuses
"""

# =============================================================================
# Document Naming
# =============================================================================

# Extension appended to include targets and used to find document files
DOC_EXTENSION = ".adoc"

# Entry points of the include graph
MASTER_FILENAME = "master.adoc"
ASSEMBLY_PATTERN = "assembly_*.adoc"

ROOT_DOCUMENT_PATTERNS: tuple[str, ...] = (
    MASTER_FILENAME,
    ASSEMBLY_PATTERN,
)

# Version-control metadata is never part of the document tree
DEFAULT_IGNORE_DIRS: frozenset[str] = frozenset({
    '.git', '.hg', '.svn',
})

# =============================================================================
# Exit Statuses
# =============================================================================

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_NOT_FOUND = 2
EXIT_PERMISSION_DENIED = 13
EXIT_NOT_REGULAR_FILE = 21
EXIT_INVALID_ARGUMENT = 22

# =============================================================================
# External Tools
# =============================================================================

DEFAULT_RUBY = "ruby"

# Loads a document in safe mode and prints the include targets Asciidoctor
# resolved for it, one per line, in catalog insertion order.
ASCIIDOCTOR_INCLUDES_SCRIPT = (
    'require "asciidoctor"; '
    'doc = Asciidoctor.load_file(ARGV[0], safe: :safe); '
    'doc.catalog[:includes].each_key { |name| puts name }'
)

ASCIIDOCTOR_LOAD_SCRIPT = 'require "asciidoctor"'
