"""
Constants for AST conversion and file watching.

This module centralizes the tunable values used by the converter, the
watcher and the command line entry point.
"""

from .project.file_types import SourceCodeFileType


class ConverterConstants:
    """Defaults for ASTConverter."""

    # Nesting bounds applied while rebuilding a tree. Method body statements
    # sit at depth 0 and namespace declarations at depth 0; a node at the
    # bound is still converted but its nested list of the same kind is left
    # empty. None disables the bound.
    MAX_STATEMENT_DEPTH = 2
    MAX_DECLARATION_DEPTH = 1


class WatchConstants:
    """Defaults for watching a directory of serialized ASTs."""

    FILE_TYPES = (SourceCodeFileType.BINARY,)
    DEBOUNCE_SECONDS = 1.0  # Ignore duplicate events within 1 second
    POLL_INTERVAL_SECONDS = 1.0
