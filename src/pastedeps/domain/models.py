from __future__ import annotations

"""
Dependency Analysis Data Models.

Defines the immutable records exchanged between the file-tree provider,
the import extractor, the path resolver and the dependency graph walker.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

# -----------------------------------------------------------------------------
# FILE SNAPSHOT
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FileRecord:
    """
    One file known to the tool for the current project snapshot.

    Attributes:
        path: Absolute normalized path (forward slashes, original casing).
        name: Base filename, display only.
        content: Full text content. Empty for binary or skipped files.
        is_binary: True if the file was classified as binary.
        is_skipped: True if the file could not be read or exceeded the size cap.
        excluded_by_default: True if an exclusion rule matched the file.
        size: File size in bytes.
    """
    path: str
    name: str
    content: str = ""
    is_binary: bool = False
    is_skipped: bool = False
    excluded_by_default: bool = False
    size: int = 0

    @property
    def is_selectable(self) -> bool:
        """Whether the user may pick this file manually."""
        return not (self.is_binary or self.is_skipped)


# -----------------------------------------------------------------------------
# IMPORT DECLARATIONS
# -----------------------------------------------------------------------------

class ImportKind(str, Enum):
    """Syntactic form of an import statement. Informational only."""
    STATIC_IMPORT = "static-import"
    DYNAMIC_IMPORT = "dynamic-import"
    REQUIRE_CALL = "require-call"
    FROM_IMPORT = "from-import"
    CSS_IMPORT = "css-import"


@dataclass(frozen=True)
class SourceSpan:
    """1-based location of a declaration; end_column is inclusive."""
    start_line: int
    start_column: int
    end_line: int
    end_column: int


@dataclass(frozen=True)
class ImportDeclaration:
    """
    A single textual import found in a source file.

    Attributes:
        kind: Syntactic form of the statement.
        raw_path: The literal module specifier written in the source.
        original_text: Matched text (synthesized for Python 'import a, b').
        span: Location of the match within the file.
    """
    kind: ImportKind
    raw_path: str
    original_text: str
    span: SourceSpan


# -----------------------------------------------------------------------------
# RESOLUTION REPORTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ResolvedImport:
    """
    Resolution outcome for one local import of a file.

    Attributes:
        import_path: Normalized local import path.
        resolved_paths: Candidate paths matched by the resolver.
        found_files: Records backing the resolved paths.
    """
    import_path: str
    resolved_paths: List[str] = field(default_factory=list)
    found_files: List[FileRecord] = field(default_factory=list)
