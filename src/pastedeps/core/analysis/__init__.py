from __future__ import annotations

from .dependency_graph import get_dependency_files
from .import_parser import (
    extract_imports,
    extract_local_import_paths,
    get_all_local_imports,
    is_local_import,
)
from .path_resolver import find_matching_files, resolve_file_imports, resolve_import_path

__all__ = [
    "extract_imports",
    "extract_local_import_paths",
    "get_all_local_imports",
    "is_local_import",
    "resolve_import_path",
    "resolve_file_imports",
    "find_matching_files",
    "get_dependency_files",
]
