from __future__ import annotations

"""
Project File Discovery Service.

Walks a project directory and produces the candidate file snapshot used by
the selection UI and the dependency walker. Every file below the root is
reported, with flags describing whether the user may select it; the flags
never remove a file from the snapshot.
"""

import logging
import os
import re
from typing import Iterable, List, Optional, Sequence

from pastedeps.core.pipeline.filters import (
    PRUNED_DIRECTORIES,
    compile_patterns,
    default_exclude_patterns,
    has_binary_extension,
    is_excluded,
    load_gitignore_patterns,
)
from pastedeps.domain.constants import DEFAULT_MAX_FILE_SIZE
from pastedeps.domain.models import FileRecord
from pastedeps.infra.fs import is_binary_file, read_text_file
from pastedeps.infra.paths import are_paths_equal, join, normalize_path

logger = logging.getLogger(__name__)

# ==============================================================================
# PUBLIC API
# ==============================================================================

def scan_project(
        root: str,
        *,
        exclude_patterns: Optional[List[str]] = None,
        respect_gitignore: bool = True,
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
) -> List[FileRecord]:
    """
    Build the FileRecord snapshot of a project directory.

    Always-ignored directories (VCS metadata, dependency caches, IDE folders)
    are pruned during the walk. Content is read only for text files within
    the size limit.

    Args:
        root: Project root directory.
        exclude_patterns: Regexes flagging files as excluded by default.
                          None selects the built-in defaults.
        respect_gitignore: Whether to add the root .gitignore rules.
        max_file_size: Files above this size are marked skipped.

    Returns:
        List[FileRecord]: Records in deterministic walk order.
    """
    root_abs = os.path.abspath(root)
    exclude_rx = prepare_exclusion_rules(root_abs, exclude_patterns, respect_gitignore)

    records = [
        _build_record(root_abs, rel_path, exclude_rx, max_file_size)
        for rel_path in _walk_relative_paths(root_abs)
    ]
    logger.info(f"Scanned {len(records)} file(s) under {normalize_path(root_abs)}")
    return records


def prepare_exclusion_rules(
        root: str,
        exclude_patterns: Optional[List[str]],
        respect_gitignore: bool,
) -> List[re.Pattern]:
    """
    Compile user or default exclusion patterns plus .gitignore rules.

    Args:
        root: Project root directory.
        exclude_patterns: Optional raw exclusion regexes.
        respect_gitignore: Whether to parse the root .gitignore file.

    Returns:
        List[re.Pattern]: Compiled exclusion patterns.
    """
    final_exclusions = (
        list(exclude_patterns) if exclude_patterns is not None else default_exclude_patterns()
    )

    if respect_gitignore:
        git_patterns = load_gitignore_patterns(root)
        if git_patterns:
            logger.debug(f"Loaded {len(git_patterns)} patterns from .gitignore")
            final_exclusions.extend(git_patterns)

    return compile_patterns(final_exclusions)


def select_files(
        all_files: Sequence[FileRecord],
        requested: Iterable[str],
        project_root: str,
) -> List[FileRecord]:
    """
    Map user-provided paths onto records of the snapshot.

    Relative paths are interpreted from the project root. Unknown paths are
    logged and ignored; duplicates are collapsed.

    Args:
        all_files: Candidate snapshot.
        requested: Absolute or root-relative paths.
        project_root: Project root directory.

    Returns:
        List[FileRecord]: Matching records in request order.
    """
    selected: List[FileRecord] = []
    root = normalize_path(os.path.abspath(project_root))

    for raw in requested:
        candidate = raw if os.path.isabs(raw) else join(root, raw)
        record = next((f for f in all_files if are_paths_equal(f.path, candidate)), None)
        if record is None:
            logger.warning(f"Selected path not found in project: {raw}")
            continue
        if any(are_paths_equal(f.path, record.path) for f in selected):
            continue
        if not record.is_selectable:
            logger.warning(f"Selected file is binary or skipped: {record.path}")
        selected.append(record)

    return selected


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _walk_relative_paths(root_abs: str) -> List[str]:
    """List forward-slash relative paths of every file below the root."""
    rel_paths: List[str] = []
    for current, dirs, files in os.walk(root_abs):
        # In-place pruning keeps os.walk out of ignored directories
        dirs[:] = sorted(d for d in dirs if d not in PRUNED_DIRECTORIES)

        rel_dir = os.path.relpath(current, root_abs)
        for file_name in sorted(files):
            rel = file_name if rel_dir == "." else os.path.join(rel_dir, file_name)
            rel_paths.append(normalize_path(rel))
    return rel_paths


def _build_record(
        root_abs: str,
        rel_path: str,
        exclude_rx: List[re.Pattern],
        max_file_size: int,
) -> FileRecord:
    file_path = os.path.join(root_abs, rel_path)
    name = os.path.basename(rel_path)
    path = normalize_path(file_path)
    excluded = is_excluded(rel_path, exclude_rx)

    try:
        size = os.path.getsize(file_path)
    except OSError as e:
        logger.debug(f"Cannot stat {rel_path}: {e}")
        return FileRecord(path=path, name=name, is_skipped=True, excluded_by_default=excluded)

    if has_binary_extension(name) or is_binary_file(file_path):
        return FileRecord(
            path=path, name=name, is_binary=True, excluded_by_default=excluded, size=size
        )

    if size > max_file_size:
        logger.debug(f"Skipping {rel_path}: {size} bytes exceeds limit of {max_file_size}")
        return FileRecord(
            path=path, name=name, is_skipped=True, excluded_by_default=excluded, size=size
        )

    content, error = read_text_file(file_path)
    if content is None:
        logger.warning(f"Skipping {rel_path}: {error}")
        return FileRecord(
            path=path, name=name, is_skipped=True, excluded_by_default=excluded, size=size
        )

    return FileRecord(
        path=path, name=name, content=content, excluded_by_default=excluded, size=size
    )
