from __future__ import annotations

"""
Dependency Graph Walker.

Computes the set of local files transitively reachable from a selection
through import statements. The walk is iterative: an explicit stack holds
the files still to scan, a visited set guarantees each file is scanned at
most once (import cycles included) and an insertion-ordered mapping keeps
the newly discovered files.
"""

import logging
from typing import Dict, Iterable, List, Set

from pastedeps.core.analysis.import_parser import extract_local_import_paths
from pastedeps.core.analysis.path_resolver import resolve_import_path
from pastedeps.domain.models import FileRecord
from pastedeps.domain.policy import DEFAULT_POLICY, ResolutionPolicy
from pastedeps.infra.paths import path_key

logger = logging.getLogger(__name__)


def get_dependency_files(
        selected_files: Iterable[FileRecord],
        all_files: Iterable[FileRecord],
        project_root: str,
        policy: ResolutionPolicy = DEFAULT_POLICY,
) -> List[FileRecord]:
    """
    Return the files reachable from the selection that are not selected yet.

    Every selected file is scanned for imports; each import is resolved
    against the candidate set, and any resolved file outside the selection
    is recorded and scanned in turn. Errors raised while handling one file
    are logged and only drop that file's contribution.

    Args:
        selected_files: Initial user selection.
        all_files: Full candidate file set.
        project_root: Root directory of the project.
        policy: Locality and extension tables.

    Returns:
        List[FileRecord]: Newly discovered dependencies in discovery order.
    """
    selected = list(selected_files)
    candidates = list(all_files)

    selected_keys: Set[str] = {path_key(f.path) for f in selected}

    # First record wins when two candidates share a key
    index: Dict[str, FileRecord] = {}
    for record in candidates:
        index.setdefault(path_key(record.path), record)

    processed: Set[str] = set()
    discovered: Dict[str, FileRecord] = {}

    # Reversed so the first selected file is scanned first
    stack: List[FileRecord] = list(reversed(selected))

    while stack:
        current = stack.pop()
        current_key = path_key(current.path)
        if current_key in processed:
            continue
        processed.add(current_key)

        try:
            found = _scan_file(current, candidates, index, project_root, policy)
        except Exception as e:
            logger.warning(f"Error processing imports for {current.path}: {e}")
            continue

        pending: List[FileRecord] = []
        for dependency in found:
            dep_key = path_key(dependency.path)
            if dep_key in selected_keys:
                continue
            discovered.setdefault(dep_key, dependency)
            if dep_key not in processed:
                pending.append(dependency)

        stack.extend(reversed(pending))

    logger.debug(
        f"Dependency walk finished: {len(processed)} file(s) scanned, "
        f"{len(discovered)} new dependenc{'y' if len(discovered) == 1 else 'ies'}."
    )
    return list(discovered.values())


def _scan_file(
        record: FileRecord,
        candidates: List[FileRecord],
        index: Dict[str, FileRecord],
        project_root: str,
        policy: ResolutionPolicy,
) -> List[FileRecord]:
    """Resolve the local imports of one file to candidate records."""
    found: List[FileRecord] = []
    for import_path in extract_local_import_paths(record.content, record.path, policy):
        resolved = resolve_import_path(import_path, record.path, candidates, project_root, policy)
        for resolved_path in resolved:
            dependency = index.get(path_key(resolved_path))
            if dependency is not None:
                found.append(dependency)
    return found
