from __future__ import annotations

"""
Dependency Review Workflow.

Detected dependencies are never folded into the selection automatically.
Detection produces a review the user confirms or edits; the approved
subset is then merged into the selection in a separate call.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from pastedeps.core.analysis.dependency_graph import get_dependency_files
from pastedeps.domain.models import FileRecord
from pastedeps.domain.policy import DEFAULT_POLICY, ResolutionPolicy
from pastedeps.infra.paths import are_paths_equal, normalize_path

logger = logging.getLogger(__name__)

NO_DEPENDENCIES_HINT = (
    "No new dependencies found. Check that the selected files contain local import statements."
)


@dataclass(frozen=True)
class DependencyReview:
    """
    Outcome of a detection pass awaiting user confirmation.

    Attributes:
        detected: Normalized paths of newly detected dependencies.
        files: Records backing the detected paths.
    """
    detected: List[str] = field(default_factory=list)
    files: List[FileRecord] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.detected


# -----------------------------------------------------------------------------
# PHASE 1: DETECTION
# -----------------------------------------------------------------------------

def detect_dependencies(
        selected_paths: Sequence[str],
        all_files: Sequence[FileRecord],
        project_root: str,
        already_detected: Iterable[str] = (),
        policy: ResolutionPolicy = DEFAULT_POLICY,
) -> DependencyReview:
    """
    Run the dependency walk for the current selection.

    Only paths that are neither selected nor already offered in an earlier
    review are returned.

    Args:
        selected_paths: Paths currently selected by the user.
        all_files: Candidate snapshot.
        project_root: Project root directory.
        already_detected: Paths offered by a previous review.
        policy: Locality and extension tables.

    Returns:
        DependencyReview: Newly detected dependencies.
    """
    if not selected_paths or not all_files:
        return DependencyReview()

    selected_records = [
        f for f in all_files if any(are_paths_equal(p, f.path) for p in selected_paths)
    ]
    previous = [normalize_path(p) for p in already_detected]

    detected: List[str] = []
    files: List[FileRecord] = []
    for record in get_dependency_files(selected_records, all_files, project_root, policy):
        path = normalize_path(record.path)
        if any(are_paths_equal(path, p) for p in selected_paths):
            continue
        if any(are_paths_equal(path, p) for p in previous):
            continue
        detected.append(path)
        files.append(record)

    if detected:
        logger.info(f"Detected {len(detected)} new dependenc{'y' if len(detected) == 1 else 'ies'}")
    else:
        logger.info(NO_DEPENDENCIES_HINT)

    return DependencyReview(detected=detected, files=files)


# -----------------------------------------------------------------------------
# PHASE 2: CONFIRMATION AND MERGE
# -----------------------------------------------------------------------------

def toggle_dependency(current: Sequence[str], path: str, selected: bool) -> List[str]:
    """
    Add or remove one dependency from the set the user approves.

    Args:
        current: Currently approved dependency paths.
        path: Dependency being toggled.
        selected: New state of the dependency.

    Returns:
        List[str]: Updated approved paths.
    """
    normalized = normalize_path(path)
    if selected:
        if any(are_paths_equal(existing, normalized) for existing in current):
            return list(current)
        return list(current) + [normalized]
    return [existing for existing in current if not are_paths_equal(existing, normalized)]


def apply_dependency_selection(
        selection: Sequence[str],
        previous_dependencies: Sequence[str],
        approved_dependencies: Sequence[str],
) -> List[str]:
    """
    Merge the approved dependencies into the user selection.

    Dependencies merged by an earlier confirmation that are no longer
    approved are removed; newly approved ones are appended once.

    Args:
        selection: Current selection paths.
        previous_dependencies: Dependencies applied by the previous confirmation.
        approved_dependencies: Dependencies approved now.

    Returns:
        List[str]: The updated selection.
    """
    approved = [normalize_path(p) for p in approved_dependencies]
    previous = [normalize_path(p) for p in previous_dependencies]

    updated = [
        path for path in selection
        if not any(are_paths_equal(dep, path) for dep in previous)
        or any(are_paths_equal(dep, path) for dep in approved)
    ]

    for dep in approved:
        if not any(are_paths_equal(path, dep) for path in updated):
            updated.append(dep)

    return updated
