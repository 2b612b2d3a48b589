from __future__ import annotations

"""
Import Path Resolver.

Maps a normalized local import path to the files of the candidate set it
may designate. Resolution is best effort and one-to-many: every file that
satisfies the matching rule is returned and no winner is picked, leaving
the final choice to the user.
"""

from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from pastedeps.core.analysis.import_parser import extract_local_import_paths
from pastedeps.domain.models import FileRecord, ResolvedImport
from pastedeps.domain.policy import DEFAULT_POLICY, ResolutionPolicy
from pastedeps.infra.paths import (
    are_paths_equal,
    dirname,
    join,
    normalize_path,
    path_key,
    resolve_path,
)

ImportPathParser = Callable[[str, str], List[str]]


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def resolve_import_path(
        import_path: str,
        current_file_path: str,
        candidate_files: Sequence[FileRecord],
        project_root: str,
        policy: ResolutionPolicy = DEFAULT_POLICY,
) -> List[str]:
    """
    Resolve one local import path to matching candidate file paths.

    Three shapes are handled:
    1. Root-absolute ('/src/app'): joined with the project root, no probing.
    2. Relative ('./x', '../x'): resolved against the importing file's folder.
    3. Bare ('utils/helpers'): used literally and matched by suffix.

    Relative and bare imports try every candidate extension and collect all
    hits. Only when nothing matched is the extensionless path tried.

    Args:
        import_path: Normalized local import path.
        current_file_path: Path of the file containing the import.
        candidate_files: Full candidate file set.
        project_root: Root directory of the project.
        policy: Extension tables.

    Returns:
        List[str]: Paths of matching records, possibly empty.
    """
    if not import_path:
        return []

    if import_path.startswith("/"):
        return find_matching_files(join(project_root, import_path), candidate_files, policy)

    if import_path.startswith(("./", "../")):
        base_path = resolve_path(dirname(current_file_path), import_path)
    else:
        base_path = import_path

    resolved: List[str] = []
    for ext in get_candidate_extensions(import_path, policy):
        resolved.extend(find_matching_files(base_path + ext, candidate_files, policy))

    if not resolved:
        resolved.extend(find_matching_files(base_path, candidate_files, policy))

    return resolved


def get_candidate_extensions(
        import_path: str,
        policy: ResolutionPolicy = DEFAULT_POLICY,
) -> Tuple[str, ...]:
    """
    Pick the extensions to append to an import path.

    Args:
        import_path: Import path as written (after normalization).
        policy: Extension tables.

    Returns:
        Tuple[str, ...]: ('',) when the last segment already carries a known
                         extension, the ordered probe list otherwise.
    """
    last_segment = normalize_path(import_path).rsplit("/", 1)[-1].lower()
    if any(last_segment.endswith(ext) for ext in policy.explicit_extensions):
        return ("",)
    return policy.probe_extensions


def find_matching_files(
        target_path: str,
        candidate_files: Iterable[FileRecord],
        policy: ResolutionPolicy = DEFAULT_POLICY,
) -> List[str]:
    """
    Return every candidate whose path matches a physical target path.

    A record matches when it is case-insensitively equal to the target or to
    one of its index files (<target>/index.js, ...), when its normalized path
    ends with "/<target>", or when it ends with "/<target>/<index file>".
    Suffix comparisons keep the original casing.

    Args:
        target_path: Candidate physical path.
        candidate_files: Records to test.
        policy: Supplies the accepted index file names.

    Returns:
        List[str]: Original paths of all matching records.
    """
    target = normalize_path(target_path)
    if not target:
        return []

    exact_keys = {path_key(target)} | {
        path_key(f"{target}/{index_name}") for index_name in policy.index_files
    }
    suffixes = ("/" + target,) + tuple(
        f"/{target}/{index_name}" for index_name in policy.index_files
    )

    matches: List[str] = []
    for record in candidate_files:
        if path_key(record.path) in exact_keys:
            matches.append(record.path)
            continue

        normalized = normalize_path(record.path)
        if normalized.endswith(suffixes):
            matches.append(record.path)

    return matches


def resolve_file_imports(
        content: str,
        file_path: str,
        candidate_files: Sequence[FileRecord],
        project_root: str,
        parser: Optional[ImportPathParser] = None,
        policy: ResolutionPolicy = DEFAULT_POLICY,
) -> List[ResolvedImport]:
    """
    Resolve every local import of one file.

    Args:
        content: Text of the file.
        file_path: Path of the file.
        candidate_files: Full candidate file set.
        project_root: Root directory of the project.
        parser: Function extracting local import paths from content.
                None selects the built-in extractor under the given policy.
        policy: Extension rules applied to extraction and resolution.

    Returns:
        List[ResolvedImport]: One report per import path, in source order.
    """
    import_paths = (
        parser(content, file_path) if parser is not None
        else extract_local_import_paths(content, file_path, policy)
    )

    reports: List[ResolvedImport] = []
    for import_path in import_paths:
        resolved_paths = resolve_import_path(
            import_path, file_path, candidate_files, project_root, policy
        )
        found_files = [
            record for record in candidate_files
            if any(are_paths_equal(record.path, p) for p in resolved_paths)
        ]
        reports.append(ResolvedImport(
            import_path=import_path,
            resolved_paths=resolved_paths,
            found_files=found_files,
        ))
    return reports
