from __future__ import annotations

"""
Unit tests for the Import Path Resolver.

Verifies the three import shapes (root-absolute, relative, bare), the
extension probing rules, index fallback and the one-to-many matching rule.
"""

from typing import Callable, List

import pytest

from pastedeps.core.analysis.path_resolver import (
    find_matching_files,
    get_candidate_extensions,
    resolve_file_imports,
    resolve_import_path,
)
from pastedeps.domain.models import FileRecord
from pastedeps.domain.policy import PROBE_EXTENSIONS, ResolutionPolicy

ROOT = "C:/project"
APP = f"{ROOT}/src/components/App.ts"


@pytest.fixture
def candidates(make_record: Callable[..., FileRecord]) -> List[FileRecord]:
    """Candidate set with a few deliberately ambiguous entries."""
    paths = [
        APP,
        f"{ROOT}/src/components/utils/helper.ts",
        f"{ROOT}/src/components/utils/helper.js",
        f"{ROOT}/src/shared/constants.ts",
        f"{ROOT}/src/shared/config.js",
        f"{ROOT}/src/widgets/index.ts",
        f"{ROOT}/src/styles/theme.css",
        f"{ROOT}/lib/utils/helper.py",
    ]
    return [make_record(p) for p in paths]


# -----------------------------------------------------------------------------
# EXTENSION CANDIDATES
# -----------------------------------------------------------------------------

@pytest.mark.parametrize("import_path", ["./a.js", "./a.mjs", "./a.cjs", "./Comp.TSX", "../s/x.scss"])
def test_explicit_extension_disables_probing(import_path: str) -> None:
    """An import naming a known extension is used as written."""
    assert get_candidate_extensions(import_path) == ("",)


@pytest.mark.parametrize("import_path", ["./a", "./dir.js/file", "lodash/debounce", "./data.json"])
def test_extensionless_imports_probe_every_extension(import_path: str) -> None:
    """Only the last segment decides; unknown extensions still probe."""
    assert get_candidate_extensions(import_path) == PROBE_EXTENSIONS


# -----------------------------------------------------------------------------
# RELATIVE IMPORTS
# -----------------------------------------------------------------------------

def test_relative_import_with_parent_traversal(candidates: List[FileRecord]) -> None:
    """'../x' is resolved against the importing file's directory."""
    result = resolve_import_path("../shared/constants", APP, candidates, ROOT)

    assert result == [f"{ROOT}/src/shared/constants.ts"]


def test_relative_import_returns_every_extension_hit(candidates: List[FileRecord]) -> None:
    """Both helper.js and helper.ts are returned, in probe order."""
    result = resolve_import_path("./utils/helper", APP, candidates, ROOT)

    assert result == [
        f"{ROOT}/src/components/utils/helper.js",
        f"{ROOT}/src/components/utils/helper.ts",
    ]


def test_relative_import_matches_case_insensitively(candidates: List[FileRecord]) -> None:
    """Exact comparison ignores case and keeps the candidate's own spelling."""
    result = resolve_import_path("./Utils/HELPER.ts", APP, candidates, ROOT)

    assert result == [f"{ROOT}/src/components/utils/helper.ts"]


def test_relative_import_falls_back_to_index_file(candidates: List[FileRecord]) -> None:
    """A directory import resolves to its index file when no sibling file exists."""
    result = resolve_import_path("../widgets", APP, candidates, ROOT)

    assert result == [f"{ROOT}/src/widgets/index.ts"]


def test_index_fallback_is_skipped_when_a_file_matches(
        make_record: Callable[..., FileRecord],
) -> None:
    """The extensionless retry only happens when no probe matched."""
    files = [
        make_record(f"{ROOT}/src/components.ts"),
        make_record(f"{ROOT}/src/components/index.ts"),
    ]

    result = resolve_import_path("./components", f"{ROOT}/src/main.ts", files, ROOT)

    assert result == [f"{ROOT}/src/components.ts"]


def test_stylesheet_import_is_resolved_without_probing(candidates: List[FileRecord]) -> None:
    result = resolve_import_path("../styles/theme.css", APP, candidates, ROOT)

    assert result == [f"{ROOT}/src/styles/theme.css"]


# -----------------------------------------------------------------------------
# ROOT-ABSOLUTE AND BARE IMPORTS
# -----------------------------------------------------------------------------

def test_root_absolute_import_joins_project_root(candidates: List[FileRecord]) -> None:
    """'/src/...' is anchored at the project root, not the filesystem root."""
    result = resolve_import_path("/src/shared/config.js", APP, candidates, ROOT)

    assert result == [f"{ROOT}/src/shared/config.js"]


def test_root_absolute_import_does_not_probe(candidates: List[FileRecord]) -> None:
    assert resolve_import_path("/src/shared/config", APP, candidates, ROOT) == []


def test_bare_import_matches_by_suffix(candidates: List[FileRecord]) -> None:
    """A bare path is tolerated as a suffix of the candidate path."""
    result = resolve_import_path("shared/config", APP, candidates, ROOT)

    assert result == [f"{ROOT}/src/shared/config.js"]


def test_bare_import_suffix_match_is_ambiguous(candidates: List[FileRecord]) -> None:
    """Repeated directory names yield every matching file, without ranking."""
    result = resolve_import_path("utils/helper", APP, candidates, ROOT)

    assert sorted(result) == sorted([
        f"{ROOT}/src/components/utils/helper.js",
        f"{ROOT}/src/components/utils/helper.ts",
        f"{ROOT}/lib/utils/helper.py",
    ])


def test_suffix_match_keeps_case(candidates: List[FileRecord]) -> None:
    """Suffix comparison is case-sensitive, unlike exact equality."""
    assert resolve_import_path("Shared/config", APP, candidates, ROOT) == []


@pytest.mark.parametrize("import_path", ["", "./missing", "../../../../nowhere", "ghost/module"])
def test_unresolvable_imports_yield_nothing(candidates: List[FileRecord], import_path: str) -> None:
    assert resolve_import_path(import_path, APP, candidates, ROOT) == []


def test_restricted_probe_policy(candidates: List[FileRecord]) -> None:
    """A policy probing only '.ts' ignores the sibling '.js' file."""
    policy = ResolutionPolicy(probe_extensions=(".ts",))

    result = resolve_import_path("./utils/helper", APP, candidates, ROOT, policy)

    assert result == [f"{ROOT}/src/components/utils/helper.ts"]


# -----------------------------------------------------------------------------
# MATCHING AND REPORTS
# -----------------------------------------------------------------------------

def test_find_matching_files_tolerates_backslashes(make_record: Callable[..., FileRecord]) -> None:
    """Windows separators in the candidate set still match; originals are returned."""
    record = make_record("C:\\project\\src\\a.js")

    assert find_matching_files("c:/PROJECT/src/a.js", [record]) == ["C:\\project\\src\\a.js"]


def test_find_matching_files_empty_target(candidates: List[FileRecord]) -> None:
    assert find_matching_files("", candidates) == []


def test_resolve_file_imports_reports_each_import(candidates: List[FileRecord]) -> None:
    """Each local import gets a report with its resolved records."""
    content = "import { helper } from './utils/helper';\nimport x from './nothing';\nimport 'react';"

    reports = resolve_file_imports(content, APP, candidates, ROOT)

    assert [r.import_path for r in reports] == ["./utils/helper", "./nothing"]
    assert len(reports[0].resolved_paths) == 2
    assert {f.name for f in reports[0].found_files} == {"helper.js", "helper.ts"}
    assert reports[1].resolved_paths == []
    assert reports[1].found_files == []


def test_resolve_file_imports_honours_policy(candidates: List[FileRecord]) -> None:
    """The report API applies the given policy to resolution."""
    policy = ResolutionPolicy(probe_extensions=(".ts",))
    content = "import { helper } from './utils/helper';"

    reports = resolve_file_imports(content, APP, candidates, ROOT, policy=policy)

    assert reports[0].resolved_paths == [f"{ROOT}/src/components/utils/helper.ts"]
    assert [f.name for f in reports[0].found_files] == ["helper.ts"]


def test_resolve_file_imports_custom_parser(candidates: List[FileRecord]) -> None:
    reports = resolve_file_imports("", APP, candidates, ROOT, parser=lambda c, p: ["../shared/config.js"])

    assert reports[0].resolved_paths == [f"{ROOT}/src/shared/config.js"]


def test_relative_import_from_file_at_posix_root(make_record: Callable[..., FileRecord]) -> None:
    """A file directly under '/' resolves its siblings."""
    files = [make_record("/a.ts"), make_record("/main.ts")]

    assert resolve_import_path("./a", "/main.ts", files, "/") == ["/a.ts"]
