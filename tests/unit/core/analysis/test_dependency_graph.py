from __future__ import annotations

"""
Unit tests for the Dependency Graph Walker.

Verifies transitive discovery, cycle termination, exclusion of the initial
selection, idempotence and the per-file error boundary.
"""

import logging
from typing import Callable, Dict, List
from unittest.mock import patch

import pytest

from pastedeps.core.analysis.dependency_graph import get_dependency_files
from pastedeps.domain.models import FileRecord
from pastedeps.domain.policy import ResolutionPolicy
from pastedeps.infra.paths import path_key

ROOT = "C:/project"


def _sorted_paths(records: List[FileRecord]) -> List[str]:
    return sorted(path_key(r.path) for r in records)


def test_transitive_dependencies_are_discovered(
        react_project: Dict[str, FileRecord], project_root: str,
) -> None:
    """Imports of imported files are followed; packages are ignored."""
    all_files = list(react_project.values())

    result = get_dependency_files([react_project["App.ts"]], all_files, project_root)

    assert [r.name for r in result] == ["helper.ts", "constants.ts", "config.js"]


def test_relative_resolution_with_parent_traversal(make_record: Callable[..., FileRecord]) -> None:
    """App.ts importing './utils/helper' and '../shared/constants' yields exactly both."""
    app = make_record(
        f"{ROOT}/src/components/App.ts",
        "import { helper } from './utils/helper';\nimport { X } from '../shared/constants';",
    )
    helper = make_record(f"{ROOT}/src/components/utils/helper.ts")
    constants = make_record(f"{ROOT}/src/shared/constants.ts")
    unrelated = make_record(f"{ROOT}/src/other.ts")

    result = get_dependency_files([app], [app, helper, constants, unrelated], ROOT)

    assert _sorted_paths(result) == _sorted_paths([helper, constants])


def test_import_cycle_terminates(make_record: Callable[..., FileRecord]) -> None:
    """A imports B and B imports A: only B is new."""
    a = make_record(f"{ROOT}/a.js", "import b from './b';")
    b = make_record(f"{ROOT}/b.js", "import a from './a';")

    result = get_dependency_files([a], [a, b], ROOT)

    assert result == [b]


def test_longer_cycle_with_many_candidates_terminates(make_record: Callable[..., FileRecord]) -> None:
    """A ring of files is walked once per file."""
    count = 100
    files = [
        make_record(f"{ROOT}/ring/m{i}.js", f"import next from './m{(i + 1) % count}';")
        for i in range(count)
    ]

    result = get_dependency_files([files[0]], files, ROOT)

    assert len(result) == count - 1
    assert files[0] not in result


def test_selected_files_are_never_offered(make_record: Callable[..., FileRecord]) -> None:
    """B is reachable from A but already selected, so it is not reported."""
    a = make_record(f"{ROOT}/a.js", "import b from './b';\nimport c from './c';")
    b = make_record(f"{ROOT}/b.js", "import d from './d';")
    c = make_record(f"{ROOT}/c.js")
    d = make_record(f"{ROOT}/d.js")

    result = get_dependency_files([a, b], [a, b, c, d], ROOT)

    assert b not in result
    assert _sorted_paths(result) == _sorted_paths([c, d])


def test_selection_comparison_ignores_case(make_record: Callable[..., FileRecord]) -> None:
    """A selected record spelled differently is still recognized as selected."""
    a = make_record(f"{ROOT}/a.js", "import b from './B';")
    b = make_record(f"{ROOT}/b.js")
    b_upper = make_record(f"{ROOT.lower()}/B.JS")

    assert get_dependency_files([a, b_upper], [a, b], ROOT) == []


def test_multi_extension_dependencies_are_all_returned(make_record: Callable[..., FileRecord]) -> None:
    main = make_record(f"{ROOT}/src/main.ts", "import { h } from './utils/helper';")
    helper_ts = make_record(f"{ROOT}/src/utils/helper.ts")
    helper_js = make_record(f"{ROOT}/src/utils/helper.js")

    result = get_dependency_files([main], [main, helper_ts, helper_js], ROOT)

    assert _sorted_paths(result) == _sorted_paths([helper_ts, helper_js])


def test_index_fallback_dependency(make_record: Callable[..., FileRecord]) -> None:
    main = make_record(f"{ROOT}/src/main.tsx", "import Button from './components';")
    index = make_record(f"{ROOT}/src/components/index.ts")

    assert get_dependency_files([main], [main, index], ROOT) == [index]


def test_walk_is_idempotent(react_project: Dict[str, FileRecord], project_root: str) -> None:
    """Two identical calls give path-equal results."""
    selected = [react_project["App.ts"], react_project["main.css"]]
    all_files = list(react_project.values())

    first = get_dependency_files(selected, all_files, project_root)
    second = get_dependency_files(selected, all_files, project_root)

    assert _sorted_paths(first) == _sorted_paths(second)
    assert "theme.css" in {r.name for r in first}


def test_binary_and_excluded_files_remain_targets(make_record: Callable[..., FileRecord]) -> None:
    """Selection flags do not filter dependency targets."""
    css = make_record(f"{ROOT}/app.css", "@import './fonts.css';\n@import './legacy.scss';")
    fonts = make_record(f"{ROOT}/fonts.css", is_binary=True)
    legacy = make_record(f"{ROOT}/legacy.scss", excluded_by_default=True)

    result = get_dependency_files([css], [css, fonts, legacy], ROOT)

    assert result == [fonts, legacy]


def test_empty_inputs_return_nothing(react_project: Dict[str, FileRecord], project_root: str) -> None:
    assert get_dependency_files([], list(react_project.values()), project_root) == []
    assert get_dependency_files([react_project["App.ts"]], [], project_root) == []


def test_restricted_policy_limits_discovery(make_record: Callable[..., FileRecord]) -> None:
    main = make_record(f"{ROOT}/main.ts", "import a from './a';")
    a_ts = make_record(f"{ROOT}/a.ts")
    a_js = make_record(f"{ROOT}/a.js")

    result = get_dependency_files([main], [main, a_ts, a_js], ROOT, ResolutionPolicy(probe_extensions=(".js",)))

    assert result == [a_js]


def test_per_file_error_is_logged_and_skipped(
        make_record: Callable[..., FileRecord], caplog: pytest.LogCaptureFixture,
) -> None:
    """An exception while scanning one file drops only that file's imports."""
    good = make_record(f"{ROOT}/good.js", "import a from './a';")
    bad = make_record(f"{ROOT}/bad.js", "import b from './b';")
    a = make_record(f"{ROOT}/a.js")
    b = make_record(f"{ROOT}/b.js")

    from pastedeps.core.analysis import dependency_graph
    original = dependency_graph.extract_local_import_paths

    def flaky(content: str, file_path: str, policy: ResolutionPolicy) -> List[str]:
        if file_path.endswith("bad.js"):
            raise UnicodeError("undecodable content")
        return original(content, file_path, policy)

    with patch.object(dependency_graph, "extract_local_import_paths", side_effect=flaky):
        with caplog.at_level(logging.WARNING, logger="pastedeps.core.analysis.dependency_graph"):
            result = get_dependency_files([bad, good], [good, bad, a, b], ROOT)

    assert result == [a]
    assert any(
        "Error processing imports for C:/project/bad.js" in rec.getMessage()
        for rec in caplog.records
    )
