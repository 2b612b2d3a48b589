from __future__ import annotations

"""
Unit tests for the File Tree Renderer.
"""

from pastedeps.core.analysis.tree_renderer import build_tree, render_file_tree

ROOT = "C:/project"


def test_render_file_tree_layout() -> None:
    """Directories come first, names are sorted and connectors nest correctly."""
    paths = [
        f"{ROOT}/src/main.ts",
        f"{ROOT}/README.md",
        f"{ROOT}/src/utils/helper.ts",
        f"{ROOT}/src/App.tsx",
    ]

    lines = render_file_tree(paths, ROOT)

    assert lines == [
        "C:/project",
        "├── src",
        "│   ├── utils",
        "│   │   └── helper.ts",
        "│   ├── App.tsx",
        "│   └── main.ts",
        "└── README.md",
    ]


def test_render_file_tree_accepts_backslash_paths() -> None:
    lines = render_file_tree(["C:\\project\\src\\a.js"], "C:\\project\\")

    assert lines == ["C:/project", "└── src", "    └── a.js"]


def test_build_tree_keeps_outside_paths_by_full_path() -> None:
    """Files outside the root are nested under their own absolute segments."""
    tree = build_tree(["D:/other/x.py"], ROOT)

    assert tree == {"D:": {"other": {"x.py": "D:/other/x.py"}}}


def test_render_empty_tree() -> None:
    assert render_file_tree([], ROOT) == [ROOT]
