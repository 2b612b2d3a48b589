from __future__ import annotations

"""
File Tree Renderer.

Builds a nested structure from a list of file paths and renders it as an
ASCII tree for the file map section of the assembled content.
"""

from typing import Dict, Iterable, List, Union

from pastedeps.infra.paths import basename, normalize_path, relative_to

Tree = Dict[str, Union["Tree", str]]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_file_tree(paths: Iterable[str], project_root: str) -> List[str]:
    """
    Render the given files as a tree rooted at the project directory.

    Args:
        paths: Absolute file paths to include.
        project_root: Directory used as the tree root.

    Returns:
        List[str]: Visual lines, starting with the root path itself.
    """
    tree = build_tree(paths, project_root)
    lines: List[str] = [normalize_path(project_root) or "."]
    render_tree_structure(tree, lines)
    return lines


def build_tree(paths: Iterable[str], project_root: str) -> Tree:
    """Nest root-relative paths into directory dictionaries."""
    tree: Tree = {}
    for path in paths:
        rel = relative_to(path, project_root) or basename(path)
        parts = [p for p in rel.split("/") if p]
        if not parts:
            continue

        level = tree
        for part in parts[:-1]:
            node = level.get(part)
            if not isinstance(node, dict):
                node = {}
                level[part] = node
            level = node
        level.setdefault(parts[-1], normalize_path(path))
    return tree


def render_tree_structure(tree_structure: Tree, lines: List[str], prefix: str = "") -> None:
    """
    Recursively append the tree lines using '├──' and '└──' connectors.

    Directories are listed before files, each group sorted by name.
    """
    entries = sorted(
        tree_structure.keys(),
        key=lambda name: (not isinstance(tree_structure[name], dict), name.lower()),
    )
    total = len(entries)

    for i, entry in enumerate(entries):
        is_last = (i == total - 1)
        connector = "└── " if is_last else "├── "
        node = tree_structure[entry]

        lines.append(f"{prefix}{connector}{entry}")
        if isinstance(node, dict):
            render_tree_structure(node, lines, prefix + ("    " if is_last else "│   "))
