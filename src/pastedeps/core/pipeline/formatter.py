from __future__ import annotations

"""
Content Assembly.

Turns the selected files into the text blob that is pasted into an LLM
chat: an optional file map, the file contents wrapped in fenced code blocks
and an optional user instructions block at the end.
"""

import os
from typing import Dict, List, Sequence

from pastedeps.core.analysis.tree_renderer import render_file_tree
from pastedeps.domain.models import FileRecord
from pastedeps.infra.paths import relative_to

# Extension -> fenced code block language hint
LANGUAGE_BY_EXTENSION: Dict[str, str] = {
    ".js": "javascript", ".jsx": "jsx", ".mjs": "javascript", ".cjs": "javascript",
    ".ts": "typescript", ".tsx": "tsx",
    ".py": "python",
    ".css": "css", ".scss": "scss", ".sass": "sass",
    ".html": "html", ".json": "json", ".md": "markdown",
    ".yml": "yaml", ".yaml": "yaml", ".toml": "toml",
    ".sh": "bash", ".sql": "sql", ".go": "go", ".rs": "rust",
    ".java": "java", ".c": "c", ".h": "c", ".cpp": "cpp", ".cs": "csharp",
}


def detect_language(file_name: str) -> str:
    """Return the code fence language for a filename, or '' if unknown."""
    _, ext = os.path.splitext(file_name)
    return LANGUAGE_BY_EXTENSION.get(ext.lower(), "")


def format_base_file_content(
        files: Sequence[FileRecord],
        project_root: str,
        include_file_tree: bool = False,
) -> str:
    """
    Format the selected files, optionally preceded by a file map.

    Binary and skipped files are listed without content.

    Args:
        files: Records in the order they should appear.
        project_root: Root used for relative paths and the file map.
        include_file_tree: Prepend a <file_map> block.

    Returns:
        str: The formatted content, empty when no file is given.
    """
    if not files:
        return ""

    sections: List[str] = []

    if include_file_tree:
        tree_lines = render_file_tree([f.path for f in files], project_root)
        sections.append("<file_map>\n" + "\n".join(tree_lines) + "\n</file_map>")

    blocks = [_format_file_block(f, project_root) for f in files]
    sections.append("<file_contents>\n" + "\n\n".join(blocks) + "\n</file_contents>")

    return "\n\n".join(sections)


def format_user_instructions_block(instructions: str) -> str:
    """Wrap free-text instructions, returning '' when they are blank."""
    text = (instructions or "").strip()
    if not text:
        return ""
    return f"<user_instructions>\n{text}\n</user_instructions>"


def assemble_clipboard_text(base_content: str, instructions: str) -> str:
    """
    Join the formatted files and the instructions block.

    A blank line separates the two parts only when both are present.
    """
    block = format_user_instructions_block(instructions)
    separator = "\n\n" if base_content and block else ""
    return base_content + separator + block


def _format_file_block(record: FileRecord, project_root: str) -> str:
    rel = relative_to(record.path, project_root) or record.name
    if record.is_binary:
        return f"File: {rel}\n(binary file, content omitted)"
    if record.is_skipped:
        return f"File: {rel}\n(file skipped, content omitted)"

    content = record.content.rstrip("\n")
    return f"File: {rel}\n```{detect_language(record.name)}\n{content}\n```"
