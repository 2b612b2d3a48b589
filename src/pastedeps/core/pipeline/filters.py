from __future__ import annotations

"""
File Filtering and Classification Rules.

Regex-based exclusion logic for the project scanner, .gitignore glob
translation and the extension tables used to flag binary files.
"""

import fnmatch
import os
import re
from typing import List, Set

from pastedeps.domain.constants import DEFAULT_EXCLUDE_PATTERNS

# -----------------------------------------------------------------------------
# REGEX AND FILENAME CONSTANTS
# -----------------------------------------------------------------------------

# Directories never descended into
PRUNED_DIRECTORIES: Set[str] = {
    ".git", ".hg", ".svn", "node_modules", "__pycache__",
    ".idea", ".vscode", ".venv", "venv", ".mypy_cache", ".pytest_cache",
}

BINARY_EXTENSIONS: Set[str] = {
    ".png", ".jpg", ".jpeg", ".gif", ".bmp", ".ico", ".webp", ".tiff",
    ".pdf", ".zip", ".gz", ".tar", ".7z", ".rar", ".jar",
    ".exe", ".dll", ".so", ".dylib", ".bin", ".o", ".class", ".pyc",
    ".mp3", ".mp4", ".wav", ".mov", ".avi",
    ".woff", ".woff2", ".ttf", ".otf", ".eot",
    ".sqlite", ".db",
}

# -----------------------------------------------------------------------------
# CONFIGURATION DEFAULTS
# -----------------------------------------------------------------------------

def default_exclude_patterns() -> List[str]:
    """
    Get the exclusion patterns applied when the user provides none.

    Files matching them stay in the candidate set but are flagged as
    excluded by default.

    Returns:
        List[str]: Regex strings for lock files, build output and minified bundles.
    """
    return list(DEFAULT_EXCLUDE_PATTERNS)

# -----------------------------------------------------------------------------
# PATTERN COMPILATION AND MATCHING
# -----------------------------------------------------------------------------

def compile_patterns(patterns: List[str]) -> List[re.Pattern]:
    """
    Compile raw regex strings, discarding malformed ones.

    Args:
        patterns: List of raw regex strings.

    Returns:
        List[re.Pattern]: Compiled regex objects.
    """
    compiled: List[re.Pattern] = []
    for p in patterns:
        try:
            compiled.append(re.compile(p))
        except re.error:
            continue
    return compiled


def matches_any(name: str, compiled_patterns: List[re.Pattern]) -> bool:
    """Verify if a string matches at least one compiled pattern."""
    return any(rx.search(name) for rx in compiled_patterns)


def is_excluded(rel_path: str, compiled_patterns: List[re.Pattern]) -> bool:
    """
    Check a root-relative path against exclusion patterns.

    The full path and each of its segments are tested, so a directory
    pattern such as '^build$' excludes every file below 'build/'.

    Args:
        rel_path: Forward-slash path relative to the project root.
        compiled_patterns: Compiled exclusion regex objects.

    Returns:
        bool: True if any pattern matches.
    """
    if not compiled_patterns:
        return False
    if matches_any(rel_path, compiled_patterns):
        return True
    return any(matches_any(seg, compiled_patterns) for seg in rel_path.split("/") if seg)

# -----------------------------------------------------------------------------
# FILE CLASSIFICATION LOGIC
# -----------------------------------------------------------------------------

def has_binary_extension(file_name: str) -> bool:
    """Classify a file as binary from its extension alone."""
    _, ext = os.path.splitext(file_name)
    return ext.lower() in BINARY_EXTENSIONS

# -----------------------------------------------------------------------------
# GITIGNORE INTEGRATION
# -----------------------------------------------------------------------------

def load_gitignore_patterns(root_path: str) -> List[str]:
    """
    Parse a .gitignore file and translate its glob rules into regexes.

    Negations ('!pattern') are not supported and are skipped.

    Args:
        root_path: Directory containing the .gitignore file.

    Returns:
        List[str]: Equivalent regex strings.
    """
    gitignore_path = os.path.join(root_path, ".gitignore")
    if not os.path.exists(gitignore_path):
        return []

    regex_patterns: List[str] = []
    try:
        with open(gitignore_path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith("#") or line.startswith("!"):
                    continue

                regex = _gitignore_to_regex(line)
                if regex:
                    regex_patterns.append(regex)
    except (OSError, UnicodeDecodeError):
        return regex_patterns

    return regex_patterns


def _gitignore_to_regex(glob_pattern: str) -> str:
    """Translate a gitignore glob into a Python regex string."""
    glob_pattern = glob_pattern.strip("/")
    if not glob_pattern:
        return ""
    return "^" + fnmatch.translate(glob_pattern)
