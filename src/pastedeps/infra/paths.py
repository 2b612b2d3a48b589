from __future__ import annotations

"""
Path Normalization Utilities.

String-level path helpers shared by the scanner and the dependency resolver.
Paths are handled as text in a canonical forward-slash form so that records
produced on Windows and POSIX hosts compare the same way. Equality is
case-insensitive; the original casing is always preserved in the output.
"""

import re
from typing import Tuple

_DRIVE_RX = re.compile(r"^([A-Za-z]:)(/?)")
_MULTI_SLASH_RX = re.compile(r"/{2,}")


# -----------------------------------------------------------------------------
# NORMALIZATION
# -----------------------------------------------------------------------------

def normalize_path(path: str) -> str:
    """
    Convert a path into its canonical forward-slash form.

    Backslashes become forward slashes, repeated separators collapse into
    one (a leading UNC '//' is kept) and trailing separators are removed
    unless the path is a root ('/', 'C:/').

    Args:
        path: Raw path string as produced by the OS or the user.

    Returns:
        str: Normalized path, or an empty string for empty input.
    """
    if not path:
        return ""

    p = path.replace("\\", "/")
    is_unc = p.startswith("//") and not p.startswith("///")
    p = _MULTI_SLASH_RX.sub("/", p)
    if is_unc:
        p = "/" + p

    while len(p) > 1 and p.endswith("/") and not _is_root(p):
        p = p[:-1]

    return p


def path_key(path: str) -> str:
    """Identity key of a path: normalized and lowercased."""
    return normalize_path(path).lower()


def are_paths_equal(path1: str, path2: str) -> bool:
    """
    Compare two paths ignoring case and separator style.

    Args:
        path1: First path.
        path2: Second path.

    Returns:
        bool: True when both paths designate the same entry.
    """
    return path_key(path1) == path_key(path2)


# -----------------------------------------------------------------------------
# DECOMPOSITION
# -----------------------------------------------------------------------------

def dirname(path: str) -> str:
    """
    Return the parent directory of a path.

    Args:
        path: File or directory path.

    Returns:
        str: Normalized parent directory. '.' when the path has no separator.
    """
    p = normalize_path(path)
    root, rest = _split_root(p)
    if not rest:
        return root or "."

    idx = rest.rfind("/")
    if idx == -1:
        return root or "."
    return root + rest[:idx]


def basename(path: str) -> str:
    """Return the final segment of a path."""
    p = normalize_path(path)
    if _is_root(p):
        return ""
    return p.rsplit("/", 1)[-1]


def relative_to(path: str, root: str) -> str:
    """
    Express a path relative to a root directory.

    Paths outside of the root are returned normalized but unchanged.

    Args:
        path: Target path.
        root: Base directory.

    Returns:
        str: Root-relative path with forward slashes.
    """
    p = normalize_path(path)
    r = normalize_path(root)
    if not r:
        return p
    if are_paths_equal(p, r):
        return ""

    prefix = r if r.endswith("/") else r + "/"
    if p.lower().startswith(prefix.lower()):
        return p[len(prefix):]
    return p


# -----------------------------------------------------------------------------
# COMPOSITION
# -----------------------------------------------------------------------------

def join(*parts: str) -> str:
    """
    Concatenate path fragments with a single separator.

    Fragments are joined literally; a fragment starting with '/' does not
    reset the result, so join('/project', '/src/app') yields
    '/project/src/app'. A fragment ending in '/' (a root such as '/' or
    'C:/') is followed directly by the next one.
    """
    pieces = [part.replace("\\", "/") for part in parts if part]
    if not pieces:
        return ""

    result = pieces[0]
    for piece in pieces[1:]:
        if result.endswith("/"):
            result += piece.lstrip("/")
        else:
            result += "/" + piece
    return normalize_path(result)


def resolve_path(base_dir: str, relative: str) -> str:
    """
    Resolve a relative reference against a base directory.

    '.' segments are dropped and '..' segments remove the previous segment.
    '..' never climbs above a root. An absolute reference replaces the base.

    Args:
        base_dir: Directory the reference is relative to.
        relative: Reference such as './utils/helper' or '../shared'.

    Returns:
        str: Normalized resolved path.
    """
    rel = normalize_path(relative)
    root, _ = _split_root(rel)
    combined = rel if root else join(base_dir, rel)
    return _collapse_segments(combined)


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _is_root(p: str) -> bool:
    return p in ("/", "//") or bool(re.fullmatch(r"[A-Za-z]:/", p))


def _split_root(p: str) -> Tuple[str, str]:
    """Split a normalized path into its root prefix and the remainder."""
    m = _DRIVE_RX.match(p)
    if m:
        return m.group(0), p[m.end():]
    if p.startswith("//"):
        return "//", p[2:]
    if p.startswith("/"):
        return "/", p[1:]
    return "", p


def _collapse_segments(p: str) -> str:
    root, rest = _split_root(normalize_path(p))
    segments = []
    for seg in rest.split("/"):
        if seg in ("", "."):
            continue
        if seg == "..":
            if segments and segments[-1] != "..":
                segments.pop()
            elif not root:
                segments.append("..")
            continue
        segments.append(seg)

    result = root + "/".join(segments)
    return normalize_path(result) or "."
