from __future__ import annotations

"""
Import Statement Extractor.

Scans source text line by line with regular expressions and reports the
import-like constructs it finds. Language support is a lookup table keyed
by file extension; each language is a sequence of independent line
matchers. Multi-line statements are not recognized.

The extractor never raises: unknown extensions, empty content and lines
that match nothing all produce no declarations.
"""

import re
from typing import Callable, Dict, Iterable, List, Sequence, Tuple

from pastedeps.domain.models import FileRecord, ImportDeclaration, ImportKind, SourceSpan
from pastedeps.domain.policy import DEFAULT_POLICY, ResolutionPolicy

LineMatcher = Callable[[int, str], List[ImportDeclaration]]

# -----------------------------------------------------------------------------
# PATTERNS
# -----------------------------------------------------------------------------

_JS_STATIC_RX = re.compile(
    r"import\s+"
    r"(?:\{[^}]*\}|\*\s+as\s+\w+|\w+\s*,\s*\*\s+as\s+\w+|\w+(?:\s*,\s*\{[^}]*\})*|\w+)"
    r"\s+from\s+['\"]([^'\"]+)['\"]"
)
_JS_DYNAMIC_RX = re.compile(r"import\s*\(\s*['\"]([^'\"]+)['\"]\s*\)")
_JS_REQUIRE_RX = re.compile(r"require\s*\(\s*['\"]([^'\"]+)['\"]\s*\)")

_PY_IMPORT_RX = re.compile(r"import\s+(\w+(?:\s*,\s*\w+)*)")
_PY_FROM_RX = re.compile(r"from\s+(\w+(?:\.\w+)*)\s+import\s+([^;]+)")

_CSS_IMPORT_RX = re.compile(r"@import\s+(?:url\()?['\"]?([^'\"\s)]+)['\"]?\s*\)?")


# -----------------------------------------------------------------------------
# LINE MATCHERS
# -----------------------------------------------------------------------------

def _pattern_matcher(kind: ImportKind, rx: re.Pattern) -> LineMatcher:
    """Build a matcher reporting every occurrence of `rx` on a line."""

    def match_line(line_no: int, line: str) -> List[ImportDeclaration]:
        found: List[ImportDeclaration] = []
        for m in rx.finditer(line):
            raw_path = m.group(1)
            if not raw_path:
                continue
            found.append(ImportDeclaration(
                kind=kind,
                raw_path=raw_path,
                original_text=m.group(0),
                span=SourceSpan(line_no, m.start() + 1, line_no, m.end()),
            ))
        return found

    return match_line


def _python_import_matcher(line_no: int, line: str) -> List[ImportDeclaration]:
    """Handle 'import a, b, c': one declaration per module name."""
    found: List[ImportDeclaration] = []
    for m in _PY_IMPORT_RX.finditer(line):
        for module in (part.strip() for part in m.group(1).split(",")):
            if not module:
                continue
            text = f"import {module}"
            found.append(ImportDeclaration(
                kind=ImportKind.STATIC_IMPORT,
                raw_path=module,
                original_text=text,
                span=SourceSpan(line_no, m.start() + 1, line_no, m.start() + len(text)),
            ))
    return found


_JS_SCANNER: Tuple[LineMatcher, ...] = (
    _pattern_matcher(ImportKind.STATIC_IMPORT, _JS_STATIC_RX),
    _pattern_matcher(ImportKind.DYNAMIC_IMPORT, _JS_DYNAMIC_RX),
    _pattern_matcher(ImportKind.REQUIRE_CALL, _JS_REQUIRE_RX),
)
_PY_SCANNER: Tuple[LineMatcher, ...] = (
    _python_import_matcher,
    _pattern_matcher(ImportKind.FROM_IMPORT, _PY_FROM_RX),
)
_CSS_SCANNER: Tuple[LineMatcher, ...] = (
    _pattern_matcher(ImportKind.CSS_IMPORT, _CSS_IMPORT_RX),
)

# Extension (lowercase, no dot) -> language scanner
SCANNERS: Dict[str, Sequence[LineMatcher]] = {
    "js": _JS_SCANNER,
    "jsx": _JS_SCANNER,
    "ts": _JS_SCANNER,
    "tsx": _JS_SCANNER,
    "py": _PY_SCANNER,
    "css": _CSS_SCANNER,
    "scss": _CSS_SCANNER,
    "sass": _CSS_SCANNER,
}


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def extract_imports(content: str, file_path: str) -> List[ImportDeclaration]:
    """
    Report every import declaration found in a file.

    The language is chosen from the final '.' segment of the path,
    case-insensitively. Matchers run in table order on each line.

    Args:
        content: Full text of the file.
        file_path: Path of the file, only used for language dispatch.

    Returns:
        List[ImportDeclaration]: Declarations in line order.
    """
    if not content or not isinstance(content, str) or not file_path:
        return []

    extension = file_path.split(".")[-1].lower()
    scanner = SCANNERS.get(extension)
    if not scanner:
        return []

    declarations: List[ImportDeclaration] = []
    for index, line in enumerate(content.split("\n")):
        for matcher in scanner:
            declarations.extend(matcher(index + 1, line))
    return declarations


def is_local_import(import_path: str, policy: ResolutionPolicy = DEFAULT_POLICY) -> bool:
    """
    Decide whether an import specifier refers to a project file.

    Args:
        import_path: Raw specifier, e.g. './utils/helper' or 'react'.
        policy: Extension tables to consult.

    Returns:
        bool: False for URLs and bare package names, True otherwise.
    """
    if not import_path:
        return False

    if import_path.startswith(("http://", "https://")):
        return False

    if import_path.startswith(("./", "../", "/")):
        return True

    if any(ext in import_path for ext in policy.local_extensions):
        return True

    return "/" in import_path


def strip_source_extension(import_path: str, policy: ResolutionPolicy = DEFAULT_POLICY) -> str:
    """Remove a trailing JS/TS/Python extension from a local import path."""
    for ext in policy.strippable_extensions:
        if import_path.endswith(ext):
            return import_path[: -len(ext)]
    return import_path


def extract_local_import_paths(
        content: str,
        file_path: str,
        policy: ResolutionPolicy = DEFAULT_POLICY,
) -> List[str]:
    """
    Extract the normalized local import paths of a file.

    Args:
        content: Full text of the file.
        file_path: Path of the file.
        policy: Locality and extension tables.

    Returns:
        List[str]: Local import paths in source order, duplicates kept.
    """
    return [
        strip_source_extension(decl.raw_path, policy)
        for decl in extract_imports(content, file_path)
        if is_local_import(decl.raw_path, policy)
    ]


def get_all_local_imports(
        files: Iterable[FileRecord],
        policy: ResolutionPolicy = DEFAULT_POLICY,
) -> List[str]:
    """
    Collect the unique local import paths across several files.

    Args:
        files: Records to scan.
        policy: Locality and extension tables.

    Returns:
        List[str]: Unique import paths in first-seen order.
    """
    seen: Dict[str, None] = {}
    for record in files:
        for import_path in extract_local_import_paths(record.content, record.path, policy):
            seen.setdefault(import_path, None)
    return list(seen)
