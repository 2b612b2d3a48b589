from __future__ import annotations

"""
Resolution Policy.

Immutable tables that drive import locality checks and file-extension
probing. The default policy is a process-wide constant; callers needing a
restricted extension set build their own instance and pass it explicitly.
"""

from dataclasses import dataclass
from typing import Tuple

# -----------------------------------------------------------------------------
# DEFAULT TABLES
# -----------------------------------------------------------------------------

# Substrings that mark an import specifier as a project file reference
LOCAL_SOURCE_EXTENSIONS: Tuple[str, ...] = (
    ".js", ".ts", ".jsx", ".tsx", ".py", ".css", ".scss", ".sass",
)

# Trailing extensions removed from local import paths (CSS family is kept)
STRIPPABLE_EXTENSIONS: Tuple[str, ...] = (".js", ".ts", ".jsx", ".tsx", ".py")

# An import ending in one of these is used exactly as written
EXPLICIT_EXTENSIONS: Tuple[str, ...] = (
    ".js", ".jsx", ".ts", ".tsx", ".mjs", ".cjs", ".py", ".css", ".scss", ".sass",
)

# Ordered probe list for extensionless imports; every entry is tried
PROBE_EXTENSIONS: Tuple[str, ...] = (
    ".js", ".ts", ".jsx", ".tsx", ".mjs", ".cjs", ".py", ".css", ".scss", ".sass",
)

INDEX_FILES: Tuple[str, ...] = ("index.js", "index.ts", "index.jsx", "index.tsx")


@dataclass(frozen=True)
class ResolutionPolicy:
    """
    Configuration value consumed by the extractor and the resolver.

    Attributes:
        local_extensions: Extension substrings that flag an import as local.
        strippable_extensions: Trailing extensions removed after filtering.
        explicit_extensions: Extensions that disable probing.
        probe_extensions: Ordered extensions appended to extensionless imports.
        index_files: Directory entry-point names accepted by the matcher.
    """
    local_extensions: Tuple[str, ...] = LOCAL_SOURCE_EXTENSIONS
    strippable_extensions: Tuple[str, ...] = STRIPPABLE_EXTENSIONS
    explicit_extensions: Tuple[str, ...] = EXPLICIT_EXTENSIONS
    probe_extensions: Tuple[str, ...] = PROBE_EXTENSIONS
    index_files: Tuple[str, ...] = INDEX_FILES


DEFAULT_POLICY = ResolutionPolicy()
