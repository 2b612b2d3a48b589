from __future__ import annotations

"""
Domain Constants.

Application-wide defaults shared by the configuration layer, the scanner
and the tokenizer.
"""

from typing import List

CURRENT_CONFIG_VERSION = "1.0.0"

DEFAULT_MODEL = "gpt-4o"

DEFAULT_MAX_FILE_SIZE = 5 * 1024 * 1024  # 5MB

# Regexes flagging files as excluded by default (they stay in the snapshot)
DEFAULT_EXCLUDE_PATTERNS: List[str] = [
    r"^(package-lock\.json|yarn\.lock|pnpm-lock\.yaml|poetry\.lock)$",
    r"^(dist|build|coverage|out)$",
    r".*\.min\.(js|css)$",
    r".*\.map$",
    r"^\.DS_Store$",
]
