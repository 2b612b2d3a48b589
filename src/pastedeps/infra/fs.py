from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Resolves per-user storage locations and performs the low-level reads the
project scanner relies on (size lookup, binary sniffing, text decoding).
"""

import os
from typing import Optional, Tuple

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "PasteDeps"
UNIX_APP_DIR_NAME = ".pastedeps"

# Bytes inspected when sniffing for binary content
BINARY_SNIFF_BYTES = 8192

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Windows: %LOCALAPPDATA%/PasteDeps
    - Linux/Mac: ~/.pastedeps

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass

    return os.path.abspath(path)


def normalize_dir(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip() or fallback
    return os.path.abspath(os.path.expandvars(os.path.expanduser(p)))

# -----------------------------------------------------------------------------
# FILE READING API
# -----------------------------------------------------------------------------

def is_binary_file(file_path: str) -> bool:
    """
    Sniff the head of a file for NUL bytes.

    Unreadable files are reported as binary so they are never decoded.
    """
    try:
        with open(file_path, "rb") as f:
            chunk = f.read(BINARY_SNIFF_BYTES)
        return b"\0" in chunk
    except OSError:
        return True


def read_text_file(file_path: str) -> Tuple[Optional[str], Optional[str]]:
    """
    Read a file as UTF-8 text.

    Args:
        file_path: Absolute path of the file.

    Returns:
        Tuple[Optional[str], Optional[str]]: (Content, Error message if applicable).
    """
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            return f.read(), None
    except UnicodeDecodeError:
        return None, "not valid UTF-8"
    except OSError as e:
        return None, str(e)
