from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures describing small in-memory project snapshots.
"""

import os
import sys
from typing import Any, Callable, Dict, List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from pastedeps.domain.models import FileRecord  # noqa: E402

PROJECT_ROOT = "C:/project"


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def make_record() -> Callable[..., FileRecord]:
    """
    Build FileRecord instances from an absolute path and content.

    The base name is derived from the path, mirroring what the scanner does.
    """

    def _make(path: str, content: str = "", **flags: Any) -> FileRecord:
        return FileRecord(path=path, name=path.rsplit("/", 1)[-1], content=content, **flags)

    return _make


@pytest.fixture
def project_root() -> str:
    """Windows-style project root used by the in-memory snapshots."""
    return PROJECT_ROOT


@pytest.fixture
def react_project(make_record: Callable[..., FileRecord]) -> Dict[str, FileRecord]:
    """
    Small JS/TS project snapshot.

    Structure:
    C:/project/src
      components/App.ts        -> ./utils/helper, ../shared/constants, react
      components/utils/helper.ts
      shared/constants.ts      -> ./config
      shared/config.js
      styles/main.css          -> ./theme.css
      styles/theme.css
    """
    files: List[FileRecord] = [
        make_record(
            f"{PROJECT_ROOT}/src/components/App.ts",
            "import React from 'react';\n"
            "import { helper } from './utils/helper';\n"
            "import { API_URL } from '../shared/constants';\n",
        ),
        make_record(f"{PROJECT_ROOT}/src/components/utils/helper.ts", "export const helper = 1;\n"),
        make_record(
            f"{PROJECT_ROOT}/src/shared/constants.ts",
            "import config from './config';\nexport const API_URL = config.url;\n",
        ),
        make_record(f"{PROJECT_ROOT}/src/shared/config.js", "module.exports = { url: '' };\n"),
        make_record(f"{PROJECT_ROOT}/src/styles/main.css", "@import './theme.css';\n"),
        make_record(f"{PROJECT_ROOT}/src/styles/theme.css", "body { color: red; }\n"),
    ]
    return {f.name: f for f in files}


@pytest.fixture
def mock_config_dict() -> Dict[str, Any]:
    """
    Return a valid, complete session configuration for testing.

    Reflects the structure defined in 'pastedeps.domain.config'.
    """
    return {
        "project_root": "/tmp/test_project",

        # Dependency detection
        "auto_include_dependencies": True,

        # Output format
        "include_file_tree": True,
        "include_binary_paths": False,
        "target_model": "gpt-4o-mini",

        # Scanning
        "exclude_patterns": [r"^dist$"],
        "respect_gitignore": False,
        "max_file_size": 1024,
    }
