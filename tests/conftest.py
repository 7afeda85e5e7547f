from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for configuration dictionaries and on-disk sample projects.
"""

import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def mock_config_dict() -> Dict[str, Any]:
    """
    Return a valid, complete configuration dictionary for testing.

    Reflects the structure defined in 'deptree4ai.domain.config'.

    Returns:
        Dict[str, Any]: A sample configuration dictionary.
    """
    return {
        # Traversal
        "target_file": "",
        "root_dir": "",
        "max_depth": None,
        "include_external": False,
        "max_content_length": 100000,

        # Resolution surface
        "extensions": [".ts", ".js", ".svelte", ".json"],
        "exclude_patterns": [r"node_modules", r"\.spec\.ts$"],
        "aliases": {"$lib": "src/lib", "$app": "@sveltejs/kit"},

        # Output
        "output_format": "tree",
        "output_file": "",
        "show_size": False,
        "show_external": True,
        "count_tokens": False,
        "target_model": "gpt-4o",

        # Diagnostics
        "debug": False,
    }


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[[Dict[str, str]], Path]:
    """
    Factory that materializes a small JS/TS project on disk.

    The project root carries a package.json so root detection stops there.
    Keys are POSIX relative paths, values are file contents.

    Returns:
        Callable[[Dict[str, str]], Path]: Builder returning the project root.
    """
    def _make(files: Dict[str, str]) -> Path:
        root = tmp_path / "proj"
        root.mkdir(exist_ok=True)
        (root / "package.json").write_text('{"name": "sample"}', encoding="utf-8")
        for rel_path, content in files.items():
            target = root.joinpath(*rel_path.split("/"))
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return root

    return _make
