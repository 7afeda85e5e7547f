from __future__ import annotations

"""
Project Root Detector.

One-shot heuristic that establishes the resolution base directory before
traversal: manifest markers first, then conventional folder names in the
file path, then the current working directory.
"""

import logging
import os
from typing import List, Optional

from deptree4ai.domain.constants import ROOT_MARKERS

logger = logging.getLogger(__name__)


def detect_project_root(start_file: str, cwd: Optional[str] = None) -> str:
    """
    Determine the project root directory for a start file.

    Args:
        start_file: File the analysis starts from.
        cwd: Fallback directory, defaults to the process working directory.

    Returns:
        str: Absolute path of the detected root.
    """
    resolved = os.path.abspath(start_file)

    current = os.path.dirname(resolved)
    while current != os.path.dirname(current):
        for marker in ROOT_MARKERS:
            if os.path.exists(os.path.join(current, marker)):
                logger.debug(f"Auto-detected root from {marker}: {current}")
                return current
        current = os.path.dirname(current)

    inferred = infer_root_from_path(resolved)
    if inferred:
        return inferred

    fallback = os.path.abspath(cwd or os.getcwd())
    logger.debug(f"No root indicator found, using working directory: {fallback}")
    return fallback


def infer_root_from_path(resolved_path: str) -> Optional[str]:
    """
    Infer the root from conventional folder names in an absolute path.

    'src' yields its parent, 'app' yields itself and a SvelteKit 'routes'
    folder yields the directory two levels above it.

    Args:
        resolved_path: Absolute file path.

    Returns:
        Optional[str]: Inferred root or None.
    """
    parts = _split_segments(resolved_path)

    src_index = _index_of(parts, "src")
    if src_index > 0:
        root = _join_segments(parts[:src_index])
        logger.debug(f"Inferred root from 'src' folder: {root}")
        return root

    app_index = _index_of(parts, "app")
    if app_index > 0:
        root = _join_segments(parts[:app_index + 1])
        logger.debug(f"Inferred root from 'app' folder: {root}")
        return root

    routes_index = _index_of(parts, "routes")
    if routes_index > 1:
        root = _join_segments(parts[:routes_index - 1])
        logger.debug(f"Inferred root from 'routes' folder: {root}")
        return root

    return None

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _split_segments(path: str) -> List[str]:
    """Split an absolute path into segments, the first being the drive/anchor."""
    drive, rest = os.path.splitdrive(path)
    segments = rest.split(os.sep)
    segments[0] = drive + segments[0]
    return segments


def _join_segments(segments: List[str]) -> str:
    joined = os.sep.join(segments)
    return joined or os.sep


def _index_of(parts: List[str], name: str) -> int:
    try:
        return parts.index(name)
    except ValueError:
        return -1
