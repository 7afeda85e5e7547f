from __future__ import annotations

"""
Human-Readable Formatting Helpers.

Shared by the content gating messages and every renderer.
"""

import os

from deptree4ai.domain.constants import LANGUAGE_MAP

_SIZE_UNITS = ("B", "KB", "MB", "GB")


def format_bytes(num_bytes: int) -> str:
    """
    Format a byte count with a 1024 base and one trimmed decimal.

    Examples: 0 -> '0 B', 1536 -> '1.5 KB', 2048 -> '2 KB'.

    Args:
        num_bytes: Size in bytes.

    Returns:
        str: Formatted size.
    """
    if num_bytes <= 0:
        return "0 B"
    index = 0
    value = float(num_bytes)
    while value >= 1024 and index < len(_SIZE_UNITS) - 1:
        value /= 1024
        index += 1
    text = f"{value:.1f}".rstrip("0").rstrip(".")
    return f"{text} {_SIZE_UNITS[index]}"


def language_for_path(file_path: str) -> str:
    """Map a file extension to the fence language tag of a code block."""
    _, ext = os.path.splitext(file_path)
    return LANGUAGE_MAP.get(ext.lower(), "")
