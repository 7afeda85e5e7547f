from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform path manipulation, text reading and output
persistence utilities. Acts as an abstraction over the 'os' module to ensure
uniform behavior across Windows and Unix-like systems.
"""

import os
from typing import Optional, Tuple

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "DepTree4AI"
UNIX_APP_DIR_NAME = ".deptree4ai"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Windows: %LOCALAPPDATA%/DepTree4AI
    - Linux/Mac: ~/.deptree4ai

    Returns:
        str: Absolute path to the application data directory.
    """
    path = ""

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


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def to_posix(path: str) -> str:
    """Render a filesystem path with forward slashes for pattern matching."""
    return path.replace(os.sep, "/") if os.sep != "/" else path


def relative_display_path(path: str, root_dir: str) -> str:
    """
    Compute the root-relative display path of a file.

    Falls back to the absolute path when no relative form exists
    (e.g. different drives on Windows).
    """
    try:
        return to_posix(os.path.relpath(path, root_dir))
    except ValueError:
        return to_posix(path)

# -----------------------------------------------------------------------------
# FILE I/O API
# -----------------------------------------------------------------------------

def read_text_file(file_path: str) -> str:
    """
    Read the whole text content of a file as UTF-8.

    Undecodable byte sequences are replaced instead of aborting the read.
    OSError propagates to the caller, which records the failure.

    Args:
        file_path: Absolute path to the target file.

    Returns:
        str: File content.
    """
    with open(file_path, "r", encoding="utf-8", errors="replace") as f:
        return f.read()


def write_text_output(path: str, text: str) -> Tuple[bool, Optional[str]]:
    """
    Persist rendered output, creating parent directories as needed.

    Args:
        path: Destination file path.
        text: Content to write.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    try:
        parent = os.path.dirname(os.path.abspath(path))
        os.makedirs(parent, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
        return True, None
    except OSError as e:
        return False, str(e)
