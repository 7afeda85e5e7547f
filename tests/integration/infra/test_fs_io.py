from __future__ import annotations

"""
Integration tests for FileSystem Infrastructure.

Validates path normalization, data directory resolution, display paths and
the text read/write helpers.
"""

import os
from pathlib import Path
from unittest.mock import patch

from deptree4ai.infra.fs import (
    get_user_data_dir,
    normalize_path,
    read_text_file,
    relative_display_path,
    write_text_output,
)

# -----------------------------------------------------------------------------
# PATH RESOLUTION TESTS
# -----------------------------------------------------------------------------

def test_get_user_data_dir_windows() -> None:
    """TC-01: Verify resolution of %LOCALAPPDATA% on Windows systems."""
    mock_appdata = "C:/Users/Test/AppData/Local"
    with patch("os.name", "nt"):
        with patch.dict(os.environ, {"LOCALAPPDATA": mock_appdata}):
            with patch("os.makedirs"):
                path = get_user_data_dir()
                assert "DepTree4AI" in path
                assert path.lower().startswith(os.path.abspath(mock_appdata).lower())


def test_get_user_data_dir_unix() -> None:
    """TC-01: Verify resolution of ~/.deptree4ai on Unix-like systems."""
    mock_home = "/home/testuser"
    with patch("os.name", "posix"):
        with patch("os.path.expanduser", return_value=mock_home):
            with patch("os.makedirs"):
                path = get_user_data_dir()
                assert path.replace("\\", "/").endswith("/home/testuser/.deptree4ai")


def test_normalize_path_expansion_and_fallback(tmp_path: Path) -> None:
    """TC-02: Verify expansion of environment variables and the empty fallback."""
    with patch.dict(os.environ, {"TEST_VAR": "my_folder"}):
        path = normalize_path("$TEST_VAR/sub", fallback=".")
        assert path.lower().endswith(os.path.join("my_folder", "sub").lower())

    assert normalize_path("   ", fallback=str(tmp_path)) == str(tmp_path)


def test_relative_display_path_uses_forward_slashes(tmp_path: Path) -> None:
    target = tmp_path / "src" / "lib" / "a.ts"
    assert relative_display_path(str(target), str(tmp_path)) == "src/lib/a.ts"

# -----------------------------------------------------------------------------
# FILE I/O TESTS
# -----------------------------------------------------------------------------

def test_read_text_file_replaces_undecodable_bytes(tmp_path: Path) -> None:
    f = tmp_path / "latin.js"
    f.write_bytes(b"const s = '\xff';")

    content = read_text_file(str(f))
    assert content.startswith("const s = '")
    assert "\ufffd" in content


def test_write_text_output_creates_parents(tmp_path: Path) -> None:
    out = tmp_path / "a" / "b" / "report.txt"

    ok, err = write_text_output(str(out), "hello")

    assert ok is True
    assert err is None
    assert out.read_text(encoding="utf-8") == "hello"


def test_write_text_output_reports_failure(tmp_path: Path) -> None:
    blocker = tmp_path / "file.txt"
    blocker.write_text("x", encoding="utf-8")

    ok, err = write_text_output(str(blocker / "child.txt"), "data")

    assert ok is False
    assert err
