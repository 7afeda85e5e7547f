from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Verifies the application's external behavior by invoking the entry point
script via subprocess. These tests validate argument parsing, exit codes,
stream output (stdout/stderr) and the optional report file.
"""

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import List

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "deptree4ai" / "main.py"


def run_cli(args: List[str], home: Path, cwd: Path | None = None) -> subprocess.CompletedProcess[str]:
    """
    Helper to execute the CLI in a separate process.

    Injects the 'src' directory into PYTHONPATH and points HOME at a
    temporary folder so the persisted session never touches real user data.

    Args:
        args: List of command line arguments (excluding 'python' and script path).
        home: Directory used as the user's home.
        cwd: Optional working directory for the subprocess.

    Returns:
        subprocess.CompletedProcess: The result object containing returncode, stdout, and stderr.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")
    env["HOME"] = str(home)
    env["USERPROFILE"] = str(home)
    env["LOCALAPPDATA"] = str(home)

    cmd = [sys.executable, str(ENTRY_POINT)] + args

    return subprocess.run(
        cmd,
        cwd=cwd,
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8"
    )


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    return home


@pytest.fixture
def sample_project(make_project) -> Path:
    """
    Structure:
    /proj
      package.json
      src/index.ts     -> ./app, lodash
      src/app.ts       -> ./index (cycle)
    """
    return make_project({
        "src/index.ts": "import { run } from './app';\nimport _ from 'lodash';\nrun();",
        "src/app.ts": "import './index';\nexport function run() {}",
    })


def test_cli_tree_output(sample_project: Path, home_dir: Path) -> None:
    """TC-01: Standard execution prints the tree and statistics (Exit Code 0)."""
    result = run_cli([str(sample_project / "src" / "index.ts"), "--use-defaults"], home_dir)

    assert result.returncode == 0, f"CLI failed with stderr: {result.stderr}"
    assert "└── src/index.ts" in result.stdout
    assert "    └── src/app.ts" in result.stdout
    assert "src/app.ts -> src/index.ts" in result.stdout
    assert "  Total files: 2" in result.stdout


def test_cli_json_output(sample_project: Path, home_dir: Path) -> None:
    """TC-02: JSON mode emits a parseable tree only."""
    args = [str(sample_project / "src" / "index.ts"), "--use-defaults", "--format", "json", "--include-external"]
    result = run_cli(args, home_dir)

    assert result.returncode == 0, result.stderr
    data = json.loads(result.stdout)
    assert data["path"] == "src/index.ts"
    assert [d["path"] for d in data["dependencies"]] == ["src/app.ts", "lodash"]
    assert data["dependencies"][1]["external"] is True


def test_cli_writes_output_file(sample_project: Path, home_dir: Path, tmp_path: Path) -> None:
    """TC-03: The content report is written to the requested file."""
    out_file = tmp_path / "context.md"
    args = [
        str(sample_project / "src" / "index.ts"),
        "--use-defaults",
        "--format", "content",
        "-o", str(out_file),
    ]
    result = run_cli(args, home_dir)

    assert result.returncode == 0, result.stderr
    text = out_file.read_text(encoding="utf-8")
    assert text.startswith("Complete Dependency Context (2 files)")
    assert "export function run() {}" in text


def test_cli_handles_missing_target(tmp_path: Path, home_dir: Path) -> None:
    """TC-04: A missing target file yields exit code 2."""
    result = run_cli([str(tmp_path / "nope.ts"), "--use-defaults"], home_dir)

    assert result.returncode == 2
    assert "File not found" in result.stderr


def test_cli_dump_config(home_dir: Path) -> None:
    """TC-05: Command line flags are reflected in the effective configuration."""
    result = run_cli(["--use-defaults", "--dump-config", "--depth", "2", "--alias", "@=src"], home_dir)

    assert result.returncode == 0, result.stderr
    cfg = json.loads(result.stdout)
    assert cfg["max_depth"] == 2
    assert cfg["aliases"]["@"] == "src"


def test_cli_help_message(home_dir: Path) -> None:
    """TC-06: Verify help message is displayed (smoke test for argparse)."""
    result = run_cli(["--help"], home_dir)

    assert result.returncode == 0
    assert "usage: deptree4ai" in result.stdout
    assert "--include-external" in result.stdout
