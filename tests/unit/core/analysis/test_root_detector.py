from __future__ import annotations

"""
Unit tests for Project Root Detection.
"""

import os
from pathlib import Path

from deptree4ai.core.analysis.root_detector import detect_project_root, infer_root_from_path


def test_marker_file_wins(tmp_path: Path) -> None:
    project = tmp_path / "web"
    target = project / "src" / "routes" / "page.ts"
    target.parent.mkdir(parents=True)
    target.write_text("", encoding="utf-8")
    (project / "svelte.config.js").write_text("", encoding="utf-8")

    assert detect_project_root(str(target)) == str(project)


def test_nearest_marker_is_used(tmp_path: Path) -> None:
    outer = tmp_path / "mono"
    inner = outer / "packages" / "ui"
    target = inner / "index.ts"
    target.parent.mkdir(parents=True)
    target.write_text("", encoding="utf-8")
    (outer / "package.json").write_text("{}", encoding="utf-8")
    (inner / "package.json").write_text("{}", encoding="utf-8")

    assert detect_project_root(str(target)) == str(inner)


def test_infer_from_src_folder() -> None:
    path = os.path.join(os.sep, "work", "proj", "src", "lib", "a.ts")
    assert infer_root_from_path(path) == os.path.join(os.sep, "work", "proj")


def test_infer_from_app_folder() -> None:
    path = os.path.join(os.sep, "work", "proj", "app", "main.ts")
    assert infer_root_from_path(path) == os.path.join(os.sep, "work", "proj", "app")


def test_infer_from_routes_folder() -> None:
    path = os.path.join(os.sep, "work", "site", "routes", "page.ts")
    assert infer_root_from_path(path) == os.path.join(os.sep, "work")


def test_infer_returns_none_without_convention() -> None:
    path = os.path.join(os.sep, "work", "misc", "a.ts")
    assert infer_root_from_path(path) is None
