from __future__ import annotations

"""
Unit tests for the Dependency Graph Builder.

Verifies:
1. Child ordering and expansion.
2. Cycle termination and edge recording.
3. Depth limiting and the visited-depth rules.
4. Content gating (binary, too large).
5. External leaves and unresolved bookkeeping.
6. Context reuse across builds.
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from deptree4ai.core.analysis.graph_builder import GraphBuilder, TraversalContext, is_binary_file
from deptree4ai.core.analysis.path_resolver import PathResolver
from deptree4ai.domain.errors import RootFileNotFoundError
from deptree4ai.infra.fs import read_text_file


def _builder(root: Path, **kwargs) -> GraphBuilder:
    include_external = kwargs.get("include_external", False)
    resolver = PathResolver(str(root), include_external=include_external)
    return GraphBuilder(resolver, **kwargs)


def test_children_follow_import_order(make_project) -> None:
    root = make_project({
        "src/main.ts": "import c from './c';\nimport a from './a';\nimport b from './b';",
        "src/a.ts": "",
        "src/b.ts": "",
        "src/c.ts": "",
    })
    tree = _builder(root).build(str(root / "src" / "main.ts"))

    assert tree.path == "src/main.ts"
    assert tree.depth == 0
    assert tree.import_count == 3
    assert [child.path for child in tree.dependencies] == ["src/c.ts", "src/a.ts", "src/b.ts"]
    assert all(child.depth == 1 for child in tree.dependencies)
    assert all(child.exists and not child.circular for child in tree.dependencies)


def test_mutual_imports_produce_one_circular_edge(make_project) -> None:
    root = make_project({
        "src/a.ts": "import b from './b';",
        "src/b.ts": "import a from './a';",
    })
    builder = _builder(root)
    tree = builder.build(str(root / "src" / "a.ts"))

    b_node = tree.dependencies[0]
    back_edge = b_node.dependencies[0]

    assert b_node.path == "src/b.ts"
    assert back_edge.path == "src/a.ts"
    assert back_edge.circular is True
    assert back_edge.dependencies == []
    assert builder.circular_deps == ["src/b.ts -> src/a.ts"]


def test_self_import_is_circular(make_project) -> None:
    root = make_project({"src/self.ts": "import me from './self';"})
    builder = _builder(root)
    tree = builder.build(str(root / "src" / "self.ts"))

    assert tree.dependencies[0].circular is True
    assert builder.circular_deps == ["src/self.ts -> src/self.ts"]


def test_depth_limit_stops_expansion(make_project) -> None:
    root = make_project({
        "src/a.ts": "import b from './b';",
        "src/b.ts": "import c from './c';",
        "src/c.ts": "",
    })

    tree = _builder(root, max_depth=1).build(str(root / "src" / "a.ts"))
    b_node = tree.dependencies[0]
    assert b_node.path == "src/b.ts"
    assert b_node.import_count == 1
    assert b_node.dependencies == []


def test_depth_zero_keeps_only_root(make_project) -> None:
    root = make_project({
        "src/a.ts": "import b from './b';",
        "src/b.ts": "",
    })
    builder = _builder(root, max_depth=0)
    tree = builder.build(str(root / "src" / "a.ts"))

    assert tree.dependencies == []
    assert builder.unresolved == []


def test_position_visited_deeper_is_dropped(make_project) -> None:
    """A file first expanded deeper than the current position is omitted there."""
    root = make_project({
        "src/main.ts": "import x from './x';\nimport y from './y';",
        "src/x.ts": "import y from './y';",
        "src/y.ts": "",
    })
    builder = _builder(root)
    tree = builder.build(str(root / "src" / "main.ts"))

    assert [child.path for child in tree.dependencies] == ["src/x.ts"]
    assert tree.dependencies[0].dependencies[0].path == "src/y.ts"
    assert builder.circular_deps == []


def test_shared_dependency_at_same_depth_is_circular_leaf(make_project) -> None:
    root = make_project({
        "src/main.ts": "import a from './a';\nimport b from './b';",
        "src/a.ts": "import s from './shared';",
        "src/b.ts": "import s from './shared';",
        "src/shared.ts": "export const s = 1;",
    })
    builder = _builder(root)
    tree = builder.build(str(root / "src" / "main.ts"))

    first, second = tree.dependencies
    assert first.dependencies[0].circular is False
    assert second.dependencies[0].circular is True
    assert builder.circular_deps == ["src/b.ts -> src/shared.ts"]


def test_missing_resolved_file_becomes_error_node(make_project) -> None:
    root = make_project({"src/main.ts": "import gone from './gone';"})
    builder = _builder(root)
    ghost = str(root / "src" / "gone.ts")

    with patch.object(builder.resolver, "resolve", return_value=ghost):
        tree = builder.build(str(root / "src" / "main.ts"))

    child = tree.dependencies[0]
    assert child.exists is False
    assert child.error == "File not found"
    assert child.original_import == "./gone"


def test_root_not_found_raises(tmp_path: Path) -> None:
    builder = _builder(tmp_path)
    with pytest.raises(RootFileNotFoundError) as exc:
        builder.build(str(tmp_path / "nope.ts"))
    assert "Root file not found" in str(exc.value)


def test_binary_file_keeps_size_without_content(make_project) -> None:
    root = make_project({"src/main.ts": "import logo from './logo.png';"})
    (root / "src" / "logo.png").write_bytes(b"\x89PNG" + b"\x00" * 20)

    tree = _builder(root).build(str(root / "src" / "main.ts"))
    logo = tree.dependencies[0]

    assert logo.path == "src/logo.png"
    assert logo.skip_reason == "Binary file"
    assert logo.content == ""
    assert logo.size == 24
    assert logo.is_text is False


def test_oversized_file_is_not_read_nor_scanned(make_project) -> None:
    big = "import hidden from './hidden';\n" + "x" * 200
    root = make_project({
        "src/main.ts": "import big from './big';",
        "src/big.ts": big,
        "src/hidden.ts": "",
    })

    tree = _builder(root, max_content_length=10).build(str(root / "src" / "main.ts"))
    big_node = tree.dependencies[0]

    assert big_node.skip_reason.startswith("File too large")
    assert big_node.content == ""
    assert big_node.dependencies == []


def test_small_file_content_is_kept(make_project) -> None:
    root = make_project({"src/main.ts": "export const x = 1;\n"})
    tree = _builder(root).build(str(root / "src" / "main.ts"))

    assert tree.is_text is True
    assert tree.content == "export const x = 1;\n"
    assert tree.skip_reason is None


def test_unresolved_specifiers_are_recorded_once(make_project) -> None:
    root = make_project({
        "src/main.ts": "import a from './missing';\nimport l from 'lodash';\nimport o from './other';",
        "src/other.ts": "import a from './missing';",
    })
    builder = _builder(root)
    builder.build(str(root / "src" / "main.ts"))

    assert builder.unresolved == ["./missing", "lodash"]


def test_external_leaves_with_include_external(make_project) -> None:
    root = make_project({
        "src/main.ts": "\n".join([
            "import _ from 'lodash';",
            "import { page } from '$app/stores';",
            "import local from './local';",
        ]),
        "src/local.ts": "",
        "node_modules/lodash/index.js": "module.exports = {};",
    })
    builder = _builder(root, include_external=True)
    tree = builder.build(str(root / "src" / "main.ts"))

    lodash, stores, local = tree.dependencies
    assert lodash.external is True
    assert lodash.path == "lodash"
    assert lodash.exists is True
    assert lodash.absolute_path == str(root / "node_modules" / "lodash" / "index.js")
    assert lodash.dependencies == []

    assert stores.external is True
    assert stores.path == "$app/stores"
    assert stores.absolute_path is None
    assert stores.exists is False

    assert local.external is False
    assert builder.unresolved == []


def test_is_external_specifier(make_project) -> None:
    root = make_project({})
    builder = _builder(root)

    assert builder.is_external_specifier("react") is True
    assert builder.is_external_specifier("$app/navigation") is True
    assert builder.is_external_specifier("$lib/util") is False
    assert builder.is_external_specifier("./x") is False
    assert builder.is_external_specifier("components/Button") is False


def test_rebuild_without_reset_reports_root_circular(make_project) -> None:
    root = make_project({"src/main.ts": ""})
    builder = _builder(root)
    target = str(root / "src" / "main.ts")

    first = builder.build(target)
    second = builder.build(target)
    assert first.circular is False
    assert second.circular is True
    assert builder.circular_deps == []

    builder.reset()
    assert builder.build(target).circular is False


def test_all_files_registry(make_project) -> None:
    root = make_project({
        "src/a.ts": "import b from './b';",
        "src/b.ts": "import a from './a';",
    })
    builder = _builder(root)
    builder.build(str(root / "src" / "a.ts"))

    assert list(builder.all_files) == [str(root / "src" / "b.ts"), str(root / "src" / "a.ts")]


def test_from_config(make_project, mock_config_dict) -> None:
    root = make_project({})
    mock_config_dict["max_depth"] = 3
    mock_config_dict["include_external"] = True

    builder = GraphBuilder.from_config(mock_config_dict, str(root))

    assert builder.max_depth == 3
    assert builder.include_external is True
    assert builder.resolver.extensions == [".ts", ".js", ".svelte", ".json"]
    assert builder.resolver.include_external is True


def test_traversal_context_keeps_first_depth() -> None:
    ctx = TraversalContext()
    ctx.mark_visited("/a", 2)
    ctx.mark_visited("/a", 1)
    ctx.add_circular("x -> y")
    ctx.add_circular("x -> y")

    assert ctx.visited == {"/a": 2}
    assert list(ctx.circular_deps) == ["x -> y"]


@pytest.mark.parametrize("name,expected", [
    ("logo.PNG", True),
    ("font.woff2", True),
    ("main.ts", False),
])
def test_is_binary_file(name: str, expected: bool) -> None:
    assert is_binary_file(name) is expected


def test_unreadable_file_is_annotated_and_siblings_continue(make_project) -> None:
    root = make_project({
        "src/main.ts": "import a from './locked';\nimport b from './ok';",
        "src/locked.ts": "import c from './c';",
        "src/ok.ts": "",
        "src/c.ts": "",
    })
    locked_path = str(root / "src" / "locked.ts")
    real_read = read_text_file

    def fake_read(path: str) -> str:
        if path == locked_path:
            raise PermissionError("denied")
        return real_read(path)

    with patch("deptree4ai.core.analysis.graph_builder.read_text_file", side_effect=fake_read):
        tree = _builder(root).build(str(root / "src" / "main.ts"))

    locked, ok = tree.dependencies
    assert locked.exists is True
    assert locked.skip_reason == "Read error: denied"
    assert locked.dependencies == []
    assert ok.path == "src/ok.ts"


def test_long_import_chain_is_fully_expanded(make_project) -> None:
    length = 2500
    files = {f"src/m{i}.ts": f"import next from './m{i + 1}';" for i in range(length - 1)}
    files[f"src/m{length - 1}.ts"] = "export const end = true;"
    root = make_project(files)

    builder = _builder(root)
    tree = builder.build(str(root / "src" / "m0.ts"))

    node = tree
    for i in range(1, length):
        assert len(node.dependencies) == 1
        node = node.dependencies[0]
        assert node.path == f"src/m{i}.ts"
        assert node.depth == i
    assert node.dependencies == []
    assert len(builder.all_files) == length
    assert builder.circular_deps == []


def test_nested_siblings_keep_preorder(make_project) -> None:
    root = make_project({
        "src/main.ts": "import a from './a';\nimport d from './d';",
        "src/a.ts": "import b from './b';\nimport c from './c';",
        "src/b.ts": "",
        "src/c.ts": "",
        "src/d.ts": "import c from './c';",
    })
    builder = _builder(root)
    tree = builder.build(str(root / "src" / "main.ts"))

    a, d = tree.dependencies
    assert [child.path for child in a.dependencies] == ["src/b.ts", "src/c.ts"]
    assert d.dependencies[0].path == "src/c.ts"
    assert d.dependencies[0].circular is True
    assert builder.circular_deps == ["src/d.ts -> src/c.ts"]
    assert list(builder.all_files) == [
        str(root / "src" / "b.ts"),
        str(root / "src" / "c.ts"),
        str(root / "src" / "a.ts"),
        str(root / "src" / "d.ts"),
        str(root / "src" / "main.ts"),
    ]
