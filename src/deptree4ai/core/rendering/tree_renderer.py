from __future__ import annotations

"""
Tree Renderer.

Converts a dependency tree into a visual ASCII hierarchy. Each file is
expanded once; later occurrences of the same absolute path are skipped
together with their subtrees, except circular leaves which are always shown.
"""

from typing import List, Optional, Set, Tuple

from deptree4ai.core.analysis.stats import node_key
from deptree4ai.domain.graph_models import FileNode
from deptree4ai.utils.formatting import format_bytes

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_tree(
        tree: Optional[FileNode],
        show_size: bool = False,
        show_external: bool = True,
) -> List[str]:
    """
    Render the dependency tree with box-drawing connectors.

    Args:
        tree: Root node.
        show_size: Append ' (size)' to every file with a known size.
        show_external: Include external leaves.

    Returns:
        List[str]: Visual lines of the tree.
    """
    lines: List[str] = []
    if tree is None:
        return lines

    printed: Set[str] = set()
    stack: List[Tuple[FileNode, str, bool]] = [(tree, "", True)]
    while stack:
        node, prefix, is_last = stack.pop()
        key = node_key(node)
        # A circular leaf has no subtree, so it is shown even on a repeated path
        if key in printed and not node.circular:
            continue
        printed.add(key)

        if node.external and not show_external:
            continue

        connector = "└── " if is_last else "├── "
        size_info = f" ({format_bytes(node.size)})" if show_size and node.size else ""
        lines.append(f"{prefix}{connector}{node.path}{size_info}{node_indicators(node)}")

        if node.circular or not node.dependencies:
            continue

        child_prefix = prefix + ("    " if is_last else "│   ")
        total = len(node.dependencies)
        for i in range(total - 1, -1, -1):
            stack.append((node.dependencies[i], child_prefix, i == total - 1))
    return lines


def node_indicators(node: FileNode) -> str:
    """Build the status suffix of a node ('[external]', '[circular]', '[error: ...]')."""
    indicators: List[str] = []
    if node.external:
        indicators.append("[external]")
    if node.circular:
        indicators.append("[circular]")
    if node.error:
        indicators.append(f"[error: {node.error}]")
    return " " + " ".join(indicators) if indicators else ""

