from __future__ import annotations

"""
Tree Flattening and Statistics.

One physical file can appear at several tree positions, so every consumer
that flattens the tree deduplicates by absolute path (external markers
without a path are keyed by their specifier).
"""

import os
from typing import Dict, Iterable, Iterator, List, Optional, Set

from deptree4ai.domain.graph_models import FileNode, GraphStats


def node_key(node: FileNode) -> str:
    """Identity of a node for secondary deduplication."""
    if node.absolute_path:
        return node.absolute_path
    return f"external:{node.path}"


def iter_unique_nodes(tree: Optional[FileNode]) -> Iterator[FileNode]:
    """
    Walk the tree pre-order, yielding each identity once.

    Children of an already yielded identity are not walked again.

    Args:
        tree: Root node.

    Yields:
        FileNode: First occurrence of every file.
    """
    if tree is None:
        return
    seen: Set[str] = set()
    stack: List[FileNode] = [tree]
    while stack:
        node = stack.pop()
        key = node_key(node)
        if key in seen:
            continue
        seen.add(key)
        yield node
        stack.extend(reversed(node.dependencies))


def collect_unique_nodes(tree: Optional[FileNode], include_external: bool = True) -> List[FileNode]:
    """
    Flatten the tree into unique nodes in pre-order.

    Args:
        tree: Root node.
        include_external: Keep external leaves in the result.

    Returns:
        List[FileNode]: Deduplicated nodes.
    """
    return [
        node for node in iter_unique_nodes(tree)
        if include_external or not node.external
    ]


def compute_stats(
        tree: Optional[FileNode],
        circular_deps: Iterable[str] = (),
        unresolved: Iterable[str] = (),
) -> GraphStats:
    """
    Aggregate summary metrics of a built tree.

    Depth is the tree level of the first occurrence of each file.

    Args:
        tree: Root node.
        circular_deps: Circular edges recorded by the builder.
        unresolved: Unresolved specifiers recorded by the builder.

    Returns:
        GraphStats: Immutable statistics snapshot.
    """
    total_files = 0
    total_size = 0
    max_depth = 0
    external_deps = 0
    file_types: Dict[str, int] = {}

    for node in iter_unique_nodes(tree):
        total_files += 1
        total_size += node.size or 0
        max_depth = max(max_depth, node.depth)
        if node.external:
            external_deps += 1
        if node.path:
            _, ext = os.path.splitext(node.path)
            file_types[ext] = file_types.get(ext, 0) + 1

    return GraphStats(
        total_files=total_files,
        total_size=total_size,
        max_depth=max_depth,
        external_deps=external_deps,
        file_types=file_types,
        circular_deps=list(circular_deps),
        unresolved=list(unresolved),
    )
