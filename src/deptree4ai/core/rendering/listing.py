from __future__ import annotations

"""
Flat Renderers.

Numbered file listing and the JSON serialization of the tree.
"""

import json
from typing import List, Optional

from deptree4ai.core.analysis.stats import collect_unique_nodes
from deptree4ai.domain.graph_models import FileNode


def render_list(tree: Optional[FileNode], show_external: bool = True) -> List[str]:
    """
    Render every unique file of the tree as a sorted, numbered list.

    Args:
        tree: Root node.
        show_external: Keep external leaves in the listing.

    Returns:
        List[str]: Header followed by one line per file.
    """
    paths = sorted({node.path for node in collect_unique_nodes(tree, include_external=show_external)})
    lines = [f"All Dependencies ({len(paths)} files):", ""]
    for index, path in enumerate(paths, start=1):
        lines.append(f"{index:3d}. {path}")
    return lines


def render_json(tree: Optional[FileNode]) -> List[str]:
    """Serialize the full tree (content included) as indented JSON."""
    payload = tree.to_dict() if tree is not None else None
    return json.dumps(payload, indent=2, ensure_ascii=False).splitlines()
