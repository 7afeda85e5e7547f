from __future__ import annotations

"""
Content Context Renderer.

Assembles the source of every unique file in the tree into one document
that can be pasted into an AI prompt. Files are ordered by depth, then by
display path, so the entry point comes first.
"""

from typing import List, Optional

from deptree4ai.core.analysis.stats import collect_unique_nodes
from deptree4ai.domain.constants import DEFAULT_MAX_CONTENT_LENGTH
from deptree4ai.domain.graph_models import FileNode
from deptree4ai.utils.formatting import format_bytes, language_for_path

SEPARATOR = "=" * 80

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def select_content_nodes(tree: Optional[FileNode], show_external: bool = True) -> List[FileNode]:
    """
    Pick the nodes that take part in the content context.

    Args:
        tree: Root node.
        show_external: Keep external leaves.

    Returns:
        List[FileNode]: Existing, error-free unique nodes sorted by (depth, path).
    """
    nodes = [
        node for node in collect_unique_nodes(tree, include_external=show_external)
        if node.exists and not node.error
    ]
    return sorted(nodes, key=lambda n: (n.depth, n.path))


def render_content(
        tree: Optional[FileNode],
        max_content_length: int = DEFAULT_MAX_CONTENT_LENGTH,
        show_external: bool = True,
) -> List[str]:
    """
    Render the complete dependency context.

    Args:
        tree: Root node.
        max_content_length: Characters printed per file before truncation.
        show_external: Keep external leaves.

    Returns:
        List[str]: Document lines.
    """
    nodes = select_content_nodes(tree, show_external)

    lines: List[str] = [
        f"Complete Dependency Context ({len(nodes)} files)",
        SEPARATOR,
        "",
    ]
    for node in nodes:
        lines.extend(render_file_block(node, max_content_length))
        lines.append("")
    return lines


def render_file_block(node: FileNode, max_content_length: int) -> List[str]:
    """Render one file as a labelled fenced code block."""
    lines = [f"{node.path}:", f"```{language_for_path(node.path)}"]

    if node.skip_reason:
        lines.append(f"// Skipped: {node.skip_reason}")
        lines.append(f"// File size: {format_bytes(node.size)}")
        lines.append("// Use --max-content to raise the limit")
    elif not node.content:
        lines.append("// No content available")
    elif len(node.content) > max_content_length:
        lines.extend(node.content[:max_content_length].splitlines())
        lines.append("")
        lines.append(f"// ... (truncated at {max_content_length} characters)")
        lines.append(f"// Original size: {format_bytes(node.size)}")
    else:
        lines.extend(node.content.splitlines())

    lines.append("```")
    return lines
