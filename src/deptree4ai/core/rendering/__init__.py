from __future__ import annotations

"""
Output renderers for dependency trees.
"""

from deptree4ai.core.rendering.content_renderer import render_content, select_content_nodes
from deptree4ai.core.rendering.listing import render_json, render_list
from deptree4ai.core.rendering.options import RenderOptions
from deptree4ai.core.rendering.report import render_report
from deptree4ai.core.rendering.summary_renderer import render_summary
from deptree4ai.core.rendering.tree_renderer import render_tree

__all__ = [
    "RenderOptions",
    "render_content",
    "render_json",
    "render_list",
    "render_report",
    "render_summary",
    "render_tree",
    "select_content_nodes",
]
