from __future__ import annotations

"""
Report Assembly.

Dispatches an analysis result to the renderer of the requested format and
appends the summary block (except for JSON, which must stay parseable).
"""

import logging
from typing import List

from deptree4ai.core.rendering.content_renderer import render_content
from deptree4ai.core.rendering.listing import render_json, render_list
from deptree4ai.core.rendering.options import RenderOptions
from deptree4ai.core.rendering.summary_renderer import render_summary
from deptree4ai.core.rendering.tree_renderer import render_tree
from deptree4ai.domain.analysis_models import AnalysisResult

logger = logging.getLogger(__name__)


def render_report(result: AnalysisResult, options: RenderOptions) -> str:
    """
    Render a successful analysis into its final text form.

    Args:
        result: Successful analysis result.
        options: Presentation switches.

    Returns:
        str: Report text terminated by a newline.

    Raises:
        ValueError: If the output format is unknown.
    """
    fmt = options.output_format
    tree = result.tree

    if fmt == "json":
        return "\n".join(render_json(tree)) + "\n"

    if fmt == "tree":
        lines: List[str] = [f"Dependency tree for {result.target_file}", f"Root: {result.root_dir}", ""]
        lines.extend(render_tree(tree, options.show_size, options.show_external))
    elif fmt == "list":
        lines = render_list(tree, options.show_external)
    elif fmt == "content":
        lines = render_content(tree, options.max_content_length, options.show_external)
    else:
        raise ValueError(f"Unknown output format: {fmt}")

    lines.extend(render_summary(result.stats, options.show_unresolved, result.token_count))
    logger.debug(f"Rendered {fmt} report: {len(lines)} lines")
    return "\n".join(lines) + "\n"
