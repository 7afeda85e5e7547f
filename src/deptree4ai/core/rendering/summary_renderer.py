from __future__ import annotations

"""
Summary Renderer.
"""

from typing import List

from deptree4ai.domain.graph_models import GraphStats
from deptree4ai.utils.formatting import format_bytes


def render_summary(stats: GraphStats, show_unresolved: bool = False, token_count: int = 0) -> List[str]:
    """
    Render circular edges, unresolved imports and statistics.

    Args:
        stats: Tree statistics.
        show_unresolved: List unresolved specifiers (debug runs).
        token_count: Token estimate, omitted when 0.

    Returns:
        List[str]: Summary lines.
    """
    lines: List[str] = []

    if stats.circular_deps:
        lines.append("")
        lines.append("Circular Dependencies:")
        lines.extend(f"  {edge}" for edge in stats.circular_deps)

    if show_unresolved and stats.unresolved:
        lines.append("")
        lines.append("Unresolved Imports:")
        lines.extend(f"  {spec}" for spec in stats.unresolved)

    lines.append("")
    lines.append("Statistics:")
    lines.append(f"  Total files: {stats.total_files}")
    lines.append(f"  Total size: {format_bytes(stats.total_size)}")
    lines.append(f"  Max depth: {stats.max_depth}")
    lines.append(f"  External deps: {stats.external_deps}")
    lines.append(f"  Circular deps: {len(stats.circular_deps)}")
    lines.append(f"  Unresolved: {len(stats.unresolved)}")

    if stats.file_types:
        breakdown = ", ".join(
            f"{ext or 'no-ext'}({count})" for ext, count in stats.file_types.items()
        )
        lines.append(f"  File types: {breakdown}")

    if token_count:
        lines.append(f"  Estimated tokens: {token_count:,}")

    return lines
