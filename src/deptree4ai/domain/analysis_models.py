from __future__ import annotations

"""
Analysis Domain Data Models.

Defines the result object exchanged between the analysis service and the
interface layer, together with its factory functions.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from deptree4ai.domain.graph_models import FileNode, GraphStats

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class AnalysisResult:
    """
    Unified result of one dependency analysis.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        target_file: Absolute path of the traversal root.
        root_dir: Project root used as resolution base.
        tree: Root node of the dependency tree (None on failure).
        circular_deps: Circular edges recorded during traversal.
        unresolved: Specifiers that could not be resolved.
        all_files: Absolute paths of every expanded file, in discovery order.
        stats: Aggregate metrics of the tree.
        token_count: Estimated token density of the content context.
        config: The normalized configuration used for the run.
    """
    ok: bool
    error: str

    target_file: str
    root_dir: str

    tree: Optional[FileNode] = None
    circular_deps: List[str] = field(default_factory=list)
    unresolved: List[str] = field(default_factory=list)
    all_files: List[str] = field(default_factory=list)
    stats: GraphStats = field(default_factory=GraphStats)

    token_count: int = 0
    config: Dict[str, Any] = field(default_factory=dict)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        cfg: Dict[str, Any],
        target_file: str,
        root_dir: str = "",
) -> AnalysisResult:
    """
    Create a failed analysis result instance.

    Args:
        error: Detailed error description.
        cfg: The configuration used during the failed run.
        target_file: The requested traversal root.
        root_dir: Resolution base, if it was already established.

    Returns:
        AnalysisResult: An immutable error result object.
    """
    return AnalysisResult(
        ok=False,
        error=error,
        target_file=target_file,
        root_dir=root_dir,
        config=dict(cfg),
    )


def create_success_result(
        cfg: Dict[str, Any],
        target_file: str,
        root_dir: str,
        tree: FileNode,
        circular_deps: List[str],
        unresolved: List[str],
        all_files: List[str],
        stats: GraphStats,
        token_count: int = 0,
) -> AnalysisResult:
    """
    Create a successful analysis result instance.

    Args:
        cfg: Final configuration used during execution.
        target_file: Absolute traversal root.
        root_dir: Project root used for resolution.
        tree: Built dependency tree.
        circular_deps: Recorded circular edges.
        unresolved: Unresolved specifiers.
        all_files: Expanded files registry.
        stats: Tree statistics.
        token_count: Optional token estimate.

    Returns:
        AnalysisResult: An immutable success result object.
    """
    return AnalysisResult(
        ok=True,
        error="",
        target_file=target_file,
        root_dir=root_dir,
        tree=tree,
        circular_deps=list(circular_deps),
        unresolved=list(unresolved),
        all_files=list(all_files),
        stats=stats,
        token_count=token_count,
        config=dict(cfg),
    )
