from __future__ import annotations

"""
Dependency Analysis Orchestration.

Coordinates one analysis run:
1. Validates the configuration.
2. Establishes the project root (override or detection).
3. Builds the dependency tree with a fresh builder.
4. Computes statistics.
5. Optionally estimates the token density of the content context.
"""

import logging
import os
from typing import Any, Dict, Optional

from deptree4ai.core.analysis.graph_builder import GraphBuilder
from deptree4ai.core.analysis.root_detector import detect_project_root
from deptree4ai.core.analysis.stats import compute_stats
from deptree4ai.core.processing.tokenizer import count_tokens
from deptree4ai.core.rendering.content_renderer import render_content
from deptree4ai.core.services.validator import validate_config
from deptree4ai.domain.analysis_models import (
    AnalysisResult,
    create_error_result,
    create_success_result,
)
from deptree4ai.domain.errors import DepTreeError
from deptree4ai.infra.fs import normalize_path

logger = logging.getLogger(__name__)


def analyze_dependencies(config: Optional[Dict[str, Any]]) -> AnalysisResult:
    """
    Run a complete dependency analysis.

    Args:
        config: The configuration dictionary (raw or partial).

    Returns:
        AnalysisResult: Tree, edges, statistics and status.
    """
    cfg, warnings = validate_config(config or {}, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    if not cfg["target_file"]:
        msg = "No target file given."
        logger.error(msg)
        return create_error_result(msg, cfg, "")

    target_file = normalize_path(cfg["target_file"], os.getcwd())

    if cfg["root_dir"]:
        root_dir = normalize_path(cfg["root_dir"], os.getcwd())
    else:
        root_dir = detect_project_root(target_file)
    logger.info(f"Analyzing {target_file} (root: {root_dir})")

    builder = GraphBuilder.from_config(cfg, root_dir)
    try:
        tree = builder.build(target_file)
    except DepTreeError as e:
        logger.error(str(e))
        return create_error_result(str(e), cfg, target_file, root_dir)

    circular_deps = builder.circular_deps
    unresolved = builder.unresolved
    stats = compute_stats(tree, circular_deps, unresolved)

    token_count = 0
    if cfg["count_tokens"]:
        context = "\n".join(
            render_content(tree, cfg["max_content_length"], cfg["show_external"])
        )
        token_count = count_tokens(context, cfg["target_model"])
        logger.debug(f"Estimated {token_count} tokens for model {cfg['target_model']}")

    logger.info(
        f"Analysis finished: {stats.total_files} files, "
        f"{len(circular_deps)} circular, {len(unresolved)} unresolved."
    )

    return create_success_result(
        cfg=cfg,
        target_file=target_file,
        root_dir=root_dir,
        tree=tree,
        circular_deps=circular_deps,
        unresolved=unresolved,
        all_files=list(builder.all_files),
        stats=stats,
        token_count=token_count,
    )
