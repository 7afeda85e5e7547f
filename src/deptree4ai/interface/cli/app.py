from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, merging of configuration
sources (defaults, persisted session and CLI overrides), dependency analysis
and report rendering to stdout or to a file.
"""

import json
import os
import sys
from typing import Any, Dict, List, Optional

from deptree4ai.core.rendering import RenderOptions, render_report
from deptree4ai.core.services.analyzer import analyze_dependencies
from deptree4ai.core.services.validator import validate_config
from deptree4ai.domain.config import get_default_config, load_config, save_config
from deptree4ai.infra.fs import write_text_output
from deptree4ai.infra.logging import LoggingConfig, configure_logging, get_logger
from deptree4ai.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_MISSING_TARGET = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 failure, 2 missing target,
             130 interrupted).
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Resolve base configuration (Default vs Persistent state)
    base_conf = get_default_config() if args.use_defaults else load_config()

    # 3. Map and merge command-line overrides
    overrides = cli_args.args_to_overrides(args)
    raw_conf = _merge_config(base_conf, overrides)

    # 4. Schema validation and normalization
    clean_conf, warnings = validate_config(raw_conf, strict=False)

    # 5. Logging bootstrap (console on stderr keeps stdout clean for reports)
    configure_logging(LoggingConfig.for_cli(clean_conf["debug"], args.log_file))
    logger.debug("CLI execution initiated with the effective configuration.")
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    if args.save_config:
        save_config(clean_conf)
        logger.info("Effective configuration saved.")

    # 6. Pre-flight target verification
    target_file = clean_conf.get("target_file", "")
    if not target_file:
        print("ERROR: No target file given.", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return EXIT_MISSING_TARGET
    if not os.path.isfile(target_file):
        msg = f"File not found: {target_file}"
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_MISSING_TARGET

    # 7. Analysis phase
    try:
        result = analyze_dependencies(clean_conf)
    except KeyboardInterrupt:
        msg = "Analysis interrupted by user."
        logger.warning(msg)
        print(msg, file=sys.stderr)
        return EXIT_INTERRUPTED
    except Exception as e:
        msg = f"Analysis failed: {e}"
        logger.critical(msg, exc_info=True)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_FAILURE

    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return EXIT_FAILURE

    # 8. Output rendering phase
    report = render_report(result, RenderOptions.from_config(result.config))
    return _emit(report, clean_conf.get("output_file", ""))

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Perform a shallow merge of override values into the base configuration.

    Only known keys are merged. 'extra_exclude_patterns' and 'extra_aliases'
    extend the base values instead of replacing them.

    Args:
        base: The primary configuration dictionary.
        overrides: New values to inject.

    Returns:
        Dict[str, Any]: The merged configuration state.
    """
    out = dict(base)
    keys_to_merge = [
        "target_file", "root_dir", "max_depth", "include_external",
        "max_content_length", "extensions", "output_format", "output_file",
        "show_size", "show_external", "count_tokens", "target_model", "debug",
    ]
    for k in keys_to_merge:
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]

    extra_patterns = overrides.get("extra_exclude_patterns")
    if extra_patterns:
        out["exclude_patterns"] = list(out.get("exclude_patterns") or []) + list(extra_patterns)

    extra_aliases = overrides.get("extra_aliases")
    if extra_aliases:
        aliases = dict(out.get("aliases") or {})
        aliases.update(extra_aliases)
        out["aliases"] = aliases

    return out

# -----------------------------------------------------------------------------
# OUTPUT
# -----------------------------------------------------------------------------

def _emit(report: str, output_file: str) -> int:
    """Print the report or persist it to output_file."""
    if not output_file:
        sys.stdout.write(report)
        return EXIT_OK

    ok, err = write_text_output(output_file, report)
    if not ok:
        logger.error(f"Could not write output to {output_file}: {err}")
        print(f"ERROR: Could not write output to {output_file}: {err}", file=sys.stderr)
        return EXIT_FAILURE

    print(f"Output written to {output_file}")
    return EXIT_OK

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
