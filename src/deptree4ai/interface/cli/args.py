from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
domain-compatible configuration overrides.
"""

import argparse
from typing import Any, Dict, List, Optional, Tuple

from deptree4ai.domain.constants import CURRENT_CONFIG_VERSION, OUTPUT_FORMATS

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the DepTree4AI CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="deptree4ai",
        description="Extract the dependency tree of a JS/TS/Svelte file and its source context.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {CURRENT_CONFIG_VERSION}")

    # --- Target ---
    p.add_argument(
        "target_file",
        nargs="?",
        default=None,
        help="Entry file whose dependencies are analyzed.",
    )
    p.add_argument(
        "--root",
        dest="root_dir",
        default=None,
        help="Project root used for resolution (auto-detected by default).",
    )

    # --- Traversal ---
    p.add_argument(
        "--depth",
        dest="max_depth",
        type=int,
        default=None,
        help="Maximum traversal depth (0 or less means unlimited).",
    )
    p.add_argument(
        "--include-external",
        action="store_true",
        help="Show third-party and framework imports as external leaves.",
    )
    p.add_argument(
        "--max-content",
        dest="max_content_length",
        type=int,
        default=None,
        help="Characters of content kept per file.",
    )

    # --- Resolution Surface ---
    p.add_argument(
        "--ext",
        dest="extensions",
        default=None,
        help="Comma-separated list of extensions tried during resolution.",
    )
    p.add_argument(
        "--exclude",
        dest="exclude_patterns",
        action="append",
        default=None,
        metavar="REGEX",
        help="Extra exclusion regex, appended to the defaults (repeatable).",
    )
    p.add_argument(
        "--alias",
        dest="aliases",
        action="append",
        type=parse_alias,
        default=None,
        metavar="KEY=TARGET",
        help="Extra import alias relative to the root (repeatable).",
    )

    # --- Output ---
    p.add_argument(
        "--format",
        dest="output_format",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Output format.",
    )
    p.add_argument(
        "-o", "--output",
        dest="output_file",
        default=None,
        help="Write the report to a file instead of stdout.",
    )
    p.add_argument(
        "--show-size",
        action="store_true",
        help="Show file sizes in the tree view.",
    )
    p.add_argument(
        "--hide-external",
        action="store_true",
        help="Omit external nodes from tree, list and content output.",
    )
    p.add_argument(
        "--count-tokens",
        action="store_true",
        help="Estimate the token count of the content context.",
    )
    p.add_argument(
        "--model",
        dest="target_model",
        default=None,
        help="Model identifier used for token estimation.",
    )

    # --- Configuration and Diagnostic Tools ---
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the saved session and start from defaults.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration as JSON and exit.",
    )
    p.add_argument(
        "--save-config",
        action="store_true",
        help="Persist the effective configuration as the default session.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG and list unresolved imports.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to a rotating file.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a domain configuration dictionary.

    Repeatable options are reported under 'extra_*' keys so the caller can
    append them to the base configuration instead of replacing it.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    overrides["target_file"] = args.target_file
    overrides["root_dir"] = args.root_dir
    overrides["max_depth"] = args.max_depth
    overrides["max_content_length"] = args.max_content_length
    overrides["output_format"] = args.output_format
    overrides["output_file"] = args.output_file
    overrides["target_model"] = args.target_model

    if args.extensions:
        overrides["extensions"] = _split_csv(args.extensions)
    if args.exclude_patterns:
        overrides["extra_exclude_patterns"] = list(args.exclude_patterns)
    if args.aliases:
        overrides["extra_aliases"] = dict(args.aliases)

    if args.include_external:
        overrides["include_external"] = True
    if args.show_size:
        overrides["show_size"] = True
    if args.hide_external:
        overrides["show_external"] = False
    if args.count_tokens:
        overrides["count_tokens"] = True
    if args.debug:
        overrides["debug"] = True

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def parse_alias(value: str) -> Tuple[str, str]:
    """
    Parse a 'KEY=TARGET' alias definition.

    Raises:
        argparse.ArgumentTypeError: If the value is malformed.
    """
    key, sep, target = value.partition("=")
    if not sep or not key.strip() or not target.strip():
        raise argparse.ArgumentTypeError(f"invalid alias '{value}', expected KEY=TARGET")
    return key.strip(), target.strip()


def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """
    Convert a comma-separated string into a list of sanitized strings.
    """
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]
