from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.

Verifies:
1. Mapping of CLI flags to configuration keys.
2. CSV and repeatable option parsing.
3. Alias definition validation.
"""

import argparse

import pytest

from deptree4ai.interface.cli.args import args_to_overrides, build_parser, parse_alias


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    return build_parser().parse_args(arg_list)


def test_cli_positional_target_and_values() -> None:
    args = parse_args([
        "src/main.ts",
        "--depth", "3",
        "--format", "json",
        "--root", "/work/app",
        "--max-content", "500",
        "-o", "out.txt",
        "--model", "gpt-4-turbo",
    ])
    overrides = args_to_overrides(args)

    assert overrides["target_file"] == "src/main.ts"
    assert overrides["max_depth"] == 3
    assert overrides["output_format"] == "json"
    assert overrides["root_dir"] == "/work/app"
    assert overrides["max_content_length"] == 500
    assert overrides["output_file"] == "out.txt"
    assert overrides["target_model"] == "gpt-4-turbo"


def test_cli_boolean_flags_mapping() -> None:
    args = parse_args([
        "main.ts",
        "--include-external",
        "--show-size",
        "--hide-external",
        "--count-tokens",
        "--debug",
    ])
    overrides = args_to_overrides(args)

    assert overrides["include_external"] is True
    assert overrides["show_size"] is True
    assert overrides["show_external"] is False
    assert overrides["count_tokens"] is True
    assert overrides["debug"] is True


def test_cli_absent_flags_are_not_overridden() -> None:
    overrides = args_to_overrides(parse_args(["main.ts"]))

    assert "include_external" not in overrides
    assert "show_external" not in overrides
    assert overrides["max_depth"] is None


def test_cli_csv_and_repeatable_options() -> None:
    args = parse_args([
        "main.ts",
        "--ext", ".js,.ts",
        "--exclude", "generated",
        "--exclude", r"\.stories\.ts$",
        "--alias", "@=src",
        "--alias", "~=src/lib",
    ])
    overrides = args_to_overrides(args)

    assert overrides["extensions"] == [".js", ".ts"]
    assert overrides["extra_exclude_patterns"] == ["generated", r"\.stories\.ts$"]
    assert overrides["extra_aliases"] == {"@": "src", "~": "src/lib"}


def test_cli_rejects_unknown_format() -> None:
    with pytest.raises(SystemExit):
        parse_args(["main.ts", "--format", "yaml"])


def test_parse_alias() -> None:
    assert parse_alias(" @ = src ") == ("@", "src")
    with pytest.raises(argparse.ArgumentTypeError):
        parse_alias("no-separator")
    with pytest.raises(argparse.ArgumentTypeError):
        parse_alias("=src")
