from __future__ import annotations

"""
Configuration Validation Service.

Gatekeeper between untrusted input (CLI flags, persisted sessions) and the
analysis engine. Handles type coercion, default injection and domain
normalization so the builder only ever sees well-formed settings.
"""

import logging
import re
from typing import Any, Dict, List, Optional, Tuple

from deptree4ai.domain.config import get_default_config
from deptree4ai.domain.constants import (
    DEFAULT_ALIASES,
    DEFAULT_EXCLUDE_PATTERNS,
    DEFAULT_EXTENSIONS,
    DEFAULT_MAX_CONTENT_LENGTH,
    DEFAULT_OUTPUT_FORMAT,
    OUTPUT_FORMATS,
)

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises exceptions on type mismatch instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and
                                          a list of warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    string_fields = ["target_file", "root_dir", "output_file", "target_model"]
    bool_fields = [
        "include_external", "show_size", "show_external", "count_tokens", "debug",
    ]
    list_fields_map = {
        "extensions": list(DEFAULT_EXTENSIONS),
        "exclude_patterns": list(DEFAULT_EXCLUDE_PATTERNS),
    }

    for field in string_fields:
        merged[field] = _as_str(merged.get(field), defaults.get(field, ""), field, warnings, strict)

    for field in bool_fields:
        merged[field] = _as_bool(merged.get(field), defaults.get(field, False), field, warnings, strict)

    for field, fallback in list_fields_map.items():
        merged[field] = _as_list_str(merged.get(field), fallback, field, warnings, strict)

    merged["aliases"] = _as_dict_str(merged.get("aliases"), dict(DEFAULT_ALIASES), "aliases", warnings, strict)

    merged["max_depth"] = _as_optional_positive_int(merged.get("max_depth"), "max_depth", warnings, strict)
    content_length = _as_optional_positive_int(
        merged.get("max_content_length"), "max_content_length", warnings, strict
    )
    merged["max_content_length"] = content_length or DEFAULT_MAX_CONTENT_LENGTH

    merged["extensions"] = _normalize_extensions(merged["extensions"], warnings, strict)
    merged["exclude_patterns"] = _normalize_patterns(merged["exclude_patterns"], warnings, strict)
    merged["output_format"] = _normalize_format(merged.get("output_format"), warnings, strict)

    return merged, warnings

# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_optional_positive_int(value: Any, field: str, warnings: List[str], strict: bool) -> Optional[int]:
    """
    Coerce a limit into a positive int; anything else means 'no limit'.

    Zero and negative numbers are treated as unlimited, matching the
    command-line semantics of '--depth 0'.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        msg = f"Invalid field '{field}': expected int, received bool."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Ignored.")
        return None

    number: Optional[int] = None
    if isinstance(value, int):
        number = value
    elif isinstance(value, float) and value.is_integer():
        number = int(value)
    elif isinstance(value, str) and not strict:
        try:
            number = int(value.strip())
            warnings.append(f"Field '{field}' converted from '{value}' to {number}.")
        except ValueError:
            number = None

    if number is None:
        msg = f"Invalid field '{field}': expected int, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Ignored.")
        return None

    return number if number > 0 else None


def _as_list_str(value: Any, fallback: List[str], field: str, warnings: List[str], strict: bool) -> List[str]:
    """Ensure input is a list of sanitized strings, supporting CSV parsing."""
    if value is None:
        return list(fallback)

    if isinstance(value, str) and not strict:
        items = [x.strip() for x in value.split(",") if x.strip()]
        if items:
            warnings.append(f"Field '{field}' converted from CSV string to list.")
            return items
        return list(fallback)

    if isinstance(value, (list, tuple)):
        out: List[str] = []
        for i, item in enumerate(value):
            if isinstance(item, str):
                s = item.strip()
                if s:
                    out.append(s)
            else:
                msg = f"Invalid item in '{field}[{i}]': expected str."
                if strict:
                    raise TypeError(msg)
                warnings.append(f"{msg} Item discarded.")
        return out

    msg = f"Invalid field '{field}': expected list[str], received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return list(fallback)


def _as_dict_str(
        value: Any,
        fallback: Dict[str, str],
        field: str,
        warnings: List[str],
        strict: bool,
) -> Dict[str, str]:
    """Ensure input is a mapping of non-empty strings to strings."""
    if value is None:
        return dict(fallback)

    if not isinstance(value, dict):
        msg = f"Invalid field '{field}': expected dict, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        return dict(fallback)

    out: Dict[str, str] = {}
    for key, target in value.items():
        if isinstance(key, str) and key.strip() and isinstance(target, str):
            out[key.strip()] = target.strip()
            continue
        msg = f"Invalid entry in '{field}': {key!r} -> {target!r}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Entry discarded.")
    return out

# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN NORMALIZATION
# -----------------------------------------------------------------------------

def _normalize_extensions(exts: List[str], warnings: List[str], strict: bool) -> List[str]:
    """Ensure all file extensions are prefixed with a dot."""
    out: List[str] = []
    for ext in exts:
        e = ext.strip()
        if not e:
            continue
        if not e.startswith("."):
            if strict:
                raise ValueError(f"Invalid extension '{ext}': must start with '.'.")
            warnings.append(f"Extension '{ext}' corrected to '.{e}'.")
            e = "." + e
        if e not in out:
            out.append(e)
    return out if out else list(DEFAULT_EXTENSIONS)


def _normalize_patterns(patterns: List[str], warnings: List[str], strict: bool) -> List[str]:
    """Drop exclusion patterns that are not valid regular expressions."""
    out: List[str] = []
    for pattern in patterns:
        try:
            re.compile(pattern)
        except re.error as e:
            if strict:
                raise ValueError(f"Invalid exclude pattern '{pattern}': {e}")
            warnings.append(f"Exclude pattern '{pattern}' is not a valid regex ({e}). Pattern discarded.")
            continue
        out.append(pattern)
    return out


def _normalize_format(value: Any, warnings: List[str], strict: bool) -> str:
    """Restrict the output format to the supported renderers."""
    if isinstance(value, str) and value.strip().lower() in OUTPUT_FORMATS:
        return value.strip().lower()

    msg = f"Invalid output format {value!r}: expected one of {', '.join(OUTPUT_FORMATS)}."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using '{DEFAULT_OUTPUT_FORMAT}'.")
    return DEFAULT_OUTPUT_FORMAT
