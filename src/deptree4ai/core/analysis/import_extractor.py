from __future__ import annotations

"""
Import Statement Extractor.

Line-scoped heuristic scanner for ES module, CommonJS and dynamic import
statements. It is not a language frontend: multi-line comments and string
literals containing import-like text are not special-cased.
"""

import logging
import os
import re
from typing import Dict, List, Tuple

from deptree4ai.domain.constants import TEMPLATE_COMPOSITE_EXTENSIONS

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# STATEMENT SHAPES
# -----------------------------------------------------------------------------

_QUOTED = r"['\"`]([^'\"`]+)['\"`]"

# Ordered: every shape is applied to every line, all matches are kept
IMPORT_PATTERNS: Tuple[Tuple[str, "re.Pattern[str]"], ...] = (
    ("ES6 Import", re.compile(r"import\s+(?:[^'\"]*?)\s+from\s+" + _QUOTED)),
    ("Type Import", re.compile(r"import\s+type\s+(?:[^'\"]*?)\s+from\s+" + _QUOTED)),
    ("Side Effect", re.compile(r"import\s+" + _QUOTED)),
    ("Dynamic Import", re.compile(r"import\s*\(\s*" + _QUOTED + r"\s*\)")),
    ("Re-export", re.compile(r"export\s+(?:[^'\"]*?)\s+from\s+" + _QUOTED)),
    (
        "CommonJS Assign",
        re.compile(r"(?:const|let|var)\s+[^=]+\s*=\s*require\s*\(\s*" + _QUOTED + r"\s*\)"),
    ),
    ("Direct Require", re.compile(r"require\s*\(\s*" + _QUOTED + r"\s*\)")),
)

_SCRIPT_REGION = re.compile(r"<script[^>]*>([\s\S]*?)</script>", re.IGNORECASE)

_COMMENT_PREFIXES: Tuple[str, ...] = ("//", "/*", "*")


def is_template_composite_file(file_name: str) -> bool:
    """Check whether the file embeds its script inside a markup template."""
    _, ext = os.path.splitext(file_name)
    return ext.lower() in TEMPLATE_COMPOSITE_EXTENSIONS


def is_valid_import_path(specifier: str) -> bool:
    """
    Filter out specifiers that can never map to a local module.

    Rejects network schemes, protocol-relative URLs, query strings, fragments,
    template interpolation, data URIs and blank values.

    Args:
        specifier: Raw string captured from a statement.

    Returns:
        bool: True if the specifier should be kept.
    """
    if not specifier or not specifier.strip():
        return False
    if specifier.startswith("http") or specifier.startswith("//"):
        return False
    if "?" in specifier or "#" in specifier:
        return False
    if "${" in specifier or "`" in specifier:
        return False
    return not specifier.startswith("data:")


class ImportExtractor:
    """
    Extracts raw import specifiers from source text.

    The result is deduplicated and keeps first-seen order so that
    traversal is deterministic.
    """

    def extract(self, content: str, is_template_composite: bool = False) -> List[str]:
        """
        Collect every import specifier found in the given source text.

        Args:
            content: Raw file content.
            is_template_composite: True for markup files with script regions
                (e.g. Svelte components).

        Returns:
            List[str]: Ordered, deduplicated specifiers.
        """
        if not content:
            return []

        if is_template_composite:
            content = self.extract_script_regions(content)

        lines = content.split("\n")
        logger.debug(f"Parsing {len(lines)} lines of content...")

        found: Dict[str, None] = {}
        for index, raw_line in enumerate(lines):
            line = raw_line.strip()
            if not line or line.startswith(_COMMENT_PREFIXES):
                continue

            for specifier in self.extract_from_line(line, index + 1):
                found.setdefault(specifier, None)

        specifiers = list(found)
        if specifiers:
            logger.debug(f"Extracted imports: [{', '.join(specifiers)}]")
        return specifiers

    @staticmethod
    def extract_script_regions(content: str) -> str:
        """
        Isolate script regions of a template composite, in document order.

        Falls back to the whole text when no script region exists.
        """
        script = "".join(match.group(1) + "\n" for match in _SCRIPT_REGION.finditer(content))
        return script or content

    @staticmethod
    def extract_from_line(line: str, line_number: int = 0) -> List[str]:
        """
        Apply every statement shape to a single line.

        Args:
            line: Stripped source line.
            line_number: 1-based position, used for tracing only.

        Returns:
            List[str]: Valid specifiers in shape order (may contain repeats).
        """
        out: List[str] = []
        for name, pattern in IMPORT_PATTERNS:
            for match in pattern.finditer(line):
                specifier = match.group(1)
                if is_valid_import_path(specifier):
                    out.append(specifier)
                    logger.debug(f'Line {line_number}: {name} -> "{specifier}"')
        return out
