from __future__ import annotations

"""
Rendering Options Model.
"""

from dataclasses import dataclass
from typing import Any, Dict

from deptree4ai.domain.constants import DEFAULT_MAX_CONTENT_LENGTH, DEFAULT_OUTPUT_FORMAT


@dataclass(frozen=True)
class RenderOptions:
    """
    Presentation switches shared by all renderers.

    Attributes:
        output_format: One of tree, list, json, content.
        show_size: Append file sizes in the tree view.
        show_external: Include external leaves in tree, list and content.
        max_content_length: Characters shown per file in the content view.
        show_unresolved: List unresolved specifiers in the summary.
    """
    output_format: str = DEFAULT_OUTPUT_FORMAT
    show_size: bool = False
    show_external: bool = True
    max_content_length: int = DEFAULT_MAX_CONTENT_LENGTH
    show_unresolved: bool = False

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "RenderOptions":
        """Derive render options from a normalized configuration."""
        return cls(
            output_format=cfg.get("output_format", DEFAULT_OUTPUT_FORMAT),
            show_size=bool(cfg.get("show_size", False)),
            show_external=bool(cfg.get("show_external", True)),
            max_content_length=int(cfg.get("max_content_length") or DEFAULT_MAX_CONTENT_LENGTH),
            show_unresolved=bool(cfg.get("debug", False)),
        )
