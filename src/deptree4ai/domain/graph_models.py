from __future__ import annotations

"""
Dependency Graph Data Models.

Defines the annotated tree node produced by the graph builder and the
aggregate statistics derived from a built tree. A node describes one graph
position, not one unique file: the same file may appear under several parents.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FileNode:
    """
    One position in the dependency tree.

    Attributes:
        path: Display path relative to the project root (raw specifier for
            external marker leaves).
        absolute_path: Absolute filesystem path, None for unresolved externals.
        exists: Whether the file was found on disk.
        depth: Distance from the traversal root.
        size: File size in bytes.
        content: Raw text content, empty when omitted.
        skip_reason: Reason the content was omitted, if any.
        is_text: True when the content was read successfully.
        import_count: Number of specifiers extracted from the file.
        dependencies: Ordered child nodes.
        circular: True for back-edges terminated as leaves.
        external: True for unexpanded third-party leaves.
        error: Structural problem with this position (e.g. missing file).
        original_import: Specifier in the parent that produced this node.
    """
    path: str
    absolute_path: Optional[str]
    exists: bool = True
    depth: int = 0
    size: int = 0
    content: str = ""
    skip_reason: Optional[str] = None
    is_text: bool = False
    import_count: int = 0
    dependencies: List["FileNode"] = field(default_factory=list)
    circular: bool = False
    external: bool = False
    error: Optional[str] = None
    original_import: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize the subtree into a JSON-compatible mapping.

        Returns:
            Dict[str, Any]: Recursive representation using camelCase keys.
        """
        return {
            "path": self.path,
            "absolutePath": self.absolute_path,
            "exists": self.exists,
            "depth": self.depth,
            "size": self.size,
            "importCount": self.import_count,
            "circular": self.circular,
            "external": self.external,
            "error": self.error,
            "skipReason": self.skip_reason,
            "isText": self.is_text,
            "originalImport": self.original_import,
            "content": self.content,
            "dependencies": [child.to_dict() for child in self.dependencies],
        }


@dataclass(frozen=True)
class GraphStats:
    """
    Summary metrics of a built tree, counted once per absolute path.

    Attributes:
        total_files: Number of unique nodes.
        total_size: Sum of unique node sizes in bytes.
        max_depth: Deepest tree level reached.
        external_deps: Number of unique external nodes.
        file_types: Extension to occurrence count.
        circular_deps: Recorded circular edges.
        unresolved: Specifiers that could not be mapped to a file.
    """
    total_files: int = 0
    total_size: int = 0
    max_depth: int = 0
    external_deps: int = 0
    file_types: Dict[str, int] = field(default_factory=dict)
    circular_deps: List[str] = field(default_factory=list)
    unresolved: List[str] = field(default_factory=list)
