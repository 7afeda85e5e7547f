from __future__ import annotations

"""
Dependency Graph Builder.

Depth-first, pre-order traversal that turns a root file into an annotated
FileNode tree. For every file it extracts import specifiers, resolves them
and either descends into it immediately or emits a leaf before moving to the next
specifier. Back-edges become circular leaves, so a single build is acyclic.
The descent uses an explicit stack of frames, so chain length is not bound
by the interpreter recursion limit.

Traversal state (visited table, circular edges, unresolved specifiers and
the expanded-files registry) lives in a TraversalContext owned by the
builder. It persists across build() calls until reset() is invoked.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, NamedTuple, Optional, Union

from deptree4ai.core.analysis.import_extractor import (
    ImportExtractor,
    is_template_composite_file,
)
from deptree4ai.core.analysis.path_resolver import PathResolver
from deptree4ai.domain.constants import (
    BINARY_EXTENSIONS,
    BUILTIN_ALIAS_TARGETS,
    CONTENT_READ_MULTIPLIER,
    DEFAULT_MAX_CONTENT_LENGTH,
)
from deptree4ai.domain.errors import RootFileNotFoundError, StructuralError
from deptree4ai.domain.graph_models import FileNode
from deptree4ai.infra.fs import read_text_file, relative_display_path
from deptree4ai.utils.formatting import format_bytes

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# TRAVERSAL STATE
# -----------------------------------------------------------------------------

@dataclass
class TraversalContext:
    """
    Mutable state of one traversal.

    Attributes:
        visited: Absolute path to first-seen depth. Entries are never
            removed or lowered.
        circular_deps: Insertion-ordered set of 'from -> to' edges.
        unresolved: Insertion-ordered set of unresolved specifiers.
        all_files: Absolute path to the expanded node, for flattening.
    """
    visited: Dict[str, int] = field(default_factory=dict)
    circular_deps: Dict[str, None] = field(default_factory=dict)
    unresolved: Dict[str, None] = field(default_factory=dict)
    all_files: Dict[str, FileNode] = field(default_factory=dict)

    def mark_visited(self, abs_path: str, depth: int) -> None:
        self.visited.setdefault(abs_path, depth)

    def add_circular(self, edge: str) -> None:
        self.circular_deps.setdefault(edge, None)

    def add_unresolved(self, specifier: str) -> None:
        self.unresolved.setdefault(specifier, None)


class FileInfo(NamedTuple):
    """Metadata and gated content of a file."""
    size: int
    content: str
    is_text: bool
    skip_reason: Optional[str]
    error: Optional[str]


@dataclass
class _Frame:
    """A file under expansion: its pending imports and the children built so far."""
    abs_path: str
    rel_path: str
    depth: int
    original_import: Optional[str]
    info: FileInfo
    imports: List[str]
    next_index: int = 0
    dependencies: List[FileNode] = field(default_factory=list)


def is_binary_file(file_path: str) -> bool:
    """Classify a file as binary by its extension."""
    _, ext = os.path.splitext(file_path)
    return ext.lower() in BINARY_EXTENSIONS

# -----------------------------------------------------------------------------
# BUILDER
# -----------------------------------------------------------------------------

class GraphBuilder:
    """
    Depth-first dependency tree builder.

    Not safe for concurrent use: one instance holds one TraversalContext.
    Building twice without reset() reuses the visited table, so the second
    root is reported as circular.
    """

    def __init__(
            self,
            resolver: PathResolver,
            *,
            max_depth: Optional[int] = None,
            include_external: bool = False,
            max_content_length: int = DEFAULT_MAX_CONTENT_LENGTH,
            extractor: Optional[ImportExtractor] = None,
    ) -> None:
        """
        Args:
            resolver: Configured path resolver. Its root is the display base.
            max_depth: Deepest level expanded, None for unlimited.
            include_external: Emit third-party imports as external leaves.
            max_content_length: Content budget in characters; files larger
                than CONTENT_READ_MULTIPLIER times this are not read.
            extractor: Import extractor, a default one when omitted.
        """
        self.resolver = resolver
        self.root_dir = resolver.root_dir
        self.max_depth = max_depth
        self.include_external = include_external
        self.max_content_length = max_content_length
        self.extractor = extractor or ImportExtractor()
        self.context = TraversalContext()

    @classmethod
    def from_config(cls, cfg: Dict[str, Any], root_dir: str) -> "GraphBuilder":
        """
        Build a builder and its resolver from a normalized configuration.

        Args:
            cfg: Validated configuration dictionary.
            root_dir: Project root used as resolution base.

        Returns:
            GraphBuilder: Ready-to-use builder with a fresh context.
        """
        resolver = PathResolver(
            root_dir,
            extensions=cfg.get("extensions"),
            exclude_patterns=cfg.get("exclude_patterns"),
            aliases=cfg.get("aliases"),
            include_external=bool(cfg.get("include_external", False)),
        )
        return cls(
            resolver,
            max_depth=cfg.get("max_depth"),
            include_external=bool(cfg.get("include_external", False)),
            max_content_length=int(cfg.get("max_content_length") or DEFAULT_MAX_CONTENT_LENGTH),
        )

    # -------------------------------------------------------------------------
    # PUBLIC API
    # -------------------------------------------------------------------------

    def reset(self) -> None:
        """Discard all traversal state so the next build starts clean."""
        self.context = TraversalContext()

    def build(self, root_file: str) -> FileNode:
        """
        Build the dependency tree rooted at root_file.

        Args:
            root_file: Path of the traversal root.

        Returns:
            FileNode: Root node of the annotated tree.

        Raises:
            RootFileNotFoundError: If the root file does not exist.
        """
        resolved = os.path.abspath(root_file)
        if not os.path.isfile(resolved):
            raise RootFileNotFoundError(resolved)

        logger.debug(f"Using root directory: {self.root_dir}")
        logger.debug(f"Target file: {resolved}")

        entry = self._enter(resolved, 0)
        if isinstance(entry, _Frame):
            return self._expand(entry)
        if entry is None:
            raise StructuralError(f"Could not analyze the file: {resolved}")
        return entry

    @property
    def circular_deps(self) -> List[str]:
        return list(self.context.circular_deps)

    @property
    def unresolved(self) -> List[str]:
        return list(self.context.unresolved)

    @property
    def all_files(self) -> Dict[str, FileNode]:
        return dict(self.context.all_files)

    # -------------------------------------------------------------------------
    # TRAVERSAL
    # -------------------------------------------------------------------------

    def _expand(self, root_frame: _Frame) -> FileNode:
        """
        Expand a file and its imports depth-first using an explicit stack.

        The top frame consumes its specifiers in order. A resolved local file
        pushes a new frame; leaves are attached immediately. A finished frame
        becomes a node attached to the frame below it.
        """
        stack: List[_Frame] = [root_frame]
        while True:
            frame = stack[-1]
            if frame.next_index < len(frame.imports):
                specifier = frame.imports[frame.next_index]
                frame.next_index += 1
                child = self._follow_import(specifier, frame)
                if isinstance(child, _Frame):
                    stack.append(child)
                elif child is not None:
                    frame.dependencies.append(child)
                continue

            node = self._finish(stack.pop())
            if not stack:
                return node
            stack[-1].dependencies.append(node)

    def _enter(
            self,
            abs_path: str,
            depth: int,
            caller: Optional[str] = None,
            original_import: Optional[str] = None,
    ) -> Union[FileNode, _Frame, None]:
        """
        Visit one graph position.

        Returns None when the position must be omitted from the parent:
        beyond the depth limit, or already visited at a greater depth.
        Circular and missing positions are finished leaves. Anything else is
        a new frame whose imports still have to be followed.
        """
        ctx = self.context
        rel_path = relative_display_path(abs_path, self.root_dir)

        if self.max_depth is not None and depth > self.max_depth:
            return None

        first_depth = ctx.visited.get(abs_path)
        if first_depth is not None:
            if first_depth <= depth:
                if caller is not None:
                    ctx.add_circular(f"{caller} -> {rel_path}")
                return FileNode(
                    path=rel_path,
                    absolute_path=abs_path,
                    depth=depth,
                    circular=True,
                    original_import=original_import,
                )
            # Visited deeper than here: the position is dropped, not re-expanded
            logger.debug(f"Skipping {rel_path}: already visited at depth {first_depth} > {depth}")
            return None

        if not os.path.exists(abs_path):
            return FileNode(
                path=rel_path,
                absolute_path=abs_path,
                exists=False,
                depth=depth,
                error="File not found",
                original_import=original_import,
            )

        ctx.mark_visited(abs_path, depth)

        info = self.read_file_info(abs_path)
        imports = self.extractor.extract(info.content, is_template_composite_file(abs_path))

        logger.debug(f"Processing: {rel_path} (depth: {depth})")
        logger.debug(f"Found {len(imports)} imports: [{', '.join(imports)}]")

        return _Frame(
            abs_path=abs_path,
            rel_path=rel_path,
            depth=depth,
            original_import=original_import,
            info=info,
            imports=imports,
        )

    def _finish(self, frame: _Frame) -> FileNode:
        """Turn an exhausted frame into its node and register it."""
        if frame.imports and not frame.dependencies:
            logger.debug(f"Found {len(frame.imports)} imports but resolved 0 dependencies")

        info = frame.info
        node = FileNode(
            path=frame.rel_path,
            absolute_path=frame.abs_path,
            exists=True,
            depth=frame.depth,
            size=info.size,
            content=info.content,
            skip_reason=info.skip_reason,
            is_text=info.is_text,
            import_count=len(frame.imports),
            dependencies=frame.dependencies,
            error=info.error,
            original_import=frame.original_import,
        )
        self.context.all_files[frame.abs_path] = node
        return node

    def _follow_import(self, specifier: str, frame: _Frame) -> Union[FileNode, _Frame, None]:
        """Resolve one specifier of the frame's file and produce its child, if any."""
        resolved = self.resolver.resolve(specifier, frame.abs_path)
        depth = frame.depth + 1

        if self.include_external and self.is_external_specifier(specifier):
            if self.max_depth is not None and depth > self.max_depth:
                return None
            return self._external_leaf(specifier, resolved, depth)

        if resolved:
            return self._enter(resolved, depth, frame.rel_path, specifier)

        self.context.add_unresolved(specifier)
        logger.debug(f'Unresolved import "{specifier}" in {frame.rel_path}')
        return None

    def is_external_specifier(self, specifier: str) -> bool:
        """
        Check whether a specifier names a third-party or framework module.

        Bare specifiers and aliases mapped to framework built-ins are
        external; relative, project-absolute and local aliases are not.
        """
        for alias, target in self.resolver.aliases.items():
            if specifier.startswith(alias):
                return target.startswith(BUILTIN_ALIAS_TARGETS)
        if self.resolver.is_project_absolute(specifier):
            return False
        return not (specifier.startswith(".") or specifier.startswith("/"))

    @staticmethod
    def _external_leaf(specifier: str, resolved: Optional[str], depth: int) -> FileNode:
        size = 0
        if resolved:
            try:
                size = os.path.getsize(resolved)
            except OSError:
                size = 0
        return FileNode(
            path=specifier,
            absolute_path=resolved,
            exists=resolved is not None,
            depth=depth,
            size=size,
            external=True,
            original_import=specifier,
        )

    # -------------------------------------------------------------------------
    # CONTENT GATING
    # -------------------------------------------------------------------------

    def read_file_info(self, abs_path: str) -> FileInfo:
        """
        Read metadata and, when allowed, the content of a file.

        Binary files and files above the read ceiling keep their size but
        no content. Read failures are recorded, never raised.

        Args:
            abs_path: Absolute path of an existing file.

        Returns:
            FileInfo: Size, content and the omission reason if any.
        """
        try:
            size = os.path.getsize(abs_path)
        except OSError as e:
            logger.warning(f"Could not stat {abs_path}: {e}")
            return FileInfo(0, "", False, None, str(e))

        read_limit = self.max_content_length * CONTENT_READ_MULTIPLIER
        rel_path = relative_display_path(abs_path, self.root_dir)

        if is_binary_file(abs_path):
            skip_reason = "Binary file"
        elif size > read_limit:
            skip_reason = f"File too large ({format_bytes(size)} > {format_bytes(read_limit)})"
        else:
            try:
                content = read_text_file(abs_path)
            except (OSError, UnicodeDecodeError) as e:
                logger.warning(f"Could not read content of {rel_path}: {e}")
                return FileInfo(size, "", False, f"Read error: {e}", None)

            logger.debug(f"Successfully read {format_bytes(size)} from {rel_path}")
            return FileInfo(size, content, True, None, None)

        logger.debug(f"Skipping content for {rel_path}: {skip_reason}")
        return FileInfo(size, "", False, skip_reason, None)
