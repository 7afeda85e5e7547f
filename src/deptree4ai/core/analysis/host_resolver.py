from __future__ import annotations

"""
Host Runtime Module Lookup.

Locates third-party packages the way the Node.js runtime does: by walking
up from a base directory through every 'node_modules' folder and reading
the package manifest entry point.
"""

import json
import logging
import os
from typing import List, Optional, Tuple

from deptree4ai.domain.constants import NODE_BUILTIN_MODULES

logger = logging.getLogger(__name__)

_HOST_EXTENSIONS: Tuple[str, ...] = (".js", ".mjs", ".cjs", ".json", ".node")
_MANIFEST_ENTRY_FIELDS: Tuple[str, ...] = ("main", "module")


def split_package_specifier(specifier: str) -> Tuple[str, str]:
    """
    Split a bare specifier into its package name and subpath.

    Scoped packages keep their scope: '@scope/pkg/a/b' -> ('@scope/pkg', 'a/b').

    Args:
        specifier: Bare module specifier.

    Returns:
        Tuple[str, str]: (package name, subpath or empty string).
    """
    parts = specifier.split("/")
    if specifier.startswith("@") and len(parts) >= 2:
        return "/".join(parts[:2]), "/".join(parts[2:])
    return parts[0], "/".join(parts[1:])


class HostModuleResolver:
    """
    Resolves bare specifiers against 'node_modules' directories.

    Core modules of the runtime ('fs', 'node:path', ...) have no file on
    disk and always resolve to None.
    """

    def __init__(self, extensions: Optional[List[str]] = None) -> None:
        """
        Args:
            extensions: Extension priority used for subpath and entry lookup.
                Defaults to the runtime's own list.
        """
        self.extensions: List[str] = list(extensions or _HOST_EXTENSIONS)

    def resolve(self, specifier: str, base_dir: str) -> Optional[str]:
        """
        Locate the file a bare specifier loads from base_dir.

        Args:
            specifier: Bare module specifier (e.g. 'lodash/fp').
            base_dir: Directory where the lookup starts.

        Returns:
            Optional[str]: Absolute file path, or None if not installed.
        """
        if self.is_builtin(specifier):
            logger.debug(f"Host built-in module has no file: {specifier}")
            return None

        package, subpath = split_package_specifier(specifier)

        for modules_dir in self._node_modules_chain(base_dir):
            package_dir = os.path.join(modules_dir, *package.split("/"))
            if not os.path.isdir(package_dir):
                continue

            if subpath:
                resolved = self._resolve_file(os.path.join(package_dir, *subpath.split("/")))
            else:
                resolved = self._resolve_package_entry(package_dir)

            if resolved:
                logger.debug(f"Host module resolved: {specifier} -> {resolved}")
                return resolved

        logger.debug(f"Host module not found: {specifier}")
        return None

    @staticmethod
    def is_builtin(specifier: str) -> bool:
        """Check whether the specifier names a runtime core module."""
        if specifier.startswith("node:"):
            return True
        return specifier.split("/")[0] in NODE_BUILTIN_MODULES

    # -------------------------------------------------------------------------
    # INTERNAL HELPERS
    # -------------------------------------------------------------------------

    @staticmethod
    def _node_modules_chain(base_dir: str) -> List[str]:
        """List candidate 'node_modules' directories from base_dir up to the filesystem root."""
        chain: List[str] = []
        current = os.path.abspath(base_dir)
        while True:
            if os.path.basename(current) != "node_modules":
                chain.append(os.path.join(current, "node_modules"))
            parent = os.path.dirname(current)
            if parent == current:
                return chain
            current = parent

    def _resolve_package_entry(self, package_dir: str) -> Optional[str]:
        """Resolve the entry point declared by a package manifest."""
        manifest = os.path.join(package_dir, "package.json")
        if os.path.isfile(manifest):
            try:
                with open(manifest, "r", encoding="utf-8") as f:
                    data = json.load(f)
            except (OSError, ValueError) as e:
                logger.debug(f"Unreadable manifest {manifest}: {e}")
                data = {}

            if isinstance(data, dict):
                for entry_field in _MANIFEST_ENTRY_FIELDS:
                    entry = data.get(entry_field)
                    if isinstance(entry, str) and entry.strip():
                        resolved = self._resolve_file(os.path.join(package_dir, entry))
                        if resolved:
                            return resolved

        return self._resolve_index(package_dir)

    def _resolve_file(self, base_path: str) -> Optional[str]:
        """Apply exact, extension and index lookup to a candidate path."""
        base_path = os.path.normpath(base_path)
        if os.path.isfile(base_path):
            return base_path
        for ext in self.extensions:
            candidate = base_path + ext
            if os.path.isfile(candidate):
                return candidate
        return self._resolve_index(base_path)

    def _resolve_index(self, directory: str) -> Optional[str]:
        """Look for an index file inside a directory."""
        for ext in self.extensions:
            candidate = os.path.join(directory, f"index{ext}")
            if os.path.isfile(candidate):
                return candidate
        return None
