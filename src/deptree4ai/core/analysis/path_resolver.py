from __future__ import annotations

"""
Module Path Resolver.

Maps a raw import specifier, seen from the file that contains it, to an
absolute file path. Strategies are tried in a fixed order and the first one
that claims the specifier decides the outcome, even when it finds no file:

1. Alias prefix substitution (framework built-ins are external).
2. Project-absolute prefixes tried against a prioritized list of bases.
3. Relative or filesystem-rooted paths, against the origin's directory.
4. External packages, via host runtime lookup when enabled.

Every candidate path goes through the shared extension/index fallback and
the exclusion filter.
"""

import logging
import os
import re
from typing import Dict, Iterable, List, Optional, Sequence, Union

from deptree4ai.core.analysis.host_resolver import HostModuleResolver
from deptree4ai.domain.constants import (
    BUILTIN_ALIAS_TARGETS,
    DEFAULT_ALIASES,
    DEFAULT_EXCLUDE_PATTERNS,
    DEFAULT_EXTENSIONS,
    PROJECT_ABSOLUTE_PREFIXES,
)
from deptree4ai.infra.fs import to_posix

logger = logging.getLogger(__name__)

PatternLike = Union[str, "re.Pattern[str]"]


def compile_patterns(patterns: Iterable[PatternLike]) -> List[re.Pattern[str]]:
    """
    Transform raw regex strings into compiled Pattern objects.

    Malformed expressions are discarded with a warning instead of aborting
    the analysis.

    Args:
        patterns: Raw regex strings or already compiled patterns.

    Returns:
        List[re.Pattern[str]]: Compiled regex objects, order preserved.
    """
    compiled: List[re.Pattern[str]] = []
    for p in patterns:
        if isinstance(p, re.Pattern):
            compiled.append(p)
            continue
        try:
            compiled.append(re.compile(p))
        except re.error as e:
            logger.warning(f"Ignoring invalid exclude pattern '{p}': {e}")
    return compiled


class PathResolver:
    """
    Strategy-ordered resolver of import specifiers.

    Attributes:
        root_dir: Project root used for aliases and project-absolute imports.
        extensions: Extension priority for the fallback lookup.
        exclude_patterns: Compiled exclusion rules.
        aliases: Prefix substitution table, checked in insertion order.
        include_external: Whether third-party packages are looked up.
    """

    def __init__(
            self,
            root_dir: str,
            extensions: Optional[Sequence[str]] = None,
            exclude_patterns: Optional[Iterable[PatternLike]] = None,
            aliases: Optional[Dict[str, str]] = None,
            include_external: bool = False,
            host_resolver: Optional[HostModuleResolver] = None,
    ) -> None:
        self.root_dir = os.path.abspath(root_dir)
        self.extensions: List[str] = list(DEFAULT_EXTENSIONS if extensions is None else extensions)
        self.exclude_patterns = compile_patterns(
            DEFAULT_EXCLUDE_PATTERNS if exclude_patterns is None else exclude_patterns
        )
        self.aliases: Dict[str, str] = dict(DEFAULT_ALIASES if aliases is None else aliases)
        self.include_external = include_external
        self.host_resolver = host_resolver or HostModuleResolver()

    # -------------------------------------------------------------------------
    # PUBLIC API
    # -------------------------------------------------------------------------

    def resolve(self, specifier: str, origin_path: str) -> Optional[str]:
        """
        Resolve one specifier found in origin_path.

        Args:
            specifier: Raw import specifier.
            origin_path: Absolute path of the importing file.

        Returns:
            Optional[str]: Absolute path of the imported file, or None when it
            cannot be resolved under the current configuration.
        """
        logger.debug(f'Resolving "{specifier}" from {origin_path}')

        if self.is_alias(specifier):
            resolved = self.resolve_alias(specifier)
            self._trace("Alias", resolved)
            return resolved

        if self.is_project_absolute(specifier):
            resolved = self.resolve_project_absolute(specifier)
            self._trace("Project absolute", resolved)
            return resolved

        if specifier.startswith(".") or specifier.startswith("/"):
            resolved = self.resolve_relative(specifier, origin_path)
            self._trace("Relative", resolved)
            return resolved

        if not self.include_external:
            logger.debug(f"External (skipped): {specifier}")
            return None

        resolved = self.host_resolver.resolve(specifier, os.path.dirname(origin_path))
        self._trace("External", resolved)
        return resolved

    def is_alias(self, specifier: str) -> bool:
        """Check whether the specifier starts with a configured alias key."""
        return any(specifier.startswith(alias) for alias in self.aliases)

    @staticmethod
    def is_project_absolute(specifier: str) -> bool:
        """Check whether the specifier starts with a conventional project folder."""
        return specifier.startswith(PROJECT_ABSOLUTE_PREFIXES)

    def should_exclude(self, file_path: str) -> bool:
        """
        Check a candidate path against the exclusion rules.

        A matching path is treated as nonexistent regardless of disk state.
        """
        candidate = to_posix(file_path)
        return any(rx.search(candidate) for rx in self.exclude_patterns)

    # -------------------------------------------------------------------------
    # STRATEGIES
    # -------------------------------------------------------------------------

    def resolve_alias(self, specifier: str) -> Optional[str]:
        """Substitute the first matching alias prefix and resolve the result."""
        for alias, target in self.aliases.items():
            if not specifier.startswith(alias):
                continue

            if target.startswith(BUILTIN_ALIAS_TARGETS):
                if not self.include_external:
                    return None
                return self.host_resolver.resolve(target, self.root_dir)

            remainder = specifier[len(alias):]
            full_path = os.path.normpath(os.path.join(self.root_dir, target + remainder))
            logger.debug(f"Alias: {alias} -> {target}, full path: {full_path}")
            return self.try_resolve_with_extensions(full_path)
        return None

    def resolve_project_absolute(self, specifier: str) -> Optional[str]:
        """Try the specifier against each candidate base, in priority order."""
        for base in self.candidate_bases():
            if not os.path.exists(base):
                logger.debug(f"Base doesn't exist: {base}")
                continue

            full_path = os.path.normpath(os.path.join(base, specifier))
            resolved = self.try_resolve_with_extensions(full_path)
            if resolved:
                logger.debug(f"Found in base: {base} -> {resolved}")
                return resolved

        return None

    def candidate_bases(self) -> List[str]:
        """
        List the bases tried for project-absolute imports.

        Order: root, root/app, root/src, parent of root, parent/app.
        """
        parent = os.path.dirname(self.root_dir)
        bases = [
            self.root_dir,
            os.path.join(self.root_dir, "app"),
            os.path.join(self.root_dir, "src"),
            parent,
            os.path.join(parent, "app"),
        ]
        # A filesystem root is its own parent
        return list(dict.fromkeys(bases))

    def resolve_relative(self, specifier: str, origin_path: str) -> Optional[str]:
        """Resolve against the directory of the importing file."""
        from_dir = os.path.dirname(origin_path)
        full_path = os.path.normpath(os.path.join(from_dir, specifier))
        logger.debug(f"Relative: {specifier} from {from_dir} -> {full_path}")
        return self.try_resolve_with_extensions(full_path)

    # -------------------------------------------------------------------------
    # SHARED FALLBACK
    # -------------------------------------------------------------------------

    def try_resolve_with_extensions(self, base_path: str) -> Optional[str]:
        """
        Apply exact, extension and index lookup to a candidate path.

        Args:
            base_path: Absolute candidate path without guaranteed extension.

        Returns:
            Optional[str]: First existing, non-excluded file, or None.
        """
        if os.path.isfile(base_path) and not self.should_exclude(base_path):
            return base_path

        for ext in self.extensions:
            candidate = base_path + ext
            if os.path.isfile(candidate) and not self.should_exclude(candidate):
                return candidate

        for ext in self.extensions:
            candidate = os.path.join(base_path, f"index{ext}")
            if os.path.isfile(candidate) and not self.should_exclude(candidate):
                return candidate

        logger.debug(f"Could not resolve: {base_path} (tried {', '.join(self.extensions)})")
        return None

    @staticmethod
    def _trace(strategy: str, resolved: Optional[str]) -> None:
        logger.debug(f"{strategy}: {resolved or 'Not found'}")
