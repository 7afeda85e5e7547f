from __future__ import annotations

"""
Domain Exception Hierarchy.

Only structural failures are raised. Unreadable dependencies and unresolved
specifiers degrade to annotated nodes and summary sets instead.
"""


class DepTreeError(Exception):
    """Base class for all dependency extraction failures."""


class StructuralError(DepTreeError):
    """The traversal cannot start; nothing is returned."""


class RootFileNotFoundError(StructuralError):
    """
    Raised when the traversal root file does not exist.

    Attributes:
        path: Absolute path that was requested as root.
    """

    def __init__(self, path: str) -> None:
        super().__init__(f"Root file not found: {path}")
        self.path = path
