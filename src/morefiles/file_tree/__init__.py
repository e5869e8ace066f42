"""Callback-driven directory tree walking.

This package provides the tree walk that recursive copy and deletion are built on,
together with the node representation handed to its callbacks.
"""

from .file_identifier import FileIdentifier
from .file_system_node import FileSystemNode
from .visit_result import VisitResult
from .walker import walk_file_tree

__all__ = [
    "FileIdentifier",
    "FileSystemNode",
    "VisitResult",
    "walk_file_tree",
]
