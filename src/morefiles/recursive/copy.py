"""Per-node actions copying a directory tree during a tree walk."""

import logging
from pathlib import Path
from typing import Optional

from morefiles.backend import FileSystemBackend
from morefiles.file_tree.file_system_node import FileSystemNode
from morefiles.file_tree.visit_result import VisitResult
from morefiles.file_tree.walker import walk_file_tree
from morefiles.recursive.failure_policy import FailurePolicy

logger = logging.getLogger(__name__)


def copy_tree(source: Path, destination: Path, policy: FailurePolicy, backend: FileSystemBackend) -> None:
    """Mirror the tree at ``source`` to ``destination``, which must not exist yet.

    A directory is created when it is entered, so it exists before any of its entries
    is copied into it, and receives the source directory's attributes when it is left.
    Files are copied with their content and attributes; symbolic links are copied as
    links. A directory that cannot be created is not descended into.

    Args:
        source: Root of the tree to copy.
        destination: Path the root is copied to.
        policy: What to do with the failure of a single node.
        backend: Performs the single-node operations.

    Raises:
        OSError: The first failure, when ``policy`` propagates failures.
    """

    def target_of(node: FileSystemNode) -> Path:
        return destination.joinpath(*node.relative_parts)

    def enter_directory(path: Path, node: FileSystemNode) -> Optional[VisitResult]:
        target = target_of(node)
        if not policy.attempt(path, backend.copy_directory, path, target):
            return VisitResult.SKIP_SUBTREE
        logger.debug("Created directory %s", target)
        return None

    def copy_file(path: Path, node: FileSystemNode) -> None:
        target = target_of(node)
        if policy.attempt(path, backend.copy_file, path, target):
            logger.debug("Copied %s to %s", path, target)

    def leave_directory(path: Path, node: FileSystemNode) -> None:
        policy.attempt(path, backend.copy_attributes, path, target_of(node))

    walk_file_tree(
        source,
        on_enter_directory=enter_directory,
        on_file=copy_file,
        on_leave_directory=leave_directory,
        on_failed=policy.record,
    )
