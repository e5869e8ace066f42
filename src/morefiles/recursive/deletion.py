"""Per-node actions deleting a directory tree during a tree walk."""

import logging
from pathlib import Path

from morefiles.backend import FileSystemBackend
from morefiles.file_tree.file_system_node import FileSystemNode
from morefiles.file_tree.walker import walk_file_tree
from morefiles.recursive.failure_policy import FailurePolicy

logger = logging.getLogger(__name__)


def delete_tree(root: Path, policy: FailurePolicy, backend: FileSystemBackend) -> None:
    """Delete the tree at ``root`` in post-order.

    Files and symbolic links are removed when visited and directories when left, so a
    directory is only removed once all of its entries were dealt with. A directory is
    attempted even if some of its entries survived; it then fails as not empty, which
    records exactly which directories remain.

    Args:
        root: Root of the tree to delete.
        policy: What to do with the failure of a single node.
        backend: Performs the single-node operations.

    Raises:
        OSError: The first failure, when ``policy`` propagates failures.
    """

    def delete_file(path: Path, node: FileSystemNode) -> None:
        if policy.attempt(path, backend.delete_file, path):
            logger.debug("Deleted %s", path)

    def delete_directory(path: Path, node: FileSystemNode) -> None:
        if policy.attempt(path, backend.delete_directory, path):
            logger.debug("Deleted directory %s", path)

    walk_file_tree(
        root,
        on_file=delete_file,
        on_leave_directory=delete_directory,
        on_failed=policy.record,
    )
