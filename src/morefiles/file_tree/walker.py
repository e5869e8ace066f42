"""Callback-driven depth-first walk of a directory tree.

The walker owns traversal order and symbolic link handling. Callers supply what to do
at each node through callbacks, so recursive copy and deletion differ only in the
callbacks they pass.
"""

import os
import stat
from pathlib import Path
from typing import Callable, Optional

from morefiles.exceptions import FileSystemLoopError
from morefiles.file_tree.file_identifier import FileIdentifier
from morefiles.file_tree.file_system_node import FileSystemNode
from morefiles.file_tree.visit_result import VisitResult
from morefiles.types import PathType

NodeCallback = Callable[[Path, FileSystemNode], Optional[VisitResult]]
FailureCallback = Callable[[Path, OSError], Optional[VisitResult]]


def _read_attributes(path: Path, follow_symlinks: bool) -> os.stat_result:
    if follow_symlinks:
        try:
            return os.stat(path)
        except FileNotFoundError:
            # Dangling link: visit the link itself
            return os.lstat(path)
    return os.lstat(path)


def _outcome(result: Optional[VisitResult]) -> VisitResult:
    return VisitResult.CONTINUE if result is None else result


def walk_file_tree(
    root: PathType,
    *,
    on_enter_directory: Optional[NodeCallback] = None,
    on_file: Optional[NodeCallback] = None,
    on_leave_directory: Optional[NodeCallback] = None,
    on_failed: Optional[FailureCallback] = None,
    follow_symlinks: bool = False,
) -> VisitResult:
    """Walk the tree rooted at ``root``, invoking the callbacks at each node.

    Directories are walked depth first and their entries are visited in sorted name
    order, so two walks of an unchanged tree produce the same sequence of callbacks.
    ``root`` itself is visited too; if it is not a directory, the walk is a single
    ``on_file`` call.

    Callbacks:
        on_enter_directory(path, node): Before the entries of a directory.
            Returning SKIP_SUBTREE skips both the entries and ``on_leave_directory``.
        on_file(path, node): For every node that is not walked as a directory. Unless
            ``follow_symlinks`` is set, this includes links to directories.
        on_leave_directory(path, node): After every entry of a directory was visited.
        on_failed(path, error): When the attributes of a node cannot be read, when a
            directory cannot be listed (its ``on_leave_directory`` is then not called)
            or when a loop is detected. Without this callback the error is raised.

    Any callback may return a VisitResult, None meaning CONTINUE. Returning TERMINATE
    stops the walk. An exception raised by a callback propagates out of the walk.

    Args:
        root: Where to start walking.
        on_enter_directory: Callback run on entering a directory.
        on_file: Callback run on a non-directory node.
        on_leave_directory: Callback run on leaving a directory.
        on_failed: Callback run for nodes that could not be visited.
        follow_symlinks: Walk into the targets of symbolic links. A directory reached
            again below itself is then reported to ``on_failed`` as a
            FileSystemLoopError instead of being walked.

    Returns:
        TERMINATE if a callback ended the walk early, CONTINUE otherwise.

    Example:
        >>> files = []
        >>> walk_file_tree("src", on_file=lambda path, node: files.append(path))  # doctest: +SKIP
        <VisitResult.CONTINUE: 'continue'>
    """

    def failed(path: Path, error: OSError) -> VisitResult:
        if on_failed is None:
            raise error
        return _outcome(on_failed(path, error))

    def call(callback: Optional[NodeCallback], path: Path, node: FileSystemNode) -> VisitResult:
        if callback is None:
            return VisitResult.CONTINUE
        return _outcome(callback(path, node))

    def visit(path: Path, parent: Optional[FileSystemNode]) -> VisitResult:
        try:
            stat_result = _read_attributes(path, follow_symlinks)
        except OSError as e:
            return failed(path, e)

        is_dir = stat.S_ISDIR(stat_result.st_mode)
        node = FileSystemNode(
            path.name,
            parent=parent,
            is_dir=is_dir,
            is_symlink=stat.S_ISLNK(stat_result.st_mode),
            file_id=FileIdentifier.from_stat(stat_result),
        )

        try:
            if not is_dir:
                return call(on_file, path, node)

            if follow_symlinks and node.revisits_ancestor():
                return failed(path, FileSystemLoopError(str(path)))

            result = call(on_enter_directory, path, node)
            if result is not VisitResult.CONTINUE:
                return result

            try:
                entries = sorted(os.listdir(path))
            except OSError as e:
                return failed(path, e)

            for entry in entries:
                if visit(path / entry, node) is VisitResult.TERMINATE:
                    return VisitResult.TERMINATE

            return call(on_leave_directory, path, node)
        finally:
            # Only the branch being walked stays attached
            node.parent = None

    if visit(Path(root), None) is VisitResult.TERMINATE:
        return VisitResult.TERMINATE
    return VisitResult.CONTINUE
