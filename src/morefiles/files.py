"""Recursive copy and deletion, plus permission-aware file creation.

These functions complement ``os``, ``shutil`` and ``pathlib`` with operations they do
not provide: recursive copy and deletion of a tree under a selectable failure policy,
and creation of files and directories with explicit POSIX permissions given as an
octal integer, a ``rwxr-x---`` string or symbolic instructions such as ``u+rwx,g-w``.

Every function accepts a ``backend`` performing the single-node operations; it
defaults to the local POSIX file system.

Concurrent operations on overlapping trees are not coordinated and their outcome is
undefined.
"""

import errno
import logging
import os
import time
from pathlib import Path
from typing import Optional

from morefiles.backend import FileSystemBackend, PosixBackend
from morefiles.copy_option import CopyOption
from morefiles.exceptions import (
    DestinationExistsError,
    RecursiveCopyError,
    RecursiveDeletionError,
    UnsupportedConfigurationError,
)
from morefiles.posix.modes import resolve_mode
from morefiles.posix.permission_set import PermissionSet
from morefiles.recursion_mode import RecursionMode
from morefiles.recursive.copy import copy_tree
from morefiles.recursive.deletion import delete_tree
from morefiles.recursive.failure_policy import FailFastPolicy, policy_for
from morefiles.types import ModeType, PathType

logger = logging.getLogger(__name__)


def copy_recursive(
    source: PathType,
    destination: PathType,
    mode: RecursionMode,
    *options: CopyOption,
    backend: Optional[FileSystemBackend] = None,
) -> None:
    """Copy a file or directory tree.

    Before anything is copied, the source is resolved to its real path and the
    destination made absolute. The copy never merges into an existing destination:
    unless REPLACE_EXISTING is given an existing destination is an error, and with it
    the destination is removed (recursively for a directory) first. Symbolic links
    inside the tree are copied as links.

    Under FAIL_FAST the first failure propagates as is and the destination is left
    incomplete. Under KEEP_GOING the copy continues past failures, skipping the
    subtree of a directory that could not be created, and raises every failure at once.

    Args:
        source: File or directory to copy.
        destination: Path the source is copied to.
        mode: Failure policy.
        *options: At most one copy option.
        backend: Performs the single-node operations. Defaults to PosixBackend.

    Raises:
        TypeError: If ``mode`` is not a RecursionMode.
        UnsupportedConfigurationError: If more than one option or an unknown option is
            given, if the destination lies inside the source, or if it is an ancestor
            of the source.
        FileNotFoundError: If the source does not exist.
        DestinationExistsError: If the destination exists and REPLACE_EXISTING was not given.
        RecursiveCopyError: Under KEEP_GOING, if any node failed.
        OSError: Under FAIL_FAST, the first node failure.

    Example:
        >>> copy_recursive("project", "backup", RecursionMode.KEEP_GOING)  # doctest: +SKIP
    """
    policy = policy_for(mode)

    if len(options) > 1:
        raise UnsupportedConfigurationError(f"At most one copy option is supported, got {len(options)}")
    for option in options:
        if option is not CopyOption.REPLACE_EXISTING:
            raise UnsupportedConfigurationError(f"Unsupported copy option: {option!r}")
    replace = bool(options)

    backend = backend or PosixBackend()

    # Raises FileNotFoundError if the source does not exist
    src = Path(source).resolve(strict=True)
    dst = Path(destination).absolute()

    # Only the parent is resolved, a link at the destination itself is never followed
    target = dst.parent.resolve() / dst.name
    if target == src or src in target.parents:
        raise UnsupportedConfigurationError(f"Cannot copy {src} into itself: {dst}")
    # The source lives inside an ancestor, which must never be removed
    if target in src.parents:
        raise UnsupportedConfigurationError(f"Cannot copy {src} over its ancestor {dst}")

    if backend.exists(dst, follow_symlinks=False):
        if not replace:
            raise DestinationExistsError(str(destination))
        logger.debug("Removing existing destination %s", dst)
        _remove(dst, backend)

    logger.debug("Copying %s to %s", src, dst)
    copy_tree(src, dst, policy, backend)

    failures = policy.failures
    if failures:
        raise RecursiveCopyError(failures, src)


def _remove(path: Path, backend: FileSystemBackend) -> None:
    if backend.is_directory(path, follow_symlinks=False):
        delete_tree(path, FailFastPolicy(), backend)
    else:
        backend.delete_file(path)


def delete_recursive(
    root: PathType,
    mode: RecursionMode,
    *,
    backend: Optional[FileSystemBackend] = None,
) -> None:
    """Delete a file or directory tree.

    Files are removed first and each directory once its entries were visited. Symbolic
    links are removed, never followed. Under FAIL_FAST the first failure propagates and
    the tree is left partially deleted. Under KEEP_GOING every failure is recorded,
    including the "not empty" failure of each directory in which something survived,
    and all of them are raised at once.

    Args:
        root: File or directory to delete.
        mode: Failure policy.
        backend: Performs the single-node operations. Defaults to PosixBackend.

    Raises:
        TypeError: If ``mode`` is not a RecursionMode.
        FileNotFoundError: If ``root`` does not exist.
        RecursiveDeletionError: Under KEEP_GOING, if any node failed.
        OSError: Under FAIL_FAST, the first node failure.
    """
    policy = policy_for(mode)
    backend = backend or PosixBackend()
    victim = Path(root)

    if not backend.exists(victim, follow_symlinks=False):
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(victim))

    logger.debug("Deleting %s", victim)
    delete_tree(victim, policy, backend)

    failures = policy.failures
    if failures:
        raise RecursiveDeletionError(failures, victim)


def get_permissions(path: PathType, *, backend: Optional[FileSystemBackend] = None) -> PermissionSet:
    """Read the POSIX permissions of a path."""
    backend = backend or PosixBackend()
    return backend.get_permissions(Path(path))


def set_permissions(path: PathType, mode: ModeType, *, backend: Optional[FileSystemBackend] = None) -> Path:
    """Set the POSIX permissions of a path.

    Args:
        path: File or directory to change.
        mode: Octal integer or ``rwxr-x---`` string replacing the permissions, or
            symbolic instructions applied to the current permissions.
        backend: Performs the operation. Defaults to PosixBackend.

    Returns:
        ``path`` as a Path.

    Example:
        >>> set_permissions("script.sh", "u+x")  # doctest: +SKIP
        PosixPath('script.sh')
    """
    backend = backend or PosixBackend()
    target = Path(path)
    permissions = resolve_mode(mode, lambda: backend.get_permissions(target))
    backend.set_permissions(target, permissions)
    return target


def create_file(path: PathType, mode: ModeType, *, backend: Optional[FileSystemBackend] = None) -> Path:
    """Create an empty file with the given permissions.

    Symbolic instructions apply to an empty permission set. The mode is checked before
    the file is created.

    Raises:
        FileExistsError: If something already exists at ``path``.
    """
    backend = backend or PosixBackend()
    target = Path(path)
    permissions = resolve_mode(mode)
    backend.create_file(target)
    backend.set_permissions(target, permissions)
    return target


def create_directory(path: PathType, mode: ModeType, *, backend: Optional[FileSystemBackend] = None) -> Path:
    """Create a directory with the given permissions. Its parent must exist.

    Raises:
        FileExistsError: If something already exists at ``path``.
        FileNotFoundError: If the parent directory does not exist.
    """
    backend = backend or PosixBackend()
    target = Path(path)
    permissions = resolve_mode(mode)
    backend.create_directory(target)
    backend.set_permissions(target, permissions)
    return target


def create_directories(path: PathType, mode: ModeType, *, backend: Optional[FileSystemBackend] = None) -> Path:
    """Create a directory and any missing parents, giving the new ones the given permissions.

    Only directories created by this call have their permissions set; existing
    ancestors are left alone. An existing directory at ``path`` is not an error.

    Returns:
        ``path`` as a Path.
    """
    backend = backend or PosixBackend()
    target = Path(path)
    permissions = resolve_mode(mode)

    # Deepest first, so that no directory loses its search permission before its children are set
    created = []
    current = target.absolute()
    while not backend.exists(current, follow_symlinks=False):
        created.append(current)
        current = current.parent

    backend.create_directories(target.absolute())
    for directory in created:
        backend.set_permissions(directory, permissions)
    return target


def touch(path: PathType, *, backend: Optional[FileSystemBackend] = None) -> Path:
    """Create an empty file, or set the access and modification times of an existing one to now."""
    backend = backend or PosixBackend()
    target = Path(path)
    if not backend.exists(target):
        backend.create_file(target)
    else:
        backend.set_times(target, time.time())
    return target


def set_times(path: PathType, timestamp: float, *, backend: Optional[FileSystemBackend] = None) -> Path:
    """Set the access and modification times of a path, not following a symbolic link.

    Args:
        path: Path to change.
        timestamp: Seconds since the epoch.
        backend: Performs the operation. Defaults to PosixBackend.
    """
    backend = backend or PosixBackend()
    target = Path(path)
    backend.set_times(target, timestamp)
    return target
