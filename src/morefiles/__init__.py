"""Recursive file operations and POSIX permission utilities.

This package complements the standard library's file API with recursive copy
and deletion of directory trees under a selectable failure policy, and with
parsing and rendering of POSIX permission sets in octal, ``rwxr-x---`` and
symbolic (``u+rwx,g-w``) notations.
"""

from importlib.metadata import PackageNotFoundError, version

from morefiles.copy_option import CopyOption
from morefiles.exceptions import (
    DestinationExistsError,
    FileSystemLoopError,
    InvalidModeInstructionError,
    InvalidModeValueError,
    NodeFailure,
    RecursiveCopyError,
    RecursiveDeletionError,
    RecursiveOperationError,
    UnsupportedConfigurationError,
    UnsupportedModeInstructionError,
)
from morefiles.files import (
    copy_recursive,
    create_directories,
    create_directory,
    create_file,
    delete_recursive,
    get_permissions,
    set_permissions,
    set_times,
    touch,
)
from morefiles.posix.permission_set import Permission, PermissionSet
from morefiles.recursion_mode import RecursionMode

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("morefiles")
except PackageNotFoundError:
    __version__ = "unknown"

__all__ = [
    "CopyOption",
    "DestinationExistsError",
    "FileSystemLoopError",
    "InvalidModeInstructionError",
    "InvalidModeValueError",
    "NodeFailure",
    "Permission",
    "PermissionSet",
    "RecursionMode",
    "RecursiveCopyError",
    "RecursiveDeletionError",
    "RecursiveOperationError",
    "UnsupportedConfigurationError",
    "UnsupportedModeInstructionError",
    "copy_recursive",
    "create_directories",
    "create_directory",
    "create_file",
    "delete_recursive",
    "get_permissions",
    "set_permissions",
    "set_times",
    "touch",
]
