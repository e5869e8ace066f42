import os
import shutil
import stat
from pathlib import Path
from typing import Protocol

from morefiles.posix.permission_set import PermissionSet


### File System Backend

# Performs the single-node file operations recursive copy, deletion and the permission
# wrappers are made of. Defined as a protocol so that it can be faked out for testing.
class FileSystemBackend(Protocol):
    def exists(self, path: Path, follow_symlinks: bool = True) -> bool:
        """Checks if a file system item exists, optionally without following a final symlink"""

    def is_directory(self, path: Path, follow_symlinks: bool = True) -> bool:
        """Checks if a path is a directory, optionally without following a final symlink"""

    def get_permissions(self, path: Path) -> PermissionSet:
        """Reads the permission bits of a path"""

    def set_permissions(self, path: Path, permissions: PermissionSet) -> None:
        """Replaces the permission bits of a path"""

    def create_file(self, path: Path) -> None:
        """Creates an empty file, failing if anything exists at the path"""

    def create_directory(self, path: Path) -> None:
        """Creates a single directory whose parent must exist"""

    def create_directories(self, path: Path) -> None:
        """Creates a directory and any missing parents"""

    def copy_file(self, source: Path, target: Path) -> None:
        """Copies a non-directory (content and attributes, links as links) to a new path"""

    def copy_directory(self, source: Path, target: Path) -> None:
        """Creates the empty counterpart of a source directory"""

    def copy_attributes(self, source: Path, target: Path) -> None:
        """Copies permission bits and timestamps from one path to another"""

    def delete_file(self, path: Path) -> None:
        """Removes a non-directory, never following a symlink"""

    def delete_directory(self, path: Path) -> None:
        """Removes an empty directory"""

    def set_times(self, path: Path, timestamp: float) -> None:
        """Sets access and modification times of a path without following a symlink"""


class PosixBackend:
    def exists(self, path: Path, follow_symlinks: bool = True) -> bool:
        return os.path.exists(path) if follow_symlinks else os.path.lexists(path)

    def is_directory(self, path: Path, follow_symlinks: bool = True) -> bool:
        try:
            mode = os.stat(path, follow_symlinks=follow_symlinks).st_mode
        except OSError:
            return False
        return stat.S_ISDIR(mode)

    def get_permissions(self, path: Path) -> PermissionSet:
        return PermissionSet.from_octal(stat.S_IMODE(os.stat(path).st_mode) & 0o777)

    def set_permissions(self, path: Path, permissions: PermissionSet) -> None:
        os.chmod(path, permissions.to_octal())

    def create_file(self, path: Path) -> None:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o666)
        os.close(fd)

    def create_directory(self, path: Path) -> None:
        os.mkdir(path)

    def create_directories(self, path: Path) -> None:
        os.makedirs(path, exist_ok=True)

    def copy_file(self, source: Path, target: Path) -> None:
        shutil.copy2(source, target, follow_symlinks=False)

    def copy_directory(self, source: Path, target: Path) -> None:
        os.mkdir(target)

    def copy_attributes(self, source: Path, target: Path) -> None:
        shutil.copystat(source, target, follow_symlinks=False)

    def delete_file(self, path: Path) -> None:
        os.unlink(path)

    def delete_directory(self, path: Path) -> None:
        os.rmdir(path)

    def set_times(self, path: Path, timestamp: float) -> None:
        # Without lutimes support only the target of a link can be updated
        follow = os.utime not in os.supports_follow_symlinks
        os.utime(path, (timestamp, timestamp), follow_symlinks=follow)
