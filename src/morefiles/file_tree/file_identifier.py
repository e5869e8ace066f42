"""File identifier for uniquely identifying files by device and inode."""

import os
from typing import Any


class FileIdentifier:
    """Class for uniquely identifying files and directories by their device and inode.

    The tree walker compares the identifier of each directory against those of its
    ancestors to detect loops when symbolic links are followed.

    Attributes:
        device_id (int): The device ID from stat information.
        inode_number (int): The inode number from stat information.
    """

    def __init__(self, device_id: int, inode_number: int):
        self.device_id = device_id
        self.inode_number = inode_number

    @classmethod
    def from_stat(cls, stat_result: os.stat_result) -> "FileIdentifier":
        """Build an identifier from the result of ``os.stat`` or ``os.lstat``."""
        return cls(stat_result.st_dev, stat_result.st_ino)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, FileIdentifier):
            return False
        return self.device_id == other.device_id and self.inode_number == other.inode_number

    def __hash__(self) -> int:
        return hash((self.device_id, self.inode_number))

    def __repr__(self) -> str:
        return f"FileIdentifier(device_id={self.device_id}, inode_number={self.inode_number})"
