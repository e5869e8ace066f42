"""POSIX permission sets and the symbolic mode grammar.

This package models the nine POSIX permission bits and converts them to and from
octal integers, ``rwxr-x---`` strings and symbolic instructions such as ``u+rwx,g-w``.
"""

from .mode_parser import parse, parse_one
from .modes import resolve_mode
from .permission_set import PERMISSIONS, Permission, PermissionSet

__all__ = [
    "PERMISSIONS",
    "Permission",
    "PermissionSet",
    "parse",
    "parse_one",
    "resolve_mode",
]
