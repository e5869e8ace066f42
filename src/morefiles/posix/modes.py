"""Resolution of permission arguments given as an integer or a string."""

import re
from typing import Callable

from morefiles.exceptions import InvalidModeValueError
from morefiles.posix.mode_parser import parse
from morefiles.posix.permission_set import PermissionSet
from morefiles.types import ModeType

_PERMISSION_STRING = re.compile(r"[r-][w-][x-][r-][w-][x-][r-][w-][x-]")


def resolve_mode(mode: ModeType, base: Callable[[], PermissionSet] = PermissionSet) -> PermissionSet:
    """Turn a permission argument into a permission set.

    An integer is read as an octal mode and a nine-character string as the
    ``rwxr-x---`` form; both describe the whole set. Any other string is parsed as
    symbolic instructions whose additions and then removals are applied to the
    permissions returned by ``base``. A string of the nine-character form is always
    read as that form, even when it is also valid as an instruction: ``"-wxrwxrwx"``
    means 0o377, not the removal of every permission.

    Args:
        mode: Octal integer, permission string or symbolic instructions.
        base: Called, only for symbolic instructions and only once they parsed, to get
            the permissions they apply to. Defaults to no permissions.

    Returns:
        The resulting permission set.

    Raises:
        InvalidModeValueError: If an integer is out of range or ``mode`` has another type.
        InvalidModeInstructionError: If symbolic instructions are malformed.
        UnsupportedModeInstructionError: If symbolic instructions use the ``X`` qualifier.

    Example:
        >>> str(resolve_mode("g+w,o-r", lambda: PermissionSet.from_octal(0o644)))
        'rw-rw----'
        >>> str(resolve_mode(0o751))
        'rwxr-x--x'
    """
    if isinstance(mode, str):
        if _PERMISSION_STRING.fullmatch(mode):
            return PermissionSet.from_string(mode)
        to_add, to_remove = parse(mode)
        return (base() | to_add) - to_remove
    if isinstance(mode, int):
        return PermissionSet.from_octal(mode)
    raise InvalidModeValueError(mode, "expected an octal integer or a permission string")
