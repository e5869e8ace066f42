"""POSIX permission set model and its octal and string conversions."""

from enum import Enum
from typing import Any, Iterable, Iterator

from morefiles.exceptions import InvalidModeValueError


class Permission(Enum):
    """One of the nine POSIX permission bits.

    Members are declared in canonical order (owner, group, others; read, write,
    execute). The value of each member is its bit in an octal mode, so the member at
    canonical index ``k`` holds bit ``8 - k``.
    """

    OWNER_READ = 0o400
    OWNER_WRITE = 0o200
    OWNER_EXECUTE = 0o100
    GROUP_READ = 0o040
    GROUP_WRITE = 0o020
    GROUP_EXECUTE = 0o010
    OTHERS_READ = 0o004
    OTHERS_WRITE = 0o002
    OTHERS_EXECUTE = 0o001


# Canonical ordering, used for iteration and for the "rwxr-x---" form
PERMISSIONS = tuple(Permission)

_LETTERS = "rwx" * 3


class PermissionSet:
    """Immutable set of POSIX permission bits.

    Iteration always follows canonical order regardless of how the set was built.
    Instances are hashable and compare equal when they hold the same bits.

    Example:
        >>> perms = PermissionSet.from_octal(0o750)
        >>> str(perms)
        'rwxr-x---'
        >>> Permission.GROUP_WRITE in perms
        False
        >>> oct(perms.to_octal())
        '0o750'
    """

    __slots__ = ("_bits",)

    def __init__(self, permissions: Iterable[Permission] = ()) -> None:
        bits = 0
        for permission in permissions:
            if not isinstance(permission, Permission):
                raise TypeError(f"Expected a Permission, got {permission!r}")
            bits |= permission.value
        self._bits = bits

    @classmethod
    def from_octal(cls, mode: int) -> "PermissionSet":
        """Build a permission set from an octal mode.

        Args:
            mode: Integer between ``0o000`` and ``0o777``.

        Returns:
            The permission set whose bits are set in ``mode``.

        Raises:
            InvalidModeValueError: If ``mode`` is not an integer in range.
        """
        if isinstance(mode, bool) or not isinstance(mode, int) or not 0 <= mode <= 0o777:
            raise InvalidModeValueError(mode)
        return cls(permission for permission in PERMISSIONS if mode & permission.value)

    @classmethod
    def from_string(cls, perms: str) -> "PermissionSet":
        """Build a permission set from its nine-character form, e.g. ``rwxr-x---``.

        Raises:
            InvalidModeValueError: If ``perms`` is not exactly nine characters where each
                position holds its canonical letter or ``-``.
        """
        if not isinstance(perms, str) or len(perms) != 9:
            raise InvalidModeValueError(perms, "expected nine characters such as 'rwxr-x---'")
        granted = []
        for permission, letter, char in zip(PERMISSIONS, _LETTERS, perms):
            if char == letter:
                granted.append(permission)
            elif char != "-":
                raise InvalidModeValueError(perms, f"unexpected {char!r} where {letter!r} or '-' was expected")
        return cls(granted)

    def to_octal(self) -> int:
        """Return the octal mode holding exactly the bits of this set."""
        return self._bits

    def __contains__(self, item: Any) -> bool:
        return isinstance(item, Permission) and bool(self._bits & item.value)

    def __iter__(self) -> Iterator[Permission]:
        return (permission for permission in PERMISSIONS if self._bits & permission.value)

    def __len__(self) -> int:
        return bin(self._bits).count("1")

    def __bool__(self) -> bool:
        return self._bits != 0

    def __or__(self, other: "PermissionSet") -> "PermissionSet":
        if not isinstance(other, PermissionSet):
            return NotImplemented
        return PermissionSet.from_octal(self._bits | other._bits)

    def __sub__(self, other: "PermissionSet") -> "PermissionSet":
        if not isinstance(other, PermissionSet):
            return NotImplemented
        return PermissionSet.from_octal(self._bits & ~other._bits)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, PermissionSet):
            return False
        return self._bits == other._bits

    def __hash__(self) -> int:
        return hash(self._bits)

    def __str__(self) -> str:
        return "".join(letter if permission in self else "-" for permission, letter in zip(PERMISSIONS, _LETTERS))

    def __repr__(self) -> str:
        return f"PermissionSet('{self}')"
