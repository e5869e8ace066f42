"""Parser for symbolic permission instructions such as ``u+rwx,g-w``.

A mode string is a comma-separated list of instructions. Each instruction has the form
``<who><op><what>``: ``who`` is zero or more of ``u``, ``g`` and ``o`` (empty meaning
all three), ``op`` is ``+`` or ``-`` and ``what`` is one or more of ``r``, ``w`` and
``x``. Parsing produces two permission sets, the bits to add and the bits to remove.
Applying them to a base set is left to the caller.
"""

from typing import Dict, Set, Tuple

from morefiles.exceptions import InvalidModeInstructionError, UnsupportedModeInstructionError
from morefiles.posix.permission_set import PERMISSIONS, Permission, PermissionSet

# Offset of each "who" in the canonical ordering, and of each "what" within a "who"
_WHO_OFFSETS: Dict[str, int] = {"u": 0, "g": 3, "o": 6}
_WHAT_OFFSETS: Dict[str, int] = {"r": 0, "w": 1, "x": 2}

_ALL_WHO = "ugo"


def parse_one(instruction: str) -> Tuple[str, Set[Permission]]:
    """Parse a single instruction.

    Args:
        instruction: One instruction, e.g. ``"go-w"``.

    Returns:
        The operator (``"+"`` or ``"-"``) and the permissions it applies to.

    Raises:
        InvalidModeInstructionError: If the instruction is malformed.
        UnsupportedModeInstructionError: If the instruction uses the ``X`` qualifier.

    Example:
        >>> op, perms = parse_one("u+x")
        >>> op, sorted(p.name for p in perms)
        ('+', ['OWNER_EXECUTE'])
    """
    plus = instruction.find("+")
    minus = instruction.find("-")

    # Exactly one operator
    if (plus < 0) == (minus < 0):
        raise InvalidModeInstructionError(instruction)

    index = plus if plus >= 0 else minus
    op = instruction[index]
    who = instruction[:index] or _ALL_WHO
    what = instruction[index + 1 :]

    if not what:
        raise InvalidModeInstructionError(instruction)

    if any(who_char not in _WHO_OFFSETS for who_char in who):
        raise InvalidModeInstructionError(instruction)
    for what_char in what:
        if what_char == "X":
            raise UnsupportedModeInstructionError(instruction)
        if what_char not in _WHAT_OFFSETS:
            raise InvalidModeInstructionError(instruction)

    permissions = {
        PERMISSIONS[_WHO_OFFSETS[who_char] + _WHAT_OFFSETS[what_char]] for who_char in who for what_char in what
    }
    return op, permissions


def parse(spec: str) -> Tuple[PermissionSet, PermissionSet]:
    """Parse a symbolic mode string into the permissions to add and to remove.

    Instructions accumulate: a later instruction never resets what an earlier one set.
    Whitespace is not trimmed.

    Args:
        spec: Comma-separated instructions. The empty string is valid and changes nothing.

    Returns:
        A ``(to_add, to_remove)`` tuple of permission sets.

    Raises:
        InvalidModeInstructionError: If any instruction is malformed.
        UnsupportedModeInstructionError: If any instruction uses the ``X`` qualifier.

    Example:
        >>> to_add, to_remove = parse("u+rwx,go-w")
        >>> str(to_add), str(to_remove)
        ('rwx------', '----w--w-')
    """
    to_add: Set[Permission] = set()
    to_remove: Set[Permission] = set()

    if spec:
        for instruction in spec.split(","):
            op, permissions = parse_one(instruction)
            (to_add if op == "+" else to_remove).update(permissions)

    return PermissionSet(to_add), PermissionSet(to_remove)
