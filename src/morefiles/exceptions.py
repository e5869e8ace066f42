import errno
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence


class InvalidModeValueError(ValueError):
    """
    Exception raised when a permission value cannot represent a POSIX permission set.

    This covers octal integers outside the range ``0o000``-``0o777`` and permission
    strings that are not nine characters of the ``rwxr-x---`` form.

    Attributes:
        value: The rejected value.

    Example:
        >>> error = InvalidModeValueError(0o1000)
        >>> str(error)
        'Invalid permission mode: 512 (expected an integer between 0o000 and 0o777)'
    """

    def __init__(self, value: object, reason: str = "expected an integer between 0o000 and 0o777") -> None:
        self.value = value
        super().__init__(f"Invalid permission mode: {value!r} ({reason})")


class InvalidModeInstructionError(ValueError):
    """
    Exception raised when a symbolic mode instruction is malformed.

    An instruction is malformed when it carries no operator or both operators, has an
    empty permission part, or contains a character outside ``ugo`` / ``rwx``.

    Attributes:
        instruction (str): The offending instruction, not the whole mode string.

    Example:
        >>> error = InvalidModeInstructionError("z+r")
        >>> str(error)
        "Invalid mode instruction: 'z+r'"
    """

    def __init__(self, instruction: str) -> None:
        self.instruction = instruction
        super().__init__(f"Invalid mode instruction: {instruction!r}")


class UnsupportedModeInstructionError(NotImplementedError):
    """
    Exception raised when a symbolic mode instruction uses the ``X`` qualifier.

    The qualifier is part of the grammar but is not implemented. It is reported
    separately from malformed instructions so that callers can tell the two apart.

    Attributes:
        instruction (str): The offending instruction.
    """

    def __init__(self, instruction: str) -> None:
        self.instruction = instruction
        super().__init__(f"Unsupported mode instruction (X is not implemented): {instruction!r}")


class UnsupportedConfigurationError(ValueError):
    """Exception raised when a recursive copy is given more than one copy option."""

    pass


class DestinationExistsError(FileExistsError):
    """
    Exception raised when a copy destination exists and replacing it was not requested.

    Example:
        >>> error = DestinationExistsError("/tmp/target")
        >>> error.filename
        '/tmp/target'
    """

    def __init__(self, destination: str) -> None:
        super().__init__(errno.EEXIST, "Destination already exists", destination)


class FileSystemLoopError(OSError):
    """Exception raised when following symbolic links leads back into a directory being walked."""

    def __init__(self, path: str) -> None:
        super().__init__(errno.ELOOP, "File system loop detected", path)


@dataclass(frozen=True)
class NodeFailure:
    """A single failed node of a recursive operation.

    Attributes:
        path: Path of the node that could not be copied or deleted.
        error: The error raised by the operation on that node.
    """

    path: Path
    error: OSError

    def __str__(self) -> str:
        return f"{self.path}: {self.error}"


class RecursiveOperationError(OSError):
    """
    Aggregate of the node failures recorded by a KEEP_GOING recursive operation.

    The failures are kept in the order they were encountered during the walk. The
    error is only raised when at least one failure was recorded.

    Attributes:
        root (Optional[Path]): Root of the operation.
        failures (List[NodeFailure]): Every recorded failure, in encounter order.
    """

    operation = "recursive operation"

    def __init__(self, failures: Sequence[NodeFailure], root: Optional[Path] = None) -> None:
        self.root = root
        self.failures: List[NodeFailure] = list(failures)
        count = len(self.failures)
        target = f" of {root}" if root is not None else ""
        message = f"{count} failure{'s' if count != 1 else ''} during {self.operation}{target}"
        super().__init__(message)

    @property
    def paths(self) -> List[Path]:
        """Paths of the failed nodes, in encounter order."""
        return [failure.path for failure in self.failures]

    def __str__(self) -> str:
        lines = [str(self.args[0])]
        lines.extend(f"  {failure}" for failure in self.failures)
        return "\n".join(lines)


class RecursiveCopyError(RecursiveOperationError):
    """Aggregate error raised by a KEEP_GOING recursive copy."""

    operation = "recursive copy"


class RecursiveDeletionError(RecursiveOperationError):
    """Aggregate error raised by a KEEP_GOING recursive deletion."""

    operation = "recursive deletion"
