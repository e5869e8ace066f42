"""Visit result enum returned by tree walk callbacks."""

from enum import Enum


class VisitResult(str, Enum):
    """What the tree walker does after a callback returns.

    Values:
        CONTINUE: Keep walking (also what a callback returning None means)
        SKIP_SUBTREE: Do not visit the children of the directory just entered, nor leave it
        TERMINATE: Stop the walk altogether
    """

    CONTINUE = "continue"
    SKIP_SUBTREE = "skip_subtree"
    TERMINATE = "terminate"
