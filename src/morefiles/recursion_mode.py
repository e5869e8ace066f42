"""Recursion mode enum selecting the failure policy of recursive operations."""

from enum import Enum


class RecursionMode(str, Enum):
    """Policy to apply when a single node fails during a recursive copy or deletion.

    Values:
        FAIL_FAST: Abort the whole operation on the first failure and propagate it unchanged
        KEEP_GOING: Record the failure, continue with the remaining nodes and raise every
            recorded failure as one aggregate error at the end
    """

    FAIL_FAST = "fail_fast"
    KEEP_GOING = "keep_going"
