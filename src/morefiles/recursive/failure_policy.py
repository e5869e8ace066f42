"""Failure policies deciding what a recursive operation does with a failed node."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, List

from morefiles.exceptions import NodeFailure
from morefiles.recursion_mode import RecursionMode

logger = logging.getLogger(__name__)


class FailurePolicy(ABC):
    """Sink for the errors raised while acting on single nodes of a tree walk."""

    @abstractmethod
    def record(self, path: Path, error: OSError) -> None:
        """Handle the failure of the node at ``path``.

        Args:
            path: Node that failed.
            error: What the node failed with.

        Raises:
            OSError: When the policy aborts the walk.
        """
        pass

    def attempt(self, path: Path, action: Callable[..., None], *args: Any) -> bool:
        """Run a single-node action, handing an OSError it raises to :meth:`record`.

        Args:
            path: Node the action works on, used to attribute a failure.
            action: Callable performing the action.
            *args: Arguments for ``action``.

        Returns:
            True if the action succeeded, False if its failure was recorded.
        """
        try:
            action(*args)
        except OSError as e:
            self.record(path, e)
            return False
        return True

    @property
    def failures(self) -> List[NodeFailure]:
        """Failures recorded so far, in the order they were encountered."""
        return []


class FailFastPolicy(FailurePolicy):
    """Propagate the first failure unchanged, which ends the walk."""

    def record(self, path: Path, error: OSError) -> None:
        raise error


class KeepGoingPolicy(FailurePolicy):
    """Record every failure and let the walk go on."""

    def __init__(self) -> None:
        self._failures: List[NodeFailure] = []

    def record(self, path: Path, error: OSError) -> None:
        logger.info("Recorded failure of %s: %s", path, error)
        self._failures.append(NodeFailure(path, error))

    @property
    def failures(self) -> List[NodeFailure]:
        return list(self._failures)


def policy_for(mode: RecursionMode) -> FailurePolicy:
    """Create the failure policy implementing a recursion mode.

    Raises:
        TypeError: If ``mode`` is not a RecursionMode.
    """
    if not isinstance(mode, RecursionMode):
        raise TypeError(f"Expected a RecursionMode, got {mode!r}")
    if mode is RecursionMode.FAIL_FAST:
        return FailFastPolicy()
    return KeepGoingPolicy()
