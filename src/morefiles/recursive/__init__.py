"""Recursive copy and deletion over the tree walker, with pluggable failure policies."""

from .copy import copy_tree
from .deletion import delete_tree
from .failure_policy import FailFastPolicy, FailurePolicy, KeepGoingPolicy, policy_for

__all__ = [
    "FailFastPolicy",
    "FailurePolicy",
    "KeepGoingPolicy",
    "copy_tree",
    "delete_tree",
    "policy_for",
]
