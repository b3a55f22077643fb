"""Exception taxonomy for :mod:`ordtree`."""

from __future__ import annotations

__all__ = [
    "OrderedTreeError",
    "TreeUnavailableError",
    "TreeCorruptionError",
    "TreeRenderingError",
]


class OrderedTreeError(Exception):
    """Base class for the recoverable errors raised by :mod:`ordtree`."""


class TreeUnavailableError(OrderedTreeError, RuntimeError):
    """Raised when an operation receives an absent tree handle."""


class TreeCorruptionError(AssertionError):
    """Raised when an internal structural or color invariant is broken.

    This is never a recoverable condition: it means an earlier edit already
    left the tree in a state the algorithms cannot reach on their own.  It is
    not an ``OrderedTreeError``: handlers for recoverable errors must not catch it.
    """


class TreeRenderingError(OrderedTreeError, RuntimeError):
    """Raised when a tree diagram cannot be rendered."""
