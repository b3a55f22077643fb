"""Free-function interface over tree handles.

Every function accepts ``Optional`` tree handles so callers that keep a tree
reference which may not have been created yet get a recoverable
``TreeUnavailableError`` instead of an ``AttributeError``.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from .binary_search_tree import BinarySearchTree, BSTNode, InsertResult, OrderedTree
from .errors import TreeUnavailableError

__all__ = [
    "insert",
    "find",
    "delete",
    "traverse",
    "count",
    "height",
    "balanced",
]

TreeHandle = Optional[OrderedTree[Any]]


def _require(tree: TreeHandle) -> OrderedTree[Any]:
    if tree is None:
        raise TreeUnavailableError("tree is not available")
    return tree


def insert(tree: TreeHandle, value: Any) -> InsertResult:
    """Insert *value* into *tree*; see :meth:`OrderedTree.insert`."""

    return _require(tree).insert(value)


def find(tree: TreeHandle, value: Any) -> Optional[BSTNode[Any]]:
    return _require(tree).find(value)


def delete(tree: TreeHandle, value: Any) -> bool:
    """Delete *value* from a plain binary search tree.

    Raises ``TypeError`` for tree variants that do not support deletion.
    """

    target = _require(tree)
    if not isinstance(target, BinarySearchTree):
        raise TypeError(f"{type(target).__name__} does not support deletion")
    return target.delete(value)


def traverse(tree: TreeHandle, visitor: Callable[[BSTNode[Any]], None]) -> None:
    """Call *visitor* on every node of *tree* in ascending value order."""

    for node in _require(tree).traverse():
        visitor(node)


def count(tree: TreeHandle) -> int:
    return _require(tree).count


def height(tree: TreeHandle) -> int:
    return _require(tree).height()


def balanced(tree: TreeHandle) -> bool:
    return _require(tree).balanced()
