"""Left-leaning red-black tree (insertion only).

``RedBlackTree`` stores its values in ``RedBlackNode`` objects and rebalances
after every insertion with the ``add_fixup`` walk.  The walk keeps three
properties intact:

* the root is black,
* a red node never has a red child,
* a right child is red only when its left sibling is red too (the tree
  leans left).

Missing children count as black.  Black heights stay equal on every path
because each step is a rotation combined with a color swap, or a push of the
black color from a node down to its two red children.

Deletion is not supported by this variant.
"""

from __future__ import annotations

import enum
import logging
from typing import Any, ClassVar, Callable, List, Optional

from .binary_search_tree import BSTNode, OrderedTree, iter_inorder, iter_preorder
from .element import E
from .errors import TreeCorruptionError

logger = logging.getLogger(__name__)

__all__ = [
    "Color",
    "RedBlackNode",
    "RedBlackTree",
    "color_of",
]


class Color(enum.Enum):
    RED = "red"
    BLACK = "black"


class RedBlackNode(BSTNode[E]):
    """Tree node carrying a read-only color; new nodes start red."""

    __slots__ = ("_color",)

    def __init__(
        self,
        value: E,
        parent: Optional["RedBlackNode[E]"] = None,
        color: Color = Color.RED,
    ) -> None:
        super().__init__(value, parent)
        self._color = color

    @property
    def color(self) -> Color:
        return self._color

    def __repr__(self) -> str:
        return f"{type(self).__name__}(value={self._value!r}, color={self._color.value})"


def color_of(node: Optional[BSTNode[Any]]) -> Color:
    """Return the color of *node*, treating a missing node as black."""

    if node is None:
        return Color.BLACK
    return node.color  # type: ignore[attr-defined,no-any-return]


class RedBlackTree(OrderedTree[E]):
    """Self-balancing ordered tree.

    >>> tree = RedBlackTree([1, 2, 3])
    >>> tree.root.value, tree.root.color
    (2, <Color.BLACK: 'black'>)
    """

    __slots__ = ()

    node_type: ClassVar[Callable[..., BSTNode[Any]]] = RedBlackNode

    def _after_insert(self, node: BSTNode[E]) -> None:
        self.add_fixup(node)  # type: ignore[arg-type]

    # ------------------------------------------------------------------
    # Rotations
    # ------------------------------------------------------------------
    def rotate_left(self, node: RedBlackNode[E]) -> None:
        """Lift the right child of *node* into its place."""

        pivot = node.right
        if pivot is None:
            raise TreeCorruptionError(
                f"rotate_left called on node {node.value} without a right child"
            )
        self._replace_child(node, pivot)
        node._right = pivot.left
        if node._right is not None:
            node._right._parent = node
        pivot._left = node
        node._parent = pivot

    def rotate_right(self, node: RedBlackNode[E]) -> None:
        """Lift the left child of *node* into its place."""

        pivot = node.left
        if pivot is None:
            raise TreeCorruptionError(
                f"rotate_right called on node {node.value} without a left child"
            )
        self._replace_child(node, pivot)
        node._left = pivot.right
        if node._left is not None:
            node._left._parent = node
        pivot._right = node
        node._parent = pivot

    def flip_left(self, node: RedBlackNode[E]) -> None:
        """Swap colors with the right child, then rotate left."""

        _swap_colors(node, node.right)  # type: ignore[arg-type]
        self.rotate_left(node)

    def flip_right(self, node: RedBlackNode[E]) -> None:
        """Swap colors with the left child, then rotate right."""

        _swap_colors(node, node.left)  # type: ignore[arg-type]
        self.rotate_right(node)

    # ------------------------------------------------------------------
    # Recoloring
    # ------------------------------------------------------------------
    @staticmethod
    def push_black(node: RedBlackNode[E]) -> None:
        """Move the black of *node* down onto its two red children."""

        if node.color is not Color.BLACK:
            raise TreeCorruptionError(f"push_black: node {node.value} is not black")
        if color_of(node.left) is not Color.RED or color_of(node.right) is not Color.RED:
            raise TreeCorruptionError(
                f"push_black: children of node {node.value} are not both red"
            )
        node._color = Color.RED
        node.left._color = Color.BLACK  # type: ignore[union-attr]
        node.right._color = Color.BLACK  # type: ignore[union-attr]

    @staticmethod
    def pull_black(node: RedBlackNode[E]) -> None:
        """Inverse of :meth:`push_black`."""

        if node.color is not Color.RED:
            raise TreeCorruptionError(f"pull_black: node {node.value} is not red")
        if node.left is None or node.right is None:
            raise TreeCorruptionError(
                f"pull_black: node {node.value} needs two children"
            )
        if node.left.color is not Color.BLACK or node.right.color is not Color.BLACK:
            raise TreeCorruptionError(
                f"pull_black: children of node {node.value} are not both black"
            )
        node._color = Color.BLACK
        node.left._color = Color.RED  # type: ignore[attr-defined]
        node.right._color = Color.RED  # type: ignore[attr-defined]

    # ------------------------------------------------------------------
    # Insertion fixup
    # ------------------------------------------------------------------
    def add_fixup(self, node: RedBlackNode[E]) -> None:
        """Restore the coloring rules after *node* was inserted red."""

        while node.color is Color.RED:
            if node is self._root:
                node._color = Color.BLACK
                return
            parent: RedBlackNode[E] = node.parent  # type: ignore[assignment]
            if color_of(parent.left) is Color.BLACK:
                # node is a red right child
                self.flip_left(parent)
                node = parent
                parent = node.parent  # type: ignore[assignment]
            if parent.color is Color.BLACK:
                return
            grandparent: RedBlackNode[E] = parent.parent  # type: ignore[assignment]
            if color_of(grandparent.right) is Color.BLACK:
                logger.debug("Fixup at %s: flip right", grandparent.value)
                self.flip_right(grandparent)
                return
            logger.debug("Fixup at %s: push black", grandparent.value)
            self.push_black(grandparent)
            node = grandparent

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------
    def validate(self) -> None:
        """Check every structural and color invariant of the tree.

        Raises ``TreeCorruptionError`` describing the first violation found.
        Intended for tests and debugging; the cost is O(n log n).
        """

        root = self._root
        if root is None:
            if self._count != 0:
                raise TreeCorruptionError("empty tree reports a non-zero count")
            return
        if root.parent is not None:
            raise TreeCorruptionError("root has a parent")
        if color_of(root) is not Color.BLACK:
            raise TreeCorruptionError("root is not black")

        seen = 0
        black_heights: List[int] = []
        for node in iter_preorder(root):
            seen += 1
            for child in (node.left, node.right):
                if child is not None and child.parent is not node:
                    raise TreeCorruptionError(
                        f"child {child.value} does not point back to {node.value}"
                    )
            if color_of(node) is Color.RED and Color.RED in (
                color_of(node.left),
                color_of(node.right),
            ):
                raise TreeCorruptionError(f"red node {node.value} has a red child")
            if color_of(node.right) is Color.RED and color_of(node.left) is Color.BLACK:
                raise TreeCorruptionError(
                    f"node {node.value} has a red right child and a black left child"
                )
            if node.left is None or node.right is None:
                black_heights.append(_black_depth(node))

        if len(set(black_heights)) > 1:
            raise TreeCorruptionError(f"black heights differ: {sorted(set(black_heights))}")
        if seen != self._count:
            raise TreeCorruptionError(
                f"count is {self._count} but {seen} nodes are reachable"
            )

        previous: Optional[RedBlackNode[E]] = None
        for node in iter_inorder(root):
            if previous is not None and not previous.value < node.value:
                raise TreeCorruptionError(
                    f"ordering violated between {previous.value} and {node.value}"
                )
            previous = node  # type: ignore[assignment]


def _swap_colors(
    first: RedBlackNode[Any], second: Optional[RedBlackNode[Any]]
) -> None:
    if second is None:
        raise TreeCorruptionError(f"node {first.value} has no child to swap colors with")
    first._color, second._color = second._color, first._color


def _black_depth(node: Optional[BSTNode[Any]]) -> int:
    """Count black nodes from *node* up to the root, inclusive."""

    depth = 0
    while node is not None:
        if color_of(node) is Color.BLACK:
            depth += 1
        node = node.parent
    return depth
