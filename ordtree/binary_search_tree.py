"""Ordered binary search tree with parent links and stackless traversal.

The module provides the plain (unbalanced) engine used by every tree variant:

* ``BSTNode`` – a slotted node exposing a value plus ``parent``, ``left`` and
  ``right`` links as read-only properties.  ``parent`` is only a back
  reference for walking upwards; children are reachable from the root
  through ``left``/``right`` alone.
* ``OrderedTree`` – insertion, lookup, traversal, height and the root-only
  balance check shared by the plain and the red-black tree.
* ``BinarySearchTree`` – adds deletion by splicing or successor replacement.

Traversal never recurses and never allocates a stack.  ``iter_steps`` moves
through the tree with a three-state machine keyed on the edge a node was
entered from:

========== ==========================
entered    edges tried, in order
========== ==========================
parent     left, right, parent
left       right, parent
right      parent
========== ==========================

Every node is therefore entered up to three times and the callers pick the
entry that matches the order they want (pre-order or in-order).
"""

from __future__ import annotations

import enum
import logging
from typing import (
    Any,
    Callable,
    ClassVar,
    Generic,
    Iterable,
    Iterator,
    NamedTuple,
    Optional,
    Tuple,
)

from .element import E
from .errors import TreeCorruptionError

logger = logging.getLogger(__name__)

__all__ = [
    "Edge",
    "BSTNode",
    "InsertResult",
    "OrderedTree",
    "BinarySearchTree",
    "iter_steps",
    "iter_inorder",
    "iter_preorder",
    "subtree_height",
]


class Edge(enum.IntEnum):
    """The three links of a node, in the order the traversal tries them."""

    PARENT = 0
    LEFT = 1
    RIGHT = 2

    def following(self) -> "Edge":
        return Edge((self + 1) % len(Edge))


class BSTNode(Generic[E]):
    """Tree node.

    The value and the three links are read-only properties; only the owning
    tree rewires them.
    """

    __slots__ = ("_value", "_parent", "_left", "_right")

    def __init__(self, value: E, parent: Optional["BSTNode[E]"] = None) -> None:
        self._value = value
        self._parent = parent
        self._left: Optional["BSTNode[E]"] = None
        self._right: Optional["BSTNode[E]"] = None

    @property
    def value(self) -> E:
        return self._value

    @property
    def parent(self) -> Optional["BSTNode[E]"]:
        """Back reference used for upward navigation only."""

        return self._parent

    @property
    def left(self) -> Optional["BSTNode[E]"]:
        return self._left

    @property
    def right(self) -> Optional["BSTNode[E]"]:
        return self._right

    def __repr__(self) -> str:
        return f"{type(self).__name__}(value={self._value!r})"

    def neighbour(self, edge: Edge) -> Optional["BSTNode[E]"]:
        if edge is Edge.PARENT:
            return self.parent
        if edge is Edge.LEFT:
            return self.left
        return self.right

    def side_of(self, child: "BSTNode[E]") -> Edge:
        """Return which child slot of this node holds *child*."""

        if self.left is child:
            return Edge.LEFT
        if self.right is child:
            return Edge.RIGHT
        raise TreeCorruptionError(
            f"node {child.value} is not a child of its parent {self.value}"
        )


class InsertResult(NamedTuple):
    """Outcome of an insertion: the node holding the value and whether it is new."""

    node: BSTNode[Any]
    created: bool


Step = Tuple[BSTNode[Any], Edge, int]


def iter_steps(start: Optional[BSTNode[Any]]) -> Iterator[Step]:
    """Yield ``(node, entered_from, depth)`` for every entry into a node.

    The walk covers the subtree rooted at *start* and stops once it would
    leave *start* through its parent edge.  *depth* is 1 at *start*.
    """

    current = start
    entered = Edge.PARENT
    depth = 1
    while current is not None:
        yield current, entered, depth
        edge = entered
        while True:
            edge = edge.following()
            nxt = current.neighbour(edge)
            if nxt is not None or edge is Edge.PARENT:
                break
        if edge is Edge.PARENT:
            if current is start or nxt is None:
                return
            entered = nxt.side_of(current)
            depth -= 1
        else:
            entered = Edge.PARENT
            depth += 1
        current = nxt


def iter_inorder(start: Optional[BSTNode[Any]]) -> Iterator[BSTNode[Any]]:
    """Yield the nodes under *start* in ascending value order."""

    for node, entered, _ in iter_steps(start):
        if entered is Edge.LEFT or (entered is Edge.PARENT and node.left is None):
            yield node


def iter_preorder(start: Optional[BSTNode[Any]]) -> Iterator[BSTNode[Any]]:
    """Yield each node under *start* when it is first entered from its parent."""

    for node, entered, _ in iter_steps(start):
        if entered is Edge.PARENT:
            yield node


def subtree_height(node: Optional[BSTNode[Any]]) -> int:
    """Return the number of nodes on the longest downward path from *node*."""

    return max((depth for _, _, depth in iter_steps(node)), default=0)


class OrderedTree(Generic[E]):
    """Insertion, lookup and traversal shared by every tree variant."""

    __slots__ = ("_root", "_count")

    node_type: ClassVar[Callable[..., BSTNode[Any]]] = BSTNode

    def __init__(self, values: Optional[Iterable[E]] = None) -> None:
        self._root: Optional[BSTNode[E]] = None
        self._count = 0
        if values is not None:
            for value in values:
                self.insert(value)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    @property
    def root(self) -> Optional[BSTNode[E]]:
        return self._root

    @property
    def count(self) -> int:
        """Number of values currently stored."""

        return self._count

    def __len__(self) -> int:
        return self._count

    def __contains__(self, value: object) -> bool:
        return self.find(value) is not None  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[E]:
        for node in self.traverse():
            yield node.value

    def __repr__(self) -> str:
        values = ", ".join(repr(value) for value in self)
        return f"{type(self).__name__}([{values}])"

    # ------------------------------------------------------------------
    # Core operations
    # ------------------------------------------------------------------
    def _find_last_node(self, value: E) -> Optional[BSTNode[E]]:
        """Return the node equal to *value*, or the node it would hang off."""

        current = self._root
        while current is not None:
            if value == current.value:
                return current
            nxt = current.left if value < current.value else current.right
            if nxt is None:
                return current
            current = nxt
        return None

    def find(self, value: E) -> Optional[BSTNode[E]]:
        """Return the node holding *value*, or ``None``."""

        current = self._root
        while current is not None:
            if value == current.value:
                return current
            current = current.left if value < current.value else current.right
        return None

    def insert(self, value: E) -> InsertResult:
        """Insert *value*.

        Inserting a value that is already present changes nothing and returns
        the existing node with ``created=False``.
        """

        parent = self._find_last_node(value)
        if parent is not None and value == parent.value:
            return InsertResult(parent, False)

        child = self.node_type(value, parent)
        if parent is None:
            self._root = child
        elif value < parent.value:
            parent._left = child
        else:
            parent._right = child
        self._count += 1
        logger.debug("Inserted %s (count=%d)", value, self._count)
        self._after_insert(child)
        return InsertResult(child, True)

    def _after_insert(self, node: BSTNode[E]) -> None:
        """Hook run after a new node is linked into the tree."""

    def traverse(self) -> Iterator[BSTNode[E]]:
        """Yield every node in ascending value order."""

        return iter_inorder(self._root)

    def preorder(self) -> Iterator[BSTNode[E]]:
        """Yield every node, parents before their children, left before right."""

        return iter_preorder(self._root)

    def height(self) -> int:
        """Height of the whole tree; 0 when empty."""

        return subtree_height(self._root)

    def balanced(self) -> bool:
        """Compare the heights of the root's two subtrees.

        Only the root is inspected: deeper subtrees may be arbitrarily skewed.
        """

        if self._root is None:
            return True
        diff = subtree_height(self._root.left) - subtree_height(self._root.right)
        return abs(diff) < 2

    # ------------------------------------------------------------------
    # Structural helpers
    # ------------------------------------------------------------------
    def _replace_child(
        self, node: BSTNode[E], replacement: Optional[BSTNode[E]]
    ) -> None:
        """Put *replacement* where *node* hangs, rewiring its parent link."""

        parent = node.parent
        if parent is None:
            if node is not self._root:
                raise TreeCorruptionError(
                    f"node {node.value} has no parent but is not the root"
                )
            self._root = replacement
        elif parent.side_of(node) is Edge.LEFT:
            parent._left = replacement
        else:
            parent._right = replacement
        if replacement is not None:
            replacement._parent = parent


class BinarySearchTree(OrderedTree[E]):
    """Unbalanced binary search tree supporting deletion.

    >>> tree = BinarySearchTree([7, 3, 11])
    >>> [node.value for node in tree.traverse()]
    [3, 7, 11]
    >>> tree.delete(7)
    True
    >>> tree.root.value
    11
    """

    __slots__ = ()

    def delete(self, value: E) -> bool:
        """Remove *value*; return ``False`` when it is not present.

        A node with two children keeps its place in the tree: it takes over
        the value of its in-order successor, and the successor is spliced out
        instead.
        """

        node = self.find(value)
        if node is None:
            return False

        if node.left is not None and node.right is not None:
            successor = node.right
            while successor.left is not None:
                successor = successor.left
            node._value = successor.value
            node = successor

        self._splice(node)
        self._count -= 1
        logger.debug("Deleted %s (count=%d)", value, self._count)
        return True

    def _splice(self, node: BSTNode[E]) -> None:
        if node.left is not None and node.right is not None:
            raise TreeCorruptionError(
                f"cannot splice node {node.value}: it has two children"
            )
        child = node.left if node.left is not None else node.right
        self._replace_child(node, child)
        node._parent = node._left = node._right = None
