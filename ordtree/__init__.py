"""In-memory ordered trees: a plain binary search tree and a red-black tree."""

from .binary_search_tree import (
    BinarySearchTree,
    BSTNode,
    Edge,
    InsertResult,
    OrderedTree,
    iter_inorder,
    iter_preorder,
    subtree_height,
)
from .element import Element, Int, Rune
from .errors import (
    OrderedTreeError,
    TreeCorruptionError,
    TreeRenderingError,
    TreeUnavailableError,
)
from .red_black_tree import Color, RedBlackNode, RedBlackTree, color_of
from .rendering import generate_dot, render_image, render_levels

__all__ = [
    "BSTNode",
    "BinarySearchTree",
    "Color",
    "Edge",
    "Element",
    "InsertResult",
    "Int",
    "OrderedTree",
    "OrderedTreeError",
    "RedBlackNode",
    "RedBlackTree",
    "Rune",
    "TreeCorruptionError",
    "TreeRenderingError",
    "TreeUnavailableError",
    "color_of",
    "generate_dot",
    "iter_inorder",
    "iter_preorder",
    "render_image",
    "render_levels",
    "subtree_height",
]
