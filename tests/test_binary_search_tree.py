from __future__ import annotations

import random
from typing import Iterable, List, Sequence, Tuple

import pytest

from ordtree.binary_search_tree import (
    BinarySearchTree,
    Edge,
    iter_steps,
    subtree_height,
)
from ordtree.element import Int, Rune
from ordtree.errors import TreeCorruptionError
from ordtree.rendering import generate_dot

GOLDEN_VALUES = [7, 3, 11, 1, 5, 9, 13, 4, 6, 8, 12, 14]


def _dot_text(edges: Iterable[Tuple[int, int]]) -> str:
    body = "".join(f"{parent} -> {child};\n" for parent, child in edges)
    return "digraph btree {\n" + body + "}\n"


def _assert_shape(tree: BinarySearchTree[int], edges: Sequence[Tuple[int, int]]) -> None:
    assert generate_dot(tree.root) == _dot_text(edges)
    assert len(tree) == len(edges) + 1


def _assert_links(tree: BinarySearchTree[int]) -> None:
    if tree.root is not None:
        assert tree.root.parent is None
    for node in tree.traverse():
        for child in (node.left, node.right):
            if child is not None:
                assert child.parent is node


def _values(tree: BinarySearchTree[int]) -> List[int]:
    return [node.value for node in tree.traverse()]


def test_insert_and_find() -> None:
    tree: BinarySearchTree[int] = BinarySearchTree()
    values = [1, 7, 4, 0, 9, 2, 3, 5, 8, 6]
    for index, value in enumerate(values):
        node, created = tree.insert(value)
        assert created
        assert node.value == value
        assert tree.find(value) is node
        assert tree.count == index + 1

    assert tree.find(100) is None
    assert 100 not in tree
    assert all(value in tree for value in values)


def test_duplicate_insert_is_a_no_op() -> None:
    tree = BinarySearchTree(GOLDEN_VALUES)
    before = generate_dot(tree.root)
    for value in GOLDEN_VALUES:
        node, created = tree.insert(value)
        assert not created
        assert node is tree.find(value)
    assert tree.count == len(GOLDEN_VALUES)
    assert generate_dot(tree.root) == before


def test_empty_tree_queries() -> None:
    tree: BinarySearchTree[int] = BinarySearchTree()
    assert tree.find(1) is None
    assert tree.count == 0
    assert not tree
    assert tree.root is None
    assert tree.height() == 0
    assert tree.balanced()
    assert list(tree.traverse()) == []
    assert tree.delete(1) is False


def test_single_node_height_is_one() -> None:
    tree = BinarySearchTree([42])
    assert tree.height() == 1
    assert tree.balanced()
    assert tree.root is not None and tree.root.parent is None


def test_traverse_yields_ascending_values() -> None:
    rng = random.Random(2024)
    for _ in range(20):
        values = rng.sample(range(1_000), 60)
        tree = BinarySearchTree(values)
        assert _values(tree) == sorted(values)
        assert list(tree) == sorted(values)


def test_preorder_matches_insertion_shape() -> None:
    tree = BinarySearchTree(GOLDEN_VALUES)
    assert [node.value for node in tree.preorder()] == [
        7, 3, 1, 5, 4, 6, 11, 9, 8, 13, 12, 14,
    ]


def test_traversal_is_single_pass() -> None:
    tree = BinarySearchTree([2, 1, 3])
    iterator = tree.traverse()
    assert [node.value for node in iterator] == [1, 2, 3]
    assert list(iterator) == []


def test_iter_steps_enters_each_node_from_every_existing_edge() -> None:
    tree = BinarySearchTree(GOLDEN_VALUES)
    steps = list(iter_steps(tree.root))
    assert len(steps) == 2 * len(tree) - 1
    from_parent = [node.value for node, entered, _ in steps if entered is Edge.PARENT]
    assert sorted(from_parent) == sorted(GOLDEN_VALUES)


def test_iter_steps_stays_inside_subtree() -> None:
    tree = BinarySearchTree(GOLDEN_VALUES)
    three = tree.find(3)
    visited = {node.value for node, _, _ in iter_steps(three)}
    assert visited == {1, 3, 4, 5, 6}
    assert subtree_height(three) == 3
    assert subtree_height(None) == 0


def test_height_and_balance() -> None:
    tree = BinarySearchTree(GOLDEN_VALUES)
    assert tree.height() == 4
    assert tree.balanced()

    assert not BinarySearchTree([1, 2, 3]).balanced()
    assert not BinarySearchTree([2, 1, 3, 4, 5]).balanced()
    assert BinarySearchTree([2, 1, 3, 4]).balanced()


def test_balance_only_inspects_the_root() -> None:
    tree = BinarySearchTree([10, 5, 15, 4, 3, 16, 17])
    assert tree.balanced()
    five = tree.find(5)
    assert subtree_height(five.left) - subtree_height(five.right) == 2


def test_height_of_degenerate_tree_does_not_recurse() -> None:
    tree = BinarySearchTree(range(2_000))
    assert tree.height() == 2_000
    assert not tree.balanced()


def test_delete_golden_shapes() -> None:
    tree = BinarySearchTree(GOLDEN_VALUES)

    assert tree.delete(6)
    _assert_shape(
        tree,
        [(7, 3), (3, 1), (3, 5), (5, 4), (7, 11), (11, 9), (9, 8), (11, 13), (13, 12), (13, 14)],
    )

    assert tree.delete(9)
    _assert_shape(
        tree,
        [(7, 3), (3, 1), (3, 5), (5, 4), (7, 11), (11, 8), (11, 13), (13, 12), (13, 14)],
    )

    assert tree.delete(11)
    _assert_shape(
        tree,
        [(7, 3), (3, 1), (3, 5), (5, 4), (7, 12), (12, 8), (12, 13), (13, 14)],
    )

    assert tree.delete(7)
    _assert_shape(
        tree,
        [(8, 3), (3, 1), (3, 5), (5, 4), (8, 12), (12, 13), (13, 14)],
    )
    _assert_links(tree)


def test_delete_root_with_single_child() -> None:
    tree = BinarySearchTree([1, 2, 3])
    assert tree.delete(1)
    _assert_shape(tree, [(2, 3)])
    assert tree.root is not None and tree.root.parent is None


def test_delete_last_node_empties_tree() -> None:
    tree = BinarySearchTree([5])
    assert tree.delete(5)
    assert tree.root is None
    assert tree.count == 0
    assert tree.height() == 0


def test_delete_absent_value_changes_nothing() -> None:
    tree = BinarySearchTree(GOLDEN_VALUES)
    before = generate_dot(tree.root)
    assert tree.delete(100) is False
    assert tree.count == len(GOLDEN_VALUES)
    assert generate_dot(tree.root) == before


def test_delete_two_children_preserves_order() -> None:
    tree = BinarySearchTree(GOLDEN_VALUES)
    before = _values(tree)
    assert tree.delete(3)
    after = _values(tree)
    assert after == [value for value in before if value != 3]
    assert tree.find(3) is None
    _assert_links(tree)


def test_random_deletes_match_reference_set() -> None:
    rng = random.Random(12345)
    values = rng.sample(range(500), 200)
    tree = BinarySearchTree(values)
    reference = set(values)

    for value in rng.sample(range(500), 300):
        deleted = tree.delete(value)
        assert deleted == (value in reference)
        reference.discard(value)
        assert tree.count == len(reference)

    assert _values(tree) == sorted(reference)
    _assert_links(tree)


def test_splice_refuses_node_with_two_children() -> None:
    tree = BinarySearchTree([2, 1, 3])
    with pytest.raises(TreeCorruptionError):
        tree._splice(tree.root)  # type: ignore[arg-type]


def test_wrapped_elements() -> None:
    tree = BinarySearchTree(Rune(char) for char in "bdcgeaf")
    assert "".join(str(value) for value in tree) == "abcdefg"
    assert generate_dot(tree.root) == (
        "digraph btree {\nb -> a;\nb -> d;\nd -> c;\nd -> g;\ng -> e;\ne -> f;\n}\n"
    )

    ints = BinarySearchTree(Int(value) for value in (3, 1, 2))
    _, created = ints.insert(Int(2))
    assert not created
    assert ints.find(Int(1)) is not None


def test_repr_lists_values_in_order() -> None:
    assert repr(BinarySearchTree([2, 1, 3])) == "BinarySearchTree([1, 2, 3])"


@pytest.mark.parametrize("field", ["value", "parent", "left", "right"])
def test_node_links_are_read_only(field: str) -> None:
    tree = BinarySearchTree([2, 1, 3])
    node = tree.find(1)
    assert node is not None
    with pytest.raises(AttributeError):
        setattr(node, field, None)
    assert _values(tree) == [1, 2, 3]
    _assert_links(tree)
    assert tree.find(1) is node
