import operator
import random
from itertools import pairwise

import pytest
from hypothesis import given, strategies as st

from avltree.tree import Cursor, Node, Tree, distance

SEED = 43
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1


def _key(value):
    return value.x if isinstance(value, Node) else value


class Item(Node):
    def __init__(self, x):
        super().__init__()
        self.x = x

    def __lt__(self, other):
        return self.x < _key(other)

    def __gt__(self, other):
        return self.x > _key(other)

    def __repr__(self):
        return f"Item({self.x})"


class Plain(Node):
    def __init__(self, x):
        super().__init__()
        self.x = x


def plain_less(a, b):
    return _key(a) < _key(b)


CONFIGS = [
    pytest.param(Item, operator.lt, id="less"),
    pytest.param(Item, operator.gt, id="greater"),
    pytest.param(Plain, plain_less, id="custom"),
]


def _height(node):
    if node is None:
        return 0
    left = _height(node.left)
    right = _height(node.right)
    assert node.balance == right - left
    assert node.balance in (-1, 0, 1)
    expected_size = 1
    expected_size += node.left.subtree_size if node.left else 0
    expected_size += node.right.subtree_size if node.right else 0
    assert node.subtree_size == expected_size
    return 1 + max(left, right)


def check_invariants(tree, less):
    items = list(tree)
    assert len(tree) == len(items)
    assert distance(tree.begin(), tree.end()) == len(items)
    assert distance(tree.end(), tree.begin()) == -len(items)
    for a, b in pairwise(items):
        assert not less(b, a)
    assert list(reversed(tree)) == items[::-1]
    for index, node in enumerate(items):
        assert node.distance_from_begin() == index
        if node.right:
            assert not less(node.right, node)
        if node.left:
            assert not less(node, node.left)
    if items:
        assert tree.begin().node is items[0]
        root = items[0]
        while root.parent is not None:
            root = root.parent
        assert root.subtree_size == len(items)
        _height(root)


def build(cls, less, n, rng):
    tree = Tree(less)
    nodes = []
    for i in range(n):
        node = cls(rng.randint(INT_MIN, INT_MAX))
        nodes.append(node)
        tree.insert(node)
        assert len(tree) == i + 1
    return tree, nodes


@pytest.mark.parametrize("cls, less", CONFIGS)
def test_insert_erase(cls, less):
    rng = random.Random(SEED)
    n = 3000
    tree, _ = build(cls, less, n, rng)
    check_invariants(tree, less)

    erased = 0
    for _ in range(n // 2):
        it = tree.lower_bound(rng.randint(INT_MIN, INT_MAX))
        if not it.at_end:
            tree.erase(it)
            erased += 1
            assert len(tree) == n - erased
    assert erased > 0
    check_invariants(tree, less)


@pytest.mark.parametrize("cls, less", CONFIGS)
def test_find(cls, less):
    rng = random.Random(SEED)
    n = 2000
    tree, nodes = build(cls, less, n, rng)
    smallest = tree.begin().node
    largest = tree.end().prev().node

    assert tree.find(smallest) == tree.begin()
    assert tree.find(largest) == tree.end().prev()

    x = 0
    for _ in range(n):
        if x % 2 == 0:
            x = rng.choice(nodes).x
        else:
            x = rng.randint(INT_MIN, INT_MAX)
        lb = tree.lower_bound(x)
        ub = tree.upper_bound(x)
        f = tree.find(x)
        eq = tree.equal_range(x)
        assert eq[0] == lb
        assert eq[1] == ub

        if lb.at_end:
            assert f == tree.end()
            assert lb == ub
            assert less(largest, x)
        elif ub == tree.begin():
            assert f == tree.end()
            assert lb == ub
            assert less(x, smallest)
        elif lb == ub:
            assert f == tree.end()
            assert not less(lb.node, x)
            assert less(x, ub.node)
        else:
            assert not f.at_end
            assert not less(f.node, x) and not less(x, f.node)
            assert not less(lb.node, x)
            if not ub.at_end:
                assert less(x, ub.node)
            assert f == lb
            it = lb
            while it != ub:
                assert not less(x, it.node) and not less(it.node, x)
                it = it.next()


def test_empty_tree():
    tree = Tree()
    assert len(tree) == 0
    assert tree.begin() == tree.end()
    assert list(tree) == []
    assert list(reversed(tree)) == []
    assert tree.lower_bound(5) == tree.end()
    assert tree.upper_bound(5) == tree.end()
    assert tree.find(5) == tree.end()
    assert tree.equal_range(5) == (tree.end(), tree.end())
    assert distance(tree.begin(), tree.end()) == 0


def test_erase_all_then_reinsert():
    rng = random.Random(SEED)
    tree, nodes = build(Item, operator.lt, 200, rng)
    while len(tree):
        tree.erase(tree.begin())
    assert tree.begin() == tree.end()
    assert all(not node.is_linked for node in nodes)

    for node in nodes:
        tree.insert(node)
    check_invariants(tree, operator.lt)
    assert [n.x for n in tree] == sorted(n.x for n in nodes)


def test_erase_from_the_back_and_middle():
    rng = random.Random(SEED)
    tree, nodes = build(Item, operator.lt, 300, rng)
    for _ in range(100):
        tree.erase(tree.end().prev())
        check_invariants(tree, operator.lt)
    for _ in range(100):
        middle = tree.begin()
        for _ in range(len(tree) // 2):
            middle = middle.next()
        tree.erase(middle)
    check_invariants(tree, operator.lt)
    assert len(tree) == 100


def test_erase_returns_following_cursor():
    tree = Tree()
    items = [Item(v) for v in (1, 2, 3, 4)]
    for item in items:
        tree.insert(item)
    after = tree.erase(tree.find(2))
    assert after.node is items[2]
    last = tree.erase(tree.find(4))
    assert last == tree.end()
    assert [n.x for n in tree] == [1, 3]


def test_equal_nodes_are_placed_before_existing_ones():
    tree = Tree()
    first, second, third = Item(7), Item(7), Item(7)
    other = Item(3)
    for node in (first, other, second, third):
        tree.insert(node)
    assert list(tree) == [other, third, second, first]
    lo, hi = tree.equal_range(7)
    assert distance(lo, hi) == 3
    assert lo.node is third
    assert hi == tree.end()
    assert tree.find(7).node is third


def test_cursor_walk_forward_and_back():
    tree = Tree()
    items = [Item(v) for v in range(10)]
    for item in reversed(items):
        tree.insert(item)
    walked = []
    it = tree.begin()
    while it != tree.end():
        walked.append(it.node)
        it = it.next()
    assert walked == items
    back = []
    while it != tree.begin():
        it = it.prev()
        back.append(it.node)
    assert back == items[::-1]


def test_cursor_errors():
    tree = Tree()
    tree.insert(Item(1))
    with pytest.raises(IndexError):
        tree.end().node
    with pytest.raises(IndexError):
        tree.end().next()
    with pytest.raises(IndexError):
        tree.begin().prev()
    with pytest.raises(IndexError):
        tree.erase(tree.end())


def test_insert_and_erase_errors():
    tree = Tree()
    other = Tree()
    node = Item(1)
    tree.insert(node)
    with pytest.raises(ValueError):
        tree.insert(node)
    with pytest.raises(ValueError):
        other.insert(node)
    with pytest.raises(ValueError):
        other.erase(tree.begin())
    with pytest.raises(TypeError):
        tree.insert(5)
    with pytest.raises(ValueError):
        distance(tree.begin(), other.end())


def test_unlinked_node_has_no_position():
    with pytest.raises(ValueError):
        Node().distance_from_begin()

    tree = Tree()
    node = Item(3)
    tree.insert(node)
    assert node.distance_from_begin() == 0
    tree.erase(tree.begin())
    assert len(tree) == 0
    with pytest.raises(ValueError):
        node.distance_from_begin()


def test_cursor_equality_and_hash():
    tree = Tree()
    node = Item(1)
    cursor = tree.insert(node)
    assert cursor == tree.begin()
    assert hash(cursor) == hash(tree.begin())
    assert cursor != tree.end()
    assert isinstance(cursor, Cursor) and cursor.tree is tree


@given(st.lists(st.integers(min_value=-1000, max_value=1000), max_size=200))
def test_sorted_order_and_positions(values):
    tree = Tree()
    for v in values:
        tree.insert(Item(v))
    assert [n.x for n in tree] == sorted(values)
    check_invariants(tree, operator.lt)


@given(
    st.lists(st.integers(min_value=-50, max_value=50), min_size=1, max_size=150),
    st.lists(st.integers(min_value=-50, max_value=50), max_size=150),
)
def test_erase_matches_reference(values, removals):
    tree = Tree()
    for v in values:
        tree.insert(Item(v))
    remaining = sorted(values)
    for r in removals:
        found = tree.find(r)
        if r in remaining:
            assert found.node.x == r
            tree.erase(found)
            remaining.remove(r)
        else:
            assert found == tree.end()
        assert [n.x for n in tree] == remaining
    check_invariants(tree, operator.lt)


@given(
    st.lists(st.integers(min_value=-30, max_value=30), max_size=100),
    st.integers(min_value=-40, max_value=40),
)
def test_bounds_match_bisect(values, probe):
    tree = Tree()
    for v in values:
        tree.insert(Item(v))
    ordered = sorted(values)
    lo = sum(1 for v in ordered if v < probe)
    hi = sum(1 for v in ordered if v <= probe)
    assert distance(tree.begin(), tree.lower_bound(probe)) == lo
    assert distance(tree.begin(), tree.upper_bound(probe)) == hi
    first, last = tree.equal_range(probe)
    assert distance(first, last) == hi - lo