"""Intrusive AVL tree whose nodes also track subtree sizes.

Objects to be stored derive from :class:`Node`; the tree links them in
place.  Besides ordered lookups, every position knows its index in the
sequence in logarithmic time, which makes :func:`distance` cheap.
"""

from __future__ import annotations

import operator
from collections.abc import Callable, Iterator
from typing import Any

Less = Callable[[Any, Any], bool]


class Node:
    """Base class for objects that can be linked into a :class:`Tree`."""

    _parent: Node | None = None
    _left: Node | None = None
    _right: Node | None = None
    _size: int = 0
    _balance: int = 0

    def __init__(self) -> None:
        self._unlink()

    def _unlink(self) -> None:
        self._parent = None
        self._left = None
        self._right = None
        self._size = 0
        self._balance = 0

    @property
    def parent(self) -> Node | None:
        """Parent node, or None for the root or an unlinked node."""
        if isinstance(self._parent, _Header):
            return None
        return self._parent

    @property
    def left(self) -> Node | None:
        return self._left

    @property
    def right(self) -> Node | None:
        return self._right

    @property
    def subtree_size(self) -> int:
        return self._size

    @property
    def balance(self) -> int:
        """Height of the right subtree minus height of the left subtree."""
        return self._balance

    @property
    def is_linked(self) -> bool:
        return self._parent is not None

    def distance_from_begin(self) -> int:
        """Zero-based position of this node in its tree's order."""
        if self._parent is None:
            raise ValueError("node is not linked into a tree")

        distance = self._left._size if self._left is not None else 0
        x: Node = self
        parent = x._parent
        while parent._parent is not x:
            if x is parent._right:
                distance += parent._size - x._size
            x = parent
            parent = x._parent
        return distance


class _Header(Node):
    """Sentinel: parent is the root, left the minimum, right the maximum."""

    def distance_from_begin(self) -> int:
        root = self._parent
        return 0 if root is None else root._size


def _minimum(x: Node) -> Node:
    while x._left is not None:
        x = x._left
    return x


def _maximum(x: Node) -> Node:
    while x._right is not None:
        x = x._right
    return x


def _successor(x: Node) -> Node:
    if x._right is not None:
        return _minimum(x._right)
    y = x._parent
    while x is y._right:
        x = y
        y = y._parent
    if x._right is y:
        # x is the header
        return x
    return y


def _predecessor(x: Node) -> Node:
    if isinstance(x, _Header):
        return _maximum(x._parent)
    if x._left is not None:
        return _maximum(x._left)
    y = x._parent
    while x is y._left:
        x = y
        y = y._parent
    return y


def _size_of(x: Node | None) -> int:
    return x._size if x is not None else 0


def _rotate_left(x: Node, z: Node) -> Node:
    tmp = z._left
    x._right = tmp
    if tmp is not None:
        tmp._parent = x
    z._left = x
    x._parent = z

    x_size = x._size
    x._size -= z._size - _size_of(tmp)
    z._size = x_size

    if z._balance == 0:
        x._balance = 1
        z._balance = -1
    else:
        x._balance = 0
        z._balance = 0
    return z


def _rotate_right(x: Node, z: Node) -> Node:
    tmp = z._right
    x._left = tmp
    if tmp is not None:
        tmp._parent = x
    z._right = x
    x._parent = z

    x_size = x._size
    x._size -= z._size - _size_of(tmp)
    z._size = x_size

    if z._balance == 0:
        x._balance = -1
        z._balance = 1
    else:
        x._balance = 0
        z._balance = 0
    return z


def _rotate_right_left(x: Node, z: Node) -> Node:
    y = z._left
    tmp1 = y._right
    z._left = tmp1
    if tmp1 is not None:
        tmp1._parent = z
    y._right = z
    z._parent = y

    tmp2 = y._left
    x._right = tmp2
    if tmp2 is not None:
        tmp2._parent = x
    y._left = x
    x._parent = y

    x_size = x._size
    x._size -= z._size - _size_of(tmp2)
    z._size -= y._size - _size_of(tmp1)
    y._size = x_size

    if y._balance == 0:
        x._balance = 0
        z._balance = 0
    elif y._balance > 0:
        x._balance = -1
        z._balance = 0
    else:
        x._balance = 0
        z._balance = 1
    y._balance = 0
    return y


def _rotate_left_right(x: Node, z: Node) -> Node:
    y = z._right
    tmp1 = y._left
    z._right = tmp1
    if tmp1 is not None:
        tmp1._parent = z
    y._left = z
    z._parent = y

    tmp2 = y._right
    x._left = tmp2
    if tmp2 is not None:
        tmp2._parent = x
    y._right = x
    x._parent = y

    x_size = x._size
    x._size -= z._size - _size_of(tmp2)
    z._size -= y._size - _size_of(tmp1)
    y._size = x_size

    if y._balance == 0:
        x._balance = 0
        z._balance = 0
    elif y._balance < 0:
        x._balance = 1
        z._balance = 0
    else:
        x._balance = 0
        z._balance = -1
    y._balance = 0
    return y


class Cursor:
    """A position in a :class:`Tree`: one of its nodes, or the end."""

    __slots__ = ("_tree", "_node")

    def __init__(self, tree: Tree, node: Node) -> None:
        self._tree = tree
        self._node = node

    @property
    def tree(self) -> Tree:
        return self._tree

    @property
    def at_end(self) -> bool:
        return self._node is self._tree._header

    @property
    def node(self) -> Node:
        """The node at this position; IndexError at the end."""
        if self.at_end:
            raise IndexError("end cursor has no node")
        return self._node

    def next(self) -> Cursor:
        """Cursor to the following position."""
        if self.at_end:
            raise IndexError("cannot advance past the end")
        return Cursor(self._tree, _successor(self._node))

    def prev(self) -> Cursor:
        """Cursor to the preceding position."""
        if self._node is self._tree._first():
            raise IndexError("cannot move before the beginning")
        return Cursor(self._tree, _predecessor(self._node))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cursor):
            return NotImplemented
        return self._tree is other._tree and self._node is other._node

    def __hash__(self) -> int:
        return hash((id(self._tree), id(self._node)))

    def __repr__(self) -> str:
        where = "end" if self.at_end else repr(self._node)
        return f"Cursor({where})"


def distance(first: Cursor, last: Cursor) -> int:
    """Number of steps from ``first`` to ``last`` (negative if backwards)."""
    if first._tree is not last._tree:
        raise ValueError("cursors belong to different trees")
    return last._node.distance_from_begin() - first._node.distance_from_begin()


class Tree:
    """Ordered multiset of :class:`Node` objects, linked in place."""

    def __init__(self, less: Less | None = None) -> None:
        self._less: Less = less if less is not None else operator.lt
        self._header = _Header()

    @property
    def less(self) -> Less:
        return self._less

    def _first(self) -> Node:
        header = self._header
        return header._left if header._parent is not None else header

    def begin(self) -> Cursor:
        return Cursor(self, self._first())

    def end(self) -> Cursor:
        return Cursor(self, self._header)

    def __len__(self) -> int:
        return _size_of(self._header._parent)

    def __iter__(self) -> Iterator[Node]:
        header = self._header
        node = self._first()
        while node is not header:
            yield node
            node = _successor(node)

    def __reversed__(self) -> Iterator[Node]:
        header = self._header
        if header._parent is None:
            return
        first = header._left
        node = header._right
        while True:
            yield node
            if node is first:
                return
            node = _predecessor(node)

    def insert(self, node: Node) -> Cursor:
        """Link ``node`` into the tree; equal nodes go before existing ones."""
        if not isinstance(node, Node) or isinstance(node, _Header):
            raise TypeError("only Node instances can be inserted")
        if node._parent is not None:
            raise ValueError("node is already linked into a tree")
        self._link(node)
        self._insert_rebalance(node)
        return Cursor(self, node)

    def erase(self, cursor: Cursor) -> Cursor:
        """Unlink the node at ``cursor``; return the cursor that followed it."""
        if cursor._tree is not self:
            raise ValueError("cursor belongs to another tree")
        z = cursor.node
        header = self._header

        following = _successor(z)
        was_leftmost = z is header._left
        was_rightmost = z is header._right
        if was_rightmost and not was_leftmost:
            new_rightmost: Node | None = _predecessor(z)
        else:
            new_rightmost = None

        x, n_is_left = self._detach(z)
        self._erase_rebalance(x, n_is_left)

        if header._parent is None:
            header._left = None
            header._right = None
        else:
            if was_leftmost:
                header._left = following
            if was_rightmost:
                header._right = new_rightmost
        z._unlink()
        return Cursor(self, following)

    def lower_bound(self, value: Any) -> Cursor:
        """First position whose node is not less than ``value``."""
        return Cursor(self, self._lower_bound(self._header._parent, self._header, value))

    def upper_bound(self, value: Any) -> Cursor:
        """First position whose node is greater than ``value``."""
        return Cursor(self, self._upper_bound(self._header._parent, self._header, value))

    def equal_range(self, value: Any) -> tuple[Cursor, Cursor]:
        """The half-open range of nodes equivalent to ``value``."""
        less = self._less
        root = self._header._parent
        end: Node = self._header
        while root is not None:
            if less(root, value):
                root = root._right
            elif less(value, root):
                end = root
                root = root._left
            else:
                return (
                    Cursor(self, self._lower_bound(root, end, value)),
                    Cursor(self, self._upper_bound(root, end, value)),
                )
        cursor = Cursor(self, end)
        return cursor, cursor

    def find(self, value: Any) -> Cursor:
        """First node equivalent to ``value``, or the end."""
        lb = self.lower_bound(value)
        if lb.at_end or self._less(value, lb._node):
            return self.end()
        return lb

    def _lower_bound(self, root: Node | None, end: Node, value: Any) -> Node:
        less = self._less
        result = end
        current = root
        while current is not None:
            if less(current, value):
                current = current._right
            else:
                result = current
                current = current._left
        return result

    def _upper_bound(self, root: Node | None, end: Node, value: Any) -> Node:
        less = self._less
        result = end
        current = root
        while current is not None:
            if less(value, current):
                result = current
                current = current._left
            else:
                current = current._right
        return result

    def _shift_nodes(self, u: Node, v: Node | None) -> None:
        header = self._header
        if u is header._parent:
            header._parent = v
        elif u is u._parent._left:
            u._parent._left = v
        else:
            u._parent._right = v
        if v is not None:
            v._parent = u._parent

    def _replace_child(self, g: Node, old: Node, new: Node) -> None:
        new._parent = g
        if g is self._header:
            g._parent = new
        elif old is g._left:
            g._left = new
        else:
            g._right = new

    def _link(self, x: Node) -> None:
        header = self._header
        less = self._less
        parent: Node = header
        current = header._parent
        went_right = False
        while current is not None:
            parent = current
            parent._size += 1
            went_right = bool(less(current, x))
            current = current._right if went_right else current._left

        if parent is header:
            header._parent = x
            header._left = x
            header._right = x
        elif not went_right:
            parent._left = x
            if parent is header._left:
                header._left = x
        else:
            parent._right = x
            if parent is header._right:
                header._right = x

        x._parent = parent
        x._left = None
        x._right = None
        x._balance = 0
        x._size = 1

    def _insert_rebalance(self, z: Node) -> None:
        header = self._header
        x = z._parent
        while x is not header:
            g = x._parent
            if z is x._left:
                if x._balance < 0:
                    if z._balance > 0:
                        n = _rotate_left_right(x, z)
                    else:
                        n = _rotate_right(x, z)
                elif x._balance > 0:
                    x._balance = 0
                    return
                else:
                    x._balance = -1
                    z, x = x, g
                    continue
            else:
                if x._balance > 0:
                    if z._balance < 0:
                        n = _rotate_right_left(x, z)
                    else:
                        n = _rotate_left(x, z)
                elif x._balance < 0:
                    x._balance = 0
                    return
                else:
                    x._balance = 1
                    z, x = x, g
                    continue
            self._replace_child(g, x, n)
            return

    def _detach(self, z: Node) -> tuple[Node, bool]:
        """Remove ``z`` from the structure; return where rebalancing starts."""
        x = z._parent
        n_is_left = z is z._parent._left
        if z._left is None:
            self._shift_nodes(z, z._right)
        elif z._right is None:
            self._shift_nodes(z, z._left)
        else:
            y = _minimum(z._right)
            if y._parent is not z:
                x = y._parent
                n_is_left = True
                self._shift_nodes(y, y._right)
                y._right = z._right
                y._right._parent = y
            else:
                x = y
                n_is_left = False
            self._shift_nodes(z, y)
            y._left = z._left
            y._left._parent = y
            y._balance = z._balance
            y._size = z._size
        return x, n_is_left

    def _erase_rebalance(self, x: Node, n_is_left: bool) -> None:
        header = self._header
        g: Node = header
        height_changed = False

        while x is not header:
            g = x._parent
            x._size -= 1

            if n_is_left:
                if x._balance > 0:
                    z = x._right
                    height_changed = z._balance != 0
                    if z._balance < 0:
                        n = _rotate_right_left(x, z)
                    else:
                        n = _rotate_left(x, z)
                elif x._balance < 0:
                    x._balance = 0
                    n = x
                    x = g
                    n_is_left = n is x._left
                    continue
                else:
                    x._balance = 1
                    break
            else:
                if x._balance < 0:
                    z = x._left
                    height_changed = z._balance != 0
                    if z._balance > 0:
                        n = _rotate_left_right(x, z)
                    else:
                        n = _rotate_right(x, z)
                elif x._balance > 0:
                    x._balance = 0
                    n = x
                    x = g
                    n_is_left = n is x._left
                    continue
                else:
                    x._balance = -1
                    break

            self._replace_child(g, x, n)
            if not height_changed:
                break
            x = g
            n_is_left = n is x._left

        ancestor = g
        while ancestor is not header:
            ancestor._size -= 1
            ancestor = ancestor._parent