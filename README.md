# avltree

An intrusive AVL tree for Python. Each node holds its own links, its AVL
balance factor and the size of its subtree. That gives you:

- ordered multiset semantics: equal keys are allowed. A newly inserted node
  goes *before* any nodes already in the tree that compare equal to it;
- `insert` and `erase` in O(log n), with rebalancing;
- `lower_bound`, `upper_bound`, `equal_range` and `find`, all driven by a
  "less than" function that you supply (the default is `operator.lt`);
- bidirectional cursors, with `end()` as a sentinel one past the last element;
- O(log n) rank queries through `Node.distance_from_begin()` and
  `distance(first, last)`.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Usage

Your element type subclasses `avltree.tree.Node`. The tree never copies
elements. It links the objects you hand it, so an object can be in only one
tree at a time.

```python
from avltree.tree import Node, Tree, distance


class Item(Node):
    def __init__(self, key):
        super().__init__()
        self.key = key


def less(a, b):
    key_a = a.key if isinstance(a, Item) else a
    key_b = b.key if isinstance(b, Item) else b
    return key_a < key_b


tree = Tree(less)
for key in [5, 1, 4, 1, 3]:
    tree.insert(Item(key))

print(len(tree))                       # 5
print([item.key for item in tree])     # [1, 1, 3, 4, 5]
print([item.key for item in reversed(tree)])  # [5, 4, 3, 1, 1]

first, last = tree.equal_range(1)      # cursors bounding the two 1s
print(distance(first, last))           # 2

cursor = tree.find(4)
if cursor != tree.end():
    cursor = tree.erase(cursor)        # cursor to the element that followed
    print(cursor.node.key)             # 5
```

The `less` function is called with nodes and with the plain values you search
for, in either order, so it has to handle both. If you reverse the comparison,
the tree sorts in descending order.

### Tree

- `insert(node)` links a node and returns a cursor to it. It raises
  `TypeError` for anything that is not a `Node`, and `ValueError` if the node
  is already linked.
- `erase(cursor)` unlinks the node at the cursor and returns a cursor to the
  position that followed it. It raises `IndexError` for the end cursor and
  `ValueError` for a cursor that belongs to another tree.
- `lower_bound(value)` returns the first position not less than `value`.
  `upper_bound(value)` returns the first position greater than `value`.
  `equal_range(value)` returns both bounds as a pair. `find(value)` returns
  the first equivalent node, or `end()` if there is none.
- `len(tree)`, `iter(tree)` and `reversed(tree)` work in the usual way.
  Iteration yields the nodes themselves.

### Cursors

`begin()` and `end()` return `Cursor` objects. Use `next()` and `prev()` to
move them. Moving past the end or before the beginning raises `IndexError`,
and `prev()` on `end()` moves to the last element. Two cursors are equal when
they point at the same position in the same tree. `cursor.node` is the node at
the position, `cursor.at_end` tells you whether the cursor is the end sentinel,
and `cursor.tree` is the tree the cursor belongs to.

`distance(first, last)` counts the steps from one cursor to the other without
walking them. The result is negative if `last` comes before `first`.

### Nodes

A linked node exposes read-only `parent`, `left`, `right`, `subtree_size`,
`balance` and `is_linked`. `distance_from_begin()` returns its zero-based
rank. On a node that is not linked, `distance_from_begin()` raises
`ValueError`.

## Benchmarks

The `avltree-bench` command times insertion, erasure, `find`, `lower_bound`,
`equal_range`, `distance`, and forward and reverse iteration. It runs each one
on a tree filled with random 64-bit keys and on a
`sortedcontainers.SortedList` with the same keys, then prints the time per
iteration in nanoseconds:

```
avltree-bench
avltree-bench --size 10000 --iterations 1000 --seed 42
```

`--size` sets the number of elements (default 100000), `--iterations` sets how
many timed repetitions each operation gets (default 10000), and `--seed` fixes
the random keys (random if you leave it out).

You can take the same measurements from code with
`avltree.bench.run_benchmarks(size, iterations, seed)`. It returns a list of
`BenchResult` records, each with `name`, `implementation`, `iterations`,
`seconds`, `label` and `ns_per_iteration`.