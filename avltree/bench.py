"""Timing comparison of :class:`~avltree.tree.Tree` against ``SortedList``.

Every benchmark first fills a container with ``size`` random 64-bit integers
and then times ``iterations`` repetitions of one operation.  Only the
operation itself is timed, not the set-up work around it.
"""

from __future__ import annotations

import argparse
import random
import sys
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from sortedcontainers import SortedList

from .tree import Node, Tree, distance

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
DEFAULT_SIZE = 100000
DEFAULT_ITERATIONS = 10000

AVLTREE = "avltree"
SORTEDCONTAINERS = "sortedcontainers"
IMPLEMENTATIONS = (AVLTREE, SORTEDCONTAINERS)
BENCHMARKS = (
    "insert",
    "erase",
    "find",
    "lower_bound",
    "equal_range",
    "distance",
    "iter",
    "reverse_iter",
)


@dataclass(frozen=True)
class BenchResult:
    """Outcome of one benchmark on one implementation."""

    name: str
    implementation: str
    iterations: int
    seconds: float

    @property
    def label(self) -> str:
        return f"BM_{self.implementation}_{self.name}"

    @property
    def ns_per_iteration(self) -> float:
        if self.iterations == 0:
            return 0.0
        return self.seconds * 1e9 / self.iterations


class _ValueNode(Node):
    """Tree node carrying one integer."""

    def __init__(self, value: int) -> None:
        super().__init__()
        self.value = value

    def __repr__(self) -> str:
        return f"_ValueNode({self.value})"


def _key(x: Any) -> Any:
    return x.value if isinstance(x, _ValueNode) else x


def _less(lhs: Any, rhs: Any) -> bool:
    return _key(lhs) < _key(rhs)


class _Stopwatch:
    """Accumulates the time spent inside its ``with`` blocks."""

    def __init__(self) -> None:
        self.total = 0.0
        self._start = 0.0

    def __enter__(self) -> _Stopwatch:
        self._start = time.perf_counter()
        return self

    def __exit__(self, *exc: object) -> None:
        self.total += time.perf_counter() - self._start


def _make_rng(seed: int) -> Callable[[], int]:
    rng = random.Random(seed)
    return lambda: rng.randint(INT64_MIN, INT64_MAX)


def _init_tree(size: int, seed: int) -> tuple[Tree, list[_ValueNode]]:
    draw = _make_rng(seed)
    tree = Tree(_less)
    nodes = [_ValueNode(draw()) for _ in range(size)]
    for node in nodes:
        tree.insert(node)
    return tree, nodes


def _init_list(size: int, seed: int) -> tuple[SortedList, list[int]]:
    draw = _make_rng(seed)
    values = [draw() for _ in range(size)]
    return SortedList(values), values


def _tree_insert(size: int, iterations: int, seed: int) -> float:
    tree, _ = _init_tree(size, seed)
    draw = _make_rng(seed)
    watch = _Stopwatch()
    for _ in range(iterations):
        node = _ValueNode(draw())
        with watch:
            cursor = tree.insert(node)
        tree.erase(cursor)
    return watch.total


def _list_insert(size: int, iterations: int, seed: int) -> float:
    items, _ = _init_list(size, seed)
    draw = _make_rng(seed)
    watch = _Stopwatch()
    for _ in range(iterations):
        value = draw()
        with watch:
            items.add(value)
        items.remove(value)
    return watch.total


def _tree_erase(size: int, iterations: int, seed: int) -> float:
    tree, _ = _init_tree(size, seed)
    draw = _make_rng(seed)
    watch = _Stopwatch()
    for _ in range(iterations):
        cursor = tree.end()
        while cursor.at_end:
            cursor = tree.lower_bound(draw())
        node = cursor.node
        with watch:
            tree.erase(cursor)
        tree.insert(node)
    return watch.total


def _list_erase(size: int, iterations: int, seed: int) -> float:
    items, _ = _init_list(size, seed)
    draw = _make_rng(seed)
    watch = _Stopwatch()
    for _ in range(iterations):
        index = len(items)
        while index == len(items):
            index = items.bisect_left(draw())
        with watch:
            value = items.pop(index)
        items.add(value)
    return watch.total


def _tree_find(size: int, iterations: int, seed: int) -> float:
    tree, nodes = _init_tree(size, seed)
    draw = _make_rng(seed)
    watch = _Stopwatch()
    for _ in range(iterations):
        node = nodes[abs(draw()) % len(nodes)]
        with watch:
            tree.find(node)
    return watch.total


def _list_find(size: int, iterations: int, seed: int) -> float:
    items, values = _init_list(size, seed)
    draw = _make_rng(seed)
    watch = _Stopwatch()
    for _ in range(iterations):
        value = values[abs(draw()) % len(values)]
        with watch:
            index = items.bisect_left(value)
            _ = index < len(items) and items[index] == value
    return watch.total


def _tree_lower_bound(size: int, iterations: int, seed: int) -> float:
    tree, _ = _init_tree(size, seed)
    draw = _make_rng(seed)
    watch = _Stopwatch()
    for _ in range(iterations):
        value = draw()
        with watch:
            tree.lower_bound(value)
    return watch.total


def _list_lower_bound(size: int, iterations: int, seed: int) -> float:
    items, _ = _init_list(size, seed)
    draw = _make_rng(seed)
    watch = _Stopwatch()
    for _ in range(iterations):
        value = draw()
        with watch:
            items.bisect_left(value)
    return watch.total


def _tree_equal_range(size: int, iterations: int, seed: int) -> float:
    tree, nodes = _init_tree(size, seed)
    draw = _make_rng(seed)
    watch = _Stopwatch()
    for _ in range(iterations):
        node = nodes[abs(draw()) % len(nodes)]
        with watch:
            tree.equal_range(node)
    return watch.total


def _list_equal_range(size: int, iterations: int, seed: int) -> float:
    items, values = _init_list(size, seed)
    draw = _make_rng(seed)
    watch = _Stopwatch()
    for _ in range(iterations):
        value = values[abs(draw()) % len(values)]
        with watch:
            items.bisect_left(value)
            items.bisect_right(value)
    return watch.total


def _tree_distance(size: int, iterations: int, seed: int) -> float:
    tree, _ = _init_tree(size, seed)
    draw = _make_rng(seed)
    watch = _Stopwatch()
    for _ in range(iterations):
        low, high = sorted((draw(), draw()))
        first = tree.lower_bound(low)
        last = tree.lower_bound(high)
        with watch:
            distance(first, last)
    return watch.total


def _list_distance(size: int, iterations: int, seed: int) -> float:
    items, _ = _init_list(size, seed)
    draw = _make_rng(seed)
    watch = _Stopwatch()
    for _ in range(iterations):
        low, high = sorted((draw(), draw()))
        with watch:
            _ = items.bisect_left(high) - items.bisect_left(low)
    return watch.total


def _tree_iter(size: int, iterations: int, seed: int) -> float:
    tree, _ = _init_tree(size, seed)
    watch = _Stopwatch()
    end = tree.end()
    for _ in range(iterations):
        with watch:
            cursor = tree.begin()
            while cursor != end:
                cursor = cursor.next()
    return watch.total


def _list_iter(size: int, iterations: int, seed: int) -> float:
    items, _ = _init_list(size, seed)
    watch = _Stopwatch()
    for _ in range(iterations):
        with watch:
            for _value in items:
                pass
    return watch.total


def _tree_reverse_iter(size: int, iterations: int, seed: int) -> float:
    tree, _ = _init_tree(size, seed)
    watch = _Stopwatch()
    begin = tree.begin()
    for _ in range(iterations):
        with watch:
            cursor = tree.end()
            while cursor != begin:
                cursor = cursor.prev()
    return watch.total


def _list_reverse_iter(size: int, iterations: int, seed: int) -> float:
    items, _ = _init_list(size, seed)
    watch = _Stopwatch()
    for _ in range(iterations):
        with watch:
            for _value in reversed(items):
                pass
    return watch.total


_RUNNERS: dict[tuple[str, str], Callable[[int, int, int], float]] = {
    ("insert", AVLTREE): _tree_insert,
    ("insert", SORTEDCONTAINERS): _list_insert,
    ("erase", AVLTREE): _tree_erase,
    ("erase", SORTEDCONTAINERS): _list_erase,
    ("find", AVLTREE): _tree_find,
    ("find", SORTEDCONTAINERS): _list_find,
    ("lower_bound", AVLTREE): _tree_lower_bound,
    ("lower_bound", SORTEDCONTAINERS): _list_lower_bound,
    ("equal_range", AVLTREE): _tree_equal_range,
    ("equal_range", SORTEDCONTAINERS): _list_equal_range,
    ("distance", AVLTREE): _tree_distance,
    ("distance", SORTEDCONTAINERS): _list_distance,
    ("iter", AVLTREE): _tree_iter,
    ("iter", SORTEDCONTAINERS): _list_iter,
    ("reverse_iter", AVLTREE): _tree_reverse_iter,
    ("reverse_iter", SORTEDCONTAINERS): _list_reverse_iter,
}


def run_benchmarks(
    size: int = DEFAULT_SIZE,
    iterations: int = DEFAULT_ITERATIONS,
    seed: int | None = None,
) -> list[BenchResult]:
    """Run every benchmark on both implementations and return the timings."""
    if size < 1:
        raise ValueError("size must be at least 1")
    if iterations < 0:
        raise ValueError("iterations must not be negative")
    if seed is None:
        seed = random.SystemRandom().getrandbits(32)

    return [
        BenchResult(
            name=name,
            implementation=implementation,
            iterations=iterations,
            seconds=_RUNNERS[name, implementation](size, iterations, seed),
        )
        for name in BENCHMARKS
        for implementation in IMPLEMENTATIONS
    ]


def _format(results: Sequence[BenchResult]) -> str:
    width = max(len("Benchmark"), *(len(r.label) for r in results))
    lines = [f"{'Benchmark':<{width}}  {'Time (ns)':>14}  {'Iterations':>10}"]
    lines.append("-" * len(lines[0]))
    lines.extend(
        f"{r.label:<{width}}  {r.ns_per_iteration:>14.1f}  {r.iterations:>10}"
        for r in results
    )
    return "\n".join(lines)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="avltree-bench",
        description="Time tree operations against sortedcontainers.SortedList.",
    )
    parser.add_argument("--size", type=int, default=DEFAULT_SIZE,
                        help="number of elements in each container")
    parser.add_argument("--iterations", type=int, default=DEFAULT_ITERATIONS,
                        help="timed repetitions of each operation")
    parser.add_argument("--seed", type=int, default=None,
                        help="random seed (random if omitted)")
    args = parser.parse_args(argv)

    try:
        results = run_benchmarks(args.size, args.iterations, args.seed)
    except ValueError as exc:
        parser.error(str(exc))

    print(_format(results), file=sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())