"""Intrusive order-statistic AVL tree with cursors, bound queries and benchmarks."""

__version__ = "0.1.0"
__all__ = ["tree", "bench"]