"""
Test fixtures package for incremental Merkle tree tests.

Usage:
    from fixtures.common import make_sum_tree, tuple_hash

    def test_something():
        tree = make_sum_tree([1, 2, 3])
"""

from .common import (
    CountingHash,
    make_digest_leaves,
    make_digest_tree,
    make_sum_tree,
    naive_root,
    sum_hash,
    tuple_hash,
)

__all__ = [
    "CountingHash",
    "make_digest_leaves",
    "make_digest_tree",
    "make_sum_tree",
    "naive_root",
    "sum_hash",
    "tuple_hash",
]
