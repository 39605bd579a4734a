"""
Zero-Value Table and Reference Recomputation

A tree of fixed depth and arity never materializes the empty part of a
level. Any child position at or beyond a level's populated length stands
for a fully empty subtree, whose value depends only on the level:

    zeroes[0]     = zero value supplied by the caller
    zeroes[l + 1] = hash([zeroes[l]] * arity)

The root of a tree without leaves is one more application on top of
zeroes[depth - 1].

This module also provides build_merkle_root(), a from-scratch bottom-up
recomputation over a leaf list using the same padding rule. The
incremental tree must always agree with it.
"""
from __future__ import annotations

from typing import Callable, Sequence, TypeVar

from imt.schemas.errors import CapacityExceededException

N = TypeVar("N")

HashFunction = Callable[[list[N]], N]


def max_leaves(depth: int, arity: int) -> int:
    """Number of leaf slots in a tree: arity ** depth (exact integer)."""
    return arity ** depth


def compute_zeroes(
    hash_fn: HashFunction,
    depth: int,
    zero_value: N,
    arity: int,
) -> tuple[tuple[N, ...], N]:
    """
    Precompute the zero value of every level below the root.

    Args:
        hash_fn: Combining hash function (children -> parent)
        depth: Number of levels below the root
        zero_value: Value of an empty leaf
        arity: Children per internal node

    Returns:
        (zeroes, empty_root) where zeroes has one entry per level
        0..depth-1 and empty_root is the root of an empty tree
    """
    zeroes: list[N] = []
    current = zero_value
    for _ in range(depth):
        zeroes.append(current)
        current = hash_fn([current] * arity)
    return tuple(zeroes), current


def parent_level(
    hash_fn: HashFunction,
    children: Sequence[N],
    zero: N,
    arity: int,
) -> list[N]:
    """
    Hash one populated level into its parent level.

    Children are grouped in windows of arity; window positions past the
    end of the level take the level's zero value. Produces
    ceil(len(children) / arity) parents.
    """
    count = len(children)
    parents: list[N] = []
    for start in range(0, count, arity):
        group = [
            children[i] if i < count else zero
            for i in range(start, start + arity)
        ]
        parents.append(hash_fn(group))
    return parents


def build_merkle_root(
    hash_fn: HashFunction,
    depth: int,
    zero_value: N,
    arity: int,
    leaves: Sequence[N],
) -> N:
    """
    Recompute a root from scratch over the given leaves.

    Example (sum as the hash, zero value 0):
        >>> build_merkle_root(sum, 2, 0, 2, [1, 2, 3])
        6
    """
    capacity = max_leaves(depth, arity)
    if len(leaves) > capacity:
        raise CapacityExceededException(
            f"The tree cannot contain more than {capacity} leaves",
            capacity=capacity,
            requested=len(leaves),
        )

    zeroes, empty_root = compute_zeroes(hash_fn, depth, zero_value, arity)
    if not leaves:
        return empty_root

    level: list[N] = list(leaves)
    for zero in zeroes:
        level = parent_level(hash_fn, level, zero, arity)
    return level[0]


__all__ = [
    "HashFunction",
    "max_leaves",
    "compute_zeroes",
    "parent_level",
    "build_merkle_root",
]
