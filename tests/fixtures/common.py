"""
Common test fixtures shared by all test modules.

Provides:
- Hash functions with known behaviour (sum, injective tuple nesting)
- A call-counting hash wrapper
- An independent, naive root recomputation (recursive, no zero table)
- Tree factories
"""

from typing import Any, Callable, Optional, Sequence

from imt.crypto.hashing import sha256, sha256_combine
from imt.merkle.incremental_tree import IncrementalMerkleTree


def sum_hash(children: list[int]) -> int:
    """Parent = sum of children. Collides freely; good for hand-checked values."""
    return sum(children)


def tuple_hash(children: list[Any]) -> tuple:
    """
    Parent = tuple of children.

    Injective by construction: two different child sequences can never
    produce equal parents, so any tampering is always detected.
    """
    return tuple(children)


class CountingHash:
    """Wraps a hash function and counts how many times it is called."""

    def __init__(self, fn: Callable[[list], Any]) -> None:
        self.fn = fn
        self.calls = 0

    def __call__(self, children: list) -> Any:
        self.calls += 1
        return self.fn(children)

    def reset(self) -> None:
        self.calls = 0


def naive_root(
    hash_fn: Callable[[list], Any],
    depth: int,
    zero_value: Any,
    arity: int,
    leaves: Sequence[Any],
) -> Any:
    """
    Recompute a root by recursion over the full tree of arity ** depth
    leaf slots; empty slots hold the zero value.
    """
    def node(level: int, index: int) -> Any:
        if level == 0:
            return leaves[index] if index < len(leaves) else zero_value
        return hash_fn([node(level - 1, index * arity + k) for k in range(arity)])

    return node(depth, 0)


def make_digest_leaves(count: int, prefix: str = "leaf") -> list[bytes]:
    """Create distinct 32-byte leaves."""
    return [sha256(f"{prefix}{i}".encode()) for i in range(count)]


def make_sum_tree(leaves: Optional[Sequence[int]] = None) -> IncrementalMerkleTree:
    """depth=2, arity=2, zero=0, hash=sum."""
    return IncrementalMerkleTree(sum_hash, depth=2, zero_value=0, arity=2, leaves=leaves)


def make_digest_tree(
    depth: int = 4,
    arity: int = 2,
    leaves: Optional[Sequence[bytes]] = None,
) -> IncrementalMerkleTree:
    """sha256 tree over 32-byte digests with a 32-zero-byte empty leaf."""
    return IncrementalMerkleTree(
        sha256_combine,
        depth=depth,
        zero_value=bytes(32),
        arity=arity,
        leaves=leaves,
    )
