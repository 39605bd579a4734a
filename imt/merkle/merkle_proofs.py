"""
Merkle Proofs
Proof record and stand-alone verification.

A MerkleProof is a detached snapshot: it holds the root and leaf at the
time it was created plus the authentication path, and keeps no reference
to the tree. Later mutations of the tree never affect it.

Verification Rule:
    node = leaf
    for each level (leaf level first):
        children = siblings[level] with node inserted at path_indices[level]
        node = hash(children)
    valid iff node == root

Verification only trusts the hash function and the proof's own contents.
It fails closed: anything malformed verifies to False instead of raising.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Generic, Optional, Sequence, TypeVar

from imt.merkle.zeroes import HashFunction


logger = logging.getLogger(__name__)

N = TypeVar("N")


@dataclass(frozen=True)
class MerkleProof(Generic[N]):
    """
    A Merkle inclusion proof for a single leaf.

    Attributes:
        root: Root of the tree when the proof was created
        leaf: Leaf value being proven
        leaf_index: 0-based index of the leaf
        siblings: Per level (leaf level first), the arity - 1 other
            children of the group containing the path node, left to right
        path_indices: Per level, the position of the path node within
            its group

    Sequences are stored as tuples so the record is immutable and can be
    shared between threads.
    """
    root: N
    leaf: N
    leaf_index: int
    siblings: tuple[tuple[N, ...], ...] = field(default_factory=tuple)
    path_indices: tuple[int, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.leaf_index < 0:
            raise ValueError(f"Leaf index must be non-negative, got {self.leaf_index}")
        object.__setattr__(
            self, "siblings", tuple(tuple(group) for group in self.siblings)
        )
        object.__setattr__(self, "path_indices", tuple(self.path_indices))

    @property
    def depth(self) -> int:
        """Number of levels covered by the authentication path."""
        return len(self.siblings)


def verify_proof(proof: Optional[MerkleProof[N]], hash_fn: HashFunction) -> bool:
    """
    Verify a MerkleProof against its own claimed root.

    Does not check that the proof came from any particular tree; use the
    tree's root for that.

    Args:
        proof: The proof to check (None verifies to False)
        hash_fn: Combining hash function the tree was built with

    Returns:
        True if recomputing the path from the leaf yields proof.root
    """
    if proof is None:
        return False

    if len(proof.siblings) != len(proof.path_indices):
        logger.debug(
            "Proof rejected: %d sibling groups vs %d path indices",
            len(proof.siblings),
            len(proof.path_indices),
        )
        return False

    # Every level of one tree has arity - 1 siblings
    group_sizes = {len(group) for group in proof.siblings}
    if len(group_sizes) > 1:
        logger.debug("Proof rejected: uneven sibling groups %s", sorted(group_sizes))
        return False

    node = proof.leaf

    try:
        for level, (group, position) in enumerate(zip(proof.siblings, proof.path_indices)):
            if not 0 <= position <= len(group):
                logger.debug(
                    "Proof rejected: path index %d out of range at level %d",
                    position,
                    level,
                )
                return False

            children = list(group)
            children.insert(position, node)
            node = hash_fn(children)
    except Exception as e:
        logger.debug("Proof rejected: hash function failed: %r", e)
        return False

    return node == proof.root


class MerkleVerifier:
    """
    Convenience class for verifying Merkle proofs.

    Example:
        >>> proof = tree.create_proof(1)
        >>> MerkleVerifier.verify(proof, sha256_combine)
        True
    """

    @staticmethod
    def verify(proof: Optional[MerkleProof[N]], hash_fn: HashFunction) -> bool:
        """Verify a proof with an explicit hash function."""
        return verify_proof(proof, hash_fn)

    @staticmethod
    def verify_leaf_in_root(
        leaf: N,
        leaf_index: int,
        siblings: Sequence[Sequence[N]],
        path_indices: Sequence[int],
        root: N,
        hash_fn: HashFunction,
    ) -> bool:
        """
        Verify a leaf against a root using raw proof components.

        A negative leaf index cannot form a proof and verifies to False.
        """
        if leaf_index < 0:
            return False
        proof = MerkleProof(
            root=root,
            leaf=leaf,
            leaf_index=leaf_index,
            siblings=tuple(tuple(group) for group in siblings),
            path_indices=tuple(path_indices),
        )
        return verify_proof(proof, hash_fn)


__all__ = [
    "MerkleProof",
    "MerkleVerifier",
    "verify_proof",
]
