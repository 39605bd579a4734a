"""
Incremental Merkle Tree
Fixed-depth, configurable-arity hash tree with append-only insertion,
in-place update, logical deletion and membership proofs.

Storage Rules:
1. nodes[0] holds the leaves, nodes[depth] holds exactly one value (the root)
2. Each level stores only its populated prefix; a position at or beyond
   the level's length is implied by zeroes[level]
3. Parent at (level + 1, i) = hash(children at level, positions
   i * arity .. i * arity + arity - 1), missing children -> zeroes[level]
4. Every mutation rewrites only the path from one leaf to the root

Node values are opaque to the tree: they are stored, compared with ==
and handed to the hash function, nothing else.

Concurrency:
- The tree holds no locks. Mutations must be serialized by the caller.
- Accessors return copies or immutable values; proofs are detached.
"""
from __future__ import annotations

import logging
from typing import Generic, Iterable, Optional, Sequence, TypeVar

from imt.merkle.merkle_proofs import MerkleProof, verify_proof
from imt.merkle.zeroes import HashFunction, compute_zeroes, max_leaves, parent_level
from imt.schemas.errors import (
    CapacityExceededException,
    IndexOutOfRangeException,
    InvalidArgumentException,
    TreeFullException,
)


logger = logging.getLogger(__name__)

N = TypeVar("N")


class IncrementalMerkleTree(Generic[N]):
    """
    Incremental Merkle tree over caller-chosen node values.

    Example (sum as the hash, zero value 0):
        >>> tree = IncrementalMerkleTree(sum, depth=2, zero_value=0, arity=2)
        >>> for leaf in (1, 2, 3):
        ...     tree.insert(leaf)
        >>> tree.root
        6
        >>> tree.update(0, 4)
        >>> tree.root
        9
    """

    def __init__(
        self,
        hash_fn: HashFunction,
        depth: int,
        zero_value: N,
        arity: int = 2,
        leaves: Optional[Sequence[N]] = None,
    ) -> None:
        """
        Build the zero-value table and, if given, bulk-load leaves.

        Args:
            hash_fn: Combining hash function, children (length arity) -> parent
            depth: Number of edges from a leaf to the root (> 0)
            zero_value: Value of an empty leaf
            arity: Children per internal node (> 0)
            leaves: Optional initial leaves, stored in order

        Raises:
            InvalidArgumentException: Missing hash function, depth <= 0 or arity <= 0
            CapacityExceededException: More than arity ** depth initial leaves
        """
        if hash_fn is None or not callable(hash_fn):
            raise InvalidArgumentException("Hash function is required", argument="hash_fn")
        if depth <= 0:
            raise InvalidArgumentException(
                f"Depth must be positive, got {depth}", argument="depth"
            )
        if arity <= 0:
            raise InvalidArgumentException(
                f"Arity must be positive, got {arity}", argument="arity"
            )

        capacity = max_leaves(depth, arity)
        leaves = list(leaves) if leaves is not None else []
        if len(leaves) > capacity:
            raise CapacityExceededException(
                f"The tree cannot contain more than {capacity} leaves (arity^depth)",
                capacity=capacity,
                requested=len(leaves),
            )

        self._hash = hash_fn
        self._depth = depth
        self._arity = arity
        self._capacity = capacity
        self._zeroes, empty_root = compute_zeroes(hash_fn, depth, zero_value, arity)
        self._nodes: list[list[N]] = [[] for _ in range(depth + 1)]

        if leaves:
            self._nodes[0] = leaves
            for level in range(depth):
                self._nodes[level + 1] = parent_level(
                    hash_fn, self._nodes[level], self._zeroes[level], arity
                )
        else:
            self._nodes[depth] = [empty_root]

        logger.debug(
            "Created tree depth=%d arity=%d with %d leaves",
            depth,
            arity,
            len(leaves),
        )

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def root(self) -> N:
        """Current root: the single value of the top level."""
        return self._nodes[self._depth][0]

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def arity(self) -> int:
        return self._arity

    @property
    def capacity(self) -> int:
        """Maximum number of leaves (arity ** depth)."""
        return self._capacity

    @property
    def size(self) -> int:
        """Number of leaves inserted so far (deleted leaves included)."""
        return len(self._nodes[0])

    @property
    def leaves(self) -> list[N]:
        """Copy of the populated leaves."""
        return list(self._nodes[0])

    @property
    def zeroes(self) -> tuple[N, ...]:
        """Zero value of every level below the root (immutable)."""
        return self._zeroes

    @property
    def hash_fn(self) -> HashFunction:
        return self._hash

    def levels(self) -> list[list[N]]:
        """Copy of every materialized level, leaves first, root last."""
        return [list(level) for level in self._nodes]

    def index_of(self, leaf: N) -> int:
        """
        Index of the first leaf equal (==) to the given value.

        Returns:
            The leaf index, or -1 if no leaf matches
        """
        for index, value in enumerate(self._nodes[0]):
            if value == leaf:
                return index
        return -1

    def __len__(self) -> int:
        return self.size

    def __contains__(self, leaf: object) -> bool:
        return self.index_of(leaf) != -1

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(depth={self._depth}, arity={self._arity}, "
            f"size={self.size}, root={self.root!r})"
        )

    # -------------------------------------------------------------------------
    # Mutators
    # -------------------------------------------------------------------------

    def insert(self, leaf: N) -> None:
        """
        Append a leaf after the current last one.

        Each node on the path from the new leaf to the root is created
        or rewritten, bottom to top. Missing siblings take the zero
        value of their level.

        Raises:
            TreeFullException: If the tree already holds arity ** depth leaves
        """
        if self.size >= self._capacity:
            raise TreeFullException("The tree is full", capacity=self._capacity)

        index = self.size
        self._update_path(index, leaf)
        logger.debug("Inserted leaf at index %d", index)

    def insert_many(self, leaves: Iterable[N]) -> None:
        """
        Append several leaves in order.

        The whole batch is checked against the remaining capacity first,
        so either all leaves are inserted or none.

        Raises:
            TreeFullException: If the batch does not fit
        """
        leaves = list(leaves)
        if self.size + len(leaves) > self._capacity:
            raise TreeFullException(
                f"Cannot insert {len(leaves)} leaves: only "
                f"{self._capacity - self.size} free slots",
                capacity=self._capacity,
            )
        for leaf in leaves:
            self.insert(leaf)

    def update(self, index: int, leaf: N) -> None:
        """
        Overwrite the leaf at index and recompute its path to the root.

        Setting a leaf to its current value is a no-op and performs no
        hashing.

        Raises:
            IndexOutOfRangeException: If index is outside [0, size)
        """
        self._check_index(index)

        if self._nodes[0][index] == leaf:
            return

        self._update_path(index, leaf)
        logger.debug("Updated leaf at index %d", index)

    def delete(self, index: int) -> None:
        """
        Reset the leaf at index to the zero value.

        The slot stays in place: size does not change.

        Raises:
            IndexOutOfRangeException: If index is outside [0, size)
        """
        self.update(index, self._zeroes[0])

    # -------------------------------------------------------------------------
    # Proofs
    # -------------------------------------------------------------------------

    def create_proof(self, index: int) -> MerkleProof[N]:
        """
        Create a detached membership proof for the leaf at index.

        Walks the same path as update() without hashing. At each level it
        records the position of the path node within its group and the
        other arity - 1 children of that group, left to right.

        Raises:
            IndexOutOfRangeException: If index is outside [0, size)
        """
        self._check_index(index)

        siblings: list[tuple[N, ...]] = []
        path_indices: list[int] = []
        leaf_index = index

        for level in range(self._depth):
            position = index % self._arity
            start = index - position

            path_indices.append(position)
            siblings.append(tuple(
                self._node_at(level, i)
                for i in range(start, start + self._arity)
                if i != index
            ))

            index //= self._arity

        return MerkleProof(
            root=self.root,
            leaf=self._nodes[0][leaf_index],
            leaf_index=leaf_index,
            siblings=tuple(siblings),
            path_indices=tuple(path_indices),
        )

    def verify_proof(self, proof: Optional[MerkleProof[N]]) -> bool:
        """
        Verify a proof with this tree's hash function.

        Same as imt.merkle.verify_proof(proof, tree.hash_fn): it checks
        internal consistency, not that the proof's root is this tree's.
        """
        return verify_proof(proof, self._hash)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _check_index(self, index: int) -> None:
        if index < 0 or index >= self.size:
            raise IndexOutOfRangeException(
                f"The leaf at index {index} does not exist in this tree",
                index=index,
                size=self.size,
            )

    def _node_at(self, level: int, index: int) -> N:
        nodes = self._nodes[level]
        return nodes[index] if index < len(nodes) else self._zeroes[level]

    def _update_path(self, index: int, node: N) -> None:
        """Store node at (0, index) and rehash every ancestor up to the root."""
        for level in range(self._depth):
            nodes = self._nodes[level]
            if index < len(nodes):
                nodes[index] = node
            else:
                # Insertion is always at the next free slot
                nodes.append(node)

            position = index % self._arity
            start = index - position
            children = [self._node_at(level, i) for i in range(start, start + self._arity)]

            node = self._hash(children)
            index //= self._arity

        self._nodes[self._depth] = [node]


__all__ = ["IncrementalMerkleTree"]
