"""
Incremental Merkle Tree

Fixed-depth, configurable-arity Merkle tree with append-only insertion,
in-place update, logical deletion and compact membership proofs, over
any ==-comparable node type and any combining hash function.

Usage:
    from imt import IncrementalMerkleTree, verify_proof

    tree = IncrementalMerkleTree(sum, depth=2, zero_value=0, arity=2)
    tree.insert(1)
    proof = tree.create_proof(0)
    assert verify_proof(proof, sum)
"""

from imt.merkle import (
    IncrementalMerkleTree,
    MerkleProof,
    MerkleVerifier,
    build_merkle_root,
    compute_zeroes,
    dumps_proof,
    loads_proof,
    max_leaves,
    proof_from_dict,
    proof_to_dict,
    verify_proof,
)
from imt.schemas.errors import (
    CapacityExceededException,
    IMTException,
    IndexOutOfRangeException,
    InvalidArgumentException,
    TreeFullException,
)

__version__ = "0.1.0"

__all__ = [
    "IncrementalMerkleTree",
    "MerkleProof",
    "MerkleVerifier",
    "verify_proof",
    "build_merkle_root",
    "compute_zeroes",
    "max_leaves",
    "proof_to_dict",
    "proof_from_dict",
    "dumps_proof",
    "loads_proof",
    "IMTException",
    "InvalidArgumentException",
    "CapacityExceededException",
    "TreeFullException",
    "IndexOutOfRangeException",
]
