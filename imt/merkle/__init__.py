"""
Incremental Merkle Tree engine.

This package provides:
- IncrementalMerkleTree: fixed-depth, fixed-arity tree with insert,
  update, delete and proof creation
- MerkleProof: detached, immutable inclusion proof
- verify_proof: stand-alone verification with an explicit hash function
- compute_zeroes / build_merkle_root: zero-value table and full
  recomputation from leaves
- proof_to_dict / proof_from_dict / dumps_proof / loads_proof: proof codec

Usage:
    from imt.merkle import IncrementalMerkleTree, verify_proof
    from imt.crypto import sha256_combine

    tree = IncrementalMerkleTree(sha256_combine, depth=16, zero_value=bytes(32))
    tree.insert(leaf)
    proof = tree.create_proof(0)
    assert verify_proof(proof, sha256_combine)
"""
from .incremental_tree import IncrementalMerkleTree

from .merkle_proofs import (
    MerkleProof,
    MerkleVerifier,
    verify_proof,
)

from .serialization import (
    dumps_proof,
    loads_proof,
    proof_from_dict,
    proof_to_dict,
)

from .zeroes import (
    HashFunction,
    build_merkle_root,
    compute_zeroes,
    max_leaves,
)


__all__ = [
    # Core types
    "IncrementalMerkleTree",
    "MerkleProof",
    "HashFunction",
    # Core functions
    "verify_proof",
    "compute_zeroes",
    "max_leaves",
    "build_merkle_root",
    # Serialization
    "proof_to_dict",
    "proof_from_dict",
    "dumps_proof",
    "loads_proof",
    # Convenience classes
    "MerkleVerifier",
]
