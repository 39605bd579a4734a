"""
Proof Serialization
Convert MerkleProof records to and from plain dicts and JSON.

External Record (field names are part of the contract):
    {
        "root": <node>,
        "leaf": <node>,
        "leafIndex": <int>,
        "siblings": [[<node>, ...], ...],   # per level, leaf level first
        "pathIndices": [<int>, ...]          # per level, leaf level first
    }

Node Encoding:
- Default encoder: bytes -> 0x-prefixed hex, other values unchanged
- Default decoder: identity; pass from_hex to restore byte digests
"""
from __future__ import annotations

from typing import Any, Callable, Optional

from pydantic import ValidationError

from imt.crypto.hashing import to_hex
from imt.merkle.merkle_proofs import MerkleProof
from imt.schemas.canonical import dumps_canonical, loads_canonical
from imt.schemas.errors import ProofDecodeException
from imt.schemas.proof import MerkleProofModel


NodeEncoder = Callable[[Any], Any]
NodeDecoder = Callable[[Any], Any]


def encode_node(node: Any) -> Any:
    """Default node encoder: bytes become 0x hex strings."""
    if isinstance(node, bytes):
        return to_hex(node)
    return node


def proof_to_model(
    proof: MerkleProof,
    encode: Optional[NodeEncoder] = None,
) -> MerkleProofModel:
    """Build the wire model for a proof."""
    encode = encode or encode_node
    return MerkleProofModel(
        root=encode(proof.root),
        leaf=encode(proof.leaf),
        leaf_index=proof.leaf_index,
        siblings=[[encode(node) for node in group] for group in proof.siblings],
        path_indices=list(proof.path_indices),
    )


def proof_to_dict(
    proof: MerkleProof,
    encode: Optional[NodeEncoder] = None,
) -> dict[str, Any]:
    """
    Convert a proof to a JSON-compatible dict using the external field names.

    Example:
        >>> proof_to_dict(tree.create_proof(0))["pathIndices"]
        [0, 0]
    """
    return proof_to_model(proof, encode).model_dump(mode="json", by_alias=True)


def proof_from_dict(
    data: dict[str, Any],
    decode: Optional[NodeDecoder] = None,
) -> MerkleProof:
    """
    Rebuild a MerkleProof from its dict form.

    Args:
        data: Dict with root, leaf, leafIndex, siblings, pathIndices
        decode: Optional node decoder (e.g. from_hex)

    Raises:
        ProofDecodeException: If the dict does not match the record shape
            or a node cannot be decoded
    """
    try:
        model = MerkleProofModel.model_validate(data)
    except ValidationError as e:
        raise ProofDecodeException(
            f"Invalid proof record: {e.error_count()} validation error(s)",
            details={"errors": [err["msg"] for err in e.errors()]},
        ) from e

    if decode is None:
        def decode(node: Any) -> Any:
            return node

    try:
        return MerkleProof(
            root=decode(model.root),
            leaf=decode(model.leaf),
            leaf_index=model.leaf_index,
            siblings=tuple(tuple(decode(node) for node in group) for group in model.siblings),
            path_indices=tuple(model.path_indices),
        )
    except (AttributeError, TypeError, ValueError) as e:
        raise ProofDecodeException(
            f"Cannot decode proof node: {e}",
            details={"error": str(e)},
        ) from e


def dumps_proof(proof: MerkleProof, encode: Optional[NodeEncoder] = None) -> str:
    """Serialize a proof to canonical JSON (sorted keys, no whitespace)."""
    return dumps_canonical(proof_to_dict(proof, encode))


def loads_proof(json_str: str, decode: Optional[NodeDecoder] = None) -> MerkleProof:
    """
    Parse a proof from JSON.

    Raises:
        ProofDecodeException: If the JSON is malformed or not a proof record
    """
    try:
        data = loads_canonical(json_str)
    except ValueError as e:
        raise ProofDecodeException(f"Invalid proof JSON: {e}") from e
    if not isinstance(data, dict):
        raise ProofDecodeException(
            "Proof JSON must be an object",
            details={"type": type(data).__name__},
        )
    return proof_from_dict(data, decode)


__all__ = [
    "encode_node",
    "proof_to_model",
    "proof_to_dict",
    "proof_from_dict",
    "dumps_proof",
    "loads_proof",
]
