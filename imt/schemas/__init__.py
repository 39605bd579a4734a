"""
Schemas & Canonicalization

Purpose: Export the error taxonomy, canonical JSON helpers and the
proof wire model.
"""

# Canonical serialization API
from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonicalize_value,
    dumps_canonical,
    loads_canonical,
)

# Error models and exceptions
from .errors import (
    CanonicalizationException,
    CapacityExceededException,
    ErrorCodes,
    IMTError,
    IMTException,
    IndexOutOfRangeException,
    InvalidArgumentException,
    ProofDecodeException,
    TreeFullException,
)

# Wire models
from .proof import MerkleProofModel


__all__ = [
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "canonicalize_value",
    "dumps_canonical",
    "loads_canonical",
    # Errors
    "ErrorCodes",
    "IMTError",
    "IMTException",
    "InvalidArgumentException",
    "CapacityExceededException",
    "TreeFullException",
    "IndexOutOfRangeException",
    "CanonicalizationException",
    "ProofDecodeException",
    # Models
    "MerkleProofModel",
]
