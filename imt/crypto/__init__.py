"""
Cryptographic utilities.

Byte hashing, hex helpers and the named combining hash functions
available to configured trees.
"""
from .hashing import (
    HASH_FUNCTIONS,
    blake2b_combine,
    from_hex,
    get_hash_function,
    hash_canonical,
    length_prefixed_combine,
    sha256,
    sha256_combine,
    to_hex,
)

__all__ = [
    "sha256",
    "hash_canonical",
    "to_hex",
    "from_hex",
    "sha256_combine",
    "length_prefixed_combine",
    "blake2b_combine",
    "HASH_FUNCTIONS",
    "get_hash_function",
]
