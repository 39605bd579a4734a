"""
Hashing Utilities
Byte hashing, canonical leaf hashing and combining hash functions.

This module provides:
- SHA-256 hashing for raw bytes
- Canonical hashing for objects (leaf construction)
- Hex encoding/decoding with 0x prefix
- Combining hash functions (children -> parent) for byte-valued trees,
  registered by name so configuration can select one

The tree engine itself is hash-agnostic; nothing here is required to
use it. These are the stock choices for trees whose nodes are digests.
"""
from __future__ import annotations

import hashlib
from typing import Any, Callable, Sequence

from imt.schemas.canonical import dumps_canonical
from imt.schemas.errors import InvalidArgumentException


# Width of the big-endian length prefix used by length_prefixed_combine
LENGTH_PREFIX_BYTES = 4


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def hash_canonical(obj: Any) -> bytes:
    """
    Hash an object using canonical JSON serialization.

    This is the standard way to turn application data into a leaf.

    Rule: leaf = sha256(dumps_canonical(obj).encode("utf-8"))

    Raises:
        CanonicalizationException: If object cannot be canonically serialized
    """
    canonical_json = dumps_canonical(obj)
    return sha256(canonical_json.encode("utf-8"))


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters

    Example:
        >>> from_hex("0xdeadbeef").hex()
        'deadbeef'
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


def sha256_combine(children: Sequence[bytes]) -> bytes:
    """
    Combine child digests into a parent: sha256(c0 + c1 + ... + cn).

    For fixed-size digests (the usual case) plain concatenation is
    unambiguous.
    """
    return sha256(b"".join(children))


def length_prefixed_combine(children: Sequence[bytes]) -> bytes:
    """
    Combine children of arbitrary length: each child is preceded by its
    4-byte big-endian length before hashing, so children of different
    sizes cannot be re-split into a colliding sequence.
    """
    hasher = hashlib.sha256()
    for child in children:
        hasher.update(len(child).to_bytes(LENGTH_PREFIX_BYTES, "big"))
        hasher.update(child)
    return hasher.digest()


def blake2b_combine(children: Sequence[bytes]) -> bytes:
    """Combine children with a 32-byte BLAKE2b digest of their concatenation."""
    return hashlib.blake2b(b"".join(children), digest_size=32).digest()


HashCombiner = Callable[[Sequence[bytes]], bytes]

HASH_FUNCTIONS: dict[str, HashCombiner] = {
    "sha256": sha256_combine,
    "sha256-length-prefixed": length_prefixed_combine,
    "blake2b": blake2b_combine,
}


def get_hash_function(name: str) -> HashCombiner:
    """
    Look up a registered combining hash function by name.

    Raises:
        InvalidArgumentException: If no function is registered under name
    """
    try:
        return HASH_FUNCTIONS[name.lower()]
    except KeyError:
        raise InvalidArgumentException(
            f"Unknown hash function {name!r}",
            argument="hash",
            details={"available": sorted(HASH_FUNCTIONS)},
        ) from None


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
