"""
Hashing Unit Tests
Tests for imt/crypto/hashing.py

Tests:
- sha256 / hash_canonical stability
- to_hex/from_hex round trip and validation
- combining hash functions and the name registry
"""
import hashlib

import pytest

from imt.crypto.hashing import (
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
from imt.schemas.errors import ErrorCodes, InvalidArgumentException


class TestSha256:
    """Tests for sha256()."""

    def test_sha256_known_value(self):
        """sha256 matches hashlib."""
        result = sha256(b"hello")

        assert result == hashlib.sha256(b"hello").digest()
        assert len(result) == 32


class TestHashCanonical:
    """Tests for hash_canonical()."""

    def test_stable_for_key_order(self):
        """Dict key order does not change the hash."""
        assert hash_canonical({"a": 1, "b": 2}) == hash_canonical({"b": 2, "a": 1})

    def test_equals_sha256_of_canonical_json(self):
        """leaf = sha256(canonical JSON)."""
        assert hash_canonical({"b": 2, "a": 1}) == sha256(b'{"a":1,"b":2}')


class TestHex:
    """Tests for to_hex()/from_hex()."""

    def test_to_hex(self):
        """Bytes become 0x-prefixed lowercase hex."""
        assert to_hex(bytes.fromhex("deadbeef")) == "0xdeadbeef"

    def test_from_hex(self):
        """0x hex decodes to bytes."""
        assert from_hex("0xdeadbeef") == bytes.fromhex("deadbeef")

    def test_round_trip(self):
        """from_hex inverts to_hex."""
        data = sha256(b"round trip")

        assert from_hex(to_hex(data)) == data

    def test_missing_prefix_raises(self):
        """Strings without 0x are rejected."""
        with pytest.raises(ValueError, match="0x"):
            from_hex("deadbeef")

    def test_odd_length_raises(self):
        """Odd number of hex digits is rejected."""
        with pytest.raises(ValueError, match="even length"):
            from_hex("0xabc")

    def test_invalid_characters_raise(self):
        """Non-hex characters are rejected."""
        with pytest.raises(ValueError, match="Invalid hex"):
            from_hex("0xzz")


class TestCombiners:
    """Tests for the combining hash functions."""

    def test_sha256_combine_is_hash_of_concatenation(self):
        """sha256_combine(children) == sha256(c0 + c1 + ...)."""
        a, b, c = sha256(b"a"), sha256(b"b"), sha256(b"c")

        assert sha256_combine([a, b, c]) == sha256(a + b + c)

    def test_sha256_combine_order_matters(self):
        """Child order changes the parent."""
        a, b = sha256(b"a"), sha256(b"b")

        assert sha256_combine([a, b]) != sha256_combine([b, a])

    def test_length_prefix_separates_boundaries(self):
        """Re-splitting the same bytes gives a different parent."""
        assert length_prefixed_combine([b"ab", b"c"]) != length_prefixed_combine([b"a", b"bc"])
        assert sha256_combine([b"ab", b"c"]) == sha256_combine([b"a", b"bc"])

    def test_blake2b_digest_size(self):
        """blake2b_combine yields 32 bytes, different from sha256."""
        children = [sha256(b"x"), sha256(b"y")]
        result = blake2b_combine(children)

        assert len(result) == 32
        assert result != sha256_combine(children)


class TestRegistry:
    """Tests for get_hash_function()."""

    def test_known_names(self):
        """Every registered name resolves."""
        for name, fn in HASH_FUNCTIONS.items():
            assert get_hash_function(name) is fn

    def test_case_insensitive(self):
        """Lookup ignores case."""
        assert get_hash_function("SHA256") is sha256_combine

    def test_unknown_name_raises(self):
        """Unknown names raise InvalidArgumentException listing the options."""
        with pytest.raises(InvalidArgumentException) as exc_info:
            get_hash_function("md5")

        assert exc_info.value.code == ErrorCodes.INVALID_ARGUMENT
        assert "sha256" in exc_info.value.details["available"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
