"""
Hashing Unit Tests
Tests for core/crypto/hashing.py

1. keccak256 matches the Ethereum test vector
2. Sorted-pair hashing is order independent
3. Hex helpers round-trip and reject malformed input
4. Case-insensitive hex comparison
"""
import pytest

from core.crypto.hashing import (
    from_hex,
    hash_sorted_pair,
    hex_equal,
    is_hash_hex,
    keccak256,
    normalize_hex,
    to_hex,
)


class TestKeccak:
    """Tests for keccak256."""

    def test_empty_input_vector(self):
        """keccak256(b"") is the well-known Ethereum empty hash, not sha3-256."""
        assert keccak256(b"").hex() == (
            "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
        )

    def test_pycryptodome_backend_installed(self):
        """eth-utils delegates keccak to eth-hash, which needs a backend."""
        from Crypto.Hash import keccak

        digest = keccak.new(digest_bits=256, data=b"allowlist").digest()
        assert keccak256(b"allowlist") == digest

    def test_digest_is_32_bytes(self):
        assert len(keccak256(b"allowlist")) == 32

    def test_deterministic(self):
        assert keccak256(b"x") == keccak256(b"x")
        assert keccak256(b"x") != keccak256(b"y")


class TestSortedPair:
    """Tests for hash_sorted_pair."""

    def test_order_independent(self):
        a = keccak256(b"a")
        b = keccak256(b"b")
        assert hash_sorted_pair(a, b) == hash_sorted_pair(b, a)

    def test_concatenates_smaller_first(self):
        a = bytes(32)
        b = b"\xff" * 32
        assert hash_sorted_pair(b, a) == keccak256(a + b)


class TestHexHelpers:
    """Tests for to_hex / from_hex / normalize_hex."""

    def test_to_hex_prefix_and_lowercase(self):
        assert to_hex(bytes.fromhex("DEADBEEF")) == "0xdeadbeef"

    def test_from_hex_roundtrip(self):
        data = keccak256(b"roundtrip")
        assert from_hex(to_hex(data)) == data

    def test_from_hex_accepts_uppercase_prefix(self):
        assert from_hex("0XABCD") == b"\xab\xcd"

    def test_from_hex_requires_prefix(self):
        with pytest.raises(ValueError, match="0x"):
            from_hex("abcd")

    def test_from_hex_rejects_odd_length(self):
        with pytest.raises(ValueError, match="even length"):
            from_hex("0xabc")

    def test_from_hex_rejects_bad_characters(self):
        with pytest.raises(ValueError, match="Invalid hex"):
            from_hex("0xzz")

    def test_normalize_hex(self):
        assert normalize_hex("  0xABcd ") == "0xabcd"
        assert normalize_hex("ABCD") == "0xabcd"

    def test_is_hash_hex(self):
        assert is_hash_hex("0x" + "ab" * 32)
        assert not is_hash_hex("0x" + "ab" * 31)
        assert not is_hash_hex("not hex")


class TestHexEqual:
    """Tests for hex_equal."""

    def test_case_insensitive(self):
        assert hex_equal("0xABCDEF", "0xabcdef")

    def test_different_values(self):
        assert not hex_equal("0x01", "0x02")

    def test_none_never_matches(self):
        assert not hex_equal(None, "0x01")
        assert not hex_equal(None, None)
