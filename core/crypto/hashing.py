"""
Hashing Utilities
Keccak-256 hashing and hex helpers for allowlist merkle trees.

This module provides:
- keccak256 over raw bytes (Ethereum-compatible, via eth-utils)
- Sorted-pair hashing used for internal merkle nodes
- Hex encoding/decoding with 0x prefix
- Case-insensitive hex normalization and comparison

Compatibility Notes:
- keccak-256 is NOT hashlib.sha3_256 (different padding); roots built here
  must verify against on-chain MerkleProof verifiers, so only keccak is used.
- Hex strings are compared after lowercasing; casing carries no meaning.
"""
from __future__ import annotations

from eth_utils import keccak


def keccak256(data: bytes) -> bytes:
    """
    Compute the keccak-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte keccak-256 digest

    Example:
        >>> keccak256(b"").hex()
        'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'
    """
    return keccak(data)


def hash_sorted_pair(a: bytes, b: bytes) -> bytes:
    """
    Hash two sibling nodes in canonical (sorted) order.

    parent = keccak256(min(a, b) || max(a, b))

    Sorting the pair first means a verifier only needs the sibling hashes,
    never their left/right position.
    """
    if b < a:
        a, b = b, a
    return keccak256(a + b)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to a lowercase hex string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert a hexadecimal string (with 0x prefix) to bytes.

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith(("0x", "0X")):
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


def normalize_hex(value: str) -> str:
    """Lowercase a hex string and make sure it carries the 0x prefix."""
    value = value.strip().lower()
    if not value.startswith("0x"):
        value = "0x" + value
    return value


def is_hash_hex(value: str) -> bool:
    """True if value is a 0x-prefixed 32-byte hex string (any casing)."""
    try:
        return len(from_hex(value)) == 32
    except (ValueError, AttributeError):
        return False


def hex_equal(left: str | None, right: str | None) -> bool:
    """Compare two hex strings case-insensitively. None never matches."""
    if left is None or right is None:
        return False
    return normalize_hex(left) == normalize_hex(right)


__all__ = [
    "keccak256",
    "hash_sorted_pair",
    "to_hex",
    "from_hex",
    "normalize_hex",
    "is_hash_hex",
    "hex_equal",
]
