"""
Core cryptographic utilities.

keccak-256 hashing and hex helpers shared by the merkle engine and stores.
"""
from .hashing import (
    keccak256,
    hash_sorted_pair,
    to_hex,
    from_hex,
    normalize_hex,
    is_hash_hex,
    hex_equal,
)

__all__ = [
    "keccak256",
    "hash_sorted_pair",
    "to_hex",
    "from_hex",
    "normalize_hex",
    "is_hash_hex",
    "hex_equal",
]
