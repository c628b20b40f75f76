"""
Leaf Codec
Canonical binary encoding of allowlist entries into merkle leaves.

Layouts (must match the on-chain verifier for each tree type):
- allowlist / recipientAmount:
    abi.encode(address, uint256)        -> 64 bytes, two 32-byte slots,
                                           address right-aligned
- recipients:
    abi.encodePacked(address, uint256, uint256)
                                        -> 20 + 32 + 32 = 84 bytes

Leaf = keccak256(encoding). Addresses are lowercased before encoding so that
differently-cased submissions produce identical leaves.
"""
from __future__ import annotations

from typing import Callable, Sequence

from eth_abi import encode
from eth_abi.packed import encode_packed

from core.crypto.hashing import keccak256
from core.schemas.entries import (
    AllowlistEntry,
    MerkleTreeType,
    RecipientAmountEntry,
    RecipientEntry,
    parse_entry,
)
from core.schemas.errors import InvalidSchemaError


def encode_address_and_amount(address: str, amount: int) -> bytes:
    """abi.encode(address, uint256) of a lowercased address."""
    return encode(["address", "uint256"], [address.lower(), int(amount)])


def encode_recipient(collection: str, token_id: int, quantity: int) -> bytes:
    """abi.encodePacked(address, uint256, uint256)."""
    return encode_packed(
        ["address", "uint256", "uint256"],
        [collection.lower(), int(token_id), int(quantity)],
    )


def _encode_recipient_amount(entry: AllowlistEntry) -> bytes:
    if not isinstance(entry, RecipientAmountEntry):
        raise InvalidSchemaError(details={"reason": "expected an address/amount entry"})
    return encode_address_and_amount(entry.address, entry.allotment)


def _encode_recipients(entry: AllowlistEntry) -> bytes:
    if not isinstance(entry, RecipientEntry):
        raise InvalidSchemaError(details={"reason": "expected a collection/tokenId/quantity entry"})
    return encode_recipient(entry.collection, entry.token_id, entry.quantity)


# Encoding strategy per tree type
ENCODERS: dict[MerkleTreeType, Callable[[AllowlistEntry], bytes]] = {
    MerkleTreeType.ALLOWLIST: _encode_recipient_amount,
    MerkleTreeType.RECIPIENT_AMOUNT: _encode_recipient_amount,
    MerkleTreeType.RECIPIENTS: _encode_recipients,
}


def encode_entry(entry: AllowlistEntry | dict, tree_type: MerkleTreeType) -> bytes:
    """
    Encode one entry with the layout of tree_type.

    Raw dicts are validated first, so malformed input raises
    InvalidEntryError / InvalidSchemaError instead of reaching the encoder.
    """
    if isinstance(entry, dict):
        entry = parse_entry(tree_type, entry)
    return ENCODERS[tree_type](entry)


def hash_leaf(entry: AllowlistEntry | dict, tree_type: MerkleTreeType) -> bytes:
    """Leaf hash: keccak256(encode_entry(entry))."""
    return keccak256(encode_entry(entry, tree_type))


def hash_leaves(entries: Sequence[AllowlistEntry | dict], tree_type: MerkleTreeType) -> list[bytes]:
    """Leaf hashes in entry order (the tree sorts them itself)."""
    return [hash_leaf(entry, tree_type) for entry in entries]


__all__ = [
    "encode_address_and_amount",
    "encode_recipient",
    "ENCODERS",
    "encode_entry",
    "hash_leaf",
    "hash_leaves",
]
