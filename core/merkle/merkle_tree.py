"""
Merkle Tree Implementation
Sorted-pair keccak merkle tree construction, proof generation, and verification.

This module provides:
- Canonical leaf ordering (deduplicate, then sort bytewise)
- Root computation with a configurable odd-node policy
- Proof generation for any leaf (ordered sibling hashes, bottom-up)
- Proof verification without position bits

Canonical Commitment Rules (Hard Contracts):
1. Leaves: keccak256 of the encoded entry (see core.merkle.leaf_codec)
2. Leaf ordering: duplicates dropped, remaining leaves sorted ascending
3. Parent hashing: parent = keccak256(min(a, b) || max(a, b))
4. Odd node at any level: promoted unchanged (PROMOTE, default) or
   paired with itself (DUPLICATE)
5. Single leaf: root = leaf, proof = []
6. Empty leaves: EmptyTreeError, nothing is built

Rules 2-4 mirror the sorted merkletreejs convention consumed by OpenZeppelin
MerkleProof.verify, so roots produced here validate on-chain.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from core.crypto.hashing import from_hex, hash_sorted_pair, to_hex
from core.schemas.errors import EmptyTreeError


class OddNodePolicy(str, Enum):
    """What happens to the last node of a level with an odd count."""

    PROMOTE = "promote"
    DUPLICATE = "duplicate"


def canonical_leaves(leaves: Sequence[bytes]) -> list[bytes]:
    """Deduplicate and sort leaves. Submission order never affects the root."""
    return sorted(set(bytes(leaf) for leaf in leaves))


def build_layers(
    leaves: Sequence[bytes],
    odd_node_policy: OddNodePolicy = OddNodePolicy.PROMOTE,
) -> list[list[bytes]]:
    """
    Build every level of the tree, leaves first, root level last.

    Args:
        leaves: Leaf hashes in canonical order (see canonical_leaves)
        odd_node_policy: Treatment of a trailing unpaired node

    Returns:
        List of levels; layers[-1] == [root]

    Raises:
        EmptyTreeError: If leaves is empty
    """
    if len(leaves) == 0:
        raise EmptyTreeError()

    layers: list[list[bytes]] = [list(leaves)]
    current_level = layers[0]

    while len(current_level) > 1:
        next_level: list[bytes] = []
        for i in range(0, len(current_level), 2):
            if i + 1 < len(current_level):
                next_level.append(hash_sorted_pair(current_level[i], current_level[i + 1]))
            elif odd_node_policy is OddNodePolicy.DUPLICATE:
                next_level.append(hash_sorted_pair(current_level[i], current_level[i]))
            else:
                next_level.append(current_level[i])
        layers.append(next_level)
        current_level = next_level

    return layers


@dataclass(frozen=True)
class MerkleProof:
    """
    Inclusion proof for one leaf.

    Sibling pairs are hashed in sorted order, so no index or direction bits
    are needed to recompute the root.

    Attributes:
        leaf: The leaf hash being proven
        siblings: Sibling hashes from bottom to top of tree
        root: The merkle root this proof is against
    """
    leaf: bytes
    siblings: list[bytes] = field(default_factory=list)
    root: bytes = b""

    def hex_siblings(self) -> list[str]:
        return [to_hex(s) for s in self.siblings]


class MerkleTree:
    """
    An immutable sorted-pair merkle tree over pre-hashed leaves.

    Trees are rebuilt from stored entries on every request, so leaf lookup
    is a linear scan.

    Example:
        >>> tree = MerkleTree([leaf_a, leaf_b, leaf_c])
        >>> proof = tree.get_proof(leaf_b)
        >>> verify_merkle_proof(tree.root, leaf_b, proof.siblings)
        True
    """

    def __init__(
        self,
        leaves: Sequence[bytes],
        odd_node_policy: OddNodePolicy = OddNodePolicy.PROMOTE,
    ) -> None:
        self.odd_node_policy = OddNodePolicy(odd_node_policy)
        self._leaves = canonical_leaves(leaves)
        self._layers = build_layers(self._leaves, self.odd_node_policy)

    @property
    def leaves(self) -> list[bytes]:
        return list(self._leaves)

    @property
    def layers(self) -> list[list[bytes]]:
        return [list(level) for level in self._layers]

    @property
    def root(self) -> bytes:
        return self._layers[-1][0]

    @property
    def hex_root(self) -> str:
        return to_hex(self.root)

    @property
    def depth(self) -> int:
        """Number of levels including leaves and root."""
        return len(self._layers)

    def __len__(self) -> int:
        return len(self._leaves)

    def __contains__(self, leaf: object) -> bool:
        return isinstance(leaf, (bytes, bytearray)) and bytes(leaf) in self._leaves

    def proof(self, leaf: bytes) -> list[bytes]:
        """
        Sibling hashes proving leaf, bottom-up.

        A level where the leaf's ancestor is a promoted odd node contributes
        no sibling.

        Raises:
            ValueError: If leaf is not in the tree
        """
        try:
            index = self._leaves.index(bytes(leaf))
        except ValueError:
            raise ValueError(f"Leaf {to_hex(bytes(leaf))} is not part of this tree") from None

        siblings: list[bytes] = []
        for level in self._layers[:-1]:
            sibling_index = index ^ 1
            if sibling_index < len(level):
                siblings.append(level[sibling_index])
            elif self.odd_node_policy is OddNodePolicy.DUPLICATE:
                siblings.append(level[index])
            index //= 2

        return siblings

    def hex_proof(self, leaf: bytes) -> list[str]:
        return [to_hex(s) for s in self.proof(leaf)]

    def get_proof(self, leaf: bytes) -> MerkleProof:
        return MerkleProof(leaf=bytes(leaf), siblings=self.proof(leaf), root=self.root)

    def verify(self, leaf: bytes, siblings: Sequence[bytes]) -> bool:
        return verify_merkle_proof(self.root, leaf, siblings)


def build_merkle_root(
    leaves: Sequence[bytes],
    odd_node_policy: OddNodePolicy = OddNodePolicy.PROMOTE,
) -> bytes:
    """
    Compute the root over leaves (any order, duplicates allowed).

    Raises:
        EmptyTreeError: If leaves is empty
    """
    return MerkleTree(leaves, odd_node_policy).root


def build_merkle_proof(
    leaves: Sequence[bytes],
    leaf: bytes,
    odd_node_policy: OddNodePolicy = OddNodePolicy.PROMOTE,
) -> MerkleProof:
    """Build the tree over leaves and return the proof for leaf."""
    return MerkleTree(leaves, odd_node_policy).get_proof(leaf)


def verify_merkle_proof(root: bytes, leaf: bytes, siblings: Sequence[bytes]) -> bool:
    """
    Verify an inclusion proof.

    Folds the siblings into the leaf with sorted-pair hashing and compares
    against root, the same way OpenZeppelin's MerkleProof.verify does.
    """
    current_hash = bytes(leaf)
    for sibling in siblings:
        current_hash = hash_sorted_pair(current_hash, bytes(sibling))
    return current_hash == bytes(root)


def verify_hex_proof(root: str, leaf: bytes, siblings: Sequence[str]) -> bool:
    """verify_merkle_proof over 0x-hex root and siblings. Malformed hex never verifies."""
    try:
        root_bytes = from_hex(root)
        sibling_bytes = [from_hex(s) for s in siblings]
    except (ValueError, AttributeError):
        return False
    return verify_merkle_proof(root_bytes, leaf, sibling_bytes)


__all__ = [
    "OddNodePolicy",
    "MerkleProof",
    "MerkleTree",
    "canonical_leaves",
    "build_layers",
    "build_merkle_root",
    "build_merkle_proof",
    "verify_merkle_proof",
    "verify_hex_proof",
]
