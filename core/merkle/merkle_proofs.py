"""
Merkle Proofs Convenience Wrappers
Entry-level wrappers around the leaf codec and the merkle tree.

This module provides class-based interfaces:
- MerkleProver: Build trees and proofs straight from allowlist entries
- MerkleVerifier: Verify an entry against a root and a proof
"""
from __future__ import annotations

from typing import Any, Sequence

from core.merkle.leaf_codec import hash_leaf, hash_leaves
from core.merkle.merkle_tree import (
    MerkleTree,
    OddNodePolicy,
    verify_hex_proof,
)
from core.schemas.entries import AllowlistEntry, MerkleTreeType, parse_entries
from core.schemas.errors import InvalidDataError


class MerkleProver:
    """
    Builds trees and proofs from validated entries.

    Example:
        >>> prover = MerkleProver(MerkleTreeType.ALLOWLIST)
        >>> tree = prover.build_tree(entries)
        >>> prover.prove(tree, entries[0])
        ['0x...']
    """

    def __init__(
        self,
        tree_type: MerkleTreeType,
        odd_node_policy: OddNodePolicy = OddNodePolicy.PROMOTE,
    ) -> None:
        self.tree_type = MerkleTreeType(tree_type)
        self.odd_node_policy = OddNodePolicy(odd_node_policy)

    def build_tree(self, entries: Sequence[AllowlistEntry | dict[str, Any]]) -> MerkleTree:
        """
        Build a tree over entries.

        Raises:
            EmptyTreeError: If entries is empty
            InvalidDataError: If a raw entry fails validation
        """
        return MerkleTree(hash_leaves(entries, self.tree_type), self.odd_node_policy)

    def build_tree_from_raw(self, raw_entries: Sequence[Any]) -> tuple[list[AllowlistEntry], MerkleTree]:
        """Validate raw input and build its tree in one step."""
        entries = parse_entries(self.tree_type, raw_entries)
        return entries, self.build_tree(entries)

    def compute_root(self, entries: Sequence[AllowlistEntry | dict[str, Any]]) -> str:
        return self.build_tree(entries).hex_root

    def prove(self, tree: MerkleTree, entry: AllowlistEntry | dict[str, Any]) -> list[str]:
        """Hex proof for entry within tree."""
        return tree.hex_proof(hash_leaf(entry, self.tree_type))


class MerkleVerifier:
    """Verifies entries against roots without any stored state."""

    @staticmethod
    def verify_entry(
        root: str,
        tree_type: MerkleTreeType,
        entry: AllowlistEntry | dict[str, Any],
        proof: Sequence[str],
    ) -> bool:
        """
        Check that entry is part of the tree with the given root.

        Returns False for entries that fail validation or malformed hex.
        """
        try:
            leaf = hash_leaf(entry, MerkleTreeType(tree_type))
        except InvalidDataError:
            return False
        return verify_hex_proof(root, leaf, proof)


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
]
