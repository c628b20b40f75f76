"""
Merkle Trees for Allowlists
Deterministic sorted-pair keccak trees, leaf encoding, proofs.

This module provides:
- Leaf codec: abi-compatible encoding of allowlist entries
- MerkleTree: tree over canonically ordered leaves
- build_merkle_root / build_merkle_proof / verify_merkle_proof
- MerkleProver / MerkleVerifier: entry-level convenience wrappers

Usage:
    from core.merkle import MerkleProver, MerkleVerifier
    from core.schemas import MerkleTreeType

    prover = MerkleProver(MerkleTreeType.ALLOWLIST)
    tree = prover.build_tree(entries)
    proof = prover.prove(tree, entries[0])
    assert MerkleVerifier.verify_entry(tree.hex_root, MerkleTreeType.ALLOWLIST, entries[0], proof)
"""
from .merkle_tree import (
    OddNodePolicy,
    MerkleProof,
    MerkleTree,
    canonical_leaves,
    build_layers,
    build_merkle_root,
    build_merkle_proof,
    verify_merkle_proof,
    verify_hex_proof,
)

from .leaf_codec import (
    encode_address_and_amount,
    encode_recipient,
    encode_entry,
    hash_leaf,
    hash_leaves,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Core types
    "OddNodePolicy",
    "MerkleProof",
    "MerkleTree",
    # Core functions
    "canonical_leaves",
    "build_layers",
    "build_merkle_root",
    "build_merkle_proof",
    "verify_merkle_proof",
    "verify_hex_proof",
    # Leaf codec
    "encode_address_and_amount",
    "encode_recipient",
    "encode_entry",
    "hash_leaf",
    "hash_leaves",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
