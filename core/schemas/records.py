"""
File: records.py

Purpose: Stored tree records, sale-contract references and proof results.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .entries import MerkleTreeType


class MerkleTreeRecord(BaseModel):
    """
    A stored merkle tree, addressed by its root.

    Created once per distinct entry set and never mutated afterwards.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(..., description="Opaque record identifier")
    root: str = Field(..., description="0x-prefixed lowercase keccak root")
    tree_type: MerkleTreeType = Field(..., description="Entry variant of this tree")
    entries: list[dict[str, Any]] = Field(
        ...,
        description="Entries exactly as submitted, in submission order",
    )
    organization_id: str | None = Field(default=None)
    collection_id: str | None = Field(default=None)
    created_at: datetime
    updated_at: datetime

    def to_output(self) -> dict[str, Any]:
        """Caller-facing shape: {id, merkleRoot, data}."""
        return {"id": self.id, "merkleRoot": self.root, "data": list(self.entries)}


class MintSaleContractRef(BaseModel):
    """Read-only view of a sale contract mirrored from chain."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    address: str = Field(..., description="Sale contract / collection address (lowercase)")
    tier_id: int = Field(default=0)
    merkle_root: str | None = Field(default=None)
    collection_id: str | None = Field(default=None)
    token_address: str | None = Field(default=None)


class CreateMerkleRootResult(BaseModel):
    """Result of createMerkleRoot. Serialized as {success, merkleRoot}."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    merkle_root: str = Field(..., alias="merkleRoot")


class ProofResult(BaseModel):
    """
    Proof for an address on an allowlist tree.

    usable is the allotment minus confirmed on-chain mints; -1 means the
    collection given has no sale contract to count against.
    """

    address: str
    amount: str
    proof: list[str] = Field(default_factory=list)
    success: bool = True
    usable: int = 0


class RecipientProofResult(BaseModel):
    """Proof for a (collection, tokenId) entry on a recipients tree."""

    collection: str
    token_id: int
    quantity: int
    proof: list[str] = Field(default_factory=list)
    success: bool = True


__all__ = [
    "MerkleTreeRecord",
    "MintSaleContractRef",
    "CreateMerkleRootResult",
    "ProofResult",
    "RecipientProofResult",
]
