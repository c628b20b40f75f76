"""
ORM Models

Tables for the two stores the allowlist core reads and writes:
- merkle_trees: content-addressed tree records (unique on root)
- mint_sale_contracts / mint_sale_transactions: sync-chain mirror rows
  written by the chain indexer

Each store has its own declarative base so the two can live in separate
databases.
"""
import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, Column, DateTime, Index, Integer, String
from sqlalchemy.orm import declarative_base

from core.schemas.entries import MerkleTreeType
from core.schemas.records import MerkleTreeRecord, MintSaleContractRef

TreeBase = declarative_base()
SyncChainBase = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MerkleTreeRow(TreeBase):
    """A stored tree. Never updated or deleted once written."""

    __tablename__ = "merkle_trees"

    id = Column(String(36), primary_key=True, default=_new_id)
    root = Column(String(66), nullable=False, unique=True, index=True)
    tree_type = Column(String(32), nullable=False)
    entries = Column(JSON, nullable=False)
    organization_id = Column(String(64), nullable=True)
    collection_id = Column(String(64), nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    def to_record(self) -> MerkleTreeRecord:
        return MerkleTreeRecord(
            id=self.id,
            root=self.root,
            tree_type=MerkleTreeType(self.tree_type),
            entries=list(self.entries or []),
            organization_id=self.organization_id,
            collection_id=self.collection_id,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class MintSaleContractRow(SyncChainBase):
    """Sale contract deployed for a collection tier, as mirrored from chain."""

    __tablename__ = "mint_sale_contracts"
    __table_args__ = (
        Index("ix_mint_sale_contracts_address_tier", "address", "tier_id"),
    )

    id = Column(String(36), primary_key=True, default=_new_id)
    height = Column(Integer, nullable=True)
    tx_hash = Column(String(66), nullable=True)
    tx_time = Column(Integer, nullable=True)
    sender = Column(String(42), nullable=True)
    address = Column(String(42), nullable=False)
    tier_id = Column(Integer, nullable=False, default=0)
    merkle_root = Column(String(66), nullable=True)
    price = Column(String(78), nullable=True)
    payment_token = Column(String(42), nullable=True)
    token_address = Column(String(42), nullable=True)
    collection_id = Column(String(64), nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    def to_ref(self) -> MintSaleContractRef:
        return MintSaleContractRef(
            id=self.id,
            address=self.address,
            tier_id=self.tier_id,
            merkle_root=self.merkle_root,
            collection_id=self.collection_id,
            token_address=self.token_address,
        )


class MintSaleTransactionRow(SyncChainBase):
    """A confirmed mint through a sale contract."""

    __tablename__ = "mint_sale_transactions"
    __table_args__ = (
        Index("ix_mint_sale_transactions_claim", "recipient", "address", "tier_id"),
    )

    id = Column(String(36), primary_key=True, default=_new_id)
    height = Column(Integer, nullable=True)
    tx_hash = Column(String(66), nullable=True)
    tx_time = Column(Integer, nullable=True)
    sender = Column(String(42), nullable=True)
    recipient = Column(String(42), nullable=False)
    address = Column(String(42), nullable=False)
    tier_id = Column(Integer, nullable=False, default=0)
    token_address = Column(String(42), nullable=True)
    token_id = Column(String(78), nullable=True)
    price = Column(String(78), nullable=True)
    payment_token = Column(String(42), nullable=True)
    collection_id = Column(String(64), nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "recipient": self.recipient,
            "address": self.address,
            "tier_id": self.tier_id,
            "token_address": self.token_address,
            "token_id": self.token_id,
            "tx_hash": self.tx_hash,
        }
