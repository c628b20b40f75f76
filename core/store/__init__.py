"""
Persistence for the allowlist core.

- Database: async engine + session factory per URL
- TreeStore: content-addressed merkle tree records
- SyncChainStore: read access to the on-chain mirror
"""
from .database import Database
from .models import (
    MerkleTreeRow,
    MintSaleContractRow,
    MintSaleTransactionRow,
    SyncChainBase,
    TreeBase,
)
from .sync_chain import SyncChainStore
from .tree_store import TreeStore

__all__ = [
    "Database",
    "MerkleTreeRow",
    "MintSaleContractRow",
    "MintSaleTransactionRow",
    "SyncChainBase",
    "TreeBase",
    "SyncChainStore",
    "TreeStore",
]
