"""
File: __init__.py

Purpose: Export the public API for the schemas module.
This is the main entry point for other modules to import schema definitions.
"""

# Error models and exceptions
from .errors import (
    AllowlistException,
    DuplicateRootError,
    EmptyDataError,
    EmptyTreeError,
    ErrorCodes,
    InvalidDataError,
    InvalidEntryError,
    InvalidSchemaError,
    InvalidTypeError,
    RootMismatchError,
    ServiceError,
    StoredTreeMismatchError,
    UnknownRootError,
)

# Entry variants
from .entries import (
    UINT256_MAX,
    AllowlistEntry,
    MerkleTreeType,
    RecipientAmountEntry,
    RecipientEntry,
    parse_entries,
    parse_entry,
    parse_tree_type,
)

# Records and results
from .records import (
    CreateMerkleRootResult,
    MerkleTreeRecord,
    MintSaleContractRef,
    ProofResult,
    RecipientProofResult,
)

__all__ = [
    # Errors
    "AllowlistException",
    "DuplicateRootError",
    "EmptyDataError",
    "EmptyTreeError",
    "ErrorCodes",
    "InvalidDataError",
    "InvalidEntryError",
    "InvalidSchemaError",
    "InvalidTypeError",
    "RootMismatchError",
    "ServiceError",
    "StoredTreeMismatchError",
    "UnknownRootError",
    # Entries
    "UINT256_MAX",
    "AllowlistEntry",
    "MerkleTreeType",
    "RecipientAmountEntry",
    "RecipientEntry",
    "parse_entries",
    "parse_entry",
    "parse_tree_type",
    # Records
    "CreateMerkleRootResult",
    "MerkleTreeRecord",
    "MintSaleContractRef",
    "ProofResult",
    "RecipientProofResult",
]
