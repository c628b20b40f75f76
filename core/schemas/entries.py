"""
File: entries.py

Purpose: Allowlist entry variants and boundary validation.

Two entry shapes exist and a tree holds exactly one of them:
- RecipientAmountEntry: {address, amount} for the `allowlist` and
  `recipientAmount` tree types
- RecipientEntry: {collection, tokenId, quantity} for the `recipients` type

Raw caller input is turned into typed entries here, before anything reaches
the merkle engine. Entries keep the caller's original strings so a stored
tree can be shown back exactly as submitted.
"""

from enum import Enum
from typing import Any, Sequence, Union

from eth_utils import is_hex_address
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import (
    EmptyDataError,
    InvalidEntryError,
    InvalidSchemaError,
    InvalidTypeError,
)

UINT256_MAX = 2**256 - 1

# pydantic error types that mean "wrong shape" rather than "bad value"
_SCHEMA_ERROR_TYPES = {"missing", "extra_forbidden", "model_type", "dict_type"}


class MerkleTreeType(str, Enum):
    """Tree type tag. Selects the entry schema and leaf encoding."""

    ALLOWLIST = "allowlist"
    RECIPIENT_AMOUNT = "recipientAmount"
    RECIPIENTS = "recipients"


def _check_address(value: str) -> str:
    if not isinstance(value, str) or not value.startswith(("0x", "0X")):
        raise ValueError("address must be a 0x-prefixed hex string")
    if not is_hex_address(value):
        raise ValueError(f"Invalid address: {value}")
    return value


def _check_uint256(value: int, name: str) -> int:
    if value < 0 or value > UINT256_MAX:
        raise ValueError(f"{name} must fit in uint256, got {value}")
    return value


class RecipientAmountEntry(BaseModel):
    """An address allowed to claim up to `amount`."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    address: str = Field(..., description="Wallet address (20-byte hex)")
    amount: str = Field(
        ...,
        description="Allotment as a decimal integer string (uint256)",
    )

    @field_validator("address")
    @classmethod
    def _validate_address(cls, v: str) -> str:
        return _check_address(v)

    @field_validator("amount", mode="before")
    @classmethod
    def _validate_amount(cls, v: Any) -> str:
        if isinstance(v, bool):
            raise ValueError("amount must be a decimal integer")
        if isinstance(v, int):
            v = str(v)
        if not isinstance(v, str) or not v.isdigit() or not v.isascii():
            raise ValueError(f"amount must be a non-negative decimal integer, got {v!r}")
        _check_uint256(int(v), "amount")
        return v

    @property
    def normalized_address(self) -> str:
        return self.address.lower()

    @property
    def allotment(self) -> int:
        return int(self.amount)

    def to_data(self) -> dict[str, Any]:
        return {"address": self.address, "amount": self.amount}


class RecipientEntry(BaseModel):
    """A collection token and the quantity redeemable for it."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    collection: str = Field(..., description="Collection contract address")
    token_id: int = Field(..., alias="tokenId", description="Token id (uint256)")
    quantity: int = Field(..., description="Quantity (uint256)")

    @field_validator("collection")
    @classmethod
    def _validate_collection(cls, v: str) -> str:
        return _check_address(v)

    @field_validator("token_id", "quantity", mode="before")
    @classmethod
    def _reject_bool_and_float(cls, v: Any) -> Any:
        if isinstance(v, (bool, float)):
            raise ValueError(f"must be an integer, got {v!r}")
        return v

    @field_validator("token_id")
    @classmethod
    def _validate_token_id(cls, v: int) -> int:
        return _check_uint256(v, "tokenId")

    @field_validator("quantity")
    @classmethod
    def _validate_quantity(cls, v: int) -> int:
        return _check_uint256(v, "quantity")

    @property
    def normalized_collection(self) -> str:
        return self.collection.lower()

    def to_data(self) -> dict[str, Any]:
        return {
            "collection": self.collection,
            "tokenId": self.token_id,
            "quantity": self.quantity,
        }


AllowlistEntry = Union[RecipientAmountEntry, RecipientEntry]

ENTRY_MODELS: dict[MerkleTreeType, type[BaseModel]] = {
    MerkleTreeType.ALLOWLIST: RecipientAmountEntry,
    MerkleTreeType.RECIPIENT_AMOUNT: RecipientAmountEntry,
    MerkleTreeType.RECIPIENTS: RecipientEntry,
}


def parse_tree_type(value: Any) -> MerkleTreeType:
    """Resolve a type tag, raising InvalidTypeError for anything unsupported."""
    if isinstance(value, MerkleTreeType):
        return value
    try:
        return MerkleTreeType(value)
    except ValueError:
        raise InvalidTypeError(value) from None


def parse_entry(tree_type: MerkleTreeType, raw: Any, index: int = 0) -> AllowlistEntry:
    """
    Validate one raw entry against the schema of tree_type.

    Raises:
        InvalidSchemaError: Missing fields, foreign fields, non-object input
        InvalidEntryError: Malformed address, amount or integer
    """
    if isinstance(raw, (RecipientAmountEntry, RecipientEntry)):
        raw = raw.to_data()
    model = ENTRY_MODELS[tree_type]
    if not isinstance(raw, dict):
        raise InvalidSchemaError(index=index, details={"reason": "entry must be an object"})
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        errors = e.errors()
        if any(err["type"] in _SCHEMA_ERROR_TYPES for err in errors):
            raise InvalidSchemaError(
                index=index,
                details={"errors": [{"loc": list(err["loc"]), "type": err["type"]} for err in errors]},
            ) from None
        first = errors[0]
        field_name = str(first["loc"][0]) if first["loc"] else None
        raise InvalidEntryError(
            str(first["msg"]).removeprefix("Value error, "),
            index=index,
            field_name=field_name,
        ) from None


def parse_entries(tree_type: Any, raw_entries: Sequence[Any]) -> list[AllowlistEntry]:
    """
    Validate a whole submission. Fails atomically on the first bad entry.

    Raises:
        InvalidTypeError: Unsupported tree type
        EmptyDataError: No entries
        InvalidDataError: Any entry failing its schema
    """
    resolved = parse_tree_type(tree_type)
    if raw_entries is None or len(raw_entries) == 0:
        raise EmptyDataError()
    return [parse_entry(resolved, raw, index=i) for i, raw in enumerate(raw_entries)]


__all__ = [
    "UINT256_MAX",
    "MerkleTreeType",
    "RecipientAmountEntry",
    "RecipientEntry",
    "AllowlistEntry",
    "ENTRY_MODELS",
    "parse_tree_type",
    "parse_entry",
    "parse_entries",
]
