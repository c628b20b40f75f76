"""
Error Taxonomy

Purpose: Standard error taxonomy for allowlist tree creation, storage
and proof generation. Defines both a Pydantic model for structured error
communication and Python exceptions for control flow.

"Address not on the allowlist" is not an error: lookups return None for it.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Input validation
    INVALID_DATA = "INVALID_DATA"
    INVALID_ENTRY = "INVALID_ENTRY"
    INVALID_SCHEMA = "INVALID_SCHEMA"
    INVALID_TYPE = "INVALID_TYPE"
    EMPTY_DATA = "EMPTY_DATA"

    # Merkle engine
    EMPTY_TREE = "EMPTY_TREE"

    # Lookup & consistency
    UNKNOWN_ROOT = "UNKNOWN_ROOT"
    ROOT_MISMATCH = "ROOT_MISMATCH"
    STORED_TREE_MISMATCH = "STORED_TREE_MISMATCH"

    # Storage
    DUPLICATE_ROOT = "DUPLICATE_ROOT"


# =============================================================================
# Pydantic Error Model (Structured Communication)
# =============================================================================

class ServiceError(BaseModel):
    """
    Structured error passed across the service boundary.

    Used by the HTTP layer to render error envelopes without depending on
    exception classes.
    """

    model_config = ConfigDict(extra="forbid")

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.INVALID_DATA],
    )
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class AllowlistException(Exception):
    """
    Base exception for all allowlist errors.

    Carries structured error information and converts to a ServiceError.
    """

    def __init__(
        self,
        message: str,
        code: str = "ALLOWLIST_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_error_model(self) -> ServiceError:
        """Convert this exception to a ServiceError model."""
        return ServiceError(
            code=self.code,
            message=self.message,
            details=self.details,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class InvalidDataError(AllowlistException):
    """Submitted entries do not fit the tree type."""

    def __init__(
        self,
        message: str = "Invalid data provided.",
        code: str = ErrorCodes.INVALID_DATA,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, code=code, details=details)


class InvalidEntryError(InvalidDataError):
    """A single entry carries a malformed address, amount or integer."""

    def __init__(
        self,
        message: str,
        index: int | None = None,
        field_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if index is not None:
            full_details["index"] = index
        if field_name:
            full_details["field"] = field_name
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_ENTRY,
            details=full_details,
        )


class InvalidSchemaError(InvalidDataError):
    """An entry is missing required fields or has fields of another variant."""

    def __init__(
        self,
        message: str = "Invalid data provided.",
        index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if index is not None:
            full_details["index"] = index
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_SCHEMA,
            details=full_details,
        )


class EmptyDataError(AllowlistException):
    """Zero entries submitted."""

    def __init__(self, message: str = "The length of data cannot be 0.") -> None:
        super().__init__(message=message, code=ErrorCodes.EMPTY_DATA)


class EmptyTreeError(AllowlistException):
    """The merkle engine was asked to build a tree without leaves."""

    def __init__(self, message: str = "Cannot build a merkle tree without leaves.") -> None:
        super().__init__(message=message, code=ErrorCodes.EMPTY_TREE)


class InvalidTypeError(AllowlistException):
    """Unsupported tree type tag."""

    def __init__(self, tree_type: Any = None, message: str = "Invalid type provided.") -> None:
        details = {"type": str(tree_type)} if tree_type is not None else None
        super().__init__(message=message, code=ErrorCodes.INVALID_TYPE, details=details)


class UnknownRootError(AllowlistException):
    """No stored tree exists for the requested root."""

    def __init__(self, root: str, message: str = "Invalid Merkle Tree") -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.UNKNOWN_ROOT,
            details={"merkle_root": root},
        )


class RootMismatchError(AllowlistException):
    """The sale contract deployed for a collection/tier points at another root."""

    def __init__(
        self,
        expected_root: str | None,
        queried_root: str,
        collection_address: str | None = None,
        tier_id: int | None = None,
    ) -> None:
        details: dict[str, Any] = {
            "contract_merkle_root": expected_root,
            "merkle_root": queried_root,
        }
        if collection_address:
            details["collection_address"] = collection_address
        if tier_id is not None:
            details["tier_id"] = tier_id
        super().__init__(
            message="The merkleRoot on this collection is invalid.",
            code=ErrorCodes.ROOT_MISMATCH,
            details=details,
        )


class StoredTreeMismatchError(AllowlistException):
    """Entries of a stored tree no longer hash to the root it is stored under."""

    def __init__(self, stored_root: str, rebuilt_root: str, odd_node_policy: str) -> None:
        super().__init__(
            message="The stored merkle tree does not match its root.",
            code=ErrorCodes.STORED_TREE_MISMATCH,
            details={
                "merkle_root": stored_root,
                "rebuilt_root": rebuilt_root,
                "odd_node_policy": odd_node_policy,
            },
        )


class DuplicateRootError(AllowlistException):
    """A record with this root already exists (unique constraint on root)."""

    def __init__(self, root: str) -> None:
        super().__init__(
            message=f"A merkle tree with root {root} already exists.",
            code=ErrorCodes.DUPLICATE_ROOT,
            details={"merkle_root": root},
        )


__all__ = [
    "ErrorCodes",
    "ServiceError",
    "AllowlistException",
    "InvalidDataError",
    "InvalidEntryError",
    "InvalidSchemaError",
    "EmptyDataError",
    "EmptyTreeError",
    "InvalidTypeError",
    "UnknownRootError",
    "RootMismatchError",
    "StoredTreeMismatchError",
    "DuplicateRootError",
]
