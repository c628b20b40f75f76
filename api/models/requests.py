"""
API Request Models

Pydantic models for API request validation.

Entries are accepted as plain objects here; their per-type schema is
enforced by the service so the error taxonomy stays in one place.
"""

from typing import Any

from pydantic import BaseModel, Field


class CreateMerkleRootRequest(BaseModel):
    """Request body for POST /merkle/roots."""

    data: list[Any] = Field(
        ...,
        description="Allowlist entries: [{address, amount}, ...]",
    )
    organization_id: str | None = Field(
        default=None,
        description="Optional owning organization",
    )
    collection_id: str | None = Field(
        default=None,
        description="Optional associated collection",
    )


class CreateGeneralTreeRequest(BaseModel):
    """Request body for POST /merkle/trees."""

    type: str = Field(
        ...,
        description="Tree type: allowlist, recipientAmount or recipients",
    )
    data: list[Any] = Field(..., description="Entries matching the tree type")


class VerifyProofRequest(BaseModel):
    """Request body for POST /merkle/verify."""

    merkle_root: str = Field(..., description="Root to verify against")
    type: str = Field(default="recipientAmount", description="Tree type of the entry")
    entry: dict[str, Any] = Field(..., description="The entry being claimed")
    proof: list[str] = Field(default_factory=list, description="Sibling hashes, leaf to root")
