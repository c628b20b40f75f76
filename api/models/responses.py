"""
API Response Models

Pydantic models for API response serialization.
"""

from typing import Any

from pydantic import BaseModel, Field

from core.schemas.records import (
    CreateMerkleRootResult,
    ProofResult,
    RecipientProofResult,
)


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "allowlist-api"
    version: str = "v1"
    ready: bool = Field(default=False, description="Stores are open and the service is wired")
    odd_node_policy: str | None = Field(default=None, description="Odd node policy roots are built with")


class MerkleTreeOutput(BaseModel):
    """Caller-facing view of a stored tree."""

    id: str = Field(..., description="Record identifier")
    merkleRoot: str = Field(..., description="0x-prefixed root")
    type: str = Field(..., description="Tree type")
    data: list[dict[str, Any]] = Field(default_factory=list, description="Entries as submitted")


class CreateMerkleRootResponse(BaseModel):
    """Response for POST /merkle/roots."""

    ok: bool = True
    result: CreateMerkleRootResult


class MerkleTreeResponse(BaseModel):
    """Response for POST /merkle/trees and GET /merkle/trees/{root}."""

    ok: bool = True
    result: MerkleTreeOutput


class ProofResponse(BaseModel):
    """Response for GET /merkle/proof. result is null when the address is not listed."""

    ok: bool = True
    result: ProofResult | None = None


class RecipientProofResponse(BaseModel):
    """Response for GET /merkle/trees/{root}/recipients."""

    ok: bool = True
    result: RecipientProofResult | None = None


class VerifyProofResponse(BaseModel):
    """Response for POST /merkle/verify."""

    ok: bool = True
    valid: bool = Field(..., description="Whether the proof checks out against the root")


class ErrorDetail(BaseModel):
    """Detailed error information."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail = Field(..., description="Error details")
