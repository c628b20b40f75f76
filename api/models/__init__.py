"""API request and response models."""

from api.models.requests import (
    CreateGeneralTreeRequest,
    CreateMerkleRootRequest,
    VerifyProofRequest,
)
from api.models.responses import (
    CreateMerkleRootResponse,
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
    MerkleTreeOutput,
    MerkleTreeResponse,
    ProofResponse,
    RecipientProofResponse,
    VerifyProofResponse,
)

__all__ = [
    "CreateMerkleRootRequest",
    "CreateGeneralTreeRequest",
    "VerifyProofRequest",
    "HealthResponse",
    "MerkleTreeOutput",
    "CreateMerkleRootResponse",
    "MerkleTreeResponse",
    "ProofResponse",
    "RecipientProofResponse",
    "VerifyProofResponse",
    "ErrorDetail",
    "ErrorResponse",
]
