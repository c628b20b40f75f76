"""
Merkle Routes

Tree creation, lookup, proofs and proof verification.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query

from api.deps import get_service
from api.errors import NotFoundError
from api.models.requests import (
    CreateGeneralTreeRequest,
    CreateMerkleRootRequest,
    VerifyProofRequest,
)
from api.models.responses import (
    CreateMerkleRootResponse,
    MerkleTreeOutput,
    MerkleTreeResponse,
    ProofResponse,
    RecipientProofResponse,
    VerifyProofResponse,
)
from core.allowlist import AllowlistService
from core.schemas.records import MerkleTreeRecord

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/merkle", tags=["merkle"])


def _tree_output(record: MerkleTreeRecord) -> MerkleTreeOutput:
    return MerkleTreeOutput(type=record.tree_type.value, **record.to_output())


@router.post("/roots", response_model=CreateMerkleRootResponse)
async def create_merkle_root(
    body: CreateMerkleRootRequest,
    service: AllowlistService = Depends(get_service),
) -> CreateMerkleRootResponse:
    """
    Store an address/amount allowlist and return its root.

    Submitting an entry set that is already stored returns the existing root.
    """
    result = await service.create_merkle_root(
        body.data,
        organization_id=body.organization_id,
        collection_id=body.collection_id,
    )
    return CreateMerkleRootResponse(ok=True, result=result)


@router.get("/proof", response_model=ProofResponse)
async def get_merkle_proof(
    address: str = Query(..., description="Claimant address"),
    merkle_root: str = Query(..., description="Root of the allowlist"),
    collection_address: str | None = Query(default=None, description="Sale contract to count mints against"),
    tier_id: int | None = Query(default=None, ge=0, description="Collection tier"),
    service: AllowlistService = Depends(get_service),
) -> ProofResponse:
    """
    Proof and remaining allowance for an address.

    404 when the root is unknown; `result` is null when the address is not
    on the allowlist.
    """
    result = await service.get_proof(
        address,
        merkle_root,
        collection_address=collection_address,
        tier_id=tier_id,
    )
    return ProofResponse(ok=True, result=result)


@router.post("/trees", response_model=MerkleTreeResponse)
async def create_general_merkle_tree(
    body: CreateGeneralTreeRequest,
    service: AllowlistService = Depends(get_service),
) -> MerkleTreeResponse:
    """Store a tree of any supported type."""
    record = await service.create_general_merkle_tree(body.type, body.data)
    return MerkleTreeResponse(ok=True, result=_tree_output(record))


@router.get("/trees/{merkle_root}", response_model=MerkleTreeResponse)
async def get_merkle_tree(
    merkle_root: str,
    service: AllowlistService = Depends(get_service),
) -> MerkleTreeResponse:
    record = await service.get_merkle_tree(merkle_root)
    if record is None:
        raise NotFoundError(
            "Invalid Merkle Tree",
            details={"merkle_root": merkle_root},
        )
    return MerkleTreeResponse(ok=True, result=_tree_output(record))


@router.get("/trees/{merkle_root}/recipients", response_model=RecipientProofResponse)
async def get_recipient_proof(
    merkle_root: str,
    collection: str = Query(..., description="Collection address"),
    token_id: int = Query(..., ge=0, description="Token id"),
    service: AllowlistService = Depends(get_service),
) -> RecipientProofResponse:
    """Proof for a (collection, tokenId) entry of a recipients tree."""
    result = await service.get_recipient_proof(merkle_root, collection, token_id)
    return RecipientProofResponse(ok=True, result=result)


@router.post("/verify", response_model=VerifyProofResponse)
async def verify_proof(
    body: VerifyProofRequest,
    service: AllowlistService = Depends(get_service),
) -> VerifyProofResponse:
    """Check a proof against a root without touching storage."""
    valid = service.verify_proof(body.merkle_root, body.type, body.entry, body.proof)
    return VerifyProofResponse(ok=True, valid=valid)
