"""
Root Consistency Guard

Proofs are only handed out against the root actually deployed on-chain for
the collection tier being claimed. Hex is compared case-insensitively.
"""
from __future__ import annotations

import logging

from core.crypto.hashing import hex_equal
from core.schemas.errors import RootMismatchError
from core.schemas.records import MintSaleContractRef

logger = logging.getLogger(__name__)


def roots_match(contract_root: str | None, queried_root: str) -> bool:
    return hex_equal(contract_root, queried_root)


def ensure_root_matches(contract: MintSaleContractRef, queried_root: str) -> None:
    """
    Raises:
        RootMismatchError: contract.merkle_root differs from queried_root
            (a contract without a root never matches)
    """
    if roots_match(contract.merkle_root, queried_root):
        return
    logger.warning(
        "Merkle root mismatch for %s tier %s: contract has %s, request used %s",
        contract.address,
        contract.tier_id,
        contract.merkle_root,
        queried_root,
    )
    raise RootMismatchError(
        expected_root=contract.merkle_root,
        queried_root=queried_root,
        collection_address=contract.address,
        tier_id=contract.tier_id,
    )


__all__ = ["roots_match", "ensure_root_matches"]
