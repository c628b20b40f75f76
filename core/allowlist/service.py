"""
Allowlist Service

Orchestrates tree creation, lookup and proof generation on top of the tree
store and the sync-chain mirror.

Operations:
- create_tree / create_merkle_root / create_general_merkle_tree
- get_merkle_tree
- get_proof (strict) / get_merkle_proof (None for unknown roots)
- get_recipient_proof
- verify_proof

Failure shapes:
- Unknown root: UnknownRootError from get_proof / get_recipient_proof
- Address not on the allowlist: None, never an error
- Sale contract pointing at another root: RootMismatchError
- Stored entries rebuilding to another root: StoredTreeMismatchError
"""
from __future__ import annotations

import logging
from typing import Any, Sequence

from core.allowlist.guard import ensure_root_matches
from core.crypto.hashing import hex_equal
from core.merkle.merkle_proofs import MerkleProver, MerkleVerifier
from core.merkle.merkle_tree import MerkleTree, OddNodePolicy
from core.schemas.entries import (
    AllowlistEntry,
    MerkleTreeType,
    RecipientAmountEntry,
    RecipientEntry,
    parse_entries,
    parse_entry,
    parse_tree_type,
)
from core.schemas.errors import InvalidTypeError, StoredTreeMismatchError, UnknownRootError
from core.schemas.records import (
    CreateMerkleRootResult,
    MerkleTreeRecord,
    ProofResult,
    RecipientProofResult,
)
from core.store.sync_chain import SyncChainStore
from core.store.tree_store import TreeStore

logger = logging.getLogger(__name__)

# usable when the given collection has no sale contract to count against
USABLE_NOT_TRACKED = -1

_ADDRESS_TREE_TYPES = (MerkleTreeType.ALLOWLIST, MerkleTreeType.RECIPIENT_AMOUNT)


class AllowlistService:
    """
    Allowlist trees and claim proofs.

    Collaborators are passed in; the service holds no other state.
    """

    def __init__(
        self,
        tree_store: TreeStore,
        sync_chain: SyncChainStore,
        odd_node_policy: OddNodePolicy = OddNodePolicy.PROMOTE,
    ) -> None:
        self.tree_store = tree_store
        self.sync_chain = sync_chain
        self.odd_node_policy = OddNodePolicy(odd_node_policy)

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    async def create_tree(
        self,
        entries: Sequence[Any],
        tree_type: MerkleTreeType | str = MerkleTreeType.RECIPIENT_AMOUNT,
        organization_id: str | None = None,
        collection_id: str | None = None,
    ) -> MerkleTreeRecord:
        """
        Validate entries and store their tree, or return the stored one.

        Raises:
            InvalidTypeError: Unsupported tree type
            EmptyDataError: No entries
            InvalidDataError: An entry failing the type's schema
        """
        resolved = parse_tree_type(tree_type)
        parsed = parse_entries(resolved, entries)
        record, _ = await self.tree_store.create_or_get(
            parsed,
            resolved,
            odd_node_policy=self.odd_node_policy,
            organization_id=organization_id,
            collection_id=collection_id,
        )
        return record

    async def create_merkle_root(
        self,
        entries: Sequence[Any],
        organization_id: str | None = None,
        collection_id: str | None = None,
    ) -> CreateMerkleRootResult:
        """Address/amount allowlist; returns {success, merkleRoot}."""
        record = await self.create_tree(
            entries,
            MerkleTreeType.RECIPIENT_AMOUNT,
            organization_id=organization_id,
            collection_id=collection_id,
        )
        return CreateMerkleRootResult(success=True, merkle_root=record.root)

    async def create_general_merkle_tree(
        self,
        tree_type: MerkleTreeType | str,
        entries: Sequence[Any],
    ) -> MerkleTreeRecord:
        return await self.create_tree(entries, tree_type)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    async def get_merkle_tree(self, merkle_root: str) -> MerkleTreeRecord | None:
        return await self.tree_store.find_by_root(merkle_root)

    async def _require_tree(self, merkle_root: str) -> MerkleTreeRecord:
        record = await self.tree_store.find_by_root(merkle_root)
        if record is None:
            logger.info("No merkle tree stored for root %s", merkle_root)
            raise UnknownRootError(merkle_root)
        return record

    @staticmethod
    def _load_entries(record: MerkleTreeRecord) -> list[AllowlistEntry]:
        return [parse_entry(record.tree_type, raw, index=i) for i, raw in enumerate(record.entries)]

    def _rebuild_tree(
        self,
        record: MerkleTreeRecord,
        entries: Sequence[AllowlistEntry],
    ) -> tuple[MerkleProver, MerkleTree]:
        """
        Rebuild the tree of a stored record and check it against the stored root.

        Raises:
            StoredTreeMismatchError: The entries hash to another root, e.g. the
                record was written under a different odd node policy
        """
        prover = MerkleProver(record.tree_type, self.odd_node_policy)
        tree = prover.build_tree(entries)
        if not hex_equal(tree.hex_root, record.root):
            logger.error(
                "Stored tree %s rebuilds to %s under odd node policy %s",
                record.root,
                tree.hex_root,
                self.odd_node_policy.value,
            )
            raise StoredTreeMismatchError(record.root, tree.hex_root, self.odd_node_policy.value)
        return prover, tree

    # ------------------------------------------------------------------
    # Proofs
    # ------------------------------------------------------------------

    async def get_proof(
        self,
        address: str,
        merkle_root: str,
        collection_address: str | None = None,
        tier_id: int | None = None,
    ) -> ProofResult | None:
        """
        Proof and remaining allowance for address under merkle_root.

        With collection_address, the sale contract of that collection tier
        must carry the same root, and confirmed mints are subtracted from
        the allotment. A collection without a sale contract yields
        usable == -1.

        Returns:
            ProofResult, or None if address is not on the allowlist

        Raises:
            UnknownRootError: No tree stored for merkle_root
            InvalidTypeError: The tree is not an address/amount tree
            RootMismatchError: The sale contract points at another root
            StoredTreeMismatchError: The stored entries no longer hash to merkle_root
        """
        record = await self._require_tree(merkle_root)
        if record.tree_type not in _ADDRESS_TREE_TYPES:
            raise InvalidTypeError(
                record.tree_type.value,
                message="Proofs by address are only available for address/amount trees.",
            )

        entries = self._load_entries(record)
        query = address.lower()
        entry = next(
            (e for e in entries if isinstance(e, RecipientAmountEntry) and e.normalized_address == query),
            None,
        )
        if entry is None:
            logger.info("Address %s is not on allowlist %s", query, record.root)
            return None

        prover, tree = self._rebuild_tree(record, entries)
        proof = prover.prove(tree, entry)

        usable = await self._usable(entry, query, record.root, collection_address, tier_id)

        return ProofResult(
            address=query,
            amount=entry.amount,
            proof=proof,
            success=True,
            usable=usable,
        )

    async def get_merkle_proof(
        self,
        address: str,
        merkle_root: str,
        collection_address: str | None = None,
        tier_id: int | None = None,
    ) -> ProofResult | None:
        """get_proof for in-process callers: an unknown root also yields None."""
        try:
            return await self.get_proof(address, merkle_root, collection_address, tier_id)
        except UnknownRootError:
            return None

    async def _usable(
        self,
        entry: RecipientAmountEntry,
        address: str,
        merkle_root: str,
        collection_address: str | None,
        tier_id: int | None,
    ) -> int:
        if not collection_address:
            return entry.allotment

        contract = await self.sync_chain.get_mint_sale_contract_by_tier(
            collection_address, tier_id if tier_id else 0
        )
        if contract is None:
            logger.info(
                "No sale contract for %s tier %s, usable not tracked",
                collection_address.lower(),
                tier_id if tier_id else 0,
            )
            return USABLE_NOT_TRACKED

        ensure_root_matches(contract, merkle_root)

        redeemed = await self.sync_chain.count_mint_transactions(
            recipient=address,
            address=collection_address,
            tier_id=tier_id,
        )
        return entry.allotment - redeemed

    async def get_recipient_proof(
        self,
        merkle_root: str,
        collection: str,
        token_id: int,
    ) -> RecipientProofResult | None:
        """
        Proof for the (collection, tokenId) entry of a recipients tree.

        Raises:
            UnknownRootError: No tree stored for merkle_root
            InvalidTypeError: The tree is not a recipients tree
            StoredTreeMismatchError: The stored entries no longer hash to merkle_root
        """
        record = await self._require_tree(merkle_root)
        if record.tree_type is not MerkleTreeType.RECIPIENTS:
            raise InvalidTypeError(
                record.tree_type.value,
                message="Recipient proofs are only available for recipients trees.",
            )

        entries = self._load_entries(record)
        wanted = collection.lower()
        entry = next(
            (
                e for e in entries
                if isinstance(e, RecipientEntry)
                and e.normalized_collection == wanted
                and e.token_id == int(token_id)
            ),
            None,
        )
        if entry is None:
            return None

        prover, tree = self._rebuild_tree(record, entries)
        return RecipientProofResult(
            collection=entry.collection,
            token_id=entry.token_id,
            quantity=entry.quantity,
            proof=prover.prove(tree, entry),
        )

    @staticmethod
    def verify_proof(
        merkle_root: str,
        tree_type: MerkleTreeType | str,
        entry: dict[str, Any],
        proof: Sequence[str],
    ) -> bool:
        """
        Stateless check of an entry's proof against a root.

        Raises:
            InvalidTypeError: Unsupported tree type
        """
        return MerkleVerifier.verify_entry(merkle_root, parse_tree_type(tree_type), entry, proof)


__all__ = ["AllowlistService", "USABLE_NOT_TRACKED"]
