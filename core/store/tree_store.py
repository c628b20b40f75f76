"""
Tree Store

Content-addressed persistence of merkle tree records, keyed by root.

At most one record exists per root. create_or_get runs find-then-insert and
relies on the unique index on `root` to settle concurrent submissions of the
same entry set: the loser of the race rolls back and returns the winner's
record.
"""
from __future__ import annotations

import logging
from typing import Any, Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.crypto.hashing import normalize_hex
from core.merkle.merkle_proofs import MerkleProver
from core.merkle.merkle_tree import OddNodePolicy
from core.schemas.entries import AllowlistEntry, MerkleTreeType
from core.schemas.errors import DuplicateRootError
from core.schemas.records import MerkleTreeRecord
from core.store.models import MerkleTreeRow

logger = logging.getLogger(__name__)


class TreeStore:
    """Reads and writes MerkleTreeRecord rows."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def find_by_root(self, root: str) -> MerkleTreeRecord | None:
        async with self._session_factory() as session:
            result = await session.execute(
                select(MerkleTreeRow).where(MerkleTreeRow.root == normalize_hex(root))
            )
            row = result.scalar_one_or_none()
            return row.to_record() if row is not None else None

    async def insert(
        self,
        root: str,
        tree_type: MerkleTreeType,
        entries: Sequence[dict[str, Any]],
        organization_id: str | None = None,
        collection_id: str | None = None,
    ) -> MerkleTreeRecord:
        """
        Insert a new record.

        Raises:
            DuplicateRootError: A record with this root already exists
        """
        root = normalize_hex(root)
        row = MerkleTreeRow(
            root=root,
            tree_type=MerkleTreeType(tree_type).value,
            entries=[dict(e) for e in entries],
            organization_id=organization_id,
            collection_id=collection_id,
        )
        async with self._session_factory() as session:
            session.add(row)
            try:
                await session.commit()
            except IntegrityError:
                await session.rollback()
                raise DuplicateRootError(root) from None
            await session.refresh(row)
            return row.to_record()

    async def create_or_get(
        self,
        entries: Sequence[AllowlistEntry],
        tree_type: MerkleTreeType,
        odd_node_policy: OddNodePolicy = OddNodePolicy.PROMOTE,
        organization_id: str | None = None,
        collection_id: str | None = None,
    ) -> tuple[MerkleTreeRecord, bool]:
        """
        Store entries under their root unless that root is already stored.

        Args:
            entries: Validated entries (see core.schemas.entries.parse_entries)
            tree_type: Tree type the entries were validated against
            odd_node_policy: Policy the root is built with; proofs served
                for the record must be built with the same one
            organization_id: Optional association, does not affect the root
            collection_id: Optional association, does not affect the root

        Returns:
            (record, created) - created is False when an existing record
            was returned unchanged

        Raises:
            EmptyTreeError: If entries is empty
        """
        tree = MerkleProver(tree_type, odd_node_policy).build_tree(entries)
        root = tree.hex_root

        existing = await self.find_by_root(root)
        if existing is not None:
            logger.info("Merkle tree %s already stored as %s", root, existing.id)
            return existing, False

        try:
            record = await self.insert(
                root,
                tree_type,
                [entry.to_data() for entry in entries],
                organization_id=organization_id,
                collection_id=collection_id,
            )
        except DuplicateRootError:
            logger.warning("Concurrent insert for merkle root %s, returning stored record", root)
            existing = await self.find_by_root(root)
            if existing is None:
                raise
            return existing, False

        logger.info("Stored merkle tree %s (%d entries) as %s", root, len(entries), record.id)
        return record, True


__all__ = ["TreeStore"]
