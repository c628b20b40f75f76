"""
Sync-Chain Store

Read access to the on-chain mirror maintained by the chain indexer: sale
contracts per collection tier and confirmed mint transactions.

The create_* writers exist for the indexer and for fixtures; the allowlist
core only ever reads.
"""
from __future__ import annotations

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.schemas.records import MintSaleContractRef
from core.store.models import MintSaleContractRow, MintSaleTransactionRow

# Columns holding addresses or hashes, stored lowercased
_HEX_FIELDS = ("address", "recipient", "sender", "token_address", "payment_token", "merkle_root", "tx_hash")


def _lower_hex_fields(data: dict[str, Any]) -> dict[str, Any]:
    return {
        key: value.lower() if key in _HEX_FIELDS and isinstance(value, str) else value
        for key, value in data.items()
    }


class SyncChainStore:
    """Queries over mint_sale_contracts and mint_sale_transactions."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get_mint_sale_contract_by_tier(
        self,
        address: str,
        tier_id: int = 0,
    ) -> MintSaleContractRef | None:
        async with self._session_factory() as session:
            result = await session.execute(
                select(MintSaleContractRow)
                .where(
                    MintSaleContractRow.address == address.lower(),
                    MintSaleContractRow.tier_id == tier_id,
                )
                .limit(1)
            )
            row = result.scalar_one_or_none()
            return row.to_ref() if row is not None else None

    async def count_mint_transactions(
        self,
        recipient: str,
        address: str,
        tier_id: int | None = None,
    ) -> int:
        """
        Count confirmed mints by recipient through the sale contract at address.

        tier_id=None counts across all tiers.
        """
        query = select(func.count(MintSaleTransactionRow.id)).where(
            MintSaleTransactionRow.recipient == recipient.lower(),
            MintSaleTransactionRow.address == address.lower(),
        )
        if tier_id is not None:
            query = query.where(MintSaleTransactionRow.tier_id == tier_id)
        async with self._session_factory() as session:
            result = await session.execute(query)
            return int(result.scalar_one())

    async def create_mint_sale_contract(self, **fields: Any) -> MintSaleContractRef:
        row = MintSaleContractRow(**_lower_hex_fields(fields))
        async with self._session_factory() as session:
            session.add(row)
            await session.commit()
            await session.refresh(row)
            return row.to_ref()

    async def create_mint_sale_transaction(self, **fields: Any) -> dict[str, Any]:
        row = MintSaleTransactionRow(**_lower_hex_fields(fields))
        async with self._session_factory() as session:
            session.add(row)
            await session.commit()
            await session.refresh(row)
            return row.to_dict()


__all__ = ["SyncChainStore"]
