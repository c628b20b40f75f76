"""
Tree Store Unit Tests
Tests for core/store/tree_store.py and core/store/sync_chain.py

1. Content addressing - one record per root
2. Duplicate-insert race resolves to the stored record
3. Sync-chain reads: sale contract by tier, mint counts
"""
import pytest

from core.merkle.merkle_proofs import MerkleProver
from core.merkle.merkle_tree import OddNodePolicy
from core.schemas.entries import MerkleTreeType, parse_entries
from core.schemas.errors import DuplicateRootError

from fixtures.common import make_address, make_allowlist_data, make_root


def _parsed(data):
    return parse_entries(MerkleTreeType.RECIPIENT_AMOUNT, data)


class TestCreateOrGet:
    """Tests for content-addressed creation."""

    @pytest.mark.asyncio
    async def test_creates_record(self, tree_store):
        entries = _parsed(make_allowlist_data(3))
        record, created = await tree_store.create_or_get(entries, MerkleTreeType.RECIPIENT_AMOUNT)

        assert created is True
        assert record.root == MerkleProver(MerkleTreeType.RECIPIENT_AMOUNT).compute_root(entries)
        assert record.entries == make_allowlist_data(3)
        assert record.tree_type is MerkleTreeType.RECIPIENT_AMOUNT

    @pytest.mark.asyncio
    async def test_root_follows_given_policy(self, tree_store):
        entries = _parsed(make_allowlist_data(3))
        record, created = await tree_store.create_or_get(
            entries,
            MerkleTreeType.RECIPIENT_AMOUNT,
            odd_node_policy=OddNodePolicy.DUPLICATE,
        )

        assert created is True
        assert record.root == MerkleProver(
            MerkleTreeType.RECIPIENT_AMOUNT, OddNodePolicy.DUPLICATE
        ).compute_root(entries)
        assert record.root != MerkleProver(MerkleTreeType.RECIPIENT_AMOUNT).compute_root(entries)

    @pytest.mark.asyncio
    async def test_same_entries_return_same_record(self, tree_store):
        entries = _parsed(make_allowlist_data(3))
        first, _ = await tree_store.create_or_get(entries, MerkleTreeType.RECIPIENT_AMOUNT)
        second, created = await tree_store.create_or_get(
            list(reversed(entries)), MerkleTreeType.RECIPIENT_AMOUNT
        )

        assert created is False
        assert second.id == first.id
        # Stored entries are those of the first submission
        assert second.entries == make_allowlist_data(3)

    @pytest.mark.asyncio
    async def test_associations_stored(self, tree_store):
        entries = _parsed(make_allowlist_data(2))
        record, _ = await tree_store.create_or_get(
            entries,
            MerkleTreeType.RECIPIENT_AMOUNT,
            organization_id="org-1",
            collection_id="col-1",
        )
        assert record.organization_id == "org-1"
        assert record.collection_id == "col-1"
        assert record.created_at is not None

    @pytest.mark.asyncio
    async def test_lost_race_returns_winner(self, tree_store, monkeypatch):
        """A concurrent insert of the same root resolves to the stored record."""
        entries = _parsed(make_allowlist_data(4))
        winner, _ = await tree_store.create_or_get(entries, MerkleTreeType.RECIPIENT_AMOUNT)

        real_find = tree_store.find_by_root
        calls = []

        async def stale_first_read(root):
            calls.append(root)
            if len(calls) == 1:
                return None
            return await real_find(root)

        monkeypatch.setattr(tree_store, "find_by_root", stale_first_read)

        record, created = await tree_store.create_or_get(entries, MerkleTreeType.RECIPIENT_AMOUNT)
        assert created is False
        assert record.id == winner.id
        assert len(calls) == 2


class TestInsertAndFind:
    """Tests for the raw store operations."""

    @pytest.mark.asyncio
    async def test_insert_duplicate_raises(self, tree_store):
        root = make_root(1)
        await tree_store.insert(root, MerkleTreeType.ALLOWLIST, make_allowlist_data(1))
        with pytest.raises(DuplicateRootError):
            await tree_store.insert(root, MerkleTreeType.ALLOWLIST, make_allowlist_data(1))

    @pytest.mark.asyncio
    async def test_find_is_case_insensitive(self, tree_store):
        root = "0x" + "ab" * 32
        await tree_store.insert(root, MerkleTreeType.ALLOWLIST, make_allowlist_data(1))
        record = await tree_store.find_by_root("0x" + "AB" * 32)
        assert record is not None
        assert record.root == root

    @pytest.mark.asyncio
    async def test_find_unknown_returns_none(self, tree_store):
        assert await tree_store.find_by_root(make_root(99)) is None

    @pytest.mark.asyncio
    async def test_to_output_shape(self, tree_store):
        record = await tree_store.insert(make_root(2), MerkleTreeType.ALLOWLIST, make_allowlist_data(2))
        output = record.to_output()
        assert set(output) == {"id", "merkleRoot", "data"}
        assert output["merkleRoot"] == make_root(2)


class TestSyncChainStore:
    """Tests for sale contract and mint transaction queries."""

    @pytest.mark.asyncio
    async def test_contract_by_tier(self, sync_chain):
        collection = make_address(0xC0)
        await sync_chain.create_mint_sale_contract(address=collection, tier_id=0, merkle_root=make_root(1))
        await sync_chain.create_mint_sale_contract(address=collection, tier_id=2, merkle_root=make_root(2))

        contract = await sync_chain.get_mint_sale_contract_by_tier(collection, 2)
        assert contract is not None
        assert contract.merkle_root == make_root(2)
        assert contract.tier_id == 2

    @pytest.mark.asyncio
    async def test_contract_lookup_lowercases(self, sync_chain):
        collection = "0x" + "Ab" * 20
        await sync_chain.create_mint_sale_contract(address=collection, merkle_root=make_root(1))
        contract = await sync_chain.get_mint_sale_contract_by_tier(collection.upper().replace("0X", "0x"))
        assert contract is not None
        assert contract.address == collection.lower()

    @pytest.mark.asyncio
    async def test_missing_contract(self, sync_chain):
        assert await sync_chain.get_mint_sale_contract_by_tier(make_address(0xDEAD), 0) is None

    @pytest.mark.asyncio
    async def test_count_by_tier(self, sync_chain):
        collection = make_address(0xC0)
        buyer = make_address(1)
        for tier in (1, 1, 2):
            await sync_chain.create_mint_sale_transaction(
                recipient=buyer, address=collection, tier_id=tier, token_id="1"
            )
        await sync_chain.create_mint_sale_transaction(
            recipient=make_address(2), address=collection, tier_id=1, token_id="2"
        )

        assert await sync_chain.count_mint_transactions(buyer, collection, 1) == 2
        assert await sync_chain.count_mint_transactions(buyer, collection, 2) == 1
        assert await sync_chain.count_mint_transactions(buyer, collection) == 3
        assert await sync_chain.count_mint_transactions(buyer, make_address(0xC1)) == 0
