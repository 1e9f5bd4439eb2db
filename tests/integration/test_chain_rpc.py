"""Integration tests against a live node (LAAKHAY_CHAIN_RPC_URL)."""

import os

import pytest

from laakhay.chain import ChainAPI, TableRef

pytestmark = pytest.mark.skipif(
    os.environ.get("RUN_LAAKHAY_NETWORK_TESTS") != "1",
    reason="Requires network access to an EOSIO node",
)


class TestChainRPCIntegration:
    """Read-only calls against a public node."""

    @pytest.mark.asyncio
    async def test_get_info(self):
        async with ChainAPI() as api:
            info = await api.get_info()
        assert "chain_id" in info
        assert info["head_block_num"] > 0

    @pytest.mark.asyncio
    async def test_system_account_has_active_key_or_delegation(self):
        async with ChainAPI() as api:
            account = await api.get_account("eosio")
        assert account.find_permission("active") is not None

    @pytest.mark.asyncio
    async def test_token_stats(self):
        table = TableRef(code="eosio.token", table="stat", scope="EOS")
        async with ChainAPI() as api:
            rows = await api.fetch_table(table, limit=5)
        assert len(rows) <= 5

    @pytest.mark.asyncio
    async def test_scope_listing(self):
        async with ChainAPI() as api:
            scopes = await api.get_table_by_scope("eosio.token", "stat", limit=10)
        assert all("scope" in row for row in scopes)
