"""Unit tests for the ChainAPI facade."""

from __future__ import annotations

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from laakhay.chain.api import ChainAPI
from laakhay.chain.auth import sign_message
from laakhay.chain.connectors.eosio import EosRESTConnector
from laakhay.chain.core import (
    ChainError,
    InvalidRange,
    PermissionNotFoundError,
    RpcError,
    encode_name,
)
from laakhay.chain.models import AccountInfo, ActionPage, PermissionLevel, TablePage, TableRef
from laakhay.chain.runtime.scanning import ScanPolicy

TABLE = TableRef(code="game", table="scores", scope="game")
FAST = ScanPolicy(poll_interval=0.001)


@pytest.fixture
def connector():
    conn = MagicMock(spec=EosRESTConnector)
    conn.close = AsyncMock()
    return conn


@pytest.fixture
def api(connector):
    return ChainAPI(connector=connector, policy=FAST)


def _account(**perms):
    return AccountInfo.model_validate(
        {
            "account_name": "alice",
            "permissions": [
                {"perm_name": name, "required_auth": {"keys": [{"key": k} for k in keys]}}
                for name, keys in perms.items()
            ],
        }
    )


class TestTableScans:
    """Test complete and single-shot table reads."""

    @pytest.mark.asyncio
    async def test_scan_all_rows(self, api, connector, make_table):
        table = make_table(count=30, page_cap=4)

        async def fetch_range(ref, lower, upper, limit, index_position=1):
            assert ref is TABLE
            return await table.read(lower, upper, limit)

        connector.fetch_range = fetch_range

        rows = await api.scan_all_rows(TABLE, hints=[10, 20])

        assert sorted(r["id"] for r in rows) == list(range(30))

    @pytest.mark.asyncio
    async def test_scan_all_rows_by_cursor(self, api, connector, make_table):
        table = make_table(count=20, page_cap=5)

        async def fetch_range(ref, lower, upper, limit, index_position=1):
            return await table.read(lower, upper, limit)

        connector.fetch_range = fetch_range

        rows = await api.scan_all_rows_by_cursor(TABLE, "id", limit=7)

        assert [r["id"] for r in rows] == list(range(7))

    @pytest.mark.asyncio
    async def test_fetch_table_logs_truncation(self, api, connector, caplog):
        connector.fetch_range = AsyncMock(
            return_value=TablePage(rows=[{"id": 1}, {"id": 2}], more=True)
        )

        with caplog.at_level(logging.WARNING):
            rows = await api.fetch_table(TABLE, limit=10)

        assert len(rows) == 2
        assert "truncation_not_followed" in caplog.text

    @pytest.mark.asyncio
    async def test_scan_range_with_name_start(self, api, connector):
        connector.fetch_range = AsyncMock(return_value=TablePage(rows=[{"owner": "alice"}]))

        rows = await api.scan_range(TABLE, "alice", 1)

        assert rows == [{"owner": "alice"}]
        connector.fetch_range.assert_awaited_once_with(
            TABLE, "alice", str(encode_name("alice") + 1), 1, index_position=1
        )

    @pytest.mark.asyncio
    async def test_scan_range_with_numeric_start(self, api, connector):
        connector.fetch_range = AsyncMock(return_value=TablePage(rows=[]))

        await api.scan_range(TABLE, 100, 5)

        connector.fetch_range.assert_awaited_once_with(TABLE, 100, 105, 5, index_position=1)

    @pytest.mark.asyncio
    async def test_scan_range_negative_length(self, api):
        with pytest.raises(InvalidRange):
            await api.scan_range(TABLE, 0, -1)

    @pytest.mark.asyncio
    async def test_fetch_table_item(self, api, connector):
        connector.fetch_range = AsyncMock(return_value=TablePage(rows=[]))
        assert await api.fetch_table_item(TABLE, 7) is None

    @pytest.mark.asyncio
    async def test_get_table_by_scope_follows_more(self, api, connector):
        connector.get_table_by_scope = AsyncMock(
            side_effect=[
                TablePage.model_validate({"rows": [{"scope": "alice"}], "more": "bob"}),
                TablePage.model_validate({"rows": [{"scope": "bob"}], "more": ""}),
            ]
        )

        rows = await api.get_table_by_scope("eosio.token", "accounts")

        assert [r["scope"] for r in rows] == ["alice", "bob"]
        second = connector.get_table_by_scope.await_args_list[1]
        assert second.kwargs["lower_bound"] == "bob"


class TestActions:
    """Test action log reads."""

    @pytest.mark.asyncio
    async def test_scan_all_actions(self, api, connector, make_action_log):
        log = make_action_log(count=25)

        async def fetch_window(account, pos, offset):
            assert account == "alice"
            return await log.read(pos, offset)

        connector.fetch_sequence_window = fetch_window
        pages = []

        done = await api.scan_all_actions("alice", pages.append, page_size=10, concurrency=2)

        assert done is True
        assert [len(p) for p in pages] == [10, 10, 5]

    @pytest.mark.asyncio
    async def test_scan_actions_window(self, api, connector, make_action_log):
        log = make_action_log(count=25, max_per_call=3)

        async def fetch_window(account, pos, offset):
            return await log.read(pos, offset)

        connector.fetch_sequence_window = fetch_window

        actions = await api.scan_actions("alice", 5, 6)

        assert [a["account_action_seq"] for a in actions] == list(range(5, 12))

    @pytest.mark.asyncio
    async def test_action_count(self, api, connector):
        connector.fetch_recent_actions = AsyncMock(
            return_value=ActionPage(actions=[{"account_action_seq": 40}, {"account_action_seq": 41}])
        )
        assert await api.get_action_max_seq("alice") == 41
        assert await api.get_action_count("alice") == 42

    @pytest.mark.asyncio
    async def test_action_count_empty_log(self, api, connector):
        connector.fetch_recent_actions = AsyncMock(return_value=ActionPage())
        assert await api.get_action_max_seq("alice") == -1
        assert await api.get_action_count("alice") == 0


class TestAccounts:
    """Test key lookups, balances and signature checks."""

    @pytest.mark.asyncio
    async def test_get_pub_keys(self, api, connector):
        connector.get_account = AsyncMock(return_value=_account(active=["EOS1", "EOS2"]))

        assert await api.get_pub_keys("alice") == ["EOS1", "EOS2"]
        assert await api.get_pub_key("alice") == "EOS1"

    @pytest.mark.asyncio
    async def test_get_pub_keys_missing_permission(self, api, connector):
        connector.get_account = AsyncMock(return_value=_account(active=["EOS1"]))

        with pytest.raises(PermissionNotFoundError):
            await api.get_pub_keys("alice", "owner")

    @pytest.mark.asyncio
    async def test_get_balance_by_symbol(self, api, connector):
        connector.get_currency_balance = AsyncMock(return_value=["1.0000 EOS", "5.00 XEOS"])

        assert await api.get_balance("alice", symbol="XEOS") == "5.00 XEOS"
        assert await api.get_balance("alice", symbol="EOS") == "1.0000 EOS"
        assert await api.get_balance("alice") == "1.0000 EOS"
        assert await api.get_balance("alice", symbol="USD") is None

    @pytest.mark.asyncio
    async def test_validate_signature(self, api, connector):
        private_key = b"\x33" * 32
        signature = sign_message(private_key, "nonce-1")
        signer = api.recover_signature(signature, "nonce-1")
        connector.get_account = AsyncMock(return_value=_account(active=[signer]))

        assert await api.validate_signature(signature, "nonce-1", "alice") == signer
        assert await api.validate_signature(signature, "nonce-2", "alice") is None

    @pytest.mark.asyncio
    async def test_get_table_abi(self, api, connector):
        connector.get_abi = AsyncMock(
            return_value={"account_name": "game", "abi": {"tables": [{"name": "scores", "type": "score"}]}}
        )

        assert await api.get_table_abi("game", "scores") == {"name": "scores", "type": "score"}
        assert await api.get_table_abi("game", "players") is None


class TestTransactions:
    """Test transaction lookup and the write path."""

    @pytest.mark.asyncio
    async def test_wait_transaction_retries(self, api, connector):
        connector.get_transaction = AsyncMock(
            side_effect=[RpcError("unknown", status_code=500), None, {"id": "abc"}]
        )

        tx = await api.wait_transaction("abc", interval=0)

        assert tx == {"id": "abc"}
        assert connector.get_transaction.await_count == 3

    @pytest.mark.asyncio
    async def test_wait_transaction_gives_up(self, api, connector):
        connector.get_transaction = AsyncMock(return_value=None)

        assert await api.wait_transaction("abc", max_rounds=2, interval=0) is None
        assert connector.get_transaction.await_count == 3

    @pytest.mark.asyncio
    async def test_call_requires_submitter(self, api):
        with pytest.raises(ChainError, match="submitter"):
            await api.call("game", "play", {}, "alice@active")

    @pytest.mark.asyncio
    async def test_transfer_records_payload(self, connector):
        submitter = MagicMock()
        submitter.transaction = AsyncMock(return_value={"transaction_id": "ff00"})
        api = ChainAPI(connector=connector, submitter=submitter)

        trx = await api.transfer(
            PermissionLevel(actor="alice", permission="active"), "bob", "1.0000 EOS", "hi"
        )

        assert trx == {"transaction_id": "ff00"}
        payload = submitter.transaction.await_args.args[0]
        action = payload["actions"][0]
        assert action["account"] == "eosio.token"
        assert action["name"] == "transfer"
        assert action["data"] == {"from": "alice", "to": "bob", "quantity": "1.0000 EOS", "memo": "hi"}
        assert action["authorization"] == [{"actor": "alice", "permission": "active"}]
        assert api.storyboard.to_list() == [payload]

    @pytest.mark.asyncio
    async def test_update_auth(self, connector):
        submitter = MagicMock()
        submitter.transaction = AsyncMock(return_value={})
        api = ChainAPI(connector=connector, submitter=submitter)

        await api.update_auth("alice", "active", "owner", 1, [{"key": "EOS1", "weight": 1}], [])

        action = submitter.transaction.await_args.args[0]["actions"][0]
        assert (action["account"], action["name"]) == ("eosio", "updateauth")
        assert action["data"]["auth"]["waits"] == []
        assert action["authorization"] == [{"actor": "alice", "permission": "owner"}]

    @pytest.mark.asyncio
    async def test_failed_submit_not_recorded(self, connector):
        submitter = MagicMock()
        submitter.transaction = AsyncMock(side_effect=RpcError("rejected"))
        api = ChainAPI(connector=connector, submitter=submitter)

        with pytest.raises(RpcError):
            await api.call("game", "play", {"move": 1}, "alice")

        assert len(api.storyboard) == 0


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_injected_connector_not_closed(self, connector):
        async with ChainAPI(connector=connector):
            pass
        connector.close.assert_not_awaited()

    def test_help_lists_operations(self):
        text = ChainAPI.help()
        assert "scan_all_rows" in text
        assert "scan_all_actions" in text
