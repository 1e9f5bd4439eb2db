"""Unit tests for EOSIO endpoint specs and adapters."""

from __future__ import annotations

import pytest

from laakhay.chain.connectors.eosio.rest.endpoints import (
    get_endpoint_adapter,
    get_endpoint_spec,
    list_endpoints,
)
from laakhay.chain.core.exceptions import MalformedResponseError
from laakhay.chain.models import AccountInfo, TablePage, TableRef

TABLE = TableRef(code="eosio.token", table="accounts", scope="alice")


class TestRegistry:
    def test_all_endpoints_registered(self):
        assert list_endpoints() == sorted(
            [
                "abi_json_to_bin",
                "get_abi",
                "get_account",
                "get_actions",
                "get_block",
                "get_currency_balance",
                "get_info",
                "get_table_by_scope",
                "get_table_rows",
                "get_transaction",
            ]
        )

    def test_unknown_endpoint(self):
        assert get_endpoint_spec("push_transaction") is None
        assert get_endpoint_adapter("push_transaction") is None


class TestGetTableRows:
    """Test get_table_rows request building and parsing."""

    def test_body_sends_keys_as_strings(self):
        spec = get_endpoint_spec("get_table_rows")
        body = spec.build_body(
            {"table": TABLE, "lower_bound": 2**63 + 1, "upper_bound": -1, "limit": -1}
        )

        assert spec.build_path({}) == "/v1/chain/get_table_rows"
        assert body == {
            "json": True,
            "code": "eosio.token",
            "scope": "alice",
            "table": "accounts",
            "limit": -1,
            "lower_bound": str(2**63 + 1),
            "upper_bound": "",
        }

    def test_secondary_index(self):
        body = get_endpoint_spec("get_table_rows").build_body(
            {"table": TABLE, "limit": 5, "index_position": 2, "key_type": "name"}
        )

        assert body["index_position"] == 2
        assert body["key_type"] == "name"

    def test_primary_index_omits_index_fields(self):
        body = get_endpoint_spec("get_table_rows").build_body(
            {"table": TABLE, "limit": 5, "index_position": 1, "key_type": "i64"}
        )

        assert "index_position" not in body
        assert "key_type" not in body

    def test_adapter_normalizes_next_key_string(self):
        adapter = get_endpoint_adapter("get_table_rows")()
        page = adapter.parse(
            {"rows": [{"id": 1}], "more": True, "next_key": "2"}, {"table": TABLE}
        )

        assert isinstance(page, TablePage)
        assert page.more is True
        assert page.next_key == "2"

    def test_adapter_rejects_non_object(self):
        adapter = get_endpoint_adapter("get_table_rows")()
        with pytest.raises(MalformedResponseError):
            adapter.parse(["rows"], {"table": TABLE})


class TestHistoryEndpoints:
    def test_get_actions_body_with_window(self):
        spec = get_endpoint_spec("get_actions")
        assert spec.build_body({"account": "alice", "pos": 10, "offset": 9}) == {
            "account_name": "alice",
            "pos": 10,
            "offset": 9,
        }

    def test_get_actions_body_recent(self):
        spec = get_endpoint_spec("get_actions")
        assert spec.build_body({"account": "alice"}) == {"account_name": "alice"}

    def test_get_actions_without_list_raises(self):
        adapter = get_endpoint_adapter("get_actions")()
        with pytest.raises(MalformedResponseError, match="alice"):
            adapter.parse({"last_irreversible_block": 5}, {"account": "alice", "pos": 0})

    def test_get_transaction_empty_is_none(self):
        adapter = get_endpoint_adapter("get_transaction")()
        assert adapter.parse({}, {"tx_id": "abc"}) is None
        assert get_endpoint_spec("get_transaction").build_body({"tx_id": "abc"}) == {"id": "abc"}


class TestChainEndpoints:
    def test_get_abi_without_contract(self):
        adapter = get_endpoint_adapter("get_abi")()
        assert adapter.parse({"account_name": "alice"}, {"code": "alice"}) == {
            "account_name": "alice",
            "abi": None,
        }

    def test_abi_json_to_bin_extracts_binargs(self):
        adapter = get_endpoint_adapter("abi_json_to_bin")()
        params = {"code": "eosio.token", "action": "transfer", "args": {}}
        assert adapter.parse({"binargs": "00ff"}, params) == "00ff"
        with pytest.raises(MalformedResponseError):
            adapter.parse({}, params)

    def test_get_account_parses_permissions(self):
        adapter = get_endpoint_adapter("get_account")()
        info = adapter.parse(
            {
                "account_name": "alice",
                "ram_quota": 8192,
                "permissions": [
                    {
                        "perm_name": "active",
                        "parent": "owner",
                        "required_auth": {
                            "threshold": 1,
                            "keys": [{"key": "EOS5abc", "weight": 1}],
                            "accounts": [],
                            "waits": [],
                        },
                    }
                ],
            },
            {"account": "alice"},
        )

        assert isinstance(info, AccountInfo)
        assert info.find_permission("active").required_auth.has_key("EOS5abc")
        assert info.ram_quota == 8192

    def test_get_account_invalid_payload(self):
        adapter = get_endpoint_adapter("get_account")()
        with pytest.raises(MalformedResponseError):
            adapter.parse({"permissions": "nope"}, {"account": "alice"})

    def test_currency_balance_strips(self):
        adapter = get_endpoint_adapter("get_currency_balance")()
        assert adapter.parse([" 1.0000 EOS "], {}) == ["1.0000 EOS"]
        body = get_endpoint_spec("get_currency_balance").build_body({"account": "alice"})
        assert body == {"code": "eosio.token", "account": "alice"}

    def test_table_by_scope_body(self):
        body = get_endpoint_spec("get_table_by_scope").build_body(
            {"code": "eosio.token", "table": "accounts", "lower_bound": "bob"}
        )
        assert body == {
            "code": "eosio.token",
            "lower_bound": "bob",
            "upper_bound": "",
            "limit": 1000,
            "table": "accounts",
        }
