"""Unit tests for RestRunner."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from laakhay.chain.runtime.rest import ResponseAdapter, RestEndpointSpec, RestRunner, RESTTransport


class TestRestRunner:
    """Test RestRunner endpoint execution."""

    @pytest.fixture
    def mock_transport(self):
        transport = MagicMock(spec=RESTTransport)
        transport.get = AsyncMock(return_value={"data": "test"})
        transport.post = AsyncMock(return_value={"rows": [], "more": False})
        return transport

    @pytest.mark.asyncio
    async def test_run_post_endpoint(self, mock_transport):
        spec = RestEndpointSpec(
            id="get_table_rows",
            method="POST",
            build_path=lambda p: "/v1/chain/get_table_rows",
            build_body=lambda p: {"code": p["code"]},
        )
        adapter = MagicMock(spec=ResponseAdapter)
        adapter.parse = MagicMock(return_value="parsed")

        result = await RestRunner(mock_transport).run(
            spec=spec, adapter=adapter, params={"code": "eosio"}
        )

        assert result == "parsed"
        mock_transport.post.assert_called_once_with(
            "/v1/chain/get_table_rows", json_body={"code": "eosio"}, headers=None
        )
        adapter.parse.assert_called_once_with({"rows": [], "more": False}, {"code": "eosio"})

    @pytest.mark.asyncio
    async def test_run_get_endpoint(self, mock_transport):
        spec = RestEndpointSpec(
            id="status",
            method="GET",
            build_path=lambda p: "/status",
            build_query=lambda p: {"verbose": p["verbose"]},
        )

        result = await RestRunner(mock_transport).run(
            spec=spec, adapter=ResponseAdapter(), params={"verbose": 1}
        )

        assert result == {"data": "test"}
        mock_transport.get.assert_called_once_with("/status", params={"verbose": 1}, headers=None)
