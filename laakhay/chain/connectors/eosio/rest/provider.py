"""EOSIO REST connector.

This connector provides direct access to nodeos chain and history endpoints.
It resolves endpoint specs and adapters from the registry and executes them
with RestRunner. Its ``fetch_range`` and ``fetch_sequence_window`` methods are
the bounded reads the scanners are driven by.
"""

from __future__ import annotations

from time import perf_counter
from typing import Any

from laakhay.chain.connectors.eosio.config import (
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_TABLE_LIMIT,
    chain_path,
    get_rpc_url,
)
from laakhay.chain.models import AccountInfo, ActionPage, TablePage, TableRef
from laakhay.chain.runtime.rest import RestRunner, RESTTransport

from .endpoints import get_endpoint_adapter, get_endpoint_spec


class EosRESTConnector:
    """EOSIO REST connector for direct use.

    Example:
        >>> async with EosRESTConnector("https://eos.example.com") as conn:
        ...     page = await conn.fetch_range(TableRef(code="eosio", table="global", scope="eosio"))
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        transport: RESTTransport | None = None,
    ) -> None:
        """Initialize the connector.

        Args:
            base_url: Node URL (defaults to LAAKHAY_CHAIN_RPC_URL, then localhost)
            timeout: HTTP timeout in seconds
            transport: Optional transport (tests inject one)
        """
        self.base_url = get_rpc_url(base_url)
        self._transport = transport or RESTTransport(self.base_url, timeout=timeout)
        self._runner = RestRunner(self._transport)

    async def fetch_health(self) -> dict[str, object]:
        """Ping the node to verify connectivity."""
        path = chain_path("get_info")
        start = perf_counter()
        info = await self._transport.post(path, json_body={})
        latency_ms = (perf_counter() - start) * 1000.0
        return {
            "status": "ok",
            "chain_id": info.get("chain_id") if isinstance(info, dict) else None,
            "head_block_num": info.get("head_block_num") if isinstance(info, dict) else None,
            "latency_ms": latency_ms,
            "endpoint": path,
        }

    async def fetch(self, endpoint_id: str, params: dict[str, Any]) -> Any:
        """Fetch data from a nodeos endpoint.

        Args:
            endpoint_id: Endpoint identifier (e.g., "get_table_rows")
            params: Request parameters

        Returns:
            Parsed response from the endpoint adapter

        Raises:
            ValueError: If endpoint_id is not found in registry
        """
        spec = get_endpoint_spec(endpoint_id)
        if spec is None:
            raise ValueError(f"Unknown REST endpoint: {endpoint_id}")

        adapter_cls = get_endpoint_adapter(endpoint_id)
        if adapter_cls is None:
            raise ValueError(f"No adapter found for endpoint: {endpoint_id}")

        return await self._runner.run(spec=spec, adapter=adapter_cls(), params=params)

    async def fetch_range(
        self,
        table: TableRef,
        lower_bound: Any = 0,
        upper_bound: Any = -1,
        limit: int = DEFAULT_TABLE_LIMIT,
        index_position: int = 1,
        key_type: str | None = None,
    ) -> TablePage:
        """Read one page of table rows in ``[lower_bound, upper_bound]``.

        Args:
            table: Table identity
            lower_bound: First key (inclusive)
            upper_bound: Last key (inclusive); -1 for none
            limit: Maximum rows; -1 for as many as fit in one page
            index_position: 1 for the primary index, 2+ for secondary indices
            key_type: Key type of a secondary index (e.g. "i64", "name")

        Returns:
            TablePage with ``more`` set when rows were left out
        """
        params = {
            "table": table,
            "lower_bound": lower_bound,
            "upper_bound": upper_bound,
            "limit": limit,
            "index_position": index_position,
            "key_type": key_type,
        }
        result: TablePage = await self.fetch("get_table_rows", params)
        return result

    async def fetch_sequence_window(self, account: str, pos: int, offset: int) -> ActionPage:
        """Read the actions of ``account`` with sequence numbers in ``[pos, pos + offset]``."""
        params = {"account": account, "pos": pos, "offset": offset}
        result: ActionPage = await self.fetch("get_actions", params)
        return result

    async def fetch_recent_actions(self, account: str) -> ActionPage:
        """Read the most recent actions of ``account``."""
        result: ActionPage = await self.fetch("get_actions", {"account": account})
        return result

    async def get_info(self) -> dict[str, Any]:
        return await self.fetch("get_info", {})

    async def get_block(self, block_num_or_id: int | str) -> dict[str, Any]:
        return await self.fetch("get_block", {"block_num_or_id": block_num_or_id})

    async def get_abi(self, code: str) -> dict[str, Any]:
        return await self.fetch("get_abi", {"code": code})

    async def abi_json_to_bin(self, code: str, action: str, args: Any) -> str:
        return await self.fetch("abi_json_to_bin", {"code": code, "action": action, "args": args})

    async def get_account(self, account: str) -> AccountInfo:
        result: AccountInfo = await self.fetch("get_account", {"account": account})
        return result

    async def get_currency_balance(
        self, account: str, code: str, symbol: str | None = None
    ) -> list[str]:
        return await self.fetch(
            "get_currency_balance", {"account": account, "code": code, "symbol": symbol}
        )

    async def get_table_by_scope(
        self,
        code: str,
        table: str | None = None,
        lower_bound: str = "",
        upper_bound: str = "",
        limit: int | None = None,
    ) -> TablePage:
        params = {
            "code": code,
            "table": table,
            "lower_bound": lower_bound,
            "upper_bound": upper_bound,
            "limit": limit,
        }
        result: TablePage = await self.fetch("get_table_by_scope", params)
        return result

    async def get_transaction(self, tx_id: str) -> dict[str, Any] | None:
        return await self.fetch("get_transaction", {"tx_id": tx_id})

    async def close(self) -> None:
        await self._transport.close()

    async def __aenter__(self) -> EosRESTConnector:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
